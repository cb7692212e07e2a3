from nftledger.exceptions import AcknowledgmentFailed
from nftledger.logger import get_logger
from nftledger import config

log = get_logger('Receivers')


class ReceiverRegistry:
    """
    Accounts that are programmable rather than plain. Such an account has to
    accept every token sent to it by a safe transfer.

    A receiver is either an object with an ``on_erc721_received`` method or a
    plain callable, invoked as ``receiver(operator, from_, token_id, data)``
    and expected to return ``config.ERC721_RECEIVED``.
    """

    def __init__(self):
        self.receivers = {}

    def register(self, account, receiver):
        self.receivers[account] = receiver

    def unregister(self, account):
        self.receivers.pop(account, None)

    def is_programmable(self, account):
        return account in self.receivers

    def acknowledge(self, operator, from_, to, token_id, data=b''):
        if not self.is_programmable(to):
            return

        receiver = self.receivers[to]
        handler = getattr(receiver, 'on_erc721_received', receiver)

        if not callable(handler):
            raise AcknowledgmentFailed(receiver=to, token_id=token_id, reason='receiver cannot be invoked')

        try:
            marker = handler(operator, from_, token_id, data)
        except Exception as e:
            raise AcknowledgmentFailed(receiver=to, token_id=token_id, reason=repr(e)) from e

        if marker != config.ERC721_RECEIVED:
            raise AcknowledgmentFailed(receiver=to, token_id=token_id, reason='returned {!r}'.format(marker))

        log.debug('{} acknowledged token {}'.format(to, token_id))
