class LedgerError(Exception):
    """
    The base exception for the registry. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class NotFound(LedgerError):
    """
    The token referenced has no recorded owner

    :ivar token_id: The token that was looked up
    """
    fmt = "Token {token_id} does not exist"


class InvalidAccount(LedgerError):
    """
    No account (or a malformed one) was given where a real
    account is required

    :ivar account: The offending value
    :ivar role: What the account was supposed to be used as
    """
    fmt = "Invalid {role} account {account!r}"


class InvalidToken(LedgerError):
    """
    The token identifier is the reserved zero value or is not
    an unsigned 256 bit integer

    :ivar token_id: The offending value
    """
    fmt = "Invalid token identifier {token_id!r}"


class InvalidFlag(LedgerError):
    """
    A blanket approval flag that is not a bool

    :ivar flag: The offending value
    """
    fmt = "Approval flag must be a bool, got {flag!r}"


class AlreadyExists(LedgerError):
    """
    Mint was attempted on a token that already has an owner

    :ivar token_id: The token being minted
    :ivar owner: Its current owner
    """
    fmt = "Token {token_id} is already owned by {owner}"


class Unauthorized(LedgerError):
    """
    The caller is neither the owner, the approved delegate nor
    an operator of the owner

    :ivar caller: The account making the call
    :ivar token_id: The token the call was about
    """
    fmt = "{caller} is not allowed to manage token {token_id}"


class AcknowledgmentFailed(LedgerError):
    """
    A programmable recipient did not return the acknowledgment
    marker during a safe transfer, or could not be invoked

    :ivar receiver: The recipient account
    :ivar token_id: The token being transferred
    :ivar reason: What went wrong
    """
    fmt = "Receiver {receiver} did not acknowledge token {token_id}: {reason}"
