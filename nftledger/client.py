from functools import partial

from nftledger.db.driver import LedgerDriver
from nftledger.registry.state import LedgerState
from nftledger.execution.executor import TransferExecutor
from nftledger.execution.events import EventLog
from nftledger.execution.receivers import ReceiverRegistry
from nftledger import config


class SignerSession:
    """Caller-bound view of the registry. Every state change is made as `signer`."""

    def __init__(self, signer, executor: TransferExecutor):
        self.signer = signer
        self.executor = executor

        # each function is a partial with the caller already filled in
        for func in executor.CALLER_FUNCTIONS:
            setattr(self, func, partial(getattr(executor, func), signer))

    def balance(self):
        return self.executor.balance_of(self.signer)


class RegistryClient:
    def __init__(self, signer='sys',
                 driver=None,
                 namespace=config.NAMESPACE,
                 events=None,
                 receivers=None):

        self.raw_driver = driver if driver is not None else LedgerDriver()
        self.state = LedgerState(driver=self.raw_driver, namespace=namespace)
        self.events = events if events is not None else EventLog()
        self.receivers = receivers if receivers is not None else ReceiverRegistry()

        self.executor = TransferExecutor(state=self.state, events=self.events, receivers=self.receivers)
        self.signer = signer

    def flush(self):
        # wipes ledger state and the event feed, receivers stay registered
        self.state.flush()
        self.events.clear()

    def as_signer(self, signer):
        return SignerSession(signer, self.executor)

    def register_receiver(self, account, receiver):
        self.receivers.register(account, receiver)

    # Queries

    def balance_of(self, account):
        return self.executor.balance_of(account)

    def owner_of(self, token_id):
        return self.executor.owner_of(token_id)

    def get_approved(self, token_id):
        return self.executor.get_approved(token_id)

    def is_approved_for_all(self, owner, operator):
        return self.executor.is_approved_for_all(owner, operator)

    def supports_interface(self, interface_id):
        return self.executor.supports_interface(interface_id)

    def dump(self):
        return self.state.dump()

    # State changes, made as the client's own signer unless told otherwise

    def mint(self, to, token_id):
        self.executor.mint(to, token_id)

    def approve(self, token_id, delegate, signer=None):
        self.executor.approve(signer or self.signer, token_id, delegate)

    def set_approval_for_all(self, operator, approved, signer=None):
        self.executor.set_approval_for_all(signer or self.signer, operator, approved)

    def transfer(self, from_, to, token_id, signer=None):
        self.executor.transfer(signer or self.signer, from_, to, token_id)

    def safe_transfer(self, from_, to, token_id, data=b'', signer=None):
        self.executor.safe_transfer(signer or self.signer, from_, to, token_id, data)

    def execute(self, function_name, kwargs, signer=None):
        return self.executor.execute(signer or self.signer, function_name, kwargs)
