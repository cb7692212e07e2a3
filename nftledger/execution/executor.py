from contextlib import contextmanager
from copy import deepcopy

from nftledger.registry.state import LedgerState, check_account, is_token
from nftledger.registry.ledger import OwnershipLedger
from nftledger.registry.approvals import ApprovalRegistry
from nftledger.registry.authorizer import TransferAuthorizer
from nftledger.registry.interfaces import supports_interface
from nftledger.execution.events import EventLog, Transfer, Approval, ApprovalForAll
from nftledger.execution.receivers import ReceiverRegistry
from nftledger.exceptions import LedgerError, InvalidAccount, InvalidToken, InvalidFlag, Unauthorized
from nftledger.logger import get_logger
from nftledger import config

log = get_logger('Executor')


class Call:
    """Writes and events of one outermost state change, filled in when it commits."""

    def __init__(self, operation):
        self.operation = operation
        self.writes = {}
        self.events = []


class TransferExecutor:
    """
    Entry point for every state changing request.

    Each request runs under the ledger lock and either commits all of its
    writes and events or none of them. Events reach subscribers only after
    the lock is released.
    """

    # Functions reachable through execute(). The first group takes the sender as caller.
    CALLER_FUNCTIONS = {'approve', 'set_approval_for_all', 'transfer', 'safe_transfer'}
    QUERY_FUNCTIONS = {'balance_of', 'owner_of', 'get_approved', 'is_approved_for_all', 'supports_interface'}
    EXPORTS = CALLER_FUNCTIONS | QUERY_FUNCTIONS | {'mint'}

    def __init__(self, state: LedgerState=None, events: EventLog=None, receivers: ReceiverRegistry=None):
        self.state = state if state is not None else LedgerState()
        self.ledger = OwnershipLedger(self.state)
        self.approvals = ApprovalRegistry(self.state, self.ledger)
        self.authorizer = TransferAuthorizer(self.ledger, self.approvals)

        self.events = events if events is not None else EventLog()
        self.receivers = receivers if receivers is not None else ReceiverRegistry()

        self.pending_events = []

    @contextmanager
    def _atomic(self, operation):
        call = Call(operation)

        with self.state.lock:
            driver = self.state.driver
            outermost = self.state.depth == 0

            if outermost:
                driver.begin()

            checkpoint = driver.checkpoint()
            event_mark = len(self.pending_events)

            self.state.depth += 1
            try:
                yield call
            except Exception as e:
                if not outermost:
                    driver.rollback_to(checkpoint)
                    del self.pending_events[event_mark:]
                    log.debug('{} undone inside an enclosing call: {}'.format(operation, e))
                    raise

                driver.rollback()
                self.pending_events = []

                if isinstance(e, LedgerError):
                    log.notice('{} rejected: {}'.format(operation, e))
                else:
                    log.error('{} failed: {}'.format(operation, e))
                raise
            else:
                if outermost:
                    writes = deepcopy(driver.pending_writes)
                    try:
                        driver.commit()
                    except Exception as e:
                        # commit() has already dropped the pending writes
                        self.pending_events = []
                        log.error('{} failed to commit: {}'.format(operation, e))
                        raise

                    call.writes = writes
                    call.events, self.pending_events = self.pending_events, []

                log.debug('{} applied'.format(operation))
            finally:
                self.state.depth -= 1

        # Nested calls leave this empty, their events go out with the enclosing call
        for event in call.events:
            self.events.emit(event)

    def _emit(self, event):
        self.pending_events.append(event)

    # Queries

    def balance_of(self, account):
        return self.ledger.balance_of(account)

    def owner_of(self, token_id):
        return self.ledger.owner_of(token_id)

    def get_approved(self, token_id):
        return self.approvals.get_approved(token_id)

    def is_approved_for_all(self, owner, operator):
        return self.approvals.is_approved_for_all(owner, operator)

    def supports_interface(self, interface_id):
        return supports_interface(interface_id)

    # State changes

    def mint(self, to, token_id):
        with self._atomic('mint'):
            if not is_token(token_id) or token_id == config.NULL_TOKEN:
                raise InvalidToken(token_id=token_id)

            check_account(to, role='recipient')

            self.ledger.record_mint(token_id, to)
            self._emit(Transfer(None, to, token_id))

    def approve(self, caller, token_id, delegate):
        with self._atomic('approve'):
            owner = self.ledger.owner_of(token_id)

            if delegate is not None:
                check_account(delegate, role='delegate')

            if not self.authorizer.may_approve(caller, token_id):
                raise Unauthorized(caller=caller, token_id=token_id)

            self.approvals.set_approval(token_id, delegate)
            self._emit(Approval(owner, delegate, token_id))

    def set_approval_for_all(self, caller, operator, approved):
        with self._atomic('set_approval_for_all'):
            if not isinstance(approved, bool):
                raise InvalidFlag(flag=approved)

            self.approvals.set_operator(caller, operator, approved)
            self._emit(ApprovalForAll(caller, operator, approved))

    def _transfer(self, caller, from_, to, token_id):
        if from_ is None or self.ledger.find_owner(token_id) != from_:
            raise InvalidAccount(account=from_, role='current owner')

        if not self.authorizer.is_authorized(caller, token_id):
            raise Unauthorized(caller=caller, token_id=token_id)

        check_account(to, role='recipient')

        self.ledger.record_transfer(token_id, from_, to)
        self.approvals.clear_approval(token_id)

        self._emit(Transfer(from_, to, token_id))

    def transfer(self, caller, from_, to, token_id):
        with self._atomic('transfer'):
            self._transfer(caller, from_, to, token_id)

    def safe_transfer(self, caller, from_, to, token_id, data=b''):
        with self._atomic('safe_transfer'):
            self._transfer(caller, from_, to, token_id)

            # Still uncommitted here, so a refusal undoes the transfer
            self.receivers.acknowledge(caller, from_, to, token_id, data)

    def execute(self, sender, function_name, kwargs) -> dict:
        assert not function_name.startswith(config.PRIVATE_METHOD_PREFIX), 'Private method not callable.'

        kwargs = dict(kwargs)
        if 'from' in kwargs:
            kwargs['from_'] = kwargs.pop('from')

        writes, events = {}, []

        try:
            assert function_name in self.EXPORTS, 'Function {} is not exported.'.format(function_name)

            func = getattr(self, function_name)

            if function_name in self.QUERY_FUNCTIONS:
                result = func(**kwargs)
            else:
                # The operation runs nested inside this call, so these are exactly its writes and events
                with self._atomic(function_name) as call:
                    if function_name in self.CALLER_FUNCTIONS:
                        result = func(sender, **kwargs)
                    else:
                        result = func(**kwargs)

                writes, events = call.writes, call.events

            status_code = 0
        except Exception as e:
            result = e
            status_code = 1

        return {
            'status_code': status_code,
            'result': result,
            'writes': writes,
            'events': [e.to_dict() for e in events]
        }
