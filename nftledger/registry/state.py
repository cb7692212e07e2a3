import threading

from nftledger.db.driver import LedgerDriver
from nftledger.db.orm import Hash
from nftledger.exceptions import InvalidAccount, InvalidToken
from nftledger import config


def is_account(value):
    """True for a usable account identifier. None is the no-account value and is never one."""
    return isinstance(value, str) and \
        0 < len(value) <= config.MAX_KEY_SIZE and \
        config.DELIMITER not in value and \
        config.INDEX_SEPARATOR not in value


def check_account(value, role='account'):
    if not is_account(value):
        raise InvalidAccount(account=value, role=role)
    return value


def is_token(value):
    return isinstance(value, int) and not isinstance(value, bool) and \
        config.NULL_TOKEN <= value <= config.MAX_TOKEN_ID


def check_token(value):
    if not is_token(value):
        raise InvalidToken(token_id=value)
    return value


class LedgerState:
    """
    The four persisted maps of the registry and the lock guarding them.

    owners:    token id -> owning account, absent when the token does not exist
    balances:  account -> number of tokens owned
    approvals: token id -> approved delegate, absent when there is none
    operators: (owner, operator) -> blanket approval flag
    """

    def __init__(self, driver: LedgerDriver=None, namespace=config.NAMESPACE):
        self.driver = driver if driver is not None else LedgerDriver()
        self.namespace = namespace

        self.owners = Hash(namespace, config.OWNERS_HASH, driver=self.driver)
        self.balances = Hash(namespace, config.BALANCES_HASH, driver=self.driver, default_value=0)
        self.approvals = Hash(namespace, config.APPROVALS_HASH, driver=self.driver)
        self.operators = Hash(namespace, config.OPERATORS_HASH, driver=self.driver, default_value=False)

        # Single writer. Re-entrant so a receiver called during a safe transfer can call back in.
        self.lock = threading.RLock()
        self.depth = 0

    def dump(self):
        operators = {}
        for k, v in self.operators.items().items():
            owner, operator = k.split(config.DELIMITER, 1)
            operators[(owner, operator)] = v

        return {
            'owners': {int(k): v for k, v in self.owners.items().items()},
            'balances': self.balances.items(),
            'approvals': {int(k): v for k, v in self.approvals.items().items()},
            'operators': operators
        }

    def flush(self):
        with self.lock:
            self.driver.flush()
