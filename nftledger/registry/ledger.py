from nftledger.registry.state import LedgerState, check_account, check_token
from nftledger.exceptions import NotFound, AlreadyExists, InvalidAccount


class OwnershipLedger:
    """
    Source of truth for who owns what.

    The record_* methods do no authorization and are only meant to be
    called by the executor once a request has been validated.
    """

    def __init__(self, state: LedgerState):
        self.state = state

    def find_owner(self, token_id):
        return self.state.owners[check_token(token_id)]

    def owner_of(self, token_id):
        owner = self.find_owner(token_id)
        if owner is None:
            raise NotFound(token_id=token_id)
        return owner

    def balance_of(self, account):
        return self.state.balances[check_account(account, role='owner')]

    def record_mint(self, token_id, to):
        check_account(to, role='recipient')

        owner = self.find_owner(token_id)
        if owner is not None:
            raise AlreadyExists(token_id=token_id, owner=owner)

        self.state.owners[token_id] = to
        self.state.balances[to] += 1

    def record_transfer(self, token_id, from_, to):
        check_account(to, role='recipient')

        if from_ is None or self.find_owner(token_id) != from_:
            raise InvalidAccount(account=from_, role='current owner')

        self.state.owners[token_id] = to
        self.state.balances[from_] -= 1
        self.state.balances[to] += 1
