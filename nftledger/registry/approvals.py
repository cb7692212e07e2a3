from nftledger.registry.state import LedgerState, is_account, check_account
from nftledger.registry.ledger import OwnershipLedger


class ApprovalRegistry:
    def __init__(self, state: LedgerState, ledger: OwnershipLedger):
        self.state = state
        self.ledger = ledger

    def get_approved(self, token_id):
        # Raises NotFound for tokens that do not exist
        self.ledger.owner_of(token_id)
        return self.state.approvals[token_id]

    def set_approval(self, token_id, delegate):
        self.state.approvals[token_id] = delegate

    def clear_approval(self, token_id):
        self.state.approvals[token_id] = None

    def set_operator(self, owner, operator, granted: bool):
        check_account(owner, role='owner')
        check_account(operator, role='operator')

        self.state.operators[owner, operator] = granted

    def is_approved_for_all(self, owner, operator) -> bool:
        # Nobody operates for the no-account value
        if not is_account(owner) or not is_account(operator):
            return False
        return self.state.operators[owner, operator] is True
