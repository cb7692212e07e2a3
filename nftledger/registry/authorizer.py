from nftledger.registry.ledger import OwnershipLedger
from nftledger.registry.approvals import ApprovalRegistry
from nftledger.registry.state import is_account


class TransferAuthorizer:
    """Read-only checks of who may act on a token. Never mutates state."""

    def __init__(self, ledger: OwnershipLedger, approvals: ApprovalRegistry):
        self.ledger = ledger
        self.approvals = approvals

    def is_authorized(self, caller, token_id) -> bool:
        """Owner, approved delegate or an operator of the owner may move the token."""
        if not is_account(caller):
            return False

        owner = self.ledger.owner_of(token_id)

        return caller == owner or \
            caller == self.approvals.get_approved(token_id) or \
            self.approvals.is_approved_for_all(owner, caller)

    def may_approve(self, caller, token_id) -> bool:
        """Only the owner or one of its operators may pick the delegate."""
        if not is_account(caller):
            return False

        owner = self.ledger.owner_of(token_id)

        return caller == owner or self.approvals.is_approved_for_all(owner, caller)
