from unittest import TestCase
from nftledger.registry.state import LedgerState
from nftledger.registry.ledger import OwnershipLedger
from nftledger.registry.approvals import ApprovalRegistry
from nftledger.registry.authorizer import TransferAuthorizer
from nftledger.exceptions import NotFound


class TestTransferAuthorizer(TestCase):
    def setUp(self):
        self.state = LedgerState()
        self.ledger = OwnershipLedger(self.state)
        self.approvals = ApprovalRegistry(self.state, self.ledger)
        self.authorizer = TransferAuthorizer(self.ledger, self.approvals)

        self.ledger.record_mint(1, 'stu')

    def test_owner_is_authorized(self):
        self.assertTrue(self.authorizer.is_authorized('stu', 1))

    def test_stranger_is_not_authorized(self):
        self.assertFalse(self.authorizer.is_authorized('colin', 1))

    def test_delegate_is_authorized(self):
        self.approvals.set_approval(1, 'colin')

        self.assertTrue(self.authorizer.is_authorized('colin', 1))

    def test_operator_is_authorized(self):
        self.approvals.set_operator('stu', 'raghu', True)

        self.assertTrue(self.authorizer.is_authorized('raghu', 1))

    def test_none_caller_never_matches_missing_delegate(self):
        self.assertFalse(self.authorizer.is_authorized(None, 1))

    def test_missing_token(self):
        with self.assertRaises(NotFound):
            self.authorizer.is_authorized('stu', 2)

    def test_checks_do_not_write(self):
        self.authorizer.is_authorized('colin', 1)
        self.authorizer.may_approve('colin', 1)

        self.assertDictEqual(self.state.driver.pending_writes, {
            'nft.owners:1': 'stu',
            'nft.balances:stu': 1,
        })

    def test_owner_may_approve(self):
        self.assertTrue(self.authorizer.may_approve('stu', 1))

    def test_operator_may_approve(self):
        self.approvals.set_operator('stu', 'raghu', True)

        self.assertTrue(self.authorizer.may_approve('raghu', 1))

    def test_delegate_may_not_approve(self):
        self.approvals.set_approval(1, 'colin')

        self.assertFalse(self.authorizer.may_approve('colin', 1))
