from unittest import TestCase
from nftledger.registry.state import LedgerState
from nftledger.registry.ledger import OwnershipLedger
from nftledger.registry.approvals import ApprovalRegistry
from nftledger.exceptions import NotFound, InvalidAccount


class TestApprovalRegistry(TestCase):
    def setUp(self):
        self.state = LedgerState()
        self.ledger = OwnershipLedger(self.state)
        self.approvals = ApprovalRegistry(self.state, self.ledger)

        self.ledger.record_mint(1, 'stu')

    def test_new_token_has_no_delegate(self):
        self.assertIsNone(self.approvals.get_approved(1))

    def test_get_approved_missing_token(self):
        with self.assertRaises(NotFound):
            self.approvals.get_approved(2)

    def test_set_approval_overwrites(self):
        self.approvals.set_approval(1, 'colin')
        self.approvals.set_approval(1, 'raghu')

        self.assertEqual(self.approvals.get_approved(1), 'raghu')

    def test_clear_approval(self):
        self.approvals.set_approval(1, 'colin')
        self.approvals.clear_approval(1)

        self.assertIsNone(self.approvals.get_approved(1))

    def test_set_operator(self):
        self.approvals.set_operator('stu', 'colin', True)

        self.assertTrue(self.approvals.is_approved_for_all('stu', 'colin'))
        self.assertFalse(self.approvals.is_approved_for_all('colin', 'stu'))

    def test_operator_without_tokens(self):
        self.approvals.set_operator('nobody', 'colin', True)

        self.assertTrue(self.approvals.is_approved_for_all('nobody', 'colin'))

    def test_revoke_operator(self):
        self.approvals.set_operator('stu', 'colin', True)
        self.approvals.set_operator('stu', 'colin', False)

        self.assertFalse(self.approvals.is_approved_for_all('stu', 'colin'))

    def test_set_operator_none_fails(self):
        with self.assertRaises(InvalidAccount):
            self.approvals.set_operator('stu', None, True)

    def test_none_owner_has_no_operators(self):
        self.assertFalse(self.approvals.is_approved_for_all(None, 'colin'))

    def test_none_operator_is_never_approved(self):
        self.assertFalse(self.approvals.is_approved_for_all('stu', None))

    def test_malformed_accounts_are_never_approved(self):
        self.assertFalse(self.approvals.is_approved_for_all('stu:x', 'colin'))
