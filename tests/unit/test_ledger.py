from unittest import TestCase
from nftledger.registry.state import LedgerState
from nftledger.registry.ledger import OwnershipLedger
from nftledger.exceptions import NotFound, InvalidAccount, InvalidToken, AlreadyExists


class TestOwnershipLedger(TestCase):
    def setUp(self):
        self.state = LedgerState()
        self.ledger = OwnershipLedger(self.state)

    def test_owner_of_missing_token(self):
        with self.assertRaises(NotFound):
            self.ledger.owner_of(1)

    def test_owner_of_zero_token_is_not_found(self):
        with self.assertRaises(NotFound):
            self.ledger.owner_of(0)

    def test_owner_of_bad_token(self):
        with self.assertRaises(InvalidToken):
            self.ledger.owner_of('1')

    def test_balance_of_none_fails(self):
        with self.assertRaises(InvalidAccount):
            self.ledger.balance_of(None)

    def test_balance_of_unknown_account_is_zero(self):
        self.assertEqual(self.ledger.balance_of('stu'), 0)

    def test_record_mint(self):
        self.ledger.record_mint(1, 'stu')

        self.assertEqual(self.ledger.owner_of(1), 'stu')
        self.assertEqual(self.ledger.balance_of('stu'), 1)

    def test_record_mint_twice_fails(self):
        self.ledger.record_mint(1, 'stu')

        with self.assertRaises(AlreadyExists) as cm:
            self.ledger.record_mint(1, 'colin')

        self.assertEqual(cm.exception.kwargs['owner'], 'stu')

    def test_record_mint_to_none_fails(self):
        with self.assertRaises(InvalidAccount):
            self.ledger.record_mint(1, None)

        self.assertIsNone(self.ledger.find_owner(1))

    def test_record_transfer(self):
        self.ledger.record_mint(1, 'stu')
        self.ledger.record_mint(2, 'stu')

        self.ledger.record_transfer(1, 'stu', 'colin')

        self.assertEqual(self.ledger.owner_of(1), 'colin')
        self.assertEqual(self.ledger.balance_of('stu'), 1)
        self.assertEqual(self.ledger.balance_of('colin'), 1)

    def test_record_transfer_from_wrong_owner_fails(self):
        self.ledger.record_mint(1, 'stu')

        with self.assertRaises(InvalidAccount):
            self.ledger.record_transfer(1, 'colin', 'raghu')

        self.assertEqual(self.ledger.owner_of(1), 'stu')

    def test_record_transfer_from_none_fails(self):
        with self.assertRaises(InvalidAccount):
            self.ledger.record_transfer(1, None, 'raghu')

    def test_record_transfer_to_none_fails(self):
        self.ledger.record_mint(1, 'stu')

        with self.assertRaises(InvalidAccount):
            self.ledger.record_transfer(1, 'stu', None)

        self.assertEqual(self.ledger.balance_of('stu'), 1)

    def test_transfer_to_self_keeps_balance(self):
        self.ledger.record_mint(1, 'stu')
        self.ledger.record_transfer(1, 'stu', 'stu')

        self.assertEqual(self.ledger.balance_of('stu'), 1)
