import unittest

from explorer.adapters.chain.static_chain_adapter import StaticChainAdapter
from explorer.core.dto import BlockDetails, RawTokenBalance, TokenMeta, TransactionDetails
from explorer.core.errors import InvalidQueryError, NotFoundError
from explorer.core.models import AddressOverview, SearchKind
from explorer.services.explorer_service import ExplorerService, classify_query

WALLET = "0x" + "a" * 40
CONTRACT = "0x" + "c" * 40
USDC = "0x" + "1" * 40
DUST = "0x" + "2" * 40
TX = "0x" + "f" * 64


class ClassifyQueryTests(unittest.TestCase):
    def test_transaction_hash(self) -> None:
        target = classify_query("  0x" + "F" * 64 + " ")
        self.assertEqual(target.kind, SearchKind.TRANSACTION)
        self.assertEqual(target.value, TX)

    def test_address(self) -> None:
        target = classify_query("0x" + "A" * 40)
        self.assertEqual(target.kind, SearchKind.ADDRESS)
        self.assertEqual(target.value, WALLET)

    def test_block_number(self) -> None:
        target = classify_query("0012345")
        self.assertEqual(target.kind, SearchKind.BLOCK)
        self.assertEqual(target.value, "12345")

    def test_rejects_everything_else(self) -> None:
        for q in ["", "0x1234", "0x" + "g" * 40, "-5", "vitalik.eth", "0x" + "a" * 63]:
            with self.subTest(q=q):
                with self.assertRaises(InvalidQueryError):
                    classify_query(q)


class ExplorerServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.chain = StaticChainAdapter(
            balances={WALLET: 2 * 10**18},
            nonces={WALLET: 7},
            code={CONTRACT: "0x6080604052"},
            token_balances={WALLET: [RawTokenBalance(USDC, 1_500_000), RawTokenBalance(DUST, 0)]},
            token_meta={USDC: TokenMeta(USDC, "USDC", 6, name="USD Coin")},
            transactions={TX: TransactionDetails(
                tx_hash=TX, block_number=10, from_address=WALLET, to_address=CONTRACT,
                value_wei=0, gas_price=10**9, gas_limit=21000, gas_used=21000, success=True,
            )},
            blocks={10: BlockDetails(10, 1_700_000_000, "0xb", "0xa", CONTRACT, 21000, 30_000_000, 1)},
        )
        self.svc = ExplorerService(self.chain)

    def test_wallet_overview(self) -> None:
        ov = self.svc.address_overview(WALLET.upper().replace("0X", "0x"))

        self.assertEqual(ov, AddressOverview(WALLET, 2 * 10**18, 7, False))
        self.assertEqual(ov.account_type, "EOA (Wallet)")
        self.assertCountEqual(self.chain.calls, ["get_balance", "get_transaction_count", "get_code"])

    def test_contract_overview(self) -> None:
        ov = self.svc.address_overview(CONTRACT)

        self.assertTrue(ov.is_contract)
        self.assertEqual(ov.account_type, "Contract")

    def test_token_balances_skip_zero_and_merge_metadata(self) -> None:
        [holding] = self.svc.token_balances(WALLET)

        self.assertEqual(holding.token_address, USDC)
        self.assertEqual(holding.symbol, "USDC")
        self.assertEqual(holding.decimals, 6)
        self.assertEqual(holding.raw_balance, 1_500_000)
        # metadata is only looked up for non-zero balances
        self.assertEqual(self.chain.calls.count("get_token_meta"), 1)

    def test_token_balances_without_holdings(self) -> None:
        self.assertEqual(self.svc.token_balances(CONTRACT), [])
        self.assertNotIn("get_token_meta", self.chain.calls)

    def test_search_dispatches_by_kind(self) -> None:
        self.assertIsInstance(self.svc.search(WALLET), AddressOverview)
        self.assertEqual(self.svc.search(TX).gas_used, 21000)
        self.assertEqual(self.svc.search("10").tx_count, 1)

    def test_missing_transaction_and_block(self) -> None:
        with self.assertRaises(NotFoundError):
            self.svc.search("0x" + "e" * 64)
        with self.assertRaises(NotFoundError):
            self.svc.search("99")

    def test_overview_rejects_non_address(self) -> None:
        with self.assertRaises(InvalidQueryError):
            self.svc.address_overview(TX)


if __name__ == "__main__":
    unittest.main()
