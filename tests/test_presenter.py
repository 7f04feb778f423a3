import unittest

from explorer.core.dto import TransferCategory, TransferRecord
from explorer.core.errors import NetworkFailure
from explorer.core.models import FeedState
from explorer.io.presenter import (
    feed_footer,
    format_amount,
    format_big_number,
    format_eth_value,
    format_gas_value,
    format_token_value,
    format_units,
    present_items,
    relative_time,
)

ME = "0x" + "a" * 40
OTHER = "0x" + "b" * 40
NOW = 1_700_000_000


def _rec(**overrides) -> TransferRecord:
    defaults = dict(
        id="u1",
        block_number=100,
        tx_hash="0x" + "1" * 64,
        from_address=ME,
        to_address=OTHER,
        category=TransferCategory.NATIVE,
        asset="ETH",
        amount_raw=10**18,
        decimals=None,
        token_id=None,
        timestamp=NOW - 30,
    )
    defaults.update(overrides)
    return TransferRecord(**defaults)


class PresentItemsTests(unittest.TestCase):
    def test_outgoing_shows_recipient(self) -> None:
        [item] = present_items([_rec()], ME.upper().replace("0X", "0x"), now_ts=NOW)

        self.assertEqual(item.direction, "out")
        self.assertEqual(item.counterparty, OTHER)
        self.assertEqual(item.short_counterparty, OTHER[:10] + "...")
        self.assertEqual(item.short_hash, "0x1111111111...")
        self.assertEqual(item.age_text, "30 secs ago")
        self.assertEqual(item.block_number, 100)

    def test_incoming_shows_sender(self) -> None:
        [item] = present_items([_rec(from_address=OTHER, to_address=ME)], ME, now_ts=NOW)

        self.assertEqual(item.direction, "in")
        self.assertEqual(item.counterparty, OTHER)

    def test_preserves_feed_order(self) -> None:
        items = present_items([_rec(id="x", block_number=9), _rec(id="y", block_number=3)], ME, now_ts=NOW)

        self.assertEqual([i.block_number for i in items], [9, 3])


class FormatAmountTests(unittest.TestCase):
    def test_native_defaults_to_18_decimals(self) -> None:
        self.assertEqual(format_amount(_rec()), "1.0000 ETH")

    def test_fungible_uses_decimals(self) -> None:
        r = _rec(category=TransferCategory.FUNGIBLE, asset="USDC", amount_raw=1_500_000, decimals=6)

        self.assertEqual(format_amount(r), "1.5000 USDC")

    def test_non_fungible_shows_one_and_token_id(self) -> None:
        r = _rec(category=TransferCategory.NON_FUNGIBLE, asset="BAYC", amount_raw=None, token_id=42)

        [item] = present_items([r], ME, now_ts=NOW)

        self.assertEqual(item.amount_text, "1 BAYC")
        self.assertEqual(item.token_id_text, "ID: #42")

    def test_multi_token_shows_count(self) -> None:
        r = _rec(category=TransferCategory.MULTI_TOKEN, asset="ITEM", amount_raw=3, token_id=7)

        self.assertEqual(format_amount(r), "3 ITEM")

    def test_missing_symbol(self) -> None:
        self.assertEqual(format_amount(_rec(asset=None)), "1.0000 N/A")

    def test_format_units_zero_and_missing(self) -> None:
        self.assertEqual(format_units(None, 6), 0)
        self.assertEqual(format_units(0, 6), 0)
        self.assertEqual(str(format_units(123, 2)), "1.23")


class RelativeTimeTests(unittest.TestCase):
    def test_buckets(self) -> None:
        self.assertEqual(relative_time(NOW - 1, NOW), "1 sec ago")
        self.assertEqual(relative_time(NOW - 59, NOW), "59 secs ago")
        self.assertEqual(relative_time(NOW - 60, NOW), "1 min ago")
        self.assertEqual(relative_time(NOW - 7200, NOW), "2 hours ago")
        self.assertEqual(relative_time(NOW - 3 * 86400, NOW), "3 days ago")

    def test_future_timestamp_clamps_to_zero(self) -> None:
        self.assertEqual(relative_time(NOW + 10, NOW), "0 secs ago")


class FeedFooterTests(unittest.TestCase):
    def test_states(self) -> None:
        self.assertEqual(feed_footer(FeedState.READY, True), "Load More")
        self.assertEqual(feed_footer(FeedState.COMPLETE, True), "End of transaction history.")
        self.assertEqual(feed_footer(FeedState.COMPLETE, False), "No transactions found for this address.")
        self.assertEqual(feed_footer(FeedState.LOADING, True), "Loading...")

    def test_failure_names_direction(self) -> None:
        err = NetworkFailure("to", "timeout", ["erc20"])

        self.assertEqual(
            feed_footer(FeedState.FAILED, True, err),
            "Error fetching to transfers [erc20]: timeout.",
        )


class ValueFormattingTests(unittest.TestCase):
    def test_eth_value(self) -> None:
        self.assertEqual(format_eth_value(0), "0.00")
        self.assertEqual(format_eth_value(None), "0.00")
        self.assertEqual(format_eth_value(1_234_567_000_000_000_000), "1.234567")

    def test_token_value_needs_decimals(self) -> None:
        self.assertEqual(format_token_value(1_500_000, None), "0")
        self.assertEqual(format_token_value(None, 6), "0")
        self.assertEqual(format_token_value(1_500_000, 6), "1.5")
        self.assertEqual(format_token_value(2_000_000 * 10**6, 6), "2,000,000")

    def test_big_number_and_gas(self) -> None:
        self.assertEqual(format_big_number(30_000_000), "30,000,000")
        self.assertEqual(format_big_number(None), "0")
        self.assertEqual(format_gas_value(12_500_000_000), "12.50 Gwei")
        self.assertEqual(format_gas_value(None), "0")


if __name__ == "__main__":
    unittest.main()
