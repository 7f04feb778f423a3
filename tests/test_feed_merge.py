import unittest

from explorer.core.dto import TransferCategory, TransferRecord
from explorer.services.feed_merge import append_unique, merge_page


def _rec(id: str, block_number: int, asset: str = "ETH") -> TransferRecord:
    return TransferRecord(
        id=id,
        block_number=block_number,
        tx_hash=f"0x{id}",
        from_address="0xaaaa",
        to_address="0xbbbb",
        category=TransferCategory.NATIVE,
        asset=asset,
        amount_raw=1,
    )


class MergePageTests(unittest.TestCase):
    def test_self_transfer_on_both_sides_appears_once(self) -> None:
        merged = merge_page([_rec("a", 10)], [_rec("a", 10)])

        self.assertEqual([r.id for r in merged], ["a"])
        self.assertEqual(merged[0].block_number, 10)

    def test_newest_block_first_across_sides(self) -> None:
        merged = merge_page([_rec("x", 5)], [_rec("y", 9)])

        self.assertEqual([(r.id, r.block_number) for r in merged], [("y", 9), ("x", 5)])

    def test_equal_blocks_keep_concatenated_order(self) -> None:
        from_batch = [_rec("f1", 7), _rec("f2", 3)]
        to_batch = [_rec("t1", 7), _rec("t2", 7)]

        merged = merge_page(from_batch, to_batch)

        self.assertEqual([r.id for r in merged], ["f1", "t1", "t2", "f2"])

    def test_equal_blocks_not_reordered_by_side(self) -> None:
        merged = merge_page([_rec("late", 4)], [_rec("early", 4)])

        self.assertEqual([r.id for r in merged], ["late", "early"])

    def test_output_is_non_increasing_and_unique(self) -> None:
        from_batch = [_rec("a", 20), _rec("b", 15), _rec("c", 2)]
        to_batch = [_rec("d", 18), _rec("b", 15), _rec("e", 1), _rec("f", 15)]

        merged = merge_page(from_batch, to_batch)

        ids = [r.id for r in merged]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertLessEqual(len(merged), len(from_batch) + len(to_batch))
        for r1, r2 in zip(merged, merged[1:]):
            self.assertGreaterEqual(r1.block_number, r2.block_number)

    def test_duplicate_keeps_first_instance(self) -> None:
        first = _rec("a", 10, asset="FROM-SIDE")
        second = _rec("a", 10, asset="TO-SIDE")

        merged = merge_page([first], [second])

        self.assertIs(merged[0], first)

    def test_both_empty(self) -> None:
        self.assertEqual(merge_page([], []), [])

    def test_one_side_empty(self) -> None:
        merged = merge_page([], [_rec("a", 3), _rec("b", 8)])

        self.assertEqual([r.id for r in merged], ["b", "a"])


class AppendUniqueTests(unittest.TestCase):
    def test_appends_after_existing_and_skips_seen_ids(self) -> None:
        existing = [_rec("a", 10), _rec("b", 9)]
        page = [_rec("b", 9), _rec("c", 12), _rec("d", 1)]

        out = append_unique(existing, page)

        self.assertEqual([r.id for r in out], ["a", "b", "c", "d"])

    def test_does_not_mutate_existing(self) -> None:
        existing = (_rec("a", 10),)

        out = append_unique(existing, [_rec("z", 1)])

        self.assertEqual(len(existing), 1)
        self.assertEqual(len(out), 2)


if __name__ == "__main__":
    unittest.main()
