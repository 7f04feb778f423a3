from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Set

from explorer.core.dto import TransferRecord


def merge_page(
    from_batch: Sequence[TransferRecord],
    to_batch: Sequence[TransferRecord],
) -> List[TransferRecord]:
    """
    Combine one page of both directions into a single feed page.

    - Dedupe by id: a self-transfer shows up on both sides, the first
      occurrence (from side) is kept at its position
    - Order: block number, newest first
    - Equal block numbers keep their concatenated order (stable sort)
    """
    unique: Dict[str, TransferRecord] = {}
    for r in list(from_batch) + list(to_batch):
        unique.setdefault(r.id, r)

    return sorted(unique.values(), key=_block_key, reverse=True)


def append_unique(
    existing: Iterable[TransferRecord],
    page: Iterable[TransferRecord],
) -> List[TransferRecord]:
    # a transfer can come back on a later page of the opposite side
    out = list(existing)
    seen: Set[str] = {r.id for r in out}
    for r in page:
        if r.id in seen:
            continue
        seen.add(r.id)
        out.append(r)
    return out


def _block_key(r: TransferRecord) -> int:
    return r.block_number
