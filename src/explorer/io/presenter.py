from __future__ import annotations

import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional

from explorer.config.settings import DEFAULT_DECIMALS
from explorer.core.dto import TransferCategory, TransferRecord
from explorer.core.errors import ExplorerError
from explorer.core.models import FeedState


@dataclass(frozen=True)
class FeedLineItem:
    tx_hash: str
    short_hash: str
    direction: str            # "out" | "in"
    counterparty: str
    short_counterparty: str
    amount_text: str
    token_id_text: Optional[str]
    age_text: str
    block_number: int


def present_items(
    records: Iterable[TransferRecord],
    address: str,
    now_ts: Optional[int] = None,
) -> List[FeedLineItem]:
    now = int(now_ts) if now_ts is not None else int(time.time())
    viewer = address.lower()
    return [_line_item(r, viewer, now) for r in records]


def _line_item(r: TransferRecord, viewer: str, now: int) -> FeedLineItem:
    is_out = r.from_address.lower() == viewer
    counterparty = r.to_address if is_out else r.from_address
    return FeedLineItem(
        tx_hash=r.tx_hash,
        short_hash=_shorten(r.tx_hash, 12),
        direction="out" if is_out else "in",
        counterparty=counterparty,
        short_counterparty=_shorten(counterparty, 10),
        amount_text=format_amount(r),
        token_id_text=f"ID: #{r.token_id}" if r.token_id is not None else None,
        age_text=relative_time(r.timestamp, now),
        block_number=r.block_number,
    )


def format_units(amount_raw: Optional[int], decimals: Optional[int]) -> Decimal:
    if not amount_raw:
        return Decimal("0")
    scale = DEFAULT_DECIMALS if decimals is None else int(decimals)
    return Decimal(amount_raw) / (Decimal(10) ** scale)


def format_amount(r: TransferRecord) -> str:
    asset = r.asset or "N/A"
    if r.category == TransferCategory.NON_FUNGIBLE:
        return f"1 {asset}"
    if r.category == TransferCategory.MULTI_TOKEN:
        return f"{r.amount_raw or 0} {asset}"
    return f"{format_units(r.amount_raw, r.decimals):.4f} {asset}"


def format_eth_value(value_wei: Optional[int]) -> str:
    if not value_wei:
        return "0.00"
    return f"{format_units(value_wei, 18):.6f}"


def format_token_value(raw_balance: Optional[int], decimals: Optional[int]) -> str:
    # unknown decimals: the raw figure would be misleading
    if not raw_balance or decimals is None:
        return "0"
    value = format_units(raw_balance, decimals)
    return f"{value:,.4f}".rstrip("0").rstrip(".")


def format_big_number(value: Optional[int]) -> str:
    return f"{int(value or 0):,}"


def format_gas_value(gas_price_wei: Optional[int]) -> str:
    if not gas_price_wei:
        return "0"
    return f"{format_units(gas_price_wei, 9):.2f} Gwei"


def relative_time(timestamp: int, now: int) -> str:
    diff = max(0, int(now) - int(timestamp))
    if diff < 60:
        return f"{diff} sec{'' if diff == 1 else 's'} ago"
    if diff < 3600:
        return f"{diff // 60} min ago"
    if diff < 86400:
        return f"{diff // 3600} hours ago"
    return f"{diff // 86400} days ago"


def feed_footer(state: Optional[FeedState], has_items: bool, error: Optional[ExplorerError] = None) -> str:
    if state == FeedState.LOADING:
        return "Loading..."
    if state == FeedState.FAILED:
        return f"{error}." if error else "Error fetching transactions."
    if state == FeedState.READY:
        return "Load More"
    if not has_items:
        return "No transactions found for this address."
    return "End of transaction history."


def _shorten(value: str, keep: int) -> str:
    if not value or len(value) <= keep:
        return value or ""
    return f"{value[:keep]}..."
