from __future__ import annotations

from typing import Any, Dict

from explorer.core.dto import TransferRecord
from explorer.core.models import FeedSession, SideCursor


def _cursor_to_dict(c: SideCursor) -> Dict[str, Any]:
    return {"status": c.status.value, "token": c.token}


def record_to_dict(r: TransferRecord) -> Dict[str, Any]:
    return {
        "id": r.id,
        "block_number": r.block_number,
        "tx_hash": r.tx_hash,
        "from": r.from_address,
        "to": r.to_address,
        "category": r.category.value,
        "asset": r.asset,
        # keep as string for JSON precision safety
        "amount_raw": str(r.amount_raw) if r.amount_raw is not None else None,
        "decimals": r.decimals,
        "token_id": str(r.token_id) if r.token_id is not None else None,
        "timestamp": r.timestamp,
    }


def session_to_dict(s: FeedSession) -> Dict[str, Any]:
    return {
        "address": s.address,
        "state": s.state.value,
        "pages_loaded": s.pages_loaded,
        "has_more": s.has_more,
        "cursors": {
            "from": _cursor_to_dict(s.from_cursor),
            "to": _cursor_to_dict(s.to_cursor),
        },
        "error": str(s.error) if s.error else None,
        "items": [record_to_dict(r) for r in s.items],
    }
