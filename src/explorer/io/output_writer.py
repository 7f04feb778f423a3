from __future__ import annotations

import json
from pathlib import Path

from explorer.core.models import FeedSession
from explorer.io.schemas import session_to_dict


def write_feed_json(session: FeedSession, out_dir: str, filename: str = "feed.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(session_to_dict(session), f, indent=2)

    return str(out_path)
