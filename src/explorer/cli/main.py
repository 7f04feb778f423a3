from __future__ import annotations

import argparse
import datetime as dt
import logging
import sys
import time
from typing import List, Optional

from explorer.config import settings
from explorer.core.errors import DataSourceError, InvalidAddressError
from explorer.core.models import FeedState
from explorer.services.feed_service import FeedService
from explorer.io.output_writer import write_feed_json
from explorer.io.presenter import FeedLineItem, feed_footer, present_items

from explorer.adapters.chain.alchemy_transfer_adapter import AlchemyTransferAdapter
from explorer.adapters.chain.static_transfer_adapter import StaticTransferAdapter


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="explorer-feed", description="Address activity feed (incoming + outgoing transfers)")
    p.add_argument("--address", required=True, help="Address whose activity to list")
    p.add_argument("--network", default=settings.DEFAULT_NETWORK, choices=sorted(settings.NETWORKS), help="Network to query")
    p.add_argument("--pages", type=int, default=1, help="Number of pages to load (stops early when history ends)")
    p.add_argument("--page-size", type=int, default=settings.FEED_PAGE_SIZE, help="Transfers per direction per page")
    p.add_argument("--out", default=None, help="Output folder for feed.json")
    p.add_argument("--use-static", action="store_true", help="Use static adapter (dev/testing)")
    p.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
    return p


def _ts() -> str:
    return dt.datetime.now().strftime("%H:%M:%S")


def _format_line(item: FeedLineItem) -> str:
    arrow = "OUT" if item.direction == "out" else "IN "
    label = "To" if item.direction == "out" else "From"
    token = f" ({item.token_id_text})" if item.token_id_text else ""
    return (
        f"{arrow} #{item.block_number} {item.short_hash} "
        f"{label}: {item.short_counterparty} • {item.amount_text}{token} • {item.age_text}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Ports
    if args.use_static:
        port = StaticTransferAdapter()
        adapter_label = "StaticTransferAdapter (dev/testing)"
    else:
        try:
            port = AlchemyTransferAdapter(network=args.network)
        except DataSourceError as exc:
            print(f"[{_ts()}] Error: {exc}", file=sys.stderr)
            return 2
        adapter_label = f"AlchemyTransferAdapter ({settings.NETWORKS[args.network]['name']})"
    print(f"Adapter: {adapter_label}")

    start_time = time.time()
    shown = 0
    with FeedService(port, page_size=args.page_size) as svc:
        try:
            pending = svc.open_feed(args.address)
        except InvalidAddressError as exc:
            print(f"[{_ts()}] Error: {exc}", file=sys.stderr)
            return 2

        print(f"[{_ts()}] Loading activity for {args.address}")
        pages = 0
        while pending is not None:
            pending.result()
            pages += 1

            session = svc.get_session()
            items = present_items(session.items[shown:], session.address)
            for item in items:
                print(_format_line(item))
            shown = len(session.items)

            if pages >= args.pages:
                break
            pending = svc.load_more()

        session = svc.get_session()

    footer = feed_footer(session.state, bool(session.items), session.error)
    if session.state == FeedState.FAILED:
        print(f"[{_ts()}] {footer}", file=sys.stderr)
    elif session.state == FeedState.READY:
        print(f"[{_ts()}] More history available (use --pages to load further)")
    else:
        print(f"[{_ts()}] {footer}")

    elapsed = time.time() - start_time
    print(f"[{_ts()}] Done in {elapsed:.1f}s • {session.pages_loaded} page(s) • {len(session.items)} transfer(s)")

    if args.out:
        out_path = write_feed_json(session, args.out)
        print(f"Wrote: {out_path}")

    return 1 if session.state == FeedState.FAILED else 0


if __name__ == "__main__":
    raise SystemExit(main())
