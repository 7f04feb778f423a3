from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from typing import Optional, Sequence, Tuple

from explorer.config.settings import FEED_CATEGORIES, FEED_PAGE_SIZE
from explorer.core.dto import Direction, TransferPage, TransferQuery
from explorer.core.errors import NetworkFailure
from explorer.core.models import FetchPageResult, SideCursor, SideStatus
from explorer.ports.transfer_query_port import TransferQueryPort

logger = logging.getLogger(__name__)


def fetch_page(
    port: TransferQueryPort,
    address: str,
    from_cursor: SideCursor,
    to_cursor: SideCursor,
    *,
    categories: Sequence[str] = FEED_CATEGORIES,
    page_size: int = FEED_PAGE_SIZE,
    executor: Optional[Executor] = None,
) -> FetchPageResult:
    """
    Fetch the next page of both directional queries for one address.

    Both queries run concurrently and the page is done once both settle.
    An exhausted side is not queried. If either query fails the whole page
    fails with a NetworkFailure naming that side; nothing partial comes back.
    """
    cats = tuple(categories)

    if executor is None:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="feed-page") as ex:
            return fetch_page(
                port, address, from_cursor, to_cursor,
                categories=cats, page_size=page_size, executor=ex,
            )

    from_fut = _submit_side(executor, port, address, Direction.FROM, from_cursor, cats, page_size)
    to_fut = _submit_side(executor, port, address, Direction.TO, to_cursor, cats, page_size)
    wait([f for f in (from_fut, to_fut) if f is not None])

    from_page = _side_result(from_fut, Direction.FROM, cats)
    to_page = _side_result(to_fut, Direction.TO, cats)

    return FetchPageResult(
        from_batch=from_page.records,
        to_batch=to_page.records,
        from_cursor=from_cursor.advance(from_page.next_cursor),
        to_cursor=to_cursor.advance(to_page.next_cursor),
    )


def _submit_side(
    executor: Executor,
    port: TransferQueryPort,
    address: str,
    direction: Direction,
    cursor: SideCursor,
    categories: Tuple[str, ...],
    page_size: int,
) -> Optional[Future]:
    if cursor.status == SideStatus.EXHAUSTED:
        logger.debug("skipping exhausted %s side for %s", direction.value, address)
        return None

    query = TransferQuery(
        address=address,
        direction=direction,
        categories=categories,
        page_size=page_size,
        cursor=cursor.token if cursor.status == SideStatus.HAS_MORE else None,
    )
    return executor.submit(port.get_asset_transfers, query)


def _side_result(
    fut: Optional[Future],
    direction: Direction,
    categories: Tuple[str, ...],
) -> TransferPage:
    if fut is None:
        return TransferPage(records=[], next_cursor=None)
    try:
        page = fut.result()
        return TransferPage(records=list(page.records), next_cursor=page.next_cursor)
    except Exception as e:
        raise NetworkFailure(direction.value, str(e), categories) from e
