from __future__ import annotations

import logging
import re
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from explorer.config.settings import FEED_CATEGORIES, FEED_MAX_WORKERS, FEED_PAGE_SIZE
from explorer.core.dto import TransferRecord
from explorer.core.errors import InvalidAddressError, NetworkFailure, StaleResponseError
from explorer.core.models import FeedSession, FeedState, SideCursor
from explorer.ports.transfer_query_port import TransferQueryPort
from explorer.services.feed_fetcher import fetch_page
from explorer.services.feed_session import (
    apply_failure,
    apply_page,
    begin_loading,
    new_session,
)

logger = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_address(address: str) -> str:
    addr = (address or "").strip()
    if not _ADDRESS_RE.match(addr):
        raise InvalidAddressError(f"Invalid address: {address!r}")
    return addr.lower()


class FeedService:
    """
    Incrementally loadable activity feed for one viewed address at a time.

    - open_feed: start a fresh session and load the first page
    - load_more: next page, only while the feed is READY
    - retry: re-fetch the page that failed, cursors untouched
    - Pages run in the background; each call returns a Future that resolves
      to the updated session, or None when the response turned out stale
    """

    def __init__(
        self,
        port: TransferQueryPort,
        page_size: int = FEED_PAGE_SIZE,
        categories: Sequence[str] = FEED_CATEGORIES,
        max_workers: int = FEED_MAX_WORKERS,
    ) -> None:
        self.port = port
        self.page_size = page_size
        self.categories = tuple(categories)

        self._lock = threading.Lock()
        self._session: Optional[FeedSession] = None

        # page jobs only wait on query futures, never the other way round
        self._page_executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="feed")
        self._query_executor = ThreadPoolExecutor(max_workers=2 * max_workers, thread_name_prefix="feed-query")

    # -------------------------
    # Feed operations
    # -------------------------

    def open_feed(self, address: str) -> Future:
        addr = normalize_address(address)
        with self._lock:
            session = new_session(addr)
            self._session = session
        logger.info("opened feed %s for %s", session.session_id, addr)
        return self._submit(session)

    def load_more(self) -> Optional[Future]:
        with self._lock:
            session = self._session
            if session is None or session.state != FeedState.READY:
                logger.debug("load_more ignored in state %s", session.state.value if session else None)
                return None
            session = begin_loading(session)
            self._session = session
        return self._submit(session)

    def retry(self) -> Optional[Future]:
        with self._lock:
            session = self._session
            if session is None or session.state != FeedState.FAILED:
                return None
            session = begin_loading(session)
            self._session = session
        logger.info("retrying page %d for %s", session.pages_loaded + 1, session.address)
        return self._submit(session)

    def close_feed(self) -> None:
        with self._lock:
            self._session = None

    # -------------------------
    # Read side
    # -------------------------

    def get_session(self) -> Optional[FeedSession]:
        with self._lock:
            return self._session

    def get_renderable_items(self) -> List[TransferRecord]:
        session = self.get_session()
        return list(session.items) if session else []

    def get_feed_state(self) -> Optional[FeedState]:
        session = self.get_session()
        return session.state if session else None

    def has_more(self) -> bool:
        session = self.get_session()
        return bool(session and session.has_more)

    def shutdown(self, wait: bool = True) -> None:
        self._page_executor.shutdown(wait=wait)
        self._query_executor.shutdown(wait=wait)

    def __enter__(self) -> FeedService:
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()

    # -------------------------
    # Helpers
    # -------------------------

    def _submit(self, session: FeedSession) -> Future:
        return self._page_executor.submit(
            self._run_page,
            session.session_id,
            session.address,
            session.from_cursor,
            session.to_cursor,
        )

    def _run_page(
        self,
        session_id: str,
        address: str,
        from_cursor: SideCursor,
        to_cursor: SideCursor,
    ) -> Optional[FeedSession]:
        try:
            result = fetch_page(
                self.port,
                address,
                from_cursor,
                to_cursor,
                categories=self.categories,
                page_size=self.page_size,
                executor=self._query_executor,
            )
            return self._apply(lambda s: apply_page(s, session_id, result))
        except NetworkFailure as e:
            failure = e
        except Exception as e:
            # the page must never stay LOADING
            failure = NetworkFailure("page", f"{e.__class__.__name__}: {e}", self.categories)
            failure.__cause__ = e

        logger.warning("feed page failed for %s: %s", address, failure)
        return self._apply(lambda s: apply_failure(s, session_id, failure))

    def _apply(self, transition: Callable[[FeedSession], FeedSession]) -> Optional[FeedSession]:
        with self._lock:
            if self._session is None:
                logger.debug("discarding response: feed closed")
                return None
            try:
                updated = transition(self._session)
            except StaleResponseError as e:
                logger.debug("discarding stale response: %s", e)
                return None
            self._session = updated
            return updated
