from __future__ import annotations

from explorer.core.errors import NetworkFailure, StaleResponseError
from explorer.core.models import FeedSession, FeedState, FetchPageResult, SideCursor
from explorer.services.feed_merge import append_unique, merge_page


def new_session(address: str) -> FeedSession:
    return FeedSession(
        address=address,
        from_cursor=SideCursor.start(),
        to_cursor=SideCursor.start(),
        state=FeedState.LOADING,
    )


def begin_loading(session: FeedSession) -> FeedSession:
    return session.evolve(state=FeedState.LOADING, error=None)


def apply_page(session: FeedSession, session_id: str, result: FetchPageResult) -> FeedSession:
    _check_current(session, session_id)

    page = merge_page(result.from_batch, result.to_batch)
    nxt = session.evolve(
        from_cursor=result.from_cursor,
        to_cursor=result.to_cursor,
        items=tuple(append_unique(session.items, page)),
        error=None,
        pages_loaded=session.pages_loaded + 1,
    )
    return nxt.evolve(state=FeedState.READY if nxt.has_more else FeedState.COMPLETE)


def apply_failure(session: FeedSession, session_id: str, error: NetworkFailure) -> FeedSession:
    # cursors and items stay as they were so a retry re-fetches the same page
    _check_current(session, session_id)
    return session.evolve(state=FeedState.FAILED, error=error)


def _check_current(session: FeedSession, session_id: str) -> None:
    if session.session_id != session_id:
        raise StaleResponseError(
            f"response for session {session_id} arrived after switching to {session.session_id}"
        )
