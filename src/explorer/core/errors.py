from __future__ import annotations

from typing import Optional, Sequence


class ExplorerError(Exception):
    pass


class DataSourceError(ExplorerError):
    pass


class RateLimitError(DataSourceError):
    pass


class NetworkFailure(DataSourceError):
    """
    One directional transfer query failed, so the whole page failed.
    """

    def __init__(
        self,
        direction: str,
        message: str,
        categories: Optional[Sequence[str]] = None,
    ) -> None:
        self.direction = direction
        self.categories = tuple(categories or ())
        self.original_message = message
        scope = f"{direction} transfers"
        if self.categories:
            scope += f" [{', '.join(self.categories)}]"
        super().__init__(f"Error fetching {scope}: {message}")


class InvalidAddressError(ExplorerError):
    pass


class StaleResponseError(ExplorerError):
    pass


class InvalidQueryError(ExplorerError):
    pass


class NotFoundError(ExplorerError):
    pass
