from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

from explorer.core.dto import TransferRecord
from explorer.core.errors import NetworkFailure



# Pagination state per query side

class SideStatus(str, Enum):
    START = "start"
    HAS_MORE = "has_more"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SideCursor:
    """
    Continuation state of one directional query.

    START fetches the first page, HAS_MORE carries the provider token,
    EXHAUSTED is terminal and never queried again.
    """

    status: SideStatus = SideStatus.START
    token: Optional[str] = None

    @classmethod
    def start(cls) -> SideCursor:
        return cls(SideStatus.START, None)

    @classmethod
    def exhausted(cls) -> SideCursor:
        return cls(SideStatus.EXHAUSTED, None)

    @classmethod
    def has_more(cls, token: str) -> SideCursor:
        return cls(SideStatus.HAS_MORE, token)

    @property
    def is_exhausted(self) -> bool:
        return self.status == SideStatus.EXHAUSTED

    def advance(self, next_token: Optional[str]) -> SideCursor:
        # only an absent token ends a side; an empty batch with a token does not
        if self.is_exhausted or not next_token:
            return SideCursor.exhausted()
        return SideCursor.has_more(next_token)



# Feed-level state

class FeedState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchPageResult:

    from_batch: List[TransferRecord]
    to_batch: List[TransferRecord]
    from_cursor: SideCursor
    to_cursor: SideCursor


@dataclass(frozen=True)
class FeedSession:
    """
    Everything the feed knows about one viewed address.

    Sessions are immutable; every transition returns a new one. session_id
    identifies the viewing session so late responses can be told apart.
    """

    address: str
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    from_cursor: SideCursor = field(default_factory=SideCursor.start)
    to_cursor: SideCursor = field(default_factory=SideCursor.start)
    items: Tuple[TransferRecord, ...] = ()
    state: FeedState = FeedState.LOADING
    error: Optional[NetworkFailure] = None
    pages_loaded: int = 0

    @property
    def has_more(self) -> bool:
        return not (self.from_cursor.is_exhausted and self.to_cursor.is_exhausted)

    def evolve(self, **changes) -> FeedSession:
        return replace(self, **changes)



# Address pages and search

@dataclass(frozen=True)
class AddressOverview:

    address: str
    balance_wei: int
    nonce: int
    is_contract: bool

    @property
    def account_type(self) -> str:
        return "Contract" if self.is_contract else "EOA (Wallet)"


@dataclass(frozen=True)
class TokenHolding:

    token_address: str
    raw_balance: int
    symbol: Optional[str]
    name: Optional[str]
    decimals: Optional[int]
    logo: Optional[str] = None


class SearchKind(str, Enum):
    ADDRESS = "address"
    TRANSACTION = "transaction"
    BLOCK = "block"


@dataclass(frozen=True)
class SearchTarget:

    kind: SearchKind
    value: str      # lower-cased hex for address/tx, decimal digits for blocks
