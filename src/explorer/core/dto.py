from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class TransferCategory(str, Enum):
    NATIVE = "external"          # plain value transfer
    INTERNAL = "internal"        # value moved by an internal call
    FUNGIBLE = "erc20"
    NON_FUNGIBLE = "erc721"
    MULTI_TOKEN = "erc1155"


class Direction(str, Enum):
    FROM = "from"   # address is the sender
    TO = "to"       # address is the recipient


@dataclass(frozen=True)
class TransferRecord:
    id: str                 # provider uniqueId, dedup key
    block_number: int
    tx_hash: str
    from_address: str
    to_address: str
    category: TransferCategory
    asset: Optional[str]
    amount_raw: Optional[int] = None     # smallest unit; None for erc721
    decimals: Optional[int] = None
    token_id: Optional[int] = None       # erc721 / erc1155
    timestamp: int = 0


@dataclass(frozen=True)
class TransferQuery:
    address: str
    direction: Direction
    categories: Tuple[str, ...]
    page_size: int
    cursor: Optional[str] = None
    exclude_zero_value: bool = True
    order: str = "desc"


@dataclass(frozen=True)
class TransferPage:
    records: List[TransferRecord] = field(default_factory=list)
    next_cursor: Optional[str] = None    # None = this side is exhausted


@dataclass(frozen=True)
class RawTokenBalance:
    token_address: str
    raw_balance: int        # token amount in raw units (before decimals)


@dataclass(frozen=True)
class TokenMeta:
    token_address: str
    symbol: Optional[str]
    decimals: Optional[int]
    name: Optional[str] = None
    logo: Optional[str] = None


@dataclass(frozen=True)
class TransactionDetails:
    tx_hash: str
    block_number: Optional[int]     # None while pending
    from_address: str
    to_address: Optional[str]       # None for contract creation
    value_wei: int
    gas_price: Optional[int]
    gas_limit: int
    gas_used: Optional[int] = None  # from the receipt
    success: Optional[bool] = None


@dataclass(frozen=True)
class BlockDetails:
    number: int
    timestamp: int
    block_hash: str
    parent_hash: str
    miner: str
    gas_used: int
    gas_limit: int
    tx_count: int
