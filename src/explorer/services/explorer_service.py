from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import List, Union

from explorer.core.dto import BlockDetails, TransactionDetails
from explorer.core.errors import InvalidQueryError, NotFoundError
from explorer.core.models import AddressOverview, SearchKind, SearchTarget, TokenHolding
from explorer.ports.chain_query_port import ChainQueryPort

logger = logging.getLogger(__name__)

_TX_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_BLOCK_RE = re.compile(r"^[0-9]+$")

_EMPTY_CODE = ("", "0x", "0x0")


def classify_query(query: str) -> SearchTarget:
    """
    Decide what a search box entry points at.

    66-char 0x hex is a transaction hash, 42-char 0x hex an address,
    plain digits a block number. Names ending in .eth are not resolved.
    """
    q = (query or "").strip()
    if _TX_HASH_RE.match(q):
        return SearchTarget(SearchKind.TRANSACTION, q.lower())
    if _ADDRESS_RE.match(q):
        return SearchTarget(SearchKind.ADDRESS, q.lower())
    if _BLOCK_RE.match(q):
        return SearchTarget(SearchKind.BLOCK, str(int(q)))
    if q.lower().endswith(".eth"):
        raise InvalidQueryError(f"ENS names are not supported: {q!r}")
    raise InvalidQueryError(f"Invalid search query: {query!r}")


class ExplorerService:
    """Address, transaction and block lookups behind the search box."""

    def __init__(self, chain: ChainQueryPort, max_workers: int = 3) -> None:
        self.chain = chain
        self.max_workers = max_workers

    def search(self, query: str) -> Union[AddressOverview, TransactionDetails, BlockDetails]:
        target = classify_query(query)
        logger.info("search %r resolved to %s", query, target.kind.value)
        if target.kind == SearchKind.TRANSACTION:
            return self.transaction(target.value)
        if target.kind == SearchKind.BLOCK:
            return self.block(int(target.value))
        return self.address_overview(target.value)

    def address_overview(self, address: str) -> AddressOverview:
        addr = classify_address(address)
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            balance_f = pool.submit(self.chain.get_balance, addr)
            nonce_f = pool.submit(self.chain.get_transaction_count, addr)
            code_f = pool.submit(self.chain.get_code, addr)
            balance = balance_f.result()
            nonce = nonce_f.result()
            code = code_f.result()

        return AddressOverview(
            address=addr,
            balance_wei=balance,
            nonce=nonce,
            is_contract=(code or "").lower() not in _EMPTY_CODE,
        )

    def token_balances(self, address: str) -> List[TokenHolding]:
        addr = classify_address(address)
        balances = [b for b in self.chain.get_token_balances(addr) if b.raw_balance > 0]
        if not balances:
            return []

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            metas = list(pool.map(lambda b: self.chain.get_token_meta(b.token_address), balances))

        holdings = [
            TokenHolding(
                token_address=b.token_address,
                raw_balance=b.raw_balance,
                symbol=m.symbol,
                name=m.name,
                decimals=m.decimals,
                logo=m.logo,
            )
            for b, m in zip(balances, metas)
        ]
        logger.debug("%s holds %d token(s)", addr, len(holdings))
        return holdings

    def transaction(self, tx_hash: str) -> TransactionDetails:
        tx = self.chain.get_transaction(tx_hash.lower())
        if tx is None:
            raise NotFoundError(f"Transaction not found: {tx_hash}")
        return tx

    def block(self, number: int) -> BlockDetails:
        if number < 0:
            raise InvalidQueryError(f"Invalid block number: {number}")
        block = self.chain.get_block(number)
        if block is None:
            raise NotFoundError(f"Block not found: {number}")
        return block


def classify_address(address: str) -> str:
    target = classify_query(address)
    if target.kind != SearchKind.ADDRESS:
        raise InvalidQueryError(f"Not an address: {address!r}")
    return target.value
