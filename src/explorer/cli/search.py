from __future__ import annotations

import argparse
import datetime as dt
import logging
import sys
from typing import List, Optional

from explorer.config import settings
from explorer.core.dto import BlockDetails, TransactionDetails
from explorer.core.errors import DataSourceError, InvalidQueryError, NotFoundError
from explorer.core.models import AddressOverview
from explorer.services.explorer_service import ExplorerService
from explorer.io.presenter import (
    format_big_number,
    format_eth_value,
    format_gas_value,
    format_token_value,
)

from explorer.adapters.chain.alchemy_chain_adapter import AlchemyChainAdapter
from explorer.adapters.chain.static_chain_adapter import StaticChainAdapter


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="explorer-search", description="Look up an address, transaction hash or block number")
    p.add_argument("query", help="Address (0x + 40 hex), tx hash (0x + 64 hex) or block number")
    p.add_argument("--network", default=settings.DEFAULT_NETWORK, choices=sorted(settings.NETWORKS), help="Network to query")
    p.add_argument("--tokens", action="store_true", help="Also list ERC-20 balances for an address")
    p.add_argument("--use-static", action="store_true", help="Use static adapter (dev/testing)")
    p.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
    return p


def _print_address(svc: ExplorerService, ov: AddressOverview, symbol: str, tokens: bool) -> None:
    print(f"Address: {ov.address}")
    print(f"Type:    {ov.account_type}")
    print(f"Balance: {format_eth_value(ov.balance_wei)} {symbol}")
    print(f"Nonce:   {format_big_number(ov.nonce)}")
    if not tokens:
        return
    holdings = svc.token_balances(ov.address)
    if not holdings:
        print("No token balances.")
    for h in holdings:
        print(f"  {format_token_value(h.raw_balance, h.decimals)} {h.symbol or 'N/A'} ({h.token_address})")


def _print_transaction(tx: TransactionDetails, symbol: str) -> None:
    status = {True: "Success", False: "Failed", None: "Pending"}[tx.success]
    print(f"Transaction: {tx.tx_hash}")
    print(f"Status:    {status}")
    print(f"Block:     {format_big_number(tx.block_number) if tx.block_number is not None else 'Pending'}")
    print(f"From:      {tx.from_address}")
    print(f"To:        {tx.to_address or 'Contract Creation'}")
    print(f"Value:     {format_eth_value(tx.value_wei)} {symbol}")
    print(f"Gas Price: {format_gas_value(tx.gas_price)}")
    print(f"Gas Limit: {format_big_number(tx.gas_limit)}")
    if tx.gas_used is not None:
        print(f"Gas Used:  {format_big_number(tx.gas_used)}")


def _print_block(block: BlockDetails) -> None:
    ts = dt.datetime.fromtimestamp(block.timestamp, tz=dt.timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    print(f"Block:        {format_big_number(block.number)}")
    print(f"Timestamp:    {ts}")
    print(f"Hash:         {block.block_hash}")
    print(f"Parent Hash:  {block.parent_hash}")
    print(f"Miner:        {block.miner}")
    print(f"Transactions: {format_big_number(block.tx_count)}")
    print(f"Gas Used:     {format_big_number(block.gas_used)} / {format_big_number(block.gas_limit)}")


def main(argv: Optional[List[str]] = None, chain=None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if chain is None:
        if args.use_static:
            chain = StaticChainAdapter()
        else:
            try:
                chain = AlchemyChainAdapter(network=args.network)
            except DataSourceError as exc:
                print(f"Error: {exc}", file=sys.stderr)
                return 2

    symbol = settings.NETWORKS[args.network]["symbol"]
    svc = ExplorerService(chain)
    try:
        found = svc.search(args.query)
        if isinstance(found, AddressOverview):
            _print_address(svc, found, symbol, args.tokens)
        elif isinstance(found, TransactionDetails):
            _print_transaction(found, symbol)
        else:
            _print_block(found)
    except InvalidQueryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except (NotFoundError, DataSourceError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
