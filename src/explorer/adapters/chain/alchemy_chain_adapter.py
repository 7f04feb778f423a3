from typing import Any, Dict, List, Optional

from explorer.adapters.chain.alchemy_rpc import AlchemyRpcClient, int_from_hex
from explorer.core.errors import DataSourceError
from explorer.ports.chain_query_port import ChainQueryPort
from explorer.core.dto import BlockDetails, RawTokenBalance, TokenMeta, TransactionDetails


class AlchemyChainAdapter(AlchemyRpcClient, ChainQueryPort):

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._token_meta_cache: Dict[str, TokenMeta] = {}

    # ---------- internal ----------

    def _hex_result(self, method: str, params: list) -> int:
        result = self._call(method, params)
        value = int_from_hex(result)
        if value is None:
            raise DataSourceError(f"Invalid {method} result: {result}")
        return value

    # ---------- port methods ----------

    def get_balance(self, address: str) -> int:
        return self._hex_result("eth_getBalance", [address, "latest"])

    def get_transaction_count(self, address: str) -> int:
        return self._hex_result("eth_getTransactionCount", [address, "latest"])

    def get_code(self, address: str) -> str:
        return self._call("eth_getCode", [address, "latest"]) or "0x"

    def get_token_balances(self, address: str) -> List[RawTokenBalance]:
        result = self._call("alchemy_getTokenBalances", [address, "erc20"])
        if not isinstance(result, dict):
            raise DataSourceError(f"Invalid alchemy_getTokenBalances result: {result}")

        out: List[RawTokenBalance] = []
        for row in result.get("tokenBalances") or []:
            if row.get("error"):
                continue
            out.append(RawTokenBalance(
                token_address=(row.get("contractAddress") or "").lower(),
                raw_balance=int_from_hex(row.get("tokenBalance")) or 0,
            ))
        return out

    def get_token_meta(self, token_address: str) -> TokenMeta:
        ta = token_address.lower()
        if ta in self._token_meta_cache:
            return self._token_meta_cache[ta]

        meta = self._call("alchemy_getTokenMetadata", [ta]) or {}
        dec = meta.get("decimals")
        tm = TokenMeta(
            token_address=ta,
            symbol=meta.get("symbol"),
            decimals=int_from_hex(dec),
            name=meta.get("name"),
            logo=meta.get("logo"),
        )
        self._token_meta_cache[ta] = tm
        return tm

    def get_transaction(self, tx_hash: str) -> Optional[TransactionDetails]:
        tx: Optional[Dict[str, Any]] = self._call("eth_getTransactionByHash", [tx_hash])
        if not tx:
            return None
        receipt: Optional[Dict[str, Any]] = self._call("eth_getTransactionReceipt", [tx_hash])

        status = int_from_hex(receipt.get("status")) if receipt else None
        return TransactionDetails(
            tx_hash=tx.get("hash") or tx_hash,
            block_number=int_from_hex(tx.get("blockNumber")),
            from_address=(tx.get("from") or "").lower(),
            to_address=tx["to"].lower() if tx.get("to") else None,
            value_wei=int_from_hex(tx.get("value")) or 0,
            gas_price=int_from_hex(tx.get("gasPrice")),
            gas_limit=int_from_hex(tx.get("gas")) or 0,
            gas_used=int_from_hex(receipt.get("gasUsed")) if receipt else None,
            success=(status == 1) if status is not None else None,
        )

    def get_block(self, number: int) -> Optional[BlockDetails]:
        block: Optional[Dict[str, Any]] = self._call("eth_getBlockByNumber", [hex(int(number)), False])
        if not block:
            return None
        return BlockDetails(
            number=int_from_hex(block.get("number")) or 0,
            timestamp=int_from_hex(block.get("timestamp")) or 0,
            block_hash=block.get("hash") or "",
            parent_hash=block.get("parentHash") or "",
            miner=(block.get("miner") or "").lower(),
            gas_used=int_from_hex(block.get("gasUsed")) or 0,
            gas_limit=int_from_hex(block.get("gasLimit")) or 0,
            tx_count=len(block.get("transactions") or []),
        )
