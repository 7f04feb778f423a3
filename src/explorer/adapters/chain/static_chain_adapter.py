from explorer.ports.chain_query_port import ChainQueryPort
from explorer.core.dto import BlockDetails, RawTokenBalance, TokenMeta, TransactionDetails
from typing import Optional, Dict, List

class StaticChainAdapter(ChainQueryPort):
    def __init__(self,
                 balances: Optional[Dict[str, int]] = None,
                 nonces: Optional[Dict[str, int]] = None,
                 code: Optional[Dict[str, str]] = None,
                 token_balances: Optional[Dict[str, List[RawTokenBalance]]] = None,
                 token_meta: Optional[Dict[str, TokenMeta]] = None,
                 transactions: Optional[Dict[str, TransactionDetails]] = None,
                 blocks: Optional[Dict[int, BlockDetails]] = None,
                 ):
        self._balances = {k.lower(): v for k, v in (balances or {}).items()}
        self._nonces = {k.lower(): v for k, v in (nonces or {}).items()}
        self._code = {k.lower(): v for k, v in (code or {}).items()}
        self._token_balances = {k.lower(): v for k, v in (token_balances or {}).items()}
        self._meta = {k.lower(): v for k, v in (token_meta or {}).items()}
        self._txs = {k.lower(): v for k, v in (transactions or {}).items()}
        self._blocks = blocks or {}
        self.calls: List[str] = []

    def get_balance(self, address):
        self.calls.append("get_balance")
        return self._balances.get(address.lower(), 0)

    def get_transaction_count(self, address):
        self.calls.append("get_transaction_count")
        return self._nonces.get(address.lower(), 0)

    def get_code(self, address):
        self.calls.append("get_code")
        return self._code.get(address.lower(), "0x")

    def get_token_balances(self, address):
        self.calls.append("get_token_balances")
        return list(self._token_balances.get(address.lower(), []))

    def get_token_meta(self, token_address):
        self.calls.append("get_token_meta")
        return self._meta.get(token_address.lower(), TokenMeta(token_address.lower(), None, None, None))

    def get_transaction(self, tx_hash):
        self.calls.append("get_transaction")
        return self._txs.get(tx_hash.lower())

    def get_block(self, number):
        self.calls.append("get_block")
        return self._blocks.get(int(number))
