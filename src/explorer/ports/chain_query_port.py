from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional
from explorer.core.dto import BlockDetails, RawTokenBalance, TokenMeta, TransactionDetails

class ChainQueryPort(ABC):
    """
    Abstract Class for point lookups behind the explorer pages.
    """

    # --- address overview ---

    @abstractmethod
    def get_balance(self, address: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_transaction_count(self, address: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_code(self, address: str) -> str:
        raise NotImplementedError

    # --- ERC-20 holdings ---

    @abstractmethod
    def get_token_balances(self, address: str) -> List[RawTokenBalance]:
        raise NotImplementedError

    @abstractmethod
    def get_token_meta(self, token_address: str) -> TokenMeta:
        raise NotImplementedError

    # --- transaction / block pages ---

    @abstractmethod
    def get_transaction(self, tx_hash: str) -> Optional[TransactionDetails]:
        raise NotImplementedError

    @abstractmethod
    def get_block(self, number: int) -> Optional[BlockDetails]:
        raise NotImplementedError
