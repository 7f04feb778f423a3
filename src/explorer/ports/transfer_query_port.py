from __future__ import annotations

from abc import ABC, abstractmethod
from explorer.core.dto import TransferPage, TransferQuery

class TransferQueryPort(ABC):
    """
    Abstract Class for the transfer-indexing provider.
    """

    # --- one page of one directional query ---

    @abstractmethod
    def get_asset_transfers(self, query: TransferQuery) -> TransferPage:
        raise NotImplementedError
