from explorer.ports.transfer_query_port import TransferQueryPort
from explorer.core.dto import Direction, TransferPage, TransferQuery, TransferRecord
from explorer.core.errors import DataSourceError
from typing import List, Optional

class StaticTransferAdapter(TransferQueryPort):
    def __init__(self,
                 transfers: Optional[List[TransferRecord]] = None,
                 ):
        self._transfers = transfers or []
        self.queries: List[TransferQuery] = []

    def get_asset_transfers(self, query):
        self.queries.append(query)
        ad = query.address.lower()
        if query.direction == Direction.FROM:
            items = [t for t in self._transfers if t.from_address.lower() == ad]
        else:
            items = [t for t in self._transfers if t.to_address.lower() == ad]
        items = [
            t for t in items
            if t.category.value in query.categories
            and not (query.exclude_zero_value and t.amount_raw == 0)
        ]
        items.sort(key=lambda x: x.block_number, reverse=(query.order == "desc"))

        offset = self._offset(query.cursor)
        page = items[offset:offset + query.page_size]
        nxt = offset + query.page_size
        return TransferPage(
            records=page,
            next_cursor=f"offset:{nxt}" if nxt < len(items) else None,
        )

    @staticmethod
    def _offset(cursor):
        if not cursor:
            return 0
        try:
            return int(cursor.split(":", 1)[1])
        except (IndexError, ValueError) as e:
            raise DataSourceError(f"Invalid page key: {cursor}") from e
