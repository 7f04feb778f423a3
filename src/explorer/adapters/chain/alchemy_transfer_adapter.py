import logging
from typing import Any, Dict, Optional

from explorer.adapters.chain.alchemy_rpc import AlchemyRpcClient, int_from_hex, parse_iso_timestamp
from explorer.core.errors import DataSourceError
from explorer.ports.transfer_query_port import TransferQueryPort
from explorer.core.dto import (
    Direction,
    TransferCategory,
    TransferPage,
    TransferQuery,
    TransferRecord,
)

logger = logging.getLogger(__name__)


def _transfer_id(r: Dict[str, Any], category: TransferCategory, token_id: Optional[int]) -> str:
    uid = r.get("uniqueId")
    if uid:
        return str(uid)
    tx_hash = r.get("hash")
    if not tx_hash:
        raise DataSourceError(f"Transfer without uniqueId or hash: {r}")
    # same fields the provider folds into uniqueId, plus the parties
    return ":".join(str(p) for p in (
        tx_hash,
        category.value,
        int_from_hex(r.get("logIndex")) if r.get("logIndex") is not None else "",
        token_id if token_id is not None else "",
        (r.get("from") or "").lower(),
        (r.get("to") or "").lower(),
    ))


class AlchemyTransferAdapter(AlchemyRpcClient, TransferQueryPort):

    # ---------- internal ----------

    @staticmethod
    def _build_params(query: TransferQuery) -> Dict[str, Any]:
        key = "fromAddress" if query.direction == Direction.FROM else "toAddress"
        params: Dict[str, Any] = {
            key: query.address,
            "category": list(query.categories),
            "withMetadata": True,
            "maxCount": hex(query.page_size),
            "excludeZeroValue": query.exclude_zero_value,
            "order": query.order,
        }
        if query.cursor:
            params["pageKey"] = query.cursor
        return params

    @staticmethod
    def _to_record(r: Dict[str, Any]) -> TransferRecord:
        try:
            category = TransferCategory(r.get("category"))
        except ValueError as e:
            raise DataSourceError(f"Unknown transfer category: {r.get('category')}") from e

        raw = r.get("rawContract") or {}
        amount_raw: Optional[int] = None
        decimals: Optional[int] = None
        token_id: Optional[int] = None

        if category == TransferCategory.NON_FUNGIBLE:
            token_id = int_from_hex(r.get("erc721TokenId") or r.get("tokenId"))
        elif category == TransferCategory.MULTI_TOKEN:
            meta = (r.get("erc1155Metadata") or [{}])[0]
            token_id = int_from_hex(meta.get("tokenId"))
            amount_raw = int_from_hex(meta.get("value"))
        else:
            amount_raw = int_from_hex(raw.get("value"))
            decimals = int_from_hex(raw.get("decimal"))

        return TransferRecord(
            id=_transfer_id(r, category, token_id),
            block_number=int_from_hex(r.get("blockNum")) or 0,
            tx_hash=r.get("hash") or "",
            from_address=(r.get("from") or "").lower(),
            to_address=(r.get("to") or "").lower(),
            category=category,
            asset=r.get("asset"),
            amount_raw=amount_raw,
            decimals=decimals,
            token_id=token_id,
            timestamp=parse_iso_timestamp((r.get("metadata") or {}).get("blockTimestamp")),
        )

    # ---------- port methods ----------

    def get_asset_transfers(self, query: TransferQuery) -> TransferPage:
        result = self._call("alchemy_getAssetTransfers", [self._build_params(query)])
        if not isinstance(result, dict):
            raise DataSourceError(f"Invalid alchemy_getAssetTransfers result: {result}")

        rows = result.get("transfers") or []
        records = [self._to_record(r) for r in rows]
        next_cursor = result.get("pageKey") or None

        logger.debug(
            "%s %s: %d transfer(s), more=%s",
            query.direction.value, query.address, len(records), bool(next_cursor),
        )
        return TransferPage(records=records, next_cursor=next_cursor)
