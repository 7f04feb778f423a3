import itertools
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import requests

from explorer.config.settings import (
    ALCHEMY_MAX_RETRIES,
    ALCHEMY_REQUESTS_PER_SEC,
    ALCHEMY_TIMEOUT_SEC,
    DEFAULT_NETWORK,
    NETWORKS,
)

from explorer.adapters.chain.rate_limiter import SimpleRateLimiter, backoff_sleep
from explorer.core.errors import DataSourceError, RateLimitError

logger = logging.getLogger(__name__)


def int_from_hex(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        return int(s, 16) if s.lower().startswith("0x") else int(s)
    except ValueError:
        return None


def parse_iso_timestamp(value: Optional[str]) -> int:
    if not value:
        return 0
    try:
        cleaned = value.replace("Z", "+00:00")
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        return 0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


class AlchemyRpcClient:
    """
    JSON-RPC transport shared by the Alchemy adapters: rate limit, retries
    with backoff on transport and rate-limit errors, provider errors raised.
    """

    def __init__(
        self,
        network: str = DEFAULT_NETWORK,
        rpc_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if network not in NETWORKS:
            raise DataSourceError(f"Invalid network configuration for {network}")
        self._network = network
        self._rpc_url = rpc_url or NETWORKS[network]["rpc_url"]
        if not self._rpc_url:
            raise DataSourceError(
                f"No RPC URL configured for {NETWORKS[network]['name']} "
                "(set ALCHEMY_API_KEY or the network RPC URL)"
            )
        self._timeout = ALCHEMY_TIMEOUT_SEC
        self._max_retries = ALCHEMY_MAX_RETRIES

        self._rl = SimpleRateLimiter(ALCHEMY_REQUESTS_PER_SEC)
        self._session = session or requests.Session()
        # called from both feed directions at once
        self._request_ids = itertools.count(1)

    def _call(self, method: str, params: list) -> Any:
        payload = {
            "id": next(self._request_ids),
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
        }

        last_err: Optional[Exception] = None

        for attempt in range(self._max_retries):
            try:
                self._rl.wait()
                resp = self._session.post(
                    self._rpc_url,
                    json=payload,
                    timeout=self._timeout,
                )
                if resp.status_code == 429:
                    last_err = RateLimitError("HTTP 429 Too Many Requests")
                    backoff_sleep(attempt)
                    continue
                resp.raise_for_status()
                data = resp.json()
            except (requests.RequestException, ValueError) as e:
                last_err = e
                logger.debug("%s attempt %d failed: %s", method, attempt + 1, e)
                backoff_sleep(attempt)
                continue

            err = data.get("error")
            if err:
                message = str(err.get("message", err)) if isinstance(err, dict) else str(err)
                code = err.get("code") if isinstance(err, dict) else None
                if code == 429 or "rate" in message.lower():
                    last_err = RateLimitError(message)
                    backoff_sleep(attempt)
                    continue
                raise DataSourceError(f"{method} failed: {message}")

            return data.get("result")

        raise DataSourceError(f"{method} failed after retries: {last_err}")
