"""CoinGecko ``simple/price`` adapter with an injectable expiring cache."""

from __future__ import annotations

import json
import logging
import urllib.parse
import urllib.request
from collections.abc import Sequence
from typing import Any

from ..cache import Cache
from ..core.constants import PRICE_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)


class CoinGeckoPriceSource:
    """HTTP client for https://api.coingecko.com/api/v3/simple/price."""

    URL = "https://api.coingecko.com/api/v3/simple/price"
    PRO_URL = "https://pro-api.coingecko.com/api/v3/simple/price"
    CACHE_PREFIX = "price:"

    def __init__(
        self,
        cache: Cache | None = None,
        *,
        ttl_seconds: float = PRICE_CACHE_TTL_SECONDS,
        api_key: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self.api_key = api_key
        self.timeout = timeout

    def _request_url(self, asset_ids: Sequence[str]) -> str:
        base = self.PRO_URL if self.api_key else self.URL
        query = urllib.parse.urlencode({"ids": ",".join(asset_ids), "vs_currencies": "usd"})
        return f"{base}?{query}"

    def _get_json(self, asset_ids: Sequence[str]) -> dict[str, Any]:
        headers = {"accept": "application/json"}
        if self.api_key:
            headers["x-cg-pro-api-key"] = self.api_key
        req = urllib.request.Request(self._request_url(asset_ids), headers=headers)
        with urllib.request.urlopen(req, timeout=self.timeout) as resp:  # pragma: no cover - network path
            return json.load(resp)

    def _cached(self, asset_id: str) -> float | None:
        if self.cache is None:
            return None
        entry = self.cache.get(self.CACHE_PREFIX + asset_id)
        return None if entry is None else float(entry.value)

    def fetch(self, asset_ids: Sequence[str]) -> dict[str, float]:
        prices: dict[str, float] = {}
        uncached: list[str] = []
        for asset_id in dict.fromkeys(asset_ids):
            cached = self._cached(asset_id)
            if cached is None:
                uncached.append(asset_id)
            else:
                prices[asset_id] = cached
        if not uncached:
            return prices

        try:
            raw = self._get_json(uncached)
        except Exception as exc:  # pragma: no cover - network errors
            logger.warning("CoinGecko request failed: %s", exc)
            return prices

        for asset_id in uncached:
            usd = (raw.get(asset_id) or {}).get("usd")
            if usd is None:
                logger.warning("CoinGecko returned no USD price for %s", asset_id)
                continue
            prices[asset_id] = float(usd)
            if self.cache is not None:
                self.cache.set(self.CACHE_PREFIX + asset_id, float(usd), self.ttl_seconds)
        return prices


__all__ = ["CoinGeckoPriceSource"]
