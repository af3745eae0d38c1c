"""Orchestration: sources -> repositories -> prices -> yield metrics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
from typing import Any

from ..analytics.yields import compute_portfolio_metrics
from ..cache import Cache
from ..core import Harvest, HarvestRepository, PortfolioMetrics, TreasuryRepository, YieldPoint
from ..core.constants import DEFAULT_APR_WINDOW, PORTFOLIO_CACHE_TTL_SECONDS
from ..sources import HarvestSource, PriceSource, TreasurySource

logger = logging.getLogger(__name__)

PORTFOLIO_CACHE_KEY = "portfolio_data"


@dataclass(frozen=True)
class PortfolioReport:
    """Metrics plus the inputs they were computed from.

    ``harvests`` holds the raw rows loaded for the run so callers can page
    through them without reading the sources again.
    """

    treasury_assets: list[dict[str, str]]
    treasury_value: float
    yield_points: list[YieldPoint]
    metrics: PortfolioMetrics
    prices: dict[str, float] = field(default_factory=dict)
    harvests: list[Harvest] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"treasuryAssets": list(self.treasury_assets), **self.metrics.to_dict()}

    def summary(self) -> dict[str, Any]:
        """Headline view: visible holdings and the rolling APR."""

        return {"treasuryAssets": list(self.treasury_assets), "rollingAPR": self.metrics.rolling_apr}

    def detailed(self) -> dict[str, Any]:
        data = self.metrics.to_dict()
        data.pop("rollingAPR")
        return data


class Pipeline:
    """Load harvests and holdings, price them, and compute :class:`PortfolioMetrics`."""

    def __init__(
        self,
        harvest_sources: Sequence[HarvestSource],
        treasury_sources: Sequence[TreasurySource],
        price_source: PriceSource,
        *,
        window: int = DEFAULT_APR_WINDOW,
        cache: Cache | None = None,
        cache_ttl_seconds: float = PORTFOLIO_CACHE_TTL_SECONDS,
    ) -> None:
        self._harvest_sources = list(harvest_sources)
        self._treasury_sources = list(treasury_sources)
        self.price_source = price_source
        self.window = window
        self.cache = cache
        self.cache_ttl_seconds = cache_ttl_seconds

    def load(self) -> tuple[HarvestRepository, TreasuryRepository]:
        harvests = HarvestRepository()
        for source in self._harvest_sources:
            try:
                harvests.extend(source.fetch())
            except Exception as exc:
                logger.warning("Source %s failed: %s", source.__class__.__name__, exc)
        treasury = TreasuryRepository()
        for source in self._treasury_sources:
            try:
                treasury.extend(source.fetch())
            except Exception as exc:
                logger.warning("Source %s failed: %s", source.__class__.__name__, exc)
        return harvests, treasury

    def run(self) -> PortfolioReport:
        harvests, treasury = self.load()
        asset_ids = sorted(set(treasury.asset_ids()) | set(harvests.asset_ids()))
        prices = self.price_source.fetch(asset_ids) if asset_ids else {}

        treasury_value = treasury.total_value(prices)
        points = harvests.to_yield_points(prices)
        metrics = compute_portfolio_metrics(points, treasury_value, self.window)
        return PortfolioReport(
            treasury_assets=treasury.display_assets(),
            treasury_value=treasury_value,
            yield_points=points,
            metrics=metrics,
            prices=prices,
            harvests=list(harvests),
        )

    def portfolio_data(self) -> dict[str, Any]:
        """Serialised :meth:`run` result, reused from the cache while it is fresh."""

        if self.cache is not None:
            entry = self.cache.get(PORTFOLIO_CACHE_KEY)
            if entry is not None:
                return entry.value
        payload = self.run().to_dict()
        if self.cache is not None:
            self.cache.set(PORTFOLIO_CACHE_KEY, payload, self.cache_ttl_seconds)
        return payload


__all__ = ["PORTFOLIO_CACHE_KEY", "Pipeline", "PortfolioReport"]
