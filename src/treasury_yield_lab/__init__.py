"""
TreasuryYieldLab: harvest-yield analytics for a crypto treasury.

Design goals:
- Pure, total metric functions over day-aggregated yield points
- Immutable data model (Harvest, TreasuryAsset, YieldPoint) + light repositories
- Pluggable sources (CSV, Firestore, CoinGecko prices) with injected TTL caches
- Matplotlib charts and CSV/JSON reports for the dashboard payload
"""

from __future__ import annotations

from . import analytics, cache, reporting
from .analytics.yields import (
    YieldAnalytics,
    compute_portfolio_metrics,
    cumulative_yield_chart_series,
    latest_relative_performance,
    rolling_apr,
    rolling_apr_series,
    yield_chart_series,
    yield_consistency_score,
    yield_frequency,
    yield_to_treasury_ratio,
)
from .cache import JSONFileCache, MemoryCache
from .core import (
    ChartSeries,
    Harvest,
    HarvestRepository,
    MetricResult,
    MetricStatus,
    PortfolioMetrics,
    TreasuryAsset,
    TreasuryRepository,
    YieldFrequency,
    YieldPoint,
)
from .pipeline import Pipeline, PortfolioReport
from .sources import (
    CoinGeckoPriceSource,
    FirestoreHarvestSource,
    FirestoreTreasurySource,
    HarvestCSVSource,
    StaticPriceSource,
    TreasuryCSVSource,
)
from .visualization import Visualizer


__all__ = [
    "ChartSeries",
    "Harvest",
    "HarvestRepository",
    "MetricResult",
    "MetricStatus",
    "PortfolioMetrics",
    "TreasuryAsset",
    "TreasuryRepository",
    "YieldFrequency",
    "YieldPoint",
    "YieldAnalytics",
    "compute_portfolio_metrics",
    "cumulative_yield_chart_series",
    "latest_relative_performance",
    "rolling_apr",
    "rolling_apr_series",
    "yield_chart_series",
    "yield_consistency_score",
    "yield_frequency",
    "yield_to_treasury_ratio",
    "JSONFileCache",
    "MemoryCache",
    "CoinGeckoPriceSource",
    "FirestoreHarvestSource",
    "FirestoreTreasurySource",
    "HarvestCSVSource",
    "StaticPriceSource",
    "TreasuryCSVSource",
    "Pipeline",
    "PortfolioReport",
    "Visualizer",
    "analytics",
    "cache",
    "reporting",
]
