"""Core data structures for :mod:`treasury_yield_lab`.

This subpackage groups the fundamental models and repositories used across
the project so they can be shared without importing the entire public
interface exposed in :mod:`treasury_yield_lab.__init__`.
"""

from __future__ import annotations

from .constants import CHART_DATE_FORMAT, DAYS_PER_YEAR, DEFAULT_APR_WINDOW
from .models import (
    ChartSeries,
    Harvest,
    MetricResult,
    MetricStatus,
    PortfolioMetrics,
    TreasuryAsset,
    YieldFrequency,
    YieldPoint,
    normalise_timestamp,
)
from .repositories import HarvestRepository, TreasuryRepository

__all__ = [
    "CHART_DATE_FORMAT",
    "DAYS_PER_YEAR",
    "DEFAULT_APR_WINDOW",
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
    "normalise_timestamp",
]
