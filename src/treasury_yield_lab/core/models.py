"""Immutable data models used throughout TreasuryYieldLab."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

import pandas as pd


def normalise_timestamp(value: Any) -> pd.Timestamp:
    """Coerce the timestamp shapes seen at the ingestion boundary to UTC.

    Accepted inputs are ``datetime``/``pandas.Timestamp`` objects, ISO-8601
    strings, epoch seconds and document-store mappings carrying ``seconds``
    and ``nanoseconds`` (with or without a leading underscore). Naive values
    are interpreted as UTC.
    """

    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            raise ValueError(f"timestamp mapping lacks seconds: {dict(value)!r}")
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        ts = pd.Timestamp(int(seconds) * 1_000_000_000 + int(nanos), unit="ns", tz="UTC")
    elif isinstance(value, bool):
        raise ValueError(f"cannot interpret {value!r} as a timestamp")
    elif isinstance(value, (int, float)):
        ts = pd.Timestamp(float(value), unit="s", tz="UTC")
    elif isinstance(value, (str, datetime, pd.Timestamp)):
        ts = pd.Timestamp(value)
    elif hasattr(value, "timestamp"):
        # e.g. google.api_core DatetimeWithNanoseconds
        ts = pd.Timestamp(value.timestamp(), unit="s", tz="UTC")
    else:
        raise ValueError(f"cannot interpret {value!r} as a timestamp")

    if pd.isna(ts):
        raise ValueError(f"cannot interpret {value!r} as a timestamp")
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def to_day(value: Any) -> pd.Timestamp:
    """Return the UTC calendar day (midnight) containing ``value``."""

    return normalise_timestamp(value).normalize()


@dataclass(frozen=True)
class Harvest:
    """A recorded claim of ``quantity`` units of ``asset_id``."""

    asset_id: str  # market-data identifier, e.g. "convex-finance"
    quantity: float
    date: pd.Timestamp
    asset_symbol: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", normalise_timestamp(self.date))

    @property
    def day(self) -> pd.Timestamp:
        return self.date.normalize()

    def value_usd(self, price: float) -> float:
        return float(price) * float(self.quantity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "asset_id": self.asset_id,
            "asset_symbol": self.asset_symbol,
            "quantity": self.quantity,
            "date": self.date,
        }


@dataclass(frozen=True)
class TreasuryAsset:
    """A holding that counts towards the treasury value."""

    id: str
    symbol: str
    quantity: float
    href: str = ""
    img_src: str = ""

    def value_usd(self, price: float) -> float:
        return float(price) * float(self.quantity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "symbol": self.symbol,
            "quantity": self.quantity,
            "href": self.href,
            "img_src": self.img_src,
        }

    def to_display_dict(self) -> dict[str, str]:
        """Public view of the asset; holdings quantities are not exposed."""

        return {"href": self.href, "imgSrc": self.img_src, "id": self.id, "symbol": self.symbol}


@dataclass(frozen=True)
class YieldPoint:
    """Summed USD value of every harvest recorded on one calendar day."""

    date: pd.Timestamp
    total_usd: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", to_day(self.date))
        object.__setattr__(self, "total_usd", float(self.total_usd))

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "total_usd": self.total_usd}


@dataclass(frozen=True)
class ChartSeries:
    """Parallel label/value arrays consumed by the charting front-end."""

    labels: list[str] = field(default_factory=list)
    data: list[float] = field(default_factory=list)

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self.data)

    def to_dict(self) -> dict[str, list[Any]]:
        return {"labels": list(self.labels), "data": list(self.data)}


@dataclass(frozen=True)
class YieldFrequency:
    """Day gaps between consecutive harvests."""

    average_days: float = 0.0
    min_days: float = 0.0
    max_days: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "averageDays": self.average_days,
            "minDays": self.min_days,
            "maxDays": self.max_days,
        }


class MetricStatus(str, Enum):
    """Why a metric holds the value it does."""

    OK = "ok"
    INSUFFICIENT_DATA = "insufficient_data"
    INVALID_DIVISOR = "invalid_divisor"


@dataclass(frozen=True)
class MetricResult:
    """Metric value paired with an explicit status flag.

    ``value`` is identical to what the plain metric function returns, so the
    sentinel conventions (``0``/``100``) still apply; ``status`` lets callers
    tell a sentinel apart from a genuinely computed number.
    """

    value: Any
    status: MetricStatus = MetricStatus.OK

    @property
    def ok(self) -> bool:
        return self.status is MetricStatus.OK

    @property
    def insufficient_data(self) -> bool:
        return self.status is MetricStatus.INSUFFICIENT_DATA


@dataclass(frozen=True)
class PortfolioMetrics:
    """Derived yield metrics for one analytics pass."""

    rolling_apr: float
    yield_consistency_score: float
    yield_frequency: YieldFrequency
    latest_relative_performance: float
    yield_to_treasury_ratio: float
    yield_chart_data: ChartSeries
    cumulative_yield_chart_data: ChartSeries
    statuses: Mapping[str, MetricStatus] = field(default_factory=dict)

    # holds lists and a dict, so instances compare by value but are unhashable
    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the field names expected by the dashboard."""

        return {
            "rollingAPR": self.rolling_apr,
            "yieldConsistencyScore": self.yield_consistency_score,
            "yieldFrequency": self.yield_frequency.to_dict(),
            "latestRelativePerformance": self.latest_relative_performance,
            "yieldToTreasuryRatio": self.yield_to_treasury_ratio,
            "yieldChartData": self.yield_chart_data.to_dict(),
            "cumulativeYieldChartData": self.cumulative_yield_chart_data.to_dict(),
        }

    def status_dict(self) -> dict[str, str]:
        return {name: status.value for name, status in self.statuses.items()}

    def insufficient_data(self, name: str) -> bool:
        return self.statuses.get(name) is MetricStatus.INSUFFICIENT_DATA


__all__ = [
    "ChartSeries",
    "Harvest",
    "MetricResult",
    "MetricStatus",
    "PortfolioMetrics",
    "TreasuryAsset",
    "YieldFrequency",
    "YieldPoint",
    "normalise_timestamp",
    "to_day",
]
