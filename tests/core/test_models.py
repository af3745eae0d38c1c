from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pandas as pd
import pytest

from treasury_yield_lab.analytics import compute_portfolio_metrics
from treasury_yield_lab.core import (
    ChartSeries,
    Harvest,
    MetricResult,
    MetricStatus,
    PortfolioMetrics,
    TreasuryAsset,
    YieldPoint,
    normalise_timestamp,
)

JAN_1 = pd.Timestamp("2024-01-01T00:00:00Z")


@pytest.mark.parametrize(
    "raw",
    [
        "2024-01-01",
        "2024-01-01T00:00:00Z",
        1_704_067_200,
        1_704_067_200.0,
        {"seconds": 1_704_067_200, "nanoseconds": 0},
        {"_seconds": 1_704_067_200, "_nanoseconds": 0},
        datetime(2024, 1, 1),
        datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2))),
        pd.Timestamp("2024-01-01"),
    ],
)
def test_normalise_timestamp_shapes_resolve_to_utc(raw: object) -> None:
    ts = normalise_timestamp(raw)
    assert ts == JAN_1
    assert str(ts.tz) == "UTC"


def test_normalise_timestamp_keeps_nanoseconds() -> None:
    ts = normalise_timestamp({"seconds": 1_704_067_200, "nanoseconds": 500_000_000})
    assert ts == JAN_1 + pd.Timedelta(milliseconds=500)


@pytest.mark.parametrize("raw", [None, {}, "not a date", "", True])
def test_normalise_timestamp_rejects_garbage(raw: object) -> None:
    with pytest.raises(ValueError):
        normalise_timestamp(raw)


def test_harvest_day_is_utc_calendar_day() -> None:
    harvest = Harvest(asset_id="crvusd", quantity=2.0, date="2024-01-01T23:30:00-05:00")
    assert harvest.date == pd.Timestamp("2024-01-02T04:30:00Z")
    assert harvest.day == pd.Timestamp("2024-01-02T00:00:00Z")
    assert harvest.value_usd(1.5) == pytest.approx(3.0)


def test_yield_point_truncates_to_day() -> None:
    point = YieldPoint(date="2024-03-05T18:45:00Z", total_usd=12)
    assert point.date == pd.Timestamp("2024-03-05T00:00:00Z")
    assert isinstance(point.total_usd, float)


def test_treasury_asset_display_hides_quantity() -> None:
    asset = TreasuryAsset(
        id="aura-finance",
        symbol="AURA",
        quantity=150_000.0,
        href="https://aura.finance/",
        img_src="https://example.org/aura.png",
    )
    assert asset.to_display_dict() == {
        "href": "https://aura.finance/",
        "imgSrc": "https://example.org/aura.png",
        "id": "aura-finance",
        "symbol": "AURA",
    }
    assert asset.value_usd(0.5) == pytest.approx(75_000.0)


def test_metric_result_flags() -> None:
    assert MetricResult(1.0).ok
    sentinel = MetricResult(0.0, MetricStatus.INSUFFICIENT_DATA)
    assert sentinel.insufficient_data
    assert not sentinel.ok


def test_chart_series_to_dict_copies_lists() -> None:
    series = ChartSeries(labels=["01/01/2024"], data=[1.0])
    out = series.to_dict()
    out["data"].append(2.0)
    assert series.data == [1.0]
    assert len(series) == 1


def test_list_holding_models_are_unhashable_but_comparable() -> None:
    metrics = compute_portfolio_metrics([YieldPoint("2024-01-01", 10.0)], 100.0)
    same = compute_portfolio_metrics([YieldPoint("2024-01-01", 10.0)], 100.0)

    assert metrics == same
    assert PortfolioMetrics.__hash__ is None
    assert ChartSeries.__hash__ is None
    with pytest.raises(TypeError, match="unhashable"):
        hash(metrics)
    with pytest.raises(TypeError, match="unhashable"):
        hash(metrics.yield_chart_data)
