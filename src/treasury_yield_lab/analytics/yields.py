"""Harvest-yield analytics over day-aggregated :class:`YieldPoint` series.

Every function here is pure and total: insufficient data or a non-positive
treasury value produce the conventional sentinels (``0`` or ``100``) instead
of exceptions. Division by zero follows IEEE semantics (``inf`` or ``nan``)
so degenerate inputs surface as numbers rather than errors.

The ``*_result`` variants return the same value wrapped in a
:class:`~treasury_yield_lab.core.models.MetricResult` whose ``status`` says
whether the value is a sentinel.

Inputs must be sorted ascending by date with at most one point per day; see
:meth:`treasury_yield_lab.core.HarvestRepository.to_yield_points`.
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import accumulate
import math
import statistics

from ..core.constants import CHART_DATE_FORMAT, DAYS_PER_YEAR, DEFAULT_APR_WINDOW, SECONDS_PER_DAY
from ..core.models import (
    ChartSeries,
    MetricResult,
    MetricStatus,
    PortfolioMetrics,
    YieldFrequency,
    YieldPoint,
)


def _divide(numerator: float, denominator: float) -> float:
    """Float division returning ``inf``/``nan`` where Python would raise."""

    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return float("nan")
        return math.copysign(float("inf"), numerator)
    return numerator / denominator


def _days_between(start: YieldPoint, end: YieldPoint) -> float:
    return (end.date - start.date).total_seconds() / SECONDS_PER_DAY


def _chart_labels(points: Sequence[YieldPoint]) -> list[str]:
    return [p.date.strftime(CHART_DATE_FORMAT) for p in points]


def _total_usd(points: Sequence[YieldPoint]) -> float:
    return math.fsum(p.total_usd for p in points)


# -----------------
# Rolling APR
# -----------------


def rolling_apr_result(
    points: Sequence[YieldPoint],
    treasury_value: float,
    window: int = DEFAULT_APR_WINDOW,
) -> MetricResult:
    if window < 1 or len(points) < window:
        return MetricResult(0.0, MetricStatus.INSUFFICIENT_DATA)
    if treasury_value <= 0:
        return MetricResult(0.0, MetricStatus.INVALID_DIVISOR)

    recent = points[-window:]
    total_yield = _total_usd(recent)
    # span is first-to-last of the slice, not window - 1 gaps
    days_difference = _days_between(recent[0], recent[-1])
    average_daily_yield = _divide(total_yield, days_difference)
    annualized_yield = average_daily_yield * DAYS_PER_YEAR
    apr = annualized_yield / treasury_value * 100.0

    status = MetricStatus.INVALID_DIVISOR if days_difference == 0 else MetricStatus.OK
    return MetricResult(apr, status)


def rolling_apr(
    points: Sequence[YieldPoint],
    treasury_value: float,
    window: int = DEFAULT_APR_WINDOW,
) -> float:
    """Annualised yield of the last ``window`` harvest days as a % of treasury.

    Returns ``0`` with fewer than ``window`` points or a non-positive
    treasury value.
    """

    return rolling_apr_result(points, treasury_value, window).value


def rolling_apr_series(
    points: Sequence[YieldPoint],
    treasury_value: float,
    window: int = DEFAULT_APR_WINDOW,
) -> ChartSeries:
    """Per-point rolling APR: entry ``i`` is :func:`rolling_apr` of ``points[: i + 1]``.

    Points without ``window`` observations up to and including themselves
    carry the ``0`` sentinel.
    """

    data = [rolling_apr(points[: i + 1], treasury_value, window) for i in range(len(points))]
    return ChartSeries(labels=_chart_labels(points), data=data)


# -----------------
# Distribution metrics
# -----------------


def yield_consistency_score_result(points: Sequence[YieldPoint]) -> MetricResult:
    if len(points) < 2:
        return MetricResult(100.0, MetricStatus.INSUFFICIENT_DATA)

    yields = [p.total_usd for p in points]
    mean = statistics.fmean(yields)
    std_dev = statistics.pstdev(yields, mu=mean)
    coefficient_of_variation = _divide(std_dev, mean) * 100.0
    if math.isnan(coefficient_of_variation):
        # all-zero series: score is undefined and stays nan
        return MetricResult(float("nan"), MetricStatus.INVALID_DIVISOR)
    return MetricResult(max(0.0, 100.0 - coefficient_of_variation))


def yield_consistency_score(points: Sequence[YieldPoint]) -> float:
    """``100 - CV%`` of the harvest values, floored at ``0``.

    Fewer than two points score a perfect ``100``. A zero mean yields ``nan``.
    """

    return yield_consistency_score_result(points).value


def yield_frequency_result(points: Sequence[YieldPoint]) -> MetricResult:
    if len(points) < 2:
        return MetricResult(YieldFrequency(), MetricStatus.INSUFFICIENT_DATA)

    dates = sorted(p.date for p in points)
    gaps = [
        (later - earlier).total_seconds() / SECONDS_PER_DAY
        for earlier, later in zip(dates, dates[1:])
    ]
    frequency = YieldFrequency(
        average_days=math.fsum(gaps) / len(gaps),
        min_days=min(gaps),
        max_days=max(gaps),
    )
    return MetricResult(frequency)


def yield_frequency(points: Sequence[YieldPoint]) -> YieldFrequency:
    """Mean, min and max number of days between consecutive harvests."""

    return yield_frequency_result(points).value


def latest_relative_performance_result(points: Sequence[YieldPoint]) -> MetricResult:
    if len(points) < 2:
        return MetricResult(0.0, MetricStatus.INSUFFICIENT_DATA)

    average = _total_usd(points) / len(points)
    latest = points[-1].total_usd
    relative = _divide(latest, average) * 100.0 - 100.0
    status = MetricStatus.INVALID_DIVISOR if average == 0 else MetricStatus.OK
    return MetricResult(relative, status)


def latest_relative_performance(points: Sequence[YieldPoint]) -> float:
    """Signed % deviation of the latest harvest from the all-time average."""

    return latest_relative_performance_result(points).value


# -----------------
# Treasury ratios
# -----------------


def yield_to_treasury_ratio_result(
    points: Sequence[YieldPoint], treasury_value: float
) -> MetricResult:
    if treasury_value <= 0:
        return MetricResult(0.0, MetricStatus.INVALID_DIVISOR)
    return MetricResult(_total_usd(points) / treasury_value * 100.0)


def yield_to_treasury_ratio(points: Sequence[YieldPoint], treasury_value: float) -> float:
    """Total harvested USD as a percentage of the treasury value."""

    return yield_to_treasury_ratio_result(points, treasury_value).value


def yield_chart_series(points: Sequence[YieldPoint], treasury_value: float) -> ChartSeries:
    """Each harvest day's value as a % of the treasury, labelled ``dd/MM/yyyy``."""

    data = [_divide(p.total_usd, treasury_value) * 100.0 for p in points]
    return ChartSeries(labels=_chart_labels(points), data=data)


def cumulative_yield_chart_series(
    points: Sequence[YieldPoint], treasury_value: float
) -> ChartSeries:
    """Running total of :func:`yield_chart_series`."""

    per_point = yield_chart_series(points, treasury_value)
    return ChartSeries(labels=per_point.labels, data=list(accumulate(per_point.data)))


def compute_portfolio_metrics(
    points: Sequence[YieldPoint],
    treasury_value: float,
    window: int = DEFAULT_APR_WINDOW,
) -> PortfolioMetrics:
    """Evaluate every metric for one ``(points, treasury_value)`` snapshot."""

    apr = rolling_apr_result(points, treasury_value, window)
    consistency = yield_consistency_score_result(points)
    frequency = yield_frequency_result(points)
    relative = latest_relative_performance_result(points)
    ratio = yield_to_treasury_ratio_result(points, treasury_value)

    return PortfolioMetrics(
        rolling_apr=apr.value,
        yield_consistency_score=consistency.value,
        yield_frequency=frequency.value,
        latest_relative_performance=relative.value,
        yield_to_treasury_ratio=ratio.value,
        yield_chart_data=yield_chart_series(points, treasury_value),
        cumulative_yield_chart_data=cumulative_yield_chart_series(points, treasury_value),
        statuses={
            "rolling_apr": apr.status,
            "yield_consistency_score": consistency.status,
            "yield_frequency": frequency.status,
            "latest_relative_performance": relative.status,
            "yield_to_treasury_ratio": ratio.status,
        },
    )


class YieldAnalytics:
    """Namespace bundling the yield metrics for callers that prefer one entry point."""

    rolling_apr = staticmethod(rolling_apr)
    rolling_apr_series = staticmethod(rolling_apr_series)
    yield_consistency_score = staticmethod(yield_consistency_score)
    yield_frequency = staticmethod(yield_frequency)
    latest_relative_performance = staticmethod(latest_relative_performance)
    yield_to_treasury_ratio = staticmethod(yield_to_treasury_ratio)
    yield_chart_series = staticmethod(yield_chart_series)
    cumulative_yield_chart_series = staticmethod(cumulative_yield_chart_series)

    @staticmethod
    def portfolio_metrics(
        points: Sequence[YieldPoint],
        treasury_value: float,
        window: int = DEFAULT_APR_WINDOW,
    ) -> PortfolioMetrics:
        return compute_portfolio_metrics(points, treasury_value, window)


__all__ = [
    "YieldAnalytics",
    "compute_portfolio_metrics",
    "cumulative_yield_chart_series",
    "latest_relative_performance",
    "latest_relative_performance_result",
    "rolling_apr",
    "rolling_apr_result",
    "rolling_apr_series",
    "yield_chart_series",
    "yield_consistency_score",
    "yield_consistency_score_result",
    "yield_frequency",
    "yield_frequency_result",
    "yield_to_treasury_ratio",
    "yield_to_treasury_ratio_result",
]
