"""Analytics subpackage bundling the harvest-yield metrics."""

from . import yields
from .yields import YieldAnalytics, compute_portfolio_metrics

__all__ = [
    "YieldAnalytics",
    "compute_portfolio_metrics",
    "yields",
]
