"""Core constants shared across TreasuryYieldLab modules."""

from __future__ import annotations

# Annualisation factor used by the rolling APR estimate.
DAYS_PER_YEAR = 365

# Number of most recent harvest days feeding the headline rolling APR.
DEFAULT_APR_WINDOW = 4

SECONDS_PER_DAY = 86_400.0

# Chart labels are rendered as dd/MM/yyyy for the dashboard consumer.
CHART_DATE_FORMAT = "%d/%m/%Y"

# Session-cache expiry windows. Price quotes and the assembled portfolio
# payload were cached between 5 and 30 minutes by the dashboard variants.
PRICE_CACHE_TTL_SECONDS = 30 * 60
PORTFOLIO_CACHE_TTL_SECONDS = 30 * 60

__all__ = [
    "CHART_DATE_FORMAT",
    "DAYS_PER_YEAR",
    "DEFAULT_APR_WINDOW",
    "PORTFOLIO_CACHE_TTL_SECONDS",
    "PRICE_CACHE_TTL_SECONDS",
    "SECONDS_PER_DAY",
]
