from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..core import HarvestRepository
from ..core.constants import CHART_DATE_FORMAT
from ..pipeline import PortfolioReport


def _ensure_outdir(outdir: str | Path) -> Path:
    p = Path(outdir)
    p.mkdir(parents=True, exist_ok=True)
    return p


def yield_series_frame(report: PortfolioReport) -> pd.DataFrame:
    """One row per harvest day with USD value, % of treasury and running %."""

    metrics = report.metrics
    return pd.DataFrame(
        {
            "date": [p.date for p in report.yield_points],
            "label": metrics.yield_chart_data.labels,
            "total_usd": [p.total_usd for p in report.yield_points],
            "yield_pct": metrics.yield_chart_data.data,
            "cumulative_pct": metrics.cumulative_yield_chart_data.data,
        },
        columns=["date", "label", "total_usd", "yield_pct", "cumulative_pct"],
    )


def portfolio_report(report: PortfolioReport, outdir: str | Path) -> pd.DataFrame:
    """Write ``portfolio.json``, ``yield_series.csv`` and ``treasury_assets.csv``.

    The JSON payload uses the dashboard field names and adds the treasury
    value and per-metric status flags under ``treasuryValue`` and ``status``.
    Returns the yield series frame.
    """

    out = _ensure_outdir(outdir)

    payload = report.to_dict()
    payload["treasuryValue"] = report.treasury_value
    payload["status"] = report.metrics.status_dict()
    with (out / "portfolio.json").open("w") as f:
        json.dump(payload, f, indent=2)

    series = yield_series_frame(report)
    series.to_csv(out / "yield_series.csv", index=False)

    assets = pd.DataFrame(report.treasury_assets, columns=["id", "symbol", "href", "imgSrc"])
    assets.to_csv(out / "treasury_assets.csv", index=False)
    return series


@dataclass(frozen=True)
class HarvestPage:
    rows: pd.DataFrame
    page: int
    total_pages: int


def harvest_table(repo: HarvestRepository, page: int = 1, per_page: int = 10) -> HarvestPage:
    """Paged list of harvest days (newest first) and the symbols collected."""

    if per_page < 1:
        raise ValueError("per_page must be positive")

    by_day: dict[pd.Timestamp, list[str]] = {}
    for harvest in repo:
        symbols = by_day.setdefault(harvest.day, [])
        symbol = harvest.asset_symbol or harvest.asset_id
        if symbol not in symbols:
            symbols.append(symbol)

    days = sorted(by_day, reverse=True)
    table = pd.DataFrame(
        {
            "date": [d.strftime(CHART_DATE_FORMAT) for d in days],
            "symbols": [", ".join(by_day[d]) for d in days],
        },
        columns=["date", "symbols"],
    )

    total_pages = max(1, math.ceil(len(table) / per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    rows = table.iloc[start : start + per_page].reset_index(drop=True)
    return HarvestPage(rows=rows, page=page, total_pages=total_pages)


__all__ = [
    "HarvestPage",
    "harvest_table",
    "portfolio_report",
    "yield_series_frame",
]
