from __future__ import annotations

import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import Any, cast

from treasury_yield_lab import (
    CoinGeckoPriceSource,
    HarvestCSVSource,
    JSONFileCache,
    MemoryCache,
    Pipeline,
    StaticPriceSource,
    TreasuryCSVSource,
    Visualizer,
)
from treasury_yield_lab.analytics.yields import rolling_apr_series
from treasury_yield_lab.core import HarvestRepository
from treasury_yield_lab.reporting import harvest_table, portfolio_report
from treasury_yield_lab.sources import PriceSource

logger = logging.getLogger(__name__)


def load_config(path: str | Path | None) -> dict[str, Any]:
    """Load configuration from a TOML file and merge with defaults.

    Parameters
    ----------
    path:
        Optional path to a configuration file. When ``None`` or missing, the
        built-in defaults are used.

    Returns
    -------
    dict[str, Any]
        Configuration dictionary with any file overrides applied.
    """

    default = {
        "harvests_csv": str(Path(__file__).with_name("sample_harvests.csv")),
        "treasury_csv": str(Path(__file__).with_name("sample_treasury.csv")),
        "prices": {
            "source": "coingecko",
            "api_key": None,
            "static": {},
        },
        "cache": {"path": None, "price_ttl_minutes": 30},
        "analytics": {"apr_window": 4},
        "output": {"outdir": None, "show": True, "charts": ["yield", "cumulative"]},
        "reporting": {"harvest_page_size": 10},
    }

    cfg_path = Path(path) if path else None

    if cfg_path and cfg_path.is_file():
        with open(cfg_path, "rb") as f:
            file_cfg = tomllib.load(f)
        for k, v in file_cfg.items():
            if isinstance(v, dict) and k in default and isinstance(default[k], dict):
                cast(dict, default[k]).update(v)
            else:
                default[k] = v
    elif cfg_path:
        logger.warning("Config file not found at %s. Using defaults.", cfg_path)

    return default


def build_price_source(cfg: dict[str, Any]) -> PriceSource:
    prices_cfg = cfg.get("prices", {})
    cache_cfg = cfg.get("cache", {})
    if str(prices_cfg.get("source", "coingecko")) == "static":
        return StaticPriceSource(dict(prices_cfg.get("static", {})))

    cache_path = cache_cfg.get("path")
    cache = JSONFileCache(cache_path) if cache_path else MemoryCache()
    return CoinGeckoPriceSource(
        cache,
        ttl_seconds=float(cache_cfg.get("price_ttl_minutes", 30)) * 60.0,
        api_key=prices_cfg.get("api_key") or None,
    )


def main() -> None:
    """Run the demo using configuration from file or environment variables."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    cfg_file = os.getenv("TREASURY_YIELD_CONFIG") or (sys.argv[1] if len(sys.argv) > 1 else None)
    cfg = load_config(cfg_file)

    if harvests_env := os.getenv("TREASURY_YIELD_HARVESTS_CSV"):
        cfg["harvests_csv"] = harvests_env
    if treasury_env := os.getenv("TREASURY_YIELD_TREASURY_CSV"):
        cfg["treasury_csv"] = treasury_env
    if outdir_env := os.getenv("TREASURY_YIELD_OUTDIR"):
        cfg.setdefault("output", {})["outdir"] = outdir_env

    pipeline = Pipeline(
        [HarvestCSVSource(str(cfg["harvests_csv"]))],
        [TreasuryCSVSource(str(cfg["treasury_csv"]))],
        build_price_source(cfg),
        window=int(cfg.get("analytics", {}).get("apr_window", 4)),
    )
    report = pipeline.run()
    metrics = report.metrics

    print(f"Treasury value: ${report.treasury_value:,.2f}")
    print(f"Rolling APR: {metrics.rolling_apr:.2f}%")
    print(f"Average harvest frequency: {metrics.yield_frequency.average_days:.1f} days")
    print(f"Yield consistency score: {metrics.yield_consistency_score:.0f}/100")
    print(f"Latest yield performance: {metrics.latest_relative_performance:+.2f}% vs average")
    print(f"Yield to treasury ratio: {metrics.yield_to_treasury_ratio:.2f}%")

    page_size = int(cfg.get("reporting", {}).get("harvest_page_size", 10))
    page = harvest_table(HarvestRepository(report.harvests), page=1, per_page=page_size)
    print(f"Recent harvests (page {page.page} of {page.total_pages}):")
    print(page.rows.to_string(index=False))

    out = cfg.get("output", {})
    outdir = Path(out["outdir"]) if out.get("outdir") else None
    show = bool(out.get("show", True)) if not outdir else False
    charts = out.get("charts", [])

    if outdir:
        portfolio_report(report, outdir)

    if "yield" in charts:
        Visualizer.yield_chart(
            metrics.yield_chart_data,
            save_path=str(outdir / "yield_chart.png") if outdir else None,
            show=show,
        )
    if "cumulative" in charts:
        Visualizer.cumulative_yield_chart(
            metrics.cumulative_yield_chart_data,
            save_path=str(outdir / "cumulative_yield_chart.png") if outdir else None,
            show=show,
        )
    if "rolling_apr" in charts:
        Visualizer.rolling_apr_chart(
            rolling_apr_series(report.yield_points, report.treasury_value, pipeline.window),
            save_path=str(outdir / "rolling_apr.png") if outdir else None,
            show=show,
        )
    if "usd" in charts:
        Visualizer.harvest_value_chart(
            report.yield_points,
            save_path=str(outdir / "harvest_value.png") if outdir else None,
            show=show,
        )


if __name__ == "__main__":
    main()
