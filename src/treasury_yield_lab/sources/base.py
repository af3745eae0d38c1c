"""Adapter protocols and shared helpers for TreasuryYieldLab data sources."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

import pandas as pd

from ..core import Harvest, TreasuryAsset


class HarvestSource(Protocol):
    """Adapter returning raw harvest records."""

    def fetch(self) -> list[Harvest]: ...


class TreasurySource(Protocol):
    """Adapter returning the assets held by the treasury."""

    def fetch(self) -> list[TreasuryAsset]: ...


class PriceSource(Protocol):
    """Adapter mapping asset identifiers to USD prices."""

    def fetch(self, asset_ids: Sequence[str]) -> dict[str, float]: ...


class StaticPriceSource:
    """Fixed price table, handy for demos, backfills and tests."""

    def __init__(self, prices: dict[str, float]) -> None:
        self.prices = {str(k): float(v) for k, v in prices.items()}

    def fetch(self, asset_ids: Sequence[str]) -> dict[str, float]:
        return {i: self.prices[i] for i in asset_ids if i in self.prices}


def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    try:
        if pd.isna(value):
            return default
    except (TypeError, ValueError):
        pass
    return str(value)


__all__ = ["HarvestSource", "PriceSource", "StaticPriceSource", "TreasurySource"]
