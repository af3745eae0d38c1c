"""CSV-backed harvest and treasury sources."""

from __future__ import annotations

import pandas as pd

from ..core import Harvest, TreasuryAsset
from .base import _text


def _read_required(path: str, required: set[str]) -> pd.DataFrame:
    df = pd.read_csv(path)
    missing = required.difference(df.columns)
    if missing:
        raise ValueError(f"CSV missing columns: {missing}")
    return df


class HarvestCSVSource:
    """Load harvests from a CSV with ``asset_id``, ``quantity`` and ``date`` columns."""

    def __init__(self, path: str) -> None:
        self.path = path

    def fetch(self) -> list[Harvest]:
        df = _read_required(self.path, {"asset_id", "quantity", "date"})
        return [
            Harvest(
                asset_id=str(r["asset_id"]),
                quantity=float(r["quantity"]),
                date=r["date"],
                asset_symbol=_text(r.get("asset_symbol")),
            )
            for _, r in df.iterrows()
        ]


class TreasuryCSVSource:
    """Load treasury holdings from a CSV with ``id``, ``symbol`` and ``quantity``."""

    def __init__(self, path: str) -> None:
        self.path = path

    def fetch(self) -> list[TreasuryAsset]:
        df = _read_required(self.path, {"id", "symbol", "quantity"})
        return [
            TreasuryAsset(
                id=str(r["id"]),
                symbol=str(r["symbol"]),
                quantity=float(r["quantity"]),
                href=_text(r.get("href")),
                img_src=_text(r.get("img_src")),
            )
            for _, r in df.iterrows()
        ]


__all__ = ["HarvestCSVSource", "TreasuryCSVSource"]
