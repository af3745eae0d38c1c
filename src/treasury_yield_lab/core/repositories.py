"""In-memory repositories for TreasuryYieldLab data models."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping

import pandas as pd

from .models import Harvest, TreasuryAsset, YieldPoint

logger = logging.getLogger(__name__)


class HarvestRepository:
    """Collection of :class:`Harvest` rows with day-level aggregation."""

    def __init__(self, harvests: Iterable[Harvest] | None = None) -> None:
        self._harvests: list[Harvest] = list(harvests) if harvests else []

    def add(self, harvest: Harvest) -> None:
        self._harvests.append(harvest)

    def extend(self, items: Iterable[Harvest]) -> None:
        self._harvests.extend(items)

    def asset_ids(self) -> list[str]:
        return sorted({h.asset_id for h in self._harvests})

    def to_dataframe(self) -> pd.DataFrame:
        if not self._harvests:
            return pd.DataFrame(columns=["asset_id", "asset_symbol", "quantity", "date"])
        return pd.DataFrame([h.to_dict() for h in self._harvests])

    def to_yield_points(self, prices: Mapping[str, float]) -> list[YieldPoint]:
        """Value each harvest at ``prices`` and sum per UTC calendar day.

        Harvests whose asset has no price are skipped with a warning. The
        result is sorted ascending by date, one point per day.
        """

        totals: dict[pd.Timestamp, float] = {}
        unpriced: set[str] = set()
        for harvest in self._harvests:
            price = prices.get(harvest.asset_id)
            if price is None:
                unpriced.add(harvest.asset_id)
                continue
            day = harvest.day
            totals[day] = totals.get(day, 0.0) + harvest.value_usd(price)
        if unpriced:
            logger.warning("No price for harvested assets %s; skipped", sorted(unpriced))
        return [YieldPoint(date=day, total_usd=totals[day]) for day in sorted(totals)]

    def __len__(self) -> int:
        return len(self._harvests)

    def __iter__(self) -> Iterator[Harvest]:
        return iter(self._harvests)


class TreasuryRepository:
    """Holdings whose combined USD value is the ratio denominator."""

    def __init__(self, assets: Iterable[TreasuryAsset] | None = None) -> None:
        self._assets: list[TreasuryAsset] = list(assets) if assets else []

    def add(self, asset: TreasuryAsset) -> None:
        self._assets.append(asset)

    def extend(self, items: Iterable[TreasuryAsset]) -> None:
        self._assets.extend(items)

    def asset_ids(self) -> list[str]:
        return sorted({a.id for a in self._assets})

    def total_value(self, prices: Mapping[str, float]) -> float:
        total = 0.0
        for asset in self._assets:
            price = prices.get(asset.id)
            if price is None:
                logger.warning("No price for treasury asset %s; excluded from value", asset.id)
                continue
            total += asset.value_usd(price)
        return total

    def display_assets(self) -> list[dict[str, str]]:
        return [asset.to_display_dict() for asset in self._assets]

    def to_dataframe(self) -> pd.DataFrame:
        if not self._assets:
            return pd.DataFrame(columns=["id", "symbol", "quantity", "href", "img_src"])
        return pd.DataFrame([asset.to_dict() for asset in self._assets])

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[TreasuryAsset]:
        return iter(self._assets)


__all__ = ["HarvestRepository", "TreasuryRepository"]
