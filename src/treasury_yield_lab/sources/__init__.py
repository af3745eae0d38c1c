"""Data source adapters used by :mod:`treasury_yield_lab`."""

from __future__ import annotations

from .base import HarvestSource, PriceSource, StaticPriceSource, TreasurySource
from .coingecko import CoinGeckoPriceSource
from .csv import HarvestCSVSource, TreasuryCSVSource
from .firestore import FirestoreHarvestSource, FirestoreTreasurySource

__all__ = [
    "HarvestSource",
    "TreasurySource",
    "PriceSource",
    "StaticPriceSource",
    "CoinGeckoPriceSource",
    "HarvestCSVSource",
    "TreasuryCSVSource",
    "FirestoreHarvestSource",
    "FirestoreTreasurySource",
]
