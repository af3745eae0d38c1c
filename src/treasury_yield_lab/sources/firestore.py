"""Firestore adapters reading the ``harvests`` and ``treasuryAssets`` collections."""

from __future__ import annotations

import logging
from typing import Any

from ..core import Harvest, TreasuryAsset
from .base import _text

logger = logging.getLogger(__name__)


def _require_firestore() -> Any:
    try:
        from google.cloud import firestore
    except Exception as exc:  # pragma: no cover - only raised when missing
        raise RuntimeError(
            "google-cloud-firestore is required to open a Firestore client. Install with: \n"
            "  pip install 'treasury-yield-lab[firestore]'\n"
            "or pass an existing client to the source."
        ) from exc
    return firestore


class _CollectionSource:
    collection = ""

    def __init__(
        self,
        client: Any | None = None,
        *,
        collection: str | None = None,
        project: str | None = None,
    ) -> None:
        self._client = client
        self.project = project
        if collection:
            self.collection = collection

    def _get_client(self) -> Any:
        if self._client is None:
            firestore = _require_firestore()
            self._client = firestore.Client(project=self.project)
        return self._client

    def _documents(self) -> list[dict[str, Any]]:
        snapshot = self._get_client().collection(self.collection).stream()
        return [doc.to_dict() or {} for doc in snapshot]


class FirestoreHarvestSource(_CollectionSource):
    """Read harvest documents ``{assetSymbol, id, quantity, date}``."""

    collection = "harvests"

    def fetch(self) -> list[Harvest]:
        harvests: list[Harvest] = []
        for doc in self._documents():
            try:
                harvests.append(
                    Harvest(
                        asset_id=str(doc["id"]),
                        quantity=float(doc["quantity"]),
                        date=doc["date"],
                        asset_symbol=_text(doc.get("assetSymbol")),
                    )
                )
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed harvest document %r: %s", doc, exc)
        return harvests


class FirestoreTreasurySource(_CollectionSource):
    """Read treasury asset documents ``{id, symbol, quantity, href, imgSrc}``."""

    collection = "treasuryAssets"

    def fetch(self) -> list[TreasuryAsset]:
        assets: list[TreasuryAsset] = []
        for doc in self._documents():
            try:
                assets.append(
                    TreasuryAsset(
                        id=str(doc["id"]),
                        symbol=str(doc.get("symbol", "")),
                        quantity=float(doc["quantity"]),
                        href=_text(doc.get("href")),
                        img_src=_text(doc.get("imgSrc")),
                    )
                )
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed treasury document %r: %s", doc, exc)
        return assets


__all__ = ["FirestoreHarvestSource", "FirestoreTreasurySource"]
