from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pandas as pd
import pytest

from treasury_yield_lab.sources import FirestoreHarvestSource, FirestoreTreasurySource


class FakeSnapshot:
    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


class FakeCollection:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def stream(self) -> list[FakeSnapshot]:
        return [FakeSnapshot(d) for d in self._docs]


class FakeClient:
    def __init__(self, collections: dict[str, list[dict[str, Any]]]) -> None:
        self.collections = collections
        self.requested: list[str] = []

    def collection(self, name: str) -> FakeCollection:
        self.requested.append(name)
        return FakeCollection(self.collections.get(name, []))


@pytest.fixture()
def client() -> FakeClient:
    return FakeClient(
        {
            "harvests": [
                {
                    "assetSymbol": "CVX",
                    "id": "convex-finance",
                    "quantity": 12.5,
                    "date": datetime(2024, 2, 1, 8, tzinfo=timezone.utc),
                },
                {
                    "assetSymbol": "CRV",
                    "id": "curve-dao-token",
                    "quantity": 40,
                    "date": {"_seconds": 1_706_781_600, "_nanoseconds": 0},
                },
                {"assetSymbol": "BAD", "id": "broken", "quantity": 1},
            ],
            "treasuryAssets": [
                {
                    "symbol": "DYDX",
                    "quantity": 338051.0,
                    "href": "https://dydx.trade/",
                    "imgSrc": "https://example.org/dydx.png",
                    "id": "dydx-chain",
                },
                {"symbol": "NOQTY", "id": "no-quantity"},
            ],
        }
    )


def test_harvest_documents_are_normalised(
    client: FakeClient, caplog: pytest.LogCaptureFixture
) -> None:
    source = FirestoreHarvestSource(client)
    with caplog.at_level("WARNING", logger="treasury_yield_lab.sources.firestore"):
        harvests = source.fetch()
    assert client.requested == ["harvests"]
    assert [h.asset_id for h in harvests] == ["convex-finance", "curve-dao-token"]
    assert harvests[0].date == pd.Timestamp("2024-02-01T08:00:00Z")
    assert harvests[1].date == pd.Timestamp("2024-02-01T10:00:00Z")
    assert harvests[1].quantity == 40.0
    assert any("broken" in rec.message for rec in caplog.records)


def test_treasury_documents_map_image_field(client: FakeClient) -> None:
    assets = FirestoreTreasurySource(client).fetch()
    assert len(assets) == 1
    assert assets[0].img_src == "https://example.org/dydx.png"
    assert assets[0].to_display_dict()["imgSrc"] == "https://example.org/dydx.png"


def test_collection_name_override(client: FakeClient) -> None:
    client.collections["archive"] = client.collections["harvests"][:1]
    harvests = FirestoreHarvestSource(client, collection="archive").fetch()
    assert client.requested == ["archive"]
    assert len(harvests) == 1
