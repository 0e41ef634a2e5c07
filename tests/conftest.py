"""
Shared test fixtures
=====================
Small, hand-checkable shipment sets used across the engine and API tests.
"""

import sys
from pathlib import Path
from datetime import date

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from trade_engine.records import ShipmentRecord
from trade_engine.stores import InMemoryShipmentStore
from trade_engine.engine import TradeQueryEngine


def make_shipment(
    importer: str = "A",
    importer_country: str = "US",
    exporter: str = "X",
    exporter_country: str = "CN",
    commodity: str = "Steel",
    tonnes: float = 1.0,
    shipped: date = date(2024, 1, 1),
    importer_website: str = None,
    exporter_website: str = None,
) -> ShipmentRecord:
    return ShipmentRecord(
        importer_name=importer,
        importer_country=importer_country,
        importer_website=importer_website,
        exporter_name=exporter,
        exporter_country=exporter_country,
        exporter_website=exporter_website,
        commodity_name=commodity,
        weight_tonnes=tonnes,
        shipment_date=shipped,
    )


@pytest.fixture
def shipment():
    """Factory for ShipmentRecord with sensible defaults."""
    return make_shipment


@pytest.fixture
def example_records():
    """
    Three shipments:
      A/US <- X/CN  Steel   2t  2024-01-05
      A/US <- Y/CN  Steel   1t  2024-02-01
      B/DE <- X/CN  Copper  5t  2024-02-10
    """
    return [
        make_shipment("A", "US", "X", "CN", "Steel", 2, date(2024, 1, 5)),
        make_shipment("A", "US", "Y", "CN", "Steel", 1, date(2024, 2, 1)),
        make_shipment("B", "DE", "X", "CN", "Copper", 5, date(2024, 2, 10)),
    ]


@pytest.fixture
def example_engine(example_records):
    return TradeQueryEngine(InMemoryShipmentStore(example_records))


@pytest.fixture
def large_records():
    """57 shipments spread over a handful of parties, commodities and months."""
    importers = [("Acme Corp", "US"), ("Borealis GmbH", "DE"), ("Cedar Ltd", "GB"),
                 ("acme corp", "US"), ("Delta SA", "FR"), ("Acme Corp", "CA")]
    exporters = [("Xiamen Steel", "CN"), ("Yokohama Metals", "JP"), ("Zeta Mining", "AU"),
                 ("Acme Corp", "US")]
    commodities = ["Steel", "Copper", "Zinc", "Nickel"]

    records = []
    for i in range(57):
        imp_name, imp_country = importers[i % len(importers)]
        exp_name, exp_country = exporters[(i * 7) % len(exporters)]
        records.append(make_shipment(
            imp_name, imp_country, exp_name, exp_country,
            commodities[(i * 3) % len(commodities)],
            tonnes=0.5 + (i % 9),
            shipped=date(2023 + (i % 2), (i % 12) + 1, (i % 27) + 1),
        ))
    return records
