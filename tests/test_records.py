"""
Shipment Record Tests
======================
Tests for raw row coercion and the importer/exporter Role.
"""

import math
from datetime import date, datetime

import pandas as pd

from trade_engine.records import Party, Role, ShipmentRecord


def test_from_mapping_coerces_missing_values():
    record = ShipmentRecord.from_mapping({
        "importer_name": None,
        "importer_country": math.nan,
        "importer_website": "   ",
        "exporter_name": "X",
        "exporter_country": "CN",
        "commodity_name": "Steel",
        "weight_tonnes": math.inf,
        "shipment_date": pd.NaT,
    })

    assert record.importer_name == ""
    assert record.importer_country == ""
    assert record.importer_website is None
    assert record.exporter_website is None
    assert record.weight_tonnes == 0.0
    assert record.shipment_date is None


def test_from_mapping_weight_alias_and_dates():
    record = ShipmentRecord.from_mapping({
        "importer_name": "A",
        "weight_metric_tonnes": "1.25",
        "shipment_date": "2024-02-29T10:30:00",
    })
    assert record.weight_tonnes == 1.25
    assert record.weight_kg == 1250
    assert record.shipment_date == date(2024, 2, 29)

    stamped = ShipmentRecord.from_mapping({"shipment_date": pd.Timestamp("2023-12-31 23:59")})
    assert stamped.shipment_date == date(2023, 12, 31)

    moment = ShipmentRecord.from_mapping({"shipment_date": datetime(2024, 5, 1, 8)})
    assert moment.shipment_date == date(2024, 5, 1)


def test_from_mapping_bad_date_is_none():
    assert ShipmentRecord.from_mapping({"shipment_date": "sometime"}).shipment_date is None


def test_role_parse():
    assert Role.parse("importer") is Role.IMPORTER
    assert Role.parse(Role.EXPORTER) is Role.EXPORTER
    assert Role.parse("IMPORTER") is None
    assert Role.parse(None) is None


def test_role_counterpart_and_party(shipment):
    record = shipment(importer="A", importer_country="US", exporter="X", exporter_country="CN",
                      exporter_website="https://x.example")

    assert Role.IMPORTER.counterpart is Role.EXPORTER
    assert Role.EXPORTER.counterpart is Role.IMPORTER
    assert Role.IMPORTER.party(record) == Party("A", "US", None)
    assert Role.EXPORTER.party(record) == Party("X", "CN", "https://x.example")
