"""
TradeQueryEngine Tests
=======================
End-to-end tests of the engine operations over in-memory stores.
"""

import pytest

from trade_engine import (
    EntityNotFoundError, InMemoryShipmentStore, Role, ShipmentStore,
    StoreUnavailableError, TradeQueryEngine,
)
from trade_engine.analytics import GlobalStats


class BrokenStore(ShipmentStore):
    """Store whose reads fail with a driver-style error."""

    def __init__(self, exc=None):
        self.exc = exc or RuntimeError("connection refused")
        self.closed = False

    def fetch_records(self):
        raise self.exc

    def close(self):
        self.closed = True


class CountingStore(InMemoryShipmentStore):
    def __init__(self, records):
        super().__init__(records)
        self.reads = 0

    def fetch_records(self):
        self.reads += 1
        return super().fetch_records()


# =====================================================================
# LISTING
# =====================================================================

def test_list_entities_example(example_engine):
    """Test the union listing for the three-shipment example."""
    page = example_engine.list_entities()

    assert [(r.name, r.role) for r in page.rows] == [
        ("A", Role.IMPORTER),
        ("X", Role.EXPORTER),
        ("B", Role.IMPORTER),
        ("Y", Role.EXPORTER),
    ]
    assert [r.total_shipments for r in page.rows] == [2, 2, 1, 1]
    assert [r.total_weight_kg for r in page.rows] == [3000, 7000, 5000, 1000]
    assert page.total == 4
    assert (page.page, page.limit, page.total_pages) == (1, 20, 1)
    print("✓ listing matches worked example")


def test_list_entities_shipments_sum_to_twice_records(large_records):
    engine = TradeQueryEngine(InMemoryShipmentStore(large_records))
    page = engine.list_entities(limit=100)

    assert page.total == len(page.rows)
    assert sum(r.total_shipments for r in page.rows) == 2 * len(large_records)


def test_list_entities_pages_partition_listing(large_records):
    """Test concatenated pages equal the full listing with no gaps or repeats."""
    engine = TradeQueryEngine(InMemoryShipmentStore(large_records))
    full = engine.list_entities(limit=100)

    collected = []
    for page_number in range(1, full.total + 2):
        page = engine.list_entities(page=page_number, limit=2)
        collected.extend((r.name, r.country, r.role) for r in page.rows)
        assert page.total_pages == -(-full.total // 2)

    assert collected == [(r.name, r.country, r.role) for r in full.rows]


def test_list_entities_is_repeatable(large_records):
    engine = TradeQueryEngine(InMemoryShipmentStore(large_records))
    first = engine.list_entities(page=2, limit=3)
    second = engine.list_entities(page=2, limit=3)
    assert first == second


def test_list_entities_filters(example_engine):
    exporters = example_engine.list_entities(role="exporter")
    assert [r.name for r in exporters.rows] == ["X", "Y"]

    search = example_engine.list_entities(search="a")
    assert [r.name for r in search.rows] == ["A"]

    country = example_engine.list_entities(country="CN")
    assert {r.name for r in country.rows} == {"X", "Y"}

    bogus_role = example_engine.list_entities(role="shipper")
    assert bogus_role.total == 4


def test_list_entities_no_match(example_engine):
    page = example_engine.list_entities(search="zzz")
    assert page.rows == []
    assert page.total == 0
    assert page.total_pages == 1


def test_list_entities_clamps_paging(example_engine):
    page = example_engine.list_entities(page="-3", limit="0")
    assert (page.page, page.limit) == (1, 1)
    assert page.total_pages == 4
    assert len(page.rows) == 1


# =====================================================================
# DETAIL & ROLLUPS
# =====================================================================

def test_get_entity_detail(example_engine):
    detail = example_engine.get_entity_detail("X", "exporter")
    assert detail.role is Role.EXPORTER
    assert detail.total_weight_kg == 7000


def test_get_entity_detail_not_found(example_engine):
    with pytest.raises(EntityNotFoundError):
        example_engine.get_entity_detail("A", Role.EXPORTER)


def test_get_entity_detail_invalid_role(example_engine):
    with pytest.raises(ValueError):
        example_engine.get_entity_detail("A", "buyer")


def test_rollups_example(example_engine):
    assert example_engine.global_stats() == GlobalStats(2, 2)
    assert [(c.commodity, c.weight_kg) for c in example_engine.top_commodities()] == [
        ("Copper", 5000), ("Steel", 3000)
    ]
    assert [(m.month_label, m.weight_kg) for m in example_engine.monthly_series()] == [
        ("Jan 2024", 2000), ("Feb 2024", 6000)
    ]
    assert example_engine.list_distinct_countries() == ["CN", "DE", "US"]


def test_each_operation_reads_store_once(example_records):
    store = CountingStore(example_records)
    engine = TradeQueryEngine(store)

    engine.list_entities(search="A", role="importer")
    assert store.reads == 1
    engine.get_entity_detail("A", "importer")
    assert store.reads == 2
    engine.global_stats()
    assert store.reads == 3


# =====================================================================
# STORE FAILURES
# =====================================================================

def test_store_error_becomes_store_unavailable():
    engine = TradeQueryEngine(BrokenStore())

    with pytest.raises(StoreUnavailableError):
        engine.list_entities()
    with pytest.raises(StoreUnavailableError):
        engine.global_stats()
    with pytest.raises(StoreUnavailableError):
        engine.get_entity_detail("A", "importer")


def test_store_unavailable_passes_through_unchanged():
    cause = StoreUnavailableError("down for maintenance")
    engine = TradeQueryEngine(BrokenStore(cause))

    with pytest.raises(StoreUnavailableError) as excinfo:
        engine.monthly_series()
    assert excinfo.value is cause


def test_ping_and_close():
    store = BrokenStore()
    engine = TradeQueryEngine(store)

    assert engine.ping() is False
    engine.close()
    assert store.closed
    assert TradeQueryEngine(InMemoryShipmentStore()).ping() is True
