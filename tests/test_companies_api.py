"""
Tests for the Trade Companies API
==================================
Includes tests for:
- GET /api/v1/health
- GET /api/v1/companies
- GET /api/v1/companies/countries
- GET /api/v1/companies/{name}
- GET /api/v1/analytics/stats, /commodities, /monthly

The query engine dependency is overridden with in-memory stores, so no
database is needed.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.deps import get_engine
from trade_engine import InMemoryShipmentStore, ShipmentStore, TradeQueryEngine

from conftest import make_shipment

client = TestClient(app)


class DownStore(ShipmentStore):
    def fetch_records(self):
        raise ConnectionError("could not connect to server")


@pytest.fixture
def use_engine():
    """Route every request to the given engine for the duration of a test."""
    def _use(engine):
        app.dependency_overrides[get_engine] = lambda: engine
        return engine

    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
def example_api(use_engine, example_engine):
    return use_engine(example_engine)


# =====================================================================
# HEALTH & ROOT
# =====================================================================

def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["endpoints"]["companies"] == "/api/v1/companies"


def test_health_ok(monkeypatch, example_engine):
    monkeypatch.setattr("api.deps._engine", example_engine)

    response = client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["store"] == "ok"
    print("✓ health reports ok")


def test_health_degraded_when_store_down(monkeypatch):
    monkeypatch.setattr("api.deps._engine", TradeQueryEngine(DownStore()))

    data = client.get("/api/v1/health").json()
    assert data["status"] == "degraded"
    assert data["store"] == "error"


def test_health_degraded_when_config_missing(monkeypatch, tmp_path):
    monkeypatch.setattr("api.deps._engine", None)
    monkeypatch.setenv("DB_CONFIG_PATH", str(tmp_path / "missing.yml"))

    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "degraded"


# =====================================================================
# COMPANY LISTING
# =====================================================================

def test_list_companies_example(example_api):
    response = client.get("/api/v1/companies")
    assert response.status_code == 200
    data = response.json()

    assert [(c["name"], c["role"]) for c in data["items"]] == [
        ("A", "importer"), ("X", "exporter"), ("B", "importer"), ("Y", "exporter"),
    ]
    assert data["items"][0] == {
        "name": "A", "country": "US", "role": "importer",
        "total_shipments": 2, "total_weight_kg": 3000,
    }
    assert (data["total"], data["page"], data["limit"], data["total_pages"]) == (4, 1, 20, 1)
    print("✓ company listing matches worked example")


def test_list_companies_filters(example_api):
    data = client.get("/api/v1/companies", params={"role": "exporter", "country": "CN"}).json()
    assert [c["name"] for c in data["items"]] == ["X", "Y"]

    data = client.get("/api/v1/companies", params={"search": "b"}).json()
    assert [c["name"] for c in data["items"]] == ["B"]


def test_list_companies_ignores_unknown_role(example_api):
    data = client.get("/api/v1/companies", params={"role": "shipper"}).json()
    assert data["total"] == 4


def test_list_companies_clamps_paging(example_api):
    response = client.get("/api/v1/companies", params={"page": "-3", "limit": "500"})
    assert response.status_code == 200
    data = response.json()
    assert data["page"] == 1
    assert data["limit"] == 100

    data = client.get("/api/v1/companies", params={"page": "abc", "limit": "abc"}).json()
    assert (data["page"], data["limit"]) == (1, 20)


def test_list_companies_past_last_page(example_api):
    data = client.get("/api/v1/companies", params={"page": 5, "limit": 2}).json()
    assert data["items"] == []
    assert data["total"] == 4
    assert data["total_pages"] == 2


def test_list_companies_injection_text_is_data(example_api):
    response = client.get("/api/v1/companies", params={"search": "'; DROP TABLE shipments; --"})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 0
    assert data["total_pages"] == 1

    # Store still intact
    assert client.get("/api/v1/companies").json()["total"] == 4


def test_list_countries(example_api):
    response = client.get("/api/v1/companies/countries")
    assert response.status_code == 200
    assert response.json() == {"items": ["CN", "DE", "US"]}


# =====================================================================
# COMPANY DETAIL
# =====================================================================

def test_company_detail(example_api):
    response = client.get("/api/v1/companies/A", params={"role": "importer"})
    assert response.status_code == 200
    data = response.json()

    assert data["name"] == "A"
    assert data["country"] == "US"
    assert data["website"] is None
    assert data["total_shipments"] == 2
    assert data["total_weight_kg"] == 3000
    assert data["top_trading_partners"] == [
        {"name": "X", "country": "CN", "shipments": 1},
        {"name": "Y", "country": "CN", "shipments": 1},
    ]
    assert data["top_commodities"] == [{"name": "Steel", "weight_kg": 3000}]


def test_company_detail_defaults_to_importer(example_api):
    assert client.get("/api/v1/companies/B").json()["role"] == "importer"
    assert client.get("/api/v1/companies/X").status_code == 404


def test_company_detail_not_found_in_role(example_api):
    response = client.get("/api/v1/companies/A", params={"role": "exporter"})
    assert response.status_code == 404
    assert "A" in response.json()["detail"]


def test_company_detail_invalid_role(example_api):
    response = client.get("/api/v1/companies/A", params={"role": "buyer"})
    assert response.status_code == 422


def test_company_detail_name_with_slash(use_engine):
    use_engine(TradeQueryEngine(InMemoryShipmentStore([
        make_shipment(importer="A/S Nordic Trading", importer_country="DK"),
    ])))

    response = client.get("/api/v1/companies/A/S Nordic Trading")
    assert response.status_code == 200
    assert response.json()["country"] == "DK"


# =====================================================================
# ANALYTICS
# =====================================================================

def test_stats(example_api):
    response = client.get("/api/v1/analytics/stats")
    assert response.status_code == 200
    assert response.json() == {"total_importers": 2, "total_exporters": 2}


def test_commodities(example_api):
    data = client.get("/api/v1/analytics/commodities").json()
    assert data["limit"] == 5
    assert data["items"] == [
        {"commodity": "Copper", "weight_kg": 5000},
        {"commodity": "Steel", "weight_kg": 3000},
    ]

    data = client.get("/api/v1/analytics/commodities", params={"limit": 1}).json()
    assert [c["commodity"] for c in data["items"]] == ["Copper"]


def test_commodities_limit_validation(example_api):
    assert client.get("/api/v1/analytics/commodities", params={"limit": 0}).status_code == 422
    assert client.get("/api/v1/analytics/commodities", params={"limit": 101}).status_code == 422


def test_monthly(example_api):
    response = client.get("/api/v1/analytics/monthly")
    assert response.status_code == 200
    assert response.json()["items"] == [
        {"month": "Jan 2024", "weight_kg": 2000},
        {"month": "Feb 2024", "weight_kg": 6000},
    ]


# =====================================================================
# STORE FAILURES
# =====================================================================

@pytest.mark.parametrize("path", [
    "/api/v1/companies",
    "/api/v1/companies/countries",
    "/api/v1/companies/A",
    "/api/v1/analytics/stats",
    "/api/v1/analytics/commodities",
    "/api/v1/analytics/monthly",
])
def test_store_down_returns_503(use_engine, path):
    use_engine(TradeQueryEngine(DownStore()))

    response = client.get(path)
    assert response.status_code == 503
    assert "unavailable" in response.json()["detail"]


def test_unconfigured_store_returns_503(monkeypatch, tmp_path):
    """Test a store that cannot be built maps to the 503 error body."""
    monkeypatch.setattr("api.deps._engine", None)
    monkeypatch.setenv("DB_CONFIG_PATH", str(tmp_path / "missing.yml"))

    response = client.get("/api/v1/analytics/stats")
    assert response.status_code == 503
    data = response.json()
    assert data["error"] == "Shipment store unavailable"
    assert data["status_code"] == 503
