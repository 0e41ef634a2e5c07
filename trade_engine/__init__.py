"""
Trade Entity Aggregation & Query Engine
========================================
Read-only analytics over a flat table of trade shipment records.

Submodules:
- records: ShipmentRecord and the importer/exporter Role
- stores: PostgreSQL, CSV and in-memory record stores
- entities: company projection and single-company drill-down
- analytics: global rollups (stats, commodities, monthly series)
- query: listing filters and pagination
- engine: TradeQueryEngine, the query operations facade
"""

from trade_engine.engine import TradeQueryEngine
from trade_engine.errors import (
    EntityNotFoundError,
    StoreUnavailableError,
    TradeEngineError,
)
from trade_engine.records import Role, ShipmentRecord
from trade_engine.stores import (
    CsvShipmentStore,
    InMemoryShipmentStore,
    PostgresShipmentStore,
    ShipmentStore,
    build_store,
)

__all__ = [
    'TradeQueryEngine',
    'EntityNotFoundError',
    'StoreUnavailableError',
    'TradeEngineError',
    'Role',
    'ShipmentRecord',
    'CsvShipmentStore',
    'InMemoryShipmentStore',
    'PostgresShipmentStore',
    'ShipmentStore',
    'build_store',
]
