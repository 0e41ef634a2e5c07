"""
Trade Engine - Entities Module
===============================
Company entities derived from the importer and exporter sides of shipments.

Provides:
- Projection of records into (name, country, role) entities
- Single-company drill-down with top partners and commodities
"""

from trade_engine.entities.projection import (
    RoleEntity,
    project_entities,
    union_entities,
)

from trade_engine.entities.detail import (
    CommodityWeight,
    EntityDetail,
    TradingPartnerLink,
    resolve_entity_detail,
)

__all__ = [
    'RoleEntity',
    'project_entities',
    'union_entities',
    'CommodityWeight',
    'EntityDetail',
    'TradingPartnerLink',
    'resolve_entity_detail',
]
