"""
Detail Resolver
================
Drill-down for a single company identified by (name, role).

Scope of the drill-down is every record where the company appears in the
requested role, whatever country was recorded on it:
- country: taken from the most recent matching shipment (latest
  shipment_date; undated records rank lowest; equal dates resolve to the
  record that comes later in the store's order)
- website: first non-null website among matching records
- top trading partners: counterpart (name, country) by shipment count
- top commodities: commodity by summed weight in kg

Ties in both top-N lists keep first-seen order.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from trade_engine.errors import EntityNotFoundError
from trade_engine.records import Role, ShipmentRecord

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 3


@dataclass(frozen=True)
class TradingPartnerLink:
    """Counterpart company and how many shipments it shares with the entity."""
    name: str
    country: str
    shipments: int


@dataclass(frozen=True)
class CommodityWeight:
    """Commodity traded by the entity, weight in kg."""
    name: str
    weight_kg: float


@dataclass(frozen=True)
class EntityDetail:
    """Full drill-down for one company in one role."""
    name: str
    country: str
    website: Optional[str]
    role: Role
    total_shipments: int
    total_weight_kg: float
    top_trading_partners: List[TradingPartnerLink] = field(default_factory=list)
    top_commodities: List[CommodityWeight] = field(default_factory=list)


def _recency_key(indexed: Tuple[int, ShipmentRecord]) -> Tuple[date, int]:
    position, record = indexed
    return (record.shipment_date or date.min, position)


def top_trading_partners(
    records: List[ShipmentRecord],
    role: Role,
    limit: int = DEFAULT_TOP_N
) -> List[TradingPartnerLink]:
    """Count the entity's records per counterpart (name, country)."""
    counterpart = role.counterpart
    counts: Dict[Tuple[str, str], int] = {}
    for record in records:
        party = counterpart.party(record)
        key = (party.name, party.country)
        counts[key] = counts.get(key, 0) + 1

    # sorted() is stable, so equal counts stay in first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        TradingPartnerLink(name=name, country=country, shipments=count)
        for (name, country), count in ranked[:max(limit, 0)]
    ]


def top_entity_commodities(
    records: List[ShipmentRecord],
    limit: int = DEFAULT_TOP_N
) -> List[CommodityWeight]:
    """Sum the entity's shipped weight (kg) per commodity."""
    weights: Dict[str, float] = {}
    for record in records:
        weights[record.commodity_name] = weights.get(record.commodity_name, 0.0) + record.weight_kg

    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [
        CommodityWeight(name=name, weight_kg=weight)
        for name, weight in ranked[:max(limit, 0)]
    ]


def resolve_entity_detail(
    records: Iterable[ShipmentRecord],
    name: str,
    role: Role,
    top_n: int = DEFAULT_TOP_N
) -> EntityDetail:
    """
    Build the drill-down for `name` in `role`.

    Name matching is exact and case-sensitive. Raises EntityNotFoundError
    when the name never appears in that role, even if it appears in the
    other one.
    """
    matched = [record for record in records if role.party(record).name == name]
    if not matched:
        raise EntityNotFoundError(name, role)

    _, latest = max(enumerate(matched), key=_recency_key)

    website = None
    for record in matched:
        website = role.party(record).website
        if website is not None:
            break

    detail = EntityDetail(
        name=name,
        country=role.party(latest).country,
        website=website,
        role=role,
        total_shipments=len(matched),
        total_weight_kg=sum(record.weight_kg for record in matched),
        top_trading_partners=top_trading_partners(matched, role, top_n),
        top_commodities=top_entity_commodities(matched, top_n),
    )
    logger.debug(f"Resolved {role.value} {name!r}: {detail.total_shipments} shipments")
    return detail
