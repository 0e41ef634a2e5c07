"""
Entity Projector
=================
Turns shipment rows into role entities (importer-entity, exporter-entity)
so both roles can be aggregated the same way.

Grouping key is (name, country) within a role: the same name recorded with
two different countries yields two separate entities. Entities come out in
the order their (name, country) pair is first seen in the input.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from trade_engine.records import Role, ShipmentRecord

logger = logging.getLogger(__name__)


@dataclass
class RoleEntity:
    """A (name, country, role) company derived from shipment records."""
    name: str
    country: str
    role: Role
    website: Optional[str] = None
    total_shipments: int = 0
    total_weight_tonnes: float = 0.0

    @property
    def total_weight_kg(self) -> float:
        return self.total_weight_tonnes * 1000


def project_entities(records: Iterable[ShipmentRecord], role: Role) -> List[RoleEntity]:
    """
    Group records by (name, country) on one side of the shipment.

    Blank names are kept as their own group. Website is the first non-null
    value observed for the pair.
    """
    groups: Dict[Tuple[str, str], RoleEntity] = {}

    for record in records:
        party = role.party(record)
        key = (party.name, party.country)
        entity = groups.get(key)
        if entity is None:
            entity = RoleEntity(name=party.name, country=party.country, role=role)
            groups[key] = entity

        entity.total_shipments += 1
        entity.total_weight_tonnes += record.weight_tonnes
        if entity.website is None and party.website is not None:
            entity.website = party.website

    return list(groups.values())


def union_entities(records: Iterable[ShipmentRecord]) -> List[RoleEntity]:
    """
    All importer entities followed by all exporter entities.

    A company trading in both directions appears once per role, and a record
    whose importer and exporter share a name still contributes to both.
    """
    records = list(records)
    entities = project_entities(records, Role.IMPORTER)
    entities.extend(project_entities(records, Role.EXPORTER))
    logger.debug(f"Projected {len(entities)} role entities from {len(records)} records")
    return entities
