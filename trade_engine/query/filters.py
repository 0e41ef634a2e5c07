"""
Filter/Search Planner
======================
Turns optional listing criteria into a predicate over role entities.

Criteria:
- search: case-insensitive substring of the company name
- role: exactly "importer" or "exporter"; any other value means no filter
- country: exact, case-sensitive match

Predicates are plain values evaluated in memory. Caller input is only ever
compared as data; it is never spliced into query text.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from trade_engine.entities.projection import RoleEntity
from trade_engine.records import Role


class Predicate:
    """Base predicate: matches every entity."""

    def matches(self, entity: RoleEntity) -> bool:
        return True

    def __call__(self, entity: RoleEntity) -> bool:
        return self.matches(entity)


@dataclass(frozen=True)
class MatchAll(Predicate):
    pass


@dataclass(frozen=True)
class NameContains(Predicate):
    needle: str

    def matches(self, entity: RoleEntity) -> bool:
        return self.needle.casefold() in entity.name.casefold()


@dataclass(frozen=True)
class RoleEquals(Predicate):
    role: Role

    def matches(self, entity: RoleEntity) -> bool:
        return entity.role is self.role


@dataclass(frozen=True)
class CountryEquals(Predicate):
    country: str

    def matches(self, entity: RoleEntity) -> bool:
        return entity.country == self.country


@dataclass(frozen=True)
class AllOf(Predicate):
    predicates: Tuple[Predicate, ...]

    def matches(self, entity: RoleEntity) -> bool:
        return all(predicate.matches(entity) for predicate in self.predicates)


def plan_filters(
    search: Optional[str] = None,
    role=None,
    country: Optional[str] = None
) -> Predicate:
    """
    Build the AND of the supplied criteria.

    Blank search and country values are treated as absent, and unknown
    role values are ignored rather than rejected.
    """
    predicates = []

    if search is not None and search.strip():
        predicates.append(NameContains(search.strip()))

    parsed_role = Role.parse(role)
    if parsed_role is not None:
        predicates.append(RoleEquals(parsed_role))

    if country:
        predicates.append(CountryEquals(country))

    if not predicates:
        return MatchAll()
    if len(predicates) == 1:
        return predicates[0]
    return AllOf(tuple(predicates))
