"""
Trade Query Engine
===================
Entry point for the query operations the dashboard surface calls.

The engine holds nothing but its store. Each operation reads the store
once, computes its result from scratch and returns frozen dataclasses, so
operations can run concurrently from any number of request threads.
Weights in every result are kilograms.
"""

import logging
from typing import List, Optional

from trade_engine.analytics import rollups
from trade_engine.analytics.rollups import CommodityRollup, GlobalStats, MonthlyRollup
from trade_engine.entities.detail import DEFAULT_TOP_N, EntityDetail, resolve_entity_detail
from trade_engine.entities.projection import union_entities
from trade_engine.errors import StoreUnavailableError, TradeEngineError
from trade_engine.query.filters import plan_filters
from trade_engine.query.paging import Page, PageRequest, paginate
from trade_engine.records import Role, ShipmentRecord
from trade_engine.stores import ShipmentStore

logger = logging.getLogger(__name__)


class TradeQueryEngine:
    """Stateless query operations over a shipment record store."""

    def __init__(self, store: ShipmentStore):
        self.store = store

    def _records(self) -> List[ShipmentRecord]:
        try:
            return self.store.fetch_records()
        except TradeEngineError:
            raise
        except Exception as e:
            logger.error(f"Shipment store read failed: {e}", exc_info=True)
            raise StoreUnavailableError(f"Shipment store read failed: {e}") from e

    def list_entities(
        self,
        page=None,
        limit=None,
        search: Optional[str] = None,
        role=None,
        country: Optional[str] = None
    ) -> Page:
        """
        One page of companies, busiest first.

        page/limit are clamped rather than validated; search, role and
        country are optional and combine with AND.
        """
        request = PageRequest.from_params(page, limit)
        predicate = plan_filters(search=search, role=role, country=country)

        entities = [e for e in union_entities(self._records()) if predicate(e)]
        result = paginate(entities, request)

        logger.debug(
            f"list_entities page={result.page} limit={result.limit} filter={predicate!r}: "
            f"{len(result.rows)} of {result.total}"
        )
        return result

    def get_entity_detail(self, name: str, role, top_n: int = DEFAULT_TOP_N) -> EntityDetail:
        """Drill-down for one company; raises EntityNotFoundError when absent."""
        parsed_role = Role.parse(role)
        if parsed_role is None:
            raise ValueError(f"Invalid role: {role!r} (expected 'importer' or 'exporter')")
        return resolve_entity_detail(self._records(), name, parsed_role, top_n=top_n)

    def global_stats(self) -> GlobalStats:
        return rollups.global_stats(self._records())

    def top_commodities(self, limit: int = rollups.DEFAULT_TOP_COMMODITIES) -> List[CommodityRollup]:
        return rollups.top_commodities(self._records(), limit=limit)

    def monthly_series(self) -> List[MonthlyRollup]:
        return rollups.monthly_series(self._records())

    def list_distinct_countries(self) -> List[str]:
        return rollups.distinct_countries(self._records())

    def ping(self) -> bool:
        return self.store.ping()

    def close(self) -> None:
        self.store.close()
