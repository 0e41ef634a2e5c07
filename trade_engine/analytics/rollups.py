"""
Aggregator - Global Rollups
============================
Dataset-wide aggregates over the raw shipment records:
- distinct importer / exporter counts
- top commodities by shipped weight
- shipped weight per calendar month
- distinct countries across both roles

All weights are returned in kilograms (tonnes x 1000).
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from trade_engine.records import ShipmentRecord

logger = logging.getLogger(__name__)

DEFAULT_TOP_COMMODITIES = 5


@dataclass(frozen=True)
class GlobalStats:
    """Distinct party counts over the full record set."""
    total_importers: int
    total_exporters: int


@dataclass(frozen=True)
class CommodityRollup:
    """Total shipped weight for one commodity."""
    commodity: str
    weight_kg: float


@dataclass(frozen=True)
class MonthlyRollup:
    """Total shipped weight for one calendar month."""
    month_label: str
    weight_kg: float


_MONTH_ABBR = (
    '', 'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)


def month_label(year: int, month: int) -> str:
    """Short label like 'Jan 2024' (English regardless of locale)."""
    return f"{_MONTH_ABBR[month]} {year}"


def global_stats(records: Iterable[ShipmentRecord]) -> GlobalStats:
    """
    Count distinct non-blank importer and exporter names.

    Each role is counted on its own, so a name that both imports and
    exports counts once in each total.
    """
    importers = set()
    exporters = set()
    for record in records:
        if record.importer_name.strip():
            importers.add(record.importer_name)
        if record.exporter_name.strip():
            exporters.add(record.exporter_name)

    return GlobalStats(total_importers=len(importers), total_exporters=len(exporters))


def top_commodities(
    records: Iterable[ShipmentRecord],
    limit: int = DEFAULT_TOP_COMMODITIES
) -> List[CommodityRollup]:
    """Commodities by summed weight (kg), heaviest first, ties in first-seen order."""
    weights: Dict[str, float] = {}
    for record in records:
        weights[record.commodity_name] = weights.get(record.commodity_name, 0.0) + record.weight_kg

    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [
        CommodityRollup(commodity=commodity, weight_kg=weight)
        for commodity, weight in ranked[:max(limit, 0)]
    ]


def monthly_series(records: Iterable[ShipmentRecord]) -> List[MonthlyRollup]:
    """
    Shipped weight (kg) per calendar month.

    Months are ordered by the earliest shipment date seen in each month, so
    'Dec 2023' precedes 'Jan 2024'. Undated records are left out.
    """
    # (year, month) -> [weight_kg, earliest date]
    months: Dict[Tuple[int, int], list] = {}
    skipped = 0
    for record in records:
        shipped = record.shipment_date
        if shipped is None:
            skipped += 1
            continue
        key = (shipped.year, shipped.month)
        bucket = months.get(key)
        if bucket is None:
            months[key] = [record.weight_kg, shipped]
        else:
            bucket[0] += record.weight_kg
            if shipped < bucket[1]:
                bucket[1] = shipped

    if skipped:
        logger.debug(f"Monthly series skipped {skipped} undated records")

    ordered = sorted(months.items(), key=lambda item: item[1][1])
    return [
        MonthlyRollup(month_label=month_label(year, month), weight_kg=weight)
        for (year, month), (weight, _earliest) in ordered
    ]


def distinct_countries(records: Iterable[ShipmentRecord]) -> List[str]:
    """Sorted unique non-blank countries seen on either side of a shipment."""
    countries = set()
    for record in records:
        for country in (record.importer_country, record.exporter_country):
            if country.strip():
                countries.add(country)
    return sorted(countries)
