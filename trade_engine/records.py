"""
Trade Engine - Shipment Records
================================
The immutable shipment row and the importer/exporter role it is viewed from.

Every store backend funnels its raw rows through ShipmentRecord.from_mapping
so the engine sees one consistent shape regardless of where the data lives.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional

# Column order used by the SQL and CSV backends
RECORD_COLUMNS = (
    'importer_name',
    'importer_country',
    'importer_website',
    'exporter_name',
    'exporter_country',
    'exporter_website',
    'commodity_name',
    'weight_tonnes',
    'shipment_date',
)

# Source column names accepted as aliases
COLUMN_ALIASES = {
    'weight_metric_tonnes': 'weight_tonnes',
}


def _is_missing(value) -> bool:
    """True for None, NaN and NaT (pandas uses both for empty cells)."""
    if value is None:
        return True
    try:
        # NaN and NaT are the only values not equal to themselves
        return bool(value != value)
    except (TypeError, ValueError):
        return False


def _text(value) -> str:
    if _is_missing(value):
        return ""
    return str(value)


def _optional_text(value) -> Optional[str]:
    if _is_missing(value):
        return None
    text = str(value)
    return text if text.strip() else None


def _safe_weight(value) -> float:
    """Convert value to float, handling None, NaN, and Inf."""
    if value is None:
        return 0.0
    try:
        f = float(value)
        if math.isnan(f) or math.isinf(f):
            return 0.0
        return f
    except (ValueError, TypeError):
        return 0.0


def _to_date(value) -> Optional[date]:
    """Coerce date-like values (date, datetime, Timestamp, ISO string)."""
    if _is_missing(value):
        return None
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    to_pydatetime = getattr(value, 'to_pydatetime', None)
    if to_pydatetime is not None:
        try:
            return to_pydatetime().date()
        except ValueError:
            return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


class Party(NamedTuple):
    """One side of a shipment: the importer or the exporter."""
    name: str
    country: str
    website: Optional[str]


@dataclass(frozen=True)
class ShipmentRecord:
    """A single shipment row. Weight is stored in metric tonnes."""
    importer_name: str
    importer_country: str
    exporter_name: str
    exporter_country: str
    commodity_name: str
    weight_tonnes: float
    shipment_date: Optional[date]
    importer_website: Optional[str] = None
    exporter_website: Optional[str] = None

    @property
    def weight_kg(self) -> float:
        return self.weight_tonnes * 1000

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> 'ShipmentRecord':
        """
        Build a record from a raw row (dict, SQL row mapping, DataFrame row).

        Blank parties are kept as empty strings, empty websites become None,
        unusable weights become 0.0 and unparseable dates become None.
        """
        data = dict(row)
        for alias, column in COLUMN_ALIASES.items():
            if column not in data and alias in data:
                data[column] = data[alias]

        return cls(
            importer_name=_text(data.get('importer_name')),
            importer_country=_text(data.get('importer_country')),
            importer_website=_optional_text(data.get('importer_website')),
            exporter_name=_text(data.get('exporter_name')),
            exporter_country=_text(data.get('exporter_country')),
            exporter_website=_optional_text(data.get('exporter_website')),
            commodity_name=_text(data.get('commodity_name')),
            weight_tonnes=_safe_weight(data.get('weight_tonnes')),
            shipment_date=_to_date(data.get('shipment_date')),
        )


class Role(str, Enum):
    """Direction in which a party participates in a shipment."""
    IMPORTER = "importer"
    EXPORTER = "exporter"

    @classmethod
    def parse(cls, value) -> Optional['Role']:
        """Return the role for an exact value, or None for anything else."""
        if isinstance(value, cls):
            return value
        for role in cls:
            if value == role.value:
                return role
        return None

    @property
    def counterpart(self) -> 'Role':
        return Role.EXPORTER if self is Role.IMPORTER else Role.IMPORTER

    def party(self, record: ShipmentRecord) -> Party:
        """The record's party on this side of the shipment."""
        if self is Role.IMPORTER:
            return Party(record.importer_name, record.importer_country, record.importer_website)
        return Party(record.exporter_name, record.exporter_country, record.exporter_website)
