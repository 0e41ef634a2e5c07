"""
Shipment Record Stores
=======================
Read-only sources of ShipmentRecord rows. The engine performs exactly one
fetch_records() call per query operation.

Backends:
- PostgresShipmentStore: a table read through SQLAlchemy Core
- CsvShipmentStore: a CSV export read with pandas
- InMemoryShipmentStore: a fixed list (tests, embedding callers)

Any failure to read is raised as StoreUnavailableError.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

import pandas as pd
import yaml
import sqlalchemy as sa
from sqlalchemy.exc import SQLAlchemyError

from trade_engine.db_utils import DatabaseConfig, DatabaseManager
from trade_engine.errors import StoreUnavailableError
from trade_engine.records import COLUMN_ALIASES, RECORD_COLUMNS, ShipmentRecord

logger = logging.getLogger(__name__)

DEFAULT_TABLE = 'shipments'
DEFAULT_WEIGHT_COLUMN = 'weight_metric_tonnes'

# Columns a source must provide (websites are optional)
REQUIRED_COLUMNS = tuple(c for c in RECORD_COLUMNS if not c.endswith('_website'))


class ShipmentStore:
    """Base class for record stores."""

    name = "base"

    def fetch_records(self) -> List[ShipmentRecord]:
        raise NotImplementedError

    def ping(self) -> bool:
        """Cheap reachability check used by the health endpoint."""
        try:
            self.fetch_records()
            return True
        except Exception as e:
            logger.error(f"Store health check failed: {e}")
            return False

    def close(self) -> None:
        pass


class InMemoryShipmentStore(ShipmentStore):
    """Fixed record list; rows may be ShipmentRecord objects or mappings."""

    name = "memory"

    def __init__(self, records: Iterable[Union[ShipmentRecord, Mapping[str, Any]]] = ()):
        self._records = tuple(
            record if isinstance(record, ShipmentRecord) else ShipmentRecord.from_mapping(record)
            for record in records
        )

    def fetch_records(self) -> List[ShipmentRecord]:
        return list(self._records)

    def ping(self) -> bool:
        return True


class CsvShipmentStore(ShipmentStore):
    """
    Shipments exported as CSV, one row per shipment.

    Every cell is read as text so party names are kept verbatim
    (no 'NA' -> NaN conversion); weights and dates are parsed per row.
    """

    name = "csv"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def fetch_records(self) -> List[ShipmentRecord]:
        try:
            frame = pd.read_csv(self.path, dtype=str, keep_default_na=False)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise StoreUnavailableError(f"Cannot read shipments CSV {self.path}: {e}") from e

        frame = frame.rename(columns={
            alias: column for alias, column in COLUMN_ALIASES.items()
            if column not in frame.columns
        })
        missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
        if missing:
            raise StoreUnavailableError(
                f"Shipments CSV {self.path} is missing columns: {', '.join(missing)}"
            )

        records = [ShipmentRecord.from_mapping(row) for row in frame.to_dict('records')]
        logger.debug(f"Loaded {len(records)} shipment records from {self.path}")
        return records

    def ping(self) -> bool:
        return self.path.is_file()


class PostgresShipmentStore(ShipmentStore):
    """
    Shipments table in PostgreSQL.

    The SELECT is built with SQLAlchemy Core so the table name is emitted as
    a quoted identifier; the statement has no caller-supplied values at all.
    Rows are read in physical (ctid) order, which is stable for the
    immutable table and makes first-seen tie-breaks reproducible.
    """

    name = "postgres"

    def __init__(
        self,
        db: DatabaseManager,
        table: str = DEFAULT_TABLE,
        schema: Optional[str] = None,
        weight_column: str = DEFAULT_WEIGHT_COLUMN
    ):
        self.db = db
        self.table = table
        self.schema = schema
        self.weight_column = weight_column

    def build_select(self) -> sa.sql.Select:
        columns = []
        for column in RECORD_COLUMNS:
            if column == 'weight_tonnes':
                columns.append(sa.column(self.weight_column).label('weight_tonnes'))
            else:
                columns.append(sa.column(column))

        return (
            sa.select(*columns)
            .select_from(sa.table(self.table, schema=self.schema))
            .order_by(sa.literal_column('ctid'))
        )

    def fetch_records(self) -> List[ShipmentRecord]:
        query = self.build_select()
        try:
            with self.db.get_engine().connect() as conn:
                rows = conn.execute(query).mappings().all()
        except (SQLAlchemyError, KeyError) as e:
            raise StoreUnavailableError(f"Error reading table {self.table}: {e}") from e

        records = [ShipmentRecord.from_mapping(row) for row in rows]
        logger.debug(f"Fetched {len(records)} shipment records from {self.table}")
        return records

    def ping(self) -> bool:
        try:
            result = self.db.execute_query("SELECT 1")
            return result is not None and len(result) > 0
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def close(self) -> None:
        self.db.close()


def build_store(config_path: Union[str, Path]) -> ShipmentStore:
    """
    Create the store described by the `store` section of the YAML config.

    store.backend: postgres (default) | csv
    store.table / store.schema / store.weight_column: postgres backend
    store.path: csv backend
    """
    try:
        config = DatabaseConfig(str(config_path))
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise StoreUnavailableError(f"Cannot load config {config_path}: {e}") from e

    store_config = config.section('store')
    backend = str(store_config.get('backend', 'postgres')).lower()

    if backend == 'csv':
        path = store_config.get('path')
        if not path:
            raise StoreUnavailableError("store.path is required for the csv backend")
        logger.info(f"Using CSV shipment store: {path}")
        return CsvShipmentStore(path)

    if backend == 'postgres':
        table = store_config.get('table', DEFAULT_TABLE)
        logger.info(f"Using PostgreSQL shipment store: table={table}")
        return PostgresShipmentStore(
            DatabaseManager(str(config_path)),
            table=table,
            schema=store_config.get('schema'),
            weight_column=store_config.get('weight_column', DEFAULT_WEIGHT_COLUMN),
        )

    raise StoreUnavailableError(f"Unknown store backend: {backend}")
