"""
Database utilities for the Trade Entity Query Engine
Provides configuration loading, connection pooling and read-only query helpers
"""

import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List
from contextlib import contextmanager
from urllib.parse import quote_plus
from psycopg2 import pool
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class DatabaseConfig:
    """Configuration loader for the YAML settings file"""

    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        self.settings = self._load_settings()
        self.config = self.settings.get('database') or {}

    def _load_settings(self) -> Dict[str, Any]:
        """Load the whole YAML settings file"""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            settings = yaml.safe_load(f)

        return settings or {}

    def section(self, name: str) -> Dict[str, Any]:
        """Return a top-level section (database, store) or an empty dict"""
        return self.settings.get(name) or {}

    def get_connection_string(self) -> str:
        """Build PostgreSQL connection string"""
        user = quote_plus(str(self.config['user']))
        password = quote_plus(str(self.config['password']))
        host = self.config['host']
        port = self.config['port']
        database = self.config['database']
        return f"postgresql://{user}:{password}@{host}:{port}/{database}"

    def get_psycopg2_params(self) -> Dict[str, Any]:
        """Get parameters for psycopg2 connection"""
        return {
            'host': self.config['host'],
            'port': self.config['port'],
            'database': self.config['database'],
            'user': self.config['user'],
            'password': self.config['password']
        }


class DatabaseManager:
    """
    Manages read-only database access
    SQLAlchemy engine for the shipment store, psycopg2 pool for raw queries
    """

    def __init__(self, config_path: str):
        self.config = DatabaseConfig(config_path)
        self._engine: Optional[Engine] = None
        self._connection_pool: Optional[pool.ThreadedConnectionPool] = None

    def get_engine(self) -> Engine:
        """Get SQLAlchemy engine (lazy initialization)"""
        if self._engine is None:
            connection_string = self.config.get_connection_string()
            self._engine = create_engine(
                connection_string,
                pool_pre_ping=True,
                pool_size=5,
                max_overflow=10,
                echo=False
            )
            logger.info("SQLAlchemy engine initialized")
        return self._engine

    def get_connection_pool(self) -> pool.ThreadedConnectionPool:
        """Get psycopg2 connection pool (shared across request threads)"""
        if self._connection_pool is None:
            params = self.config.get_psycopg2_params()
            self._connection_pool = pool.ThreadedConnectionPool(
                minconn=1,
                maxconn=10,
                **params
            )
            logger.info("psycopg2 connection pool initialized")
        return self._connection_pool

    @contextmanager
    def get_connection(self):
        """Context manager for psycopg2 connection from pool"""
        conn_pool = self.get_connection_pool()
        conn = conn_pool.getconn()
        try:
            yield conn
        except Exception as e:
            logger.error(f"Database error: {e}")
            raise
        finally:
            # Read-only usage: always end the transaction before returning the connection
            conn.rollback()
            conn_pool.putconn(conn)

    @contextmanager
    def get_cursor(self, cursor_factory=None):
        """Context manager for database cursor"""
        with self.get_connection() as conn:
            cursor = conn.cursor(cursor_factory=cursor_factory)
            try:
                yield cursor
            finally:
                cursor.close()

    def execute_query(self, query: str, params: Optional[tuple] = None) -> List[tuple]:
        """Execute SELECT query and return results"""
        with self.get_cursor() as cursor:
            cursor.execute(query, params)
            return cursor.fetchall()

    def close(self):
        """Close all connections"""
        if self._connection_pool:
            self._connection_pool.closeall()
            self._connection_pool = None
            logger.info("Connection pool closed")
        if self._engine:
            self._engine.dispose()
            self._engine = None
            logger.info("SQLAlchemy engine disposed")
