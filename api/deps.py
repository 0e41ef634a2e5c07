"""
API Dependencies
=================
Query engine dependency injection for FastAPI endpoints.

The engine is built once per process from the YAML config named by
DB_CONFIG_PATH and shared across requests; it keeps no per-request state.
"""

import os
import logging
import threading
from typing import Generator, Optional

from trade_engine import TradeQueryEngine, build_store

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config/db_config.yml'

# Global engine instance (singleton)
_engine: Optional[TradeQueryEngine] = None
_engine_lock = threading.Lock()


def get_engine_instance() -> TradeQueryEngine:
    """
    Get or create the global TradeQueryEngine instance.
    Raises StoreUnavailableError when the configured store cannot be built.
    """
    global _engine

    if _engine is None:
        with _engine_lock:
            if _engine is None:
                config_path = os.environ.get('DB_CONFIG_PATH', DEFAULT_CONFIG_PATH)
                _engine = TradeQueryEngine(build_store(config_path))
                logger.info(f"TradeQueryEngine initialized with config: {config_path}")

    return _engine


def get_engine() -> Generator[TradeQueryEngine, None, None]:
    """
    FastAPI dependency that yields the shared query engine.

    Usage in endpoints:
        @router.get("/endpoint")
        def endpoint(engine: TradeQueryEngine = Depends(get_engine)):
            stats = engine.global_stats()
    """
    yield get_engine_instance()


def check_store_health(engine: TradeQueryEngine) -> bool:
    """
    Check record store reachability.
    Returns True if healthy, False otherwise.
    """
    try:
        return engine.ping()
    except Exception as e:
        logger.error(f"Store health check failed: {e}")
        return False


def shutdown_engine():
    """
    Cleanup function to release store connections on app shutdown.
    """
    global _engine
    if _engine is not None:
        _engine.close()
        _engine = None
        logger.info("TradeQueryEngine closed")
