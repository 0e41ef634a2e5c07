"""
Health Router
==============
Health check endpoint.
"""

import logging
from fastapi import APIRouter
from datetime import datetime

from api.deps import get_engine_instance, check_store_health
from api.schemas import HealthStatus
from api import __version__
from trade_engine.errors import StoreUnavailableError

router = APIRouter(prefix="/api/v1", tags=["Health"])
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthStatus)
def health_check():
    """
    Health check endpoint.

    Returns API status and shipment store reachability. A store that cannot
    even be configured reports as degraded rather than failing the check.
    """
    try:
        store_healthy = check_store_health(get_engine_instance())
    except StoreUnavailableError as e:
        logger.error(f"Shipment store not configured: {e}")
        store_healthy = False

    return HealthStatus(
        status="ok" if store_healthy else "degraded",
        store="ok" if store_healthy else "error",
        version=__version__,
        timestamp=datetime.utcnow()
    )
