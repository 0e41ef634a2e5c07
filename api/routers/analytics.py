"""
Analytics Router
=================
Dataset-wide rollups: party counts, top commodities, monthly weight.

These endpoints ignore the company listing filters entirely.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_engine
from api.schemas import (
    GlobalStats, TopCommodity, TopCommoditiesResponse,
    MonthlyWeight, MonthlySeriesResponse
)
from trade_engine import TradeQueryEngine
from trade_engine.errors import StoreUnavailableError

router = APIRouter(prefix="/api/v1/analytics", tags=["Analytics"])
logger = logging.getLogger(__name__)

# Constants
DEFAULT_COMMODITY_LIMIT = 5
MAX_COMMODITY_LIMIT = 100


@router.get("/stats", response_model=GlobalStats)
def get_global_stats(engine: TradeQueryEngine = Depends(get_engine)):
    """Count of distinct importer and exporter names."""
    try:
        stats = engine.global_stats()
        return GlobalStats(
            total_importers=stats.total_importers,
            total_exporters=stats.total_exporters
        )
    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Shipment store unavailable: {str(e)}")
    except Exception as e:
        logger.error(f"Error fetching stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching stats: {str(e)}")


@router.get("/commodities", response_model=TopCommoditiesResponse)
def get_top_commodities(
    limit: int = Query(DEFAULT_COMMODITY_LIMIT, ge=1, le=MAX_COMMODITY_LIMIT, description="Number of commodities"),
    engine: TradeQueryEngine = Depends(get_engine)
):
    """Commodities by total shipped weight (kg), heaviest first."""
    try:
        commodities = engine.top_commodities(limit=limit)
        return TopCommoditiesResponse(
            items=[TopCommodity(commodity=c.commodity, weight_kg=c.weight_kg) for c in commodities],
            limit=limit
        )
    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Shipment store unavailable: {str(e)}")
    except Exception as e:
        logger.error(f"Error fetching commodities: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching commodities: {str(e)}")


@router.get("/monthly", response_model=MonthlySeriesResponse)
def get_monthly_series(engine: TradeQueryEngine = Depends(get_engine)):
    """
    Total shipped weight (kg) per calendar month.

    Months are in chronological order, e.g. 'Dec 2023' before 'Jan 2024'.
    """
    try:
        series = engine.monthly_series()
        return MonthlySeriesResponse(
            items=[MonthlyWeight(month=m.month_label, weight_kg=m.weight_kg) for m in series]
        )
    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Shipment store unavailable: {str(e)}")
    except Exception as e:
        logger.error(f"Error fetching monthly data: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching monthly data: {str(e)}")
