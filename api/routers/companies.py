"""
Companies Router
=================
Company listing, country list and company detail endpoints.

Companies are (name, country, role) entities derived from the importer and
exporter sides of each shipment.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from api.deps import get_engine
from api.schemas import (
    CompanySummary, CompanyListResponse, CompanyDetail,
    TradingPartner, CommodityWeight, CountryListResponse
)
from trade_engine import TradeQueryEngine
from trade_engine.errors import EntityNotFoundError, StoreUnavailableError
from trade_engine.records import Role

router = APIRouter(prefix="/api/v1/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.get("", response_model=CompanyListResponse)
def list_companies(
    page: Optional[str] = Query(None, description="Page number (default 1, values below 1 become 1)"),
    limit: Optional[str] = Query(None, description="Page size (default 20, clamped to 1-100)"),
    search: Optional[str] = Query(None, description="Case-insensitive company name search"),
    role: Optional[str] = Query(None, description="importer or exporter; other values are ignored"),
    country: Optional[str] = Query(None, description="Exact country match"),
    engine: TradeQueryEngine = Depends(get_engine)
):
    """
    List companies with optional search and filters.

    Ordered by total shipments, busiest first. Out-of-range paging values
    are clamped instead of rejected.
    """
    try:
        result = engine.list_entities(
            page=page,
            limit=limit,
            search=search,
            role=role,
            country=country
        )

        items = [
            CompanySummary(
                name=row.name,
                country=row.country,
                role=row.role,
                total_shipments=row.total_shipments,
                total_weight_kg=row.total_weight_kg
            )
            for row in result.rows
        ]

        return CompanyListResponse(
            items=items,
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages
        )

    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Shipment store unavailable: {str(e)}")
    except Exception as e:
        logger.error(f"Error listing companies: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error listing companies: {str(e)}")


@router.get("/countries", response_model=CountryListResponse)
def list_countries(engine: TradeQueryEngine = Depends(get_engine)):
    """Sorted distinct countries seen on either side of a shipment."""
    try:
        return CountryListResponse(items=engine.list_distinct_countries())
    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Shipment store unavailable: {str(e)}")
    except Exception as e:
        logger.error(f"Error fetching countries: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching countries: {str(e)}")


@router.get("/{name:path}", response_model=CompanyDetail)
def get_company_detail(
    name: str,
    role: Role = Query(Role.IMPORTER, description="Role the company is looked up in"),
    engine: TradeQueryEngine = Depends(get_engine)
):
    """
    Get the detail view for one company in one role.

    Returns:
    - Totals (shipments, weight in kg), country and website
    - Top 3 trading partners by shipment count
    - Top 3 commodities by weight
    """
    try:
        detail = engine.get_entity_detail(name, role)

        return CompanyDetail(
            name=detail.name,
            country=detail.country,
            website=detail.website,
            role=detail.role,
            total_shipments=detail.total_shipments,
            total_weight_kg=detail.total_weight_kg,
            top_trading_partners=[
                TradingPartner(name=p.name, country=p.country, shipments=p.shipments)
                for p in detail.top_trading_partners
            ],
            top_commodities=[
                CommodityWeight(name=c.name, weight_kg=c.weight_kg)
                for c in detail.top_commodities
            ]
        )

    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Shipment store unavailable: {str(e)}")
    except Exception as e:
        logger.error(f"Error fetching company detail: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching company detail: {str(e)}")
