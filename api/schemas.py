"""
Pydantic Response Schemas
==========================
Type-safe response models for the Trade Companies API.

All weights are kilograms.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

from trade_engine.records import Role


# =====================================================================
# HEALTH SCHEMAS
# =====================================================================

class HealthStatus(BaseModel):
    """Health check response."""
    status: str = Field(description="Overall API status")
    store: str = Field(description="Shipment store status")
    version: str = Field(description="API version")
    timestamp: datetime = Field(default_factory=datetime.utcnow)


# =====================================================================
# COMPANY SCHEMAS
# =====================================================================

class CompanySummary(BaseModel):
    """One (name, country, role) row of the company listing."""
    name: str
    country: str
    role: Role
    total_shipments: int = 0
    total_weight_kg: float = 0.0


class CompanyListResponse(BaseModel):
    """Paginated list of companies."""
    items: List[CompanySummary]
    total: int
    page: int
    limit: int
    total_pages: int


class TradingPartner(BaseModel):
    """Counterpart company within a company detail."""
    name: str
    country: str
    shipments: int


class CommodityWeight(BaseModel):
    """Commodity within a company detail."""
    name: str
    weight_kg: float


class CompanyDetail(BaseModel):
    """Drill-down for one company in one role."""
    name: str
    country: str
    website: Optional[str] = None
    role: Role
    total_shipments: int = 0
    total_weight_kg: float = 0.0
    top_trading_partners: List[TradingPartner] = []
    top_commodities: List[CommodityWeight] = []


class CountryListResponse(BaseModel):
    """Distinct countries across importers and exporters."""
    items: List[str]


# =====================================================================
# ANALYTICS SCHEMAS
# =====================================================================

class GlobalStats(BaseModel):
    """Distinct importer and exporter counts."""
    total_importers: int
    total_exporters: int


class TopCommodity(BaseModel):
    """Commodity by total shipped weight."""
    commodity: str
    weight_kg: float


class TopCommoditiesResponse(BaseModel):
    items: List[TopCommodity]
    limit: int


class MonthlyWeight(BaseModel):
    """Total shipped weight for one calendar month."""
    month: str = Field(description="Month label, e.g. 'Jan 2024'")
    weight_kg: float


class MonthlySeriesResponse(BaseModel):
    items: List[MonthlyWeight]


# =====================================================================
# ERROR SCHEMAS
# =====================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int
