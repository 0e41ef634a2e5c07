"""
Trade Companies API
====================
Read-only HTTP API over the trade entity query engine.

This API provides:
- Health check
- Company listing (search, role and country filters, pagination)
- Company detail (top trading partners, top commodities)
- Analytics rollups (party counts, top commodities, monthly weight)

All endpoints are READ-ONLY. Weights are reported in kilograms.

Usage:
    uvicorn api.main:app --host 0.0.0.0 --port 8000 --reload

Or via the entrypoint script:
    python scripts/run_api.py

Environment Variables:
    DB_CONFIG_PATH: Path to YAML config (default: config/db_config.yml)
    LOG_LEVEL: Logging level (default: INFO)
    LOG_FILE: Optional rotating log file
"""

import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.deps import shutdown_engine
from api.schemas import ErrorResponse
from api.routers import (
    health_router,
    companies_router,
    analytics_router
)
from trade_engine.errors import StoreUnavailableError
from trade_engine.logging_config import setup_logging

# Configure logging
setup_logging(
    log_file=os.environ.get('LOG_FILE'),
    log_level=os.environ.get('LOG_LEVEL', 'INFO')
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    """
    # Startup
    logger.info("Trade Companies API starting up...")
    yield
    # Shutdown
    logger.info("Trade Companies API shutting down...")
    shutdown_engine()


# Create FastAPI app
app = FastAPI(
    title="Trade Companies API",
    description="""
## Trade Companies API

A read-only API over a flat table of trade shipment records:

- **Companies**: importers and exporters derived from shipments, with search, filters and pagination
- **Company detail**: totals, top trading partners and top commodities
- **Analytics**: distinct party counts, top commodities, monthly shipped weight

### Key Features

- ✅ Read-only (no inserts/updates/deletes)
- ✅ No query text built from request values
- ✅ Deterministic ordering and pagination
- ✅ Weights in kilograms
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware (configure origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["GET"],  # Read-only API
    allow_headers=["*"],
)


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    logger.error(f"Shipment store unavailable: {exc}")
    return JSONResponse(
        status_code=503,
        content=ErrorResponse(
            error="Shipment store unavailable",
            detail=str(exc),
            status_code=503
        ).model_dump()
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            detail=str(exc),
            status_code=500
        ).model_dump()
    )


# Include routers
app.include_router(health_router)
app.include_router(companies_router)
app.include_router(analytics_router)


# Root endpoint
@app.get("/", tags=["Root"])
def root():
    """
    API root - returns welcome message and links.
    """
    return {
        "message": "Welcome to the Trade Companies API",
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc",
        "endpoints": {
            "health": "/api/v1/health",
            "companies": "/api/v1/companies",
            "countries": "/api/v1/companies/countries",
            "company_detail": "/api/v1/companies/{name}?role=importer",
            "stats": "/api/v1/analytics/stats",
            "commodities": "/api/v1/analytics/commodities",
            "monthly": "/api/v1/analytics/monthly"
        }
    }


@app.get("/api/v1", tags=["Root"])
def api_v1_root():
    """
    API v1 root - returns available endpoints.
    """
    return {
        "api_version": "v1",
        "endpoints": [
            {"path": "/api/v1/health", "method": "GET", "description": "Health check"},
            {"path": "/api/v1/companies", "method": "GET", "description": "List companies with search and filters"},
            {"path": "/api/v1/companies/countries", "method": "GET", "description": "Distinct countries"},
            {"path": "/api/v1/companies/{name}", "method": "GET", "description": "Company detail"},
            {"path": "/api/v1/analytics/stats", "method": "GET", "description": "Distinct importer/exporter counts"},
            {"path": "/api/v1/analytics/commodities", "method": "GET", "description": "Top commodities by weight"},
            {"path": "/api/v1/analytics/monthly", "method": "GET", "description": "Shipped weight per month"}
        ]
    }
