"""
API Routers Package
"""
from .health import router as health_router
from .companies import router as companies_router
from .analytics import router as analytics_router

__all__ = [
    'health_router',
    'companies_router',
    'analytics_router'
]
