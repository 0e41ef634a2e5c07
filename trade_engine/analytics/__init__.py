"""
Trade Engine - Analytics Module
================================
Dataset-wide rollups computed from the shipment records.
"""

from .rollups import (
    CommodityRollup,
    GlobalStats,
    MonthlyRollup,
    distinct_countries,
    global_stats,
    month_label,
    monthly_series,
    top_commodities,
)

__all__ = [
    'CommodityRollup',
    'GlobalStats',
    'MonthlyRollup',
    'distinct_countries',
    'global_stats',
    'month_label',
    'monthly_series',
    'top_commodities',
]
