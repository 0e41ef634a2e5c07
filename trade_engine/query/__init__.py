"""
Trade Engine - Query Module
============================
Listing criteria and pagination.
"""

from .filters import (
    AllOf,
    CountryEquals,
    MatchAll,
    NameContains,
    Predicate,
    RoleEquals,
    plan_filters,
)

from .paging import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    Page,
    PageRequest,
    paginate,
    total_pages,
)

__all__ = [
    'AllOf',
    'CountryEquals',
    'MatchAll',
    'NameContains',
    'Predicate',
    'RoleEquals',
    'plan_filters',
    'DEFAULT_LIMIT',
    'DEFAULT_PAGE',
    'MAX_LIMIT',
    'Page',
    'PageRequest',
    'paginate',
    'total_pages',
]
