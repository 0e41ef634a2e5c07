"""
Trade Engine - Error Types
===========================
Exceptions raised by the query engine and the record stores.
"""


class TradeEngineError(Exception):
    """Base class for all query engine errors."""


class EntityNotFoundError(TradeEngineError):
    """No shipment records exist for the requested (name, role) identity."""

    def __init__(self, name: str, role):
        self.name = name
        self.role = role
        role_value = getattr(role, 'value', role)
        super().__init__(f"Company not found: {name!r} as {role_value}")


class StoreUnavailableError(TradeEngineError):
    """The shipment record store could not be read."""
