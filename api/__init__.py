"""
Trade Companies API
====================
Read-only HTTP layer over the trade entity query engine.
"""

__version__ = "1.0.0"
