"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .catalog_handler import CatalogHandler
from .entitlement_handler import EntitlementHandler

__all__ = [
    "CatalogHandler",
    "EntitlementHandler",
]
