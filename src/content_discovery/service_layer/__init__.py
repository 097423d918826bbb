"""Service layer - use case orchestration over a document store."""

from .discovery_service import DiscoveryService


__all__ = [
    "DiscoveryService",
]
