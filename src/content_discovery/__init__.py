"""Content discovery for blog posts and research papers.

Fuzzy free-text search, tag filtering and related-document ranking over a
paginated, sortable document store.
"""

from content_discovery.adapters import AbstractDocumentStore, FileSystemDocumentStore, InMemoryDocumentStore
from content_discovery.config import Settings
from content_discovery.domain import (
    ContentDiscoveryError,
    Document,
    DocumentNotFoundError,
    FieldWeights,
    InvalidArgumentError,
    QueryFilter,
    ResultPage,
    SortSpec,
    StoreUnavailableError,
)
from content_discovery.service_layer import DiscoveryService


__all__ = [
    "AbstractDocumentStore",
    "ContentDiscoveryError",
    "DiscoveryService",
    "Document",
    "DocumentNotFoundError",
    "FieldWeights",
    "FileSystemDocumentStore",
    "InMemoryDocumentStore",
    "InvalidArgumentError",
    "QueryFilter",
    "ResultPage",
    "Settings",
    "SortSpec",
    "StoreUnavailableError",
]
