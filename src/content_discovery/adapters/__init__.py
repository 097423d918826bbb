"""Adapters layer - document store implementations.

Following the Repository Pattern: abstracts where documents come from so the
discovery core only sees immutable snapshots.
"""

from .document_store import (
    AbstractDocumentStore,
    InMemoryDocumentStore,
)
from .filesystem_store import FileSystemDocumentStore


__all__ = [
    "AbstractDocumentStore",
    "FileSystemDocumentStore",
    "InMemoryDocumentStore",
]
