"""Document store abstractions.

Following the Repository Pattern: the discovery core only reads documents
through this narrow contract and never owns persistence. Stores hand out
immutable snapshots in a stable corpus order.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
import logging

from content_discovery.domain.errors import DocumentNotFoundError
from content_discovery.domain.model import Document
from content_discovery.domain.search import StoreFilter


logger = logging.getLogger(__name__)


class AbstractDocumentStore(ABC):
    """Read-only contract the discovery service requires from a content store.

    Implementations raise ``StoreUnavailableError`` when the backing store
    cannot be read; callers propagate it unchanged.
    """

    @abstractmethod
    def list_all(self, store_filter: StoreFilter | None = None, limit: int | None = None) -> list[Document]:
        """Return the (optionally filtered) corpus in stable order.

        Args:
            store_filter: Exact-match filters applied before returning
            limit: Maximum number of documents to return, None for all

        Returns:
            Documents in corpus order
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, document_id: str) -> Document:
        """Get a document by identifier.

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        raise NotImplementedError

    def get_by_slug(self, slug: str) -> Document:
        """Get a document by its human-readable slug.

        The default scans ``list_all``; backends with a slug index override it.

        Raises:
            DocumentNotFoundError: If no document has this slug
        """
        for document in self.list_all():
            if document.slug == slug:
                return document
        raise DocumentNotFoundError(slug, by="slug")


def select_documents(documents: Iterable[Document], store_filter: StoreFilter | None, limit: int | None) -> list[Document]:
    selected = [document for document in documents if store_filter is None or store_filter.matches(document)]
    if limit is not None:
        selected = selected[:limit]
    return selected


class InMemoryDocumentStore(AbstractDocumentStore):
    """In-memory store keyed by document id, ordered by insertion."""

    def __init__(self, documents: Iterable[Document] = ()):
        self._documents: dict[str, Document] = {}
        for document in documents:
            self.add(document)

    def add(self, document: Document) -> None:
        """Add or replace a document (replacement keeps the original position)."""
        self._documents[document.id] = document

    def list_all(self, store_filter: StoreFilter | None = None, limit: int | None = None) -> list[Document]:
        return select_documents(self._documents.values(), store_filter, limit)

    def get_by_id(self, document_id: str) -> Document:
        try:
            return self._documents[document_id]
        except KeyError:
            raise DocumentNotFoundError(document_id) from None

    def __len__(self) -> int:
        return len(self._documents)
