"""Discovery service orchestration layer.

Fetches a candidate snapshot from the document store, delegates to the pure
search functions and returns pages. Provides the high-level API used by a
request layer: search, tag listing, related documents and general listing.

No state survives between calls; every call works on its own snapshot.
"""

from collections.abc import Generator
from contextlib import contextmanager
import logging

from content_discovery.adapters.document_store import AbstractDocumentStore
from content_discovery.config import Settings
from content_discovery.domain.errors import ContentDiscoveryError, InvalidArgumentError
from content_discovery.domain.model import Document
from content_discovery.domain.search import QueryFilter, ResultPage, SortSpec, StoreFilter
from content_discovery.observability.context import operation_scope
from content_discovery.observability.metrics import (
    ERROR_COUNT,
    QUERY_COUNT,
    QUERY_LATENCY,
    RESULT_COUNT,
    track_latency,
)
from content_discovery.observability.tracing import create_span
from content_discovery.search import query_engine
from content_discovery.search.related import find_related
from content_discovery.search.tags import count_tags, extract_categories, extract_tags


logger = logging.getLogger(__name__)


class DiscoveryService:
    """High-level content discovery service.

    Coordinates the document store with fuzzy search, tag filtering and
    related-document ranking. Thresholds, weights and page sizes come from
    ``Settings``.
    """

    def __init__(
        self,
        store: AbstractDocumentStore,
        settings: Settings | None = None,
    ):
        """Initialize the service with its collaborators.

        Args:
            store: Document store providing candidate snapshots (required)
            settings: Discovery configuration, loaded from the environment when omitted
        """
        self.store = store
        self.settings = settings or Settings()

    @contextmanager
    def _operation(self, name: str, **attributes: str | int) -> Generator[None, None, None]:
        with (
            operation_scope(name),
            create_span(f"discovery.{name}", attributes=attributes),
            track_latency(QUERY_LATENCY, operation=name),
        ):
            try:
                yield
            except ContentDiscoveryError as e:
                QUERY_COUNT.labels(operation=name, status="error").inc()
                ERROR_COUNT.labels(operation=name, error_type=type(e).__name__).inc()
                logger.warning(f"{name} failed: {e}")
                raise
            QUERY_COUNT.labels(operation=name, status="ok").inc()

    def _resolve_limit(self, limit: int | None) -> int:
        if limit is None:
            return self.settings.default_page_size
        if limit < 1:
            raise InvalidArgumentError(f"Limit must be a positive integer, got {limit}")
        if limit > self.settings.max_page_size:
            raise InvalidArgumentError(f"Limit {limit} exceeds the maximum page size of {self.settings.max_page_size}")
        return limit

    def _candidates(self, store_filter: StoreFilter | None = None) -> list[Document]:
        return self.store.list_all(store_filter, limit=self.settings.candidate_limit)

    def _run_query(
        self,
        operation: str,
        query_filter: QueryFilter,
        sort: SortSpec | None,
        page: int,
        limit: int,
    ) -> ResultPage:
        query_engine.validate_pagination(page, limit)
        query_engine.resolve_sort(sort, query_filter.text is not None)
        store_filter = StoreFilter(
            tag=query_filter.tag,
            category=query_filter.category,
            featured=query_filter.featured,
            kind=query_filter.kind,
        )
        result = query_engine.query(
            self._candidates(store_filter),
            query_filter,
            sort,
            page,
            limit,
            weights=self.settings.search_weights(),
            threshold=self.settings.search_threshold,
        )
        RESULT_COUNT.labels(operation=operation).observe(result.total)
        return result

    def search(self, query: str, page: int = 1, limit: int | None = None) -> ResultPage:
        """Free-text fuzzy search, best matches first.

        Args:
            query: Search text; must be non-empty after trimming
            page: 1-based page number
            limit: Page size, defaults to ``settings.default_page_size``

        Returns:
            ResultPage ordered by relevance

        Raises:
            InvalidArgumentError: For a blank query or invalid pagination
            StoreUnavailableError: Propagated from the store
        """
        with self._operation("search", page=page):
            if not query or not query.strip():
                raise InvalidArgumentError("Search query must be non-empty")
            result = self._run_query("search", QueryFilter(text=query.strip()), None, page, self._resolve_limit(limit))
            logger.debug(f"Search for {query!r} matched {result.total} documents")
            return result

    def list_by_tag(self, tag: str, page: int = 1, limit: int | None = None) -> ResultPage:
        """Documents carrying exactly ``tag``, newest first.

        A tag nobody uses yields an empty page with ``total=0``.
        """
        with self._operation("list_by_tag", page=page):
            if not tag or not tag.strip():
                raise InvalidArgumentError("Tag filter must be a non-empty string")
            return self._run_query("list_by_tag", QueryFilter(tag=tag), None, page, self._resolve_limit(limit))

    def list_page(
        self,
        query_filter: QueryFilter | None = None,
        sort: SortSpec | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> ResultPage:
        """General listing: optional text search, exact filters, sort and pagination."""
        with self._operation("list_page", page=page):
            return self._run_query("list_page", query_filter or QueryFilter(), sort, page, self._resolve_limit(limit))

    def list_tags(self) -> list[str]:
        """Every distinct tag in the store, sorted ascending."""
        with self._operation("list_tags"):
            return extract_tags(self._candidates())

    def tag_counts(self) -> list[tuple[str, int]]:
        """``(tag, document count)`` pairs sorted by tag."""
        with self._operation("tag_counts"):
            return count_tags(self._candidates())

    def list_categories(self) -> list[str]:
        """Every distinct category in the store, sorted ascending."""
        with self._operation("list_categories"):
            return extract_categories(self._candidates())

    def get_by_slug(self, slug: str) -> Document:
        """Look up a document by slug.

        Raises:
            DocumentNotFoundError: If the slug is unknown
        """
        with self._operation("get_by_slug"):
            if not slug or not slug.strip():
                raise InvalidArgumentError("Slug must be a non-empty string")
            return self.store.get_by_slug(slug)

    def related_to(self, document_id: str, limit: int | None = None) -> list[Document]:
        """Documents related to ``document_id``, most related first.

        Raises:
            DocumentNotFoundError: If the target does not exist, so callers can
                tell "no related items" apart from "target missing"
            InvalidArgumentError: If ``limit`` is not positive
        """
        with self._operation("related_to"):
            resolved_limit = self.settings.default_related_limit if limit is None else limit
            if resolved_limit < 1:
                raise InvalidArgumentError(f"Related limit must be a positive integer, got {resolved_limit}")
            target = self.store.get_by_id(document_id)
            related = find_related(
                target,
                self._candidates(),
                resolved_limit,
                weights=self.settings.related_weights(),
                threshold=self.settings.related_threshold,
                tag_weight=self.settings.related_tag_weight,
                content_weight=self.settings.related_content_weight,
                include_zero_scores=self.settings.related_include_zero_scores,
            )
            logger.debug(f"Found {len(related)} documents related to {document_id!r}")
            return related
