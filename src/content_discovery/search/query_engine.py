"""Paginated query engine.

Pipeline, in order:

1. text search narrows the corpus to documents with a fuzzy match,
2. tag, category, topic, featured, kind and date filters intersect exactly,
3. a stable sort orders the survivors,
4. ``skip = (page - 1) * limit`` selects the page.

Every structure built here lives only for the duration of one call.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
from typing import Any

from content_discovery.domain.errors import InvalidArgumentError
from content_discovery.domain.model import Document, FieldWeights, as_utc
from content_discovery.domain.search import (
    DEFAULT_SORT_DIRECTIONS,
    QueryFilter,
    ResultPage,
    SortDirection,
    SortSpec,
)
from content_discovery.search.fuzzy import DEFAULT_SEARCH_THRESHOLD, rank_matches
from content_discovery.search.tags import filter_by_category, filter_by_tag, filter_by_topic


logger = logging.getLogger(__name__)

_SORT_KEYS: dict[str, Callable[[Document], Any]] = {
    "published_at": lambda document: document.published_at,
    "updated_at": lambda document: document.updated_at,
    "title": lambda document: document.title.casefold(),
}


def validate_pagination(page: int, limit: int) -> None:
    if page < 1:
        raise InvalidArgumentError(f"Page must be a positive integer, got {page}")
    if limit < 1:
        raise InvalidArgumentError(f"Limit must be a positive integer, got {limit}")


def resolve_sort(sort: SortSpec | None, has_text: bool) -> tuple[str, SortDirection]:
    """Return the effective ``(field, direction)`` for a request.

    Without an explicit sort, text queries order by relevance and everything
    else by publication date. A missing direction comes from
    ``DEFAULT_SORT_DIRECTIONS``.
    """
    if sort is None:
        field = "relevance" if has_text else "published_at"
        return field, DEFAULT_SORT_DIRECTIONS[field]

    if sort.field not in DEFAULT_SORT_DIRECTIONS:
        allowed = ", ".join(sorted(DEFAULT_SORT_DIRECTIONS))
        raise InvalidArgumentError(f"Unknown sort field {sort.field!r}. Available: {allowed}")
    if sort.field == "relevance" and not has_text:
        raise InvalidArgumentError("Sorting by relevance requires a text query")
    return sort.field, sort.direction or DEFAULT_SORT_DIRECTIONS[sort.field]


def paginate(items: Sequence[Document], page: int, limit: int) -> ResultPage:
    """Cut one page out of an already filtered and sorted sequence."""
    validate_pagination(page, limit)
    skip = (page - 1) * limit
    return ResultPage(items=list(items[skip : skip + limit]), total=len(items), page=page, limit=limit)


def apply_filters(documents: Sequence[Document], query_filter: QueryFilter) -> list[Document]:
    """Apply every non-text filter as an exact intersection, keeping relative order."""
    selected = list(documents)
    if query_filter.tag is not None:
        selected = filter_by_tag(selected, query_filter.tag)
    if query_filter.category is not None:
        selected = filter_by_category(selected, query_filter.category)
    if query_filter.topic is not None:
        selected = filter_by_topic(selected, query_filter.topic)
    if query_filter.featured is not None:
        selected = [document for document in selected if document.featured == query_filter.featured]
    if query_filter.kind is not None:
        selected = [document for document in selected if document.kind == query_filter.kind]
    if query_filter.published_after is not None:
        start = as_utc(query_filter.published_after)
        selected = [document for document in selected if document.published_at >= start]
    if query_filter.published_before is not None:
        end = as_utc(query_filter.published_before)
        selected = [document for document in selected if document.published_at <= end]
    return selected


def query(
    documents: Sequence[Document],
    query_filter: QueryFilter | None = None,
    sort: SortSpec | None = None,
    page: int = 1,
    limit: int = 10,
    *,
    weights: FieldWeights | None = None,
    threshold: float = DEFAULT_SEARCH_THRESHOLD,
) -> ResultPage:
    """Filter, search, sort and paginate ``documents``.

    Raises:
        InvalidArgumentError: For a bad page or limit, an unknown sort field,
            relevance sorting without text, or an empty text/tag/category filter.
    """
    query_filter = query_filter or QueryFilter()
    validate_pagination(page, limit)
    has_text = query_filter.text is not None
    sort_field, direction = resolve_sort(sort, has_text)

    candidates: list[Document] = list(documents)
    relevance: dict[str, float] = {}
    if has_text:
        matches = rank_matches(
            query_filter.text,
            candidates,
            weights or FieldWeights.search_defaults(),
            threshold,
        )
        relevance = {document.id: match.score for document, match in matches}
        # Back to corpus order so relevance ties stay stable
        candidates = [document for document in candidates if document.id in relevance]

    candidates = apply_filters(candidates, query_filter)

    descending = direction == "desc"
    if sort_field == "relevance":
        candidates.sort(key=lambda document: relevance[document.id], reverse=descending)
    else:
        candidates.sort(key=_SORT_KEYS[sort_field], reverse=descending)

    logger.debug(
        "Query matched %d documents (text=%s, sort=%s %s, page=%d, limit=%d)",
        len(candidates),
        has_text,
        sort_field,
        direction,
        page,
        limit,
    )
    return paginate(candidates, page, limit)
