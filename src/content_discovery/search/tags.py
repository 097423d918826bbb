"""Tag and category index helpers.

All helpers build their structures per call and keep the corpus's relative
order; tag and category matching is exact, case-sensitive string equality.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from content_discovery.domain.errors import InvalidArgumentError
from content_discovery.domain.model import Document


def _require_value(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise InvalidArgumentError(f"{label} filter must be a non-empty string")
    return value


def extract_tags(documents: Iterable[Document]) -> list[str]:
    """Return every distinct tag in ``documents``, sorted ascending."""
    tags: set[str] = set()
    for document in documents:
        tags.update(document.tags)
    return sorted(tags)


def count_tags(documents: Iterable[Document]) -> list[tuple[str, int]]:
    """Return ``(tag, number of documents carrying it)`` pairs ordered by tag."""
    counts: Counter[str] = Counter()
    for document in documents:
        counts.update(set(document.tags))
    return sorted(counts.items())


def filter_by_tag(documents: Sequence[Document], tag: str) -> list[Document]:
    """Return documents carrying exactly ``tag``.

    Raises:
        InvalidArgumentError: If ``tag`` is empty or blank; an empty tag never means "all".
    """
    tag = _require_value(tag, "Tag")
    return [document for document in documents if tag in document.tags]


def extract_categories(documents: Iterable[Document]) -> list[str]:
    """Return every distinct category in ``documents``, sorted ascending."""
    categories: set[str] = set()
    for document in documents:
        categories.update(document.categories)
    return sorted(categories)


def filter_by_category(documents: Sequence[Document], category: str) -> list[Document]:
    """Return documents listing exactly ``category``."""
    category = _require_value(category, "Category")
    return [document for document in documents if category in document.categories]


def filter_by_topic(documents: Sequence[Document], topic: str) -> list[Document]:
    """Return documents with a category containing ``topic`` (case-insensitive)."""
    needle = _require_value(topic, "Topic").lower()
    return [
        document
        for document in documents
        if any(needle in category.lower() for category in document.categories)
    ]
