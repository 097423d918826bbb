"""Domain models for discovery queries.

Value objects are immutable (frozen) so a computed page or match cannot be
changed after the engine hands it back.
"""

from datetime import datetime
import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from content_discovery.domain.model import Document, DocumentKind


SortField = Literal["published_at", "updated_at", "title", "relevance"]
SortDirection = Literal["asc", "desc"]

# Time-ordered fields and relevance read newest/best first; everything else reads A-Z.
DEFAULT_SORT_DIRECTIONS: dict[str, SortDirection] = {
    "published_at": "desc",
    "updated_at": "desc",
    "relevance": "desc",
    "title": "asc",
}


class FuzzyMatch(BaseModel):
    """Outcome of scoring one document against one query.

    ``distance`` is the internal metric (0 is exact, lower is better);
    ``score`` is its inverse as reported to callers (higher is better).
    Neither is comparable across queries.
    """

    model_config = ConfigDict(frozen=True)

    distance: float = Field(ge=0.0, le=1.0)
    field_distances: dict[str, float] = Field(default_factory=dict)

    @property
    def score(self) -> float:
        return 1.0 - self.distance


class ScoredDocument(BaseModel):
    """A document paired with the score that placed it in a ranking."""

    model_config = ConfigDict(frozen=True)

    document: Document
    score: float


class QueryFilter(BaseModel):
    """Filters accepted by the query engine.

    ``text`` narrows by fuzzy match first; every other field is an exact
    intersection applied afterwards.
    """

    model_config = ConfigDict(frozen=True)

    text: str | None = None
    tag: str | None = None
    category: str | None = None
    topic: str | None = None
    featured: bool | None = None
    kind: DocumentKind | None = None
    published_after: datetime | None = None
    published_before: datetime | None = None


class StoreFilter(BaseModel):
    """Exact-match filters a document store can apply while fetching candidates."""

    model_config = ConfigDict(frozen=True)

    tag: str | None = None
    category: str | None = None
    featured: bool | None = None
    kind: DocumentKind | None = None

    def matches(self, document: Document) -> bool:
        if self.tag is not None and self.tag not in document.tags:
            return False
        if self.category is not None and self.category not in document.categories:
            return False
        if self.featured is not None and document.featured != self.featured:
            return False
        return self.kind is None or document.kind == self.kind


class SortSpec(BaseModel):
    """Requested ordering. ``direction=None`` resolves through ``DEFAULT_SORT_DIRECTIONS``."""

    model_config = ConfigDict(frozen=True)

    field: str = "published_at"
    direction: SortDirection | None = None


class ResultPage(BaseModel):
    """One page of results plus pagination metadata."""

    model_config = ConfigDict(frozen=True)

    items: list[Document] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @model_validator(mode="after")
    def _check_invariants(self) -> "ResultPage":
        if len(self.items) > self.limit:
            raise ValueError("A page cannot hold more items than its limit")
        if self.total < len(self.items):
            raise ValueError("Total must be at least the number of items on the page")
        return self

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    def to_response(self) -> dict[str, Any]:
        """Serialize to the response shape used by the request layer."""
        data = self.model_dump(mode="json")
        return {
            "items": data["items"],
            "total": self.total,
            "page": self.page,
            "totalPages": self.total_pages,
            "limit": self.limit,
        }
