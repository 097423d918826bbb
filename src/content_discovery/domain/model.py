"""Domain model - documents and field weighting.

Documents are owned by an external store; the core only ever sees immutable
snapshots of them. Uses Pydantic dataclasses for validation at construction.
"""

from datetime import datetime, timezone
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.dataclasses import dataclass


SearchField = Literal["title", "excerpt", "body", "tags", "categories", "authors"]
DocumentKind = Literal["post", "paper"]

SEARCH_FIELDS: tuple[str, ...] = ("title", "excerpt", "body", "tags", "categories", "authors")


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class Document:
    """Immutable snapshot of a blog post or research paper.

    Identity is the ``id``; two snapshots with the same id compare equal even
    if their content differs.
    """

    id: str
    title: str
    published_at: datetime
    excerpt: str = ""
    body: str = ""
    tags: tuple[str, ...] = ()
    updated_at: datetime | None = None
    slug: str | None = None
    categories: tuple[str, ...] = ()
    authors: tuple[str, ...] = ()
    featured: bool = False
    kind: DocumentKind = "post"

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("Document must have a non-empty id")
        if not self.title.strip():
            raise ValueError("Document must have a non-empty title")
        # Frozen dataclass: normalise timestamps through object.__setattr__
        object.__setattr__(self, "published_at", as_utc(self.published_at))
        updated = self.updated_at if self.updated_at is not None else self.published_at
        object.__setattr__(self, "updated_at", as_utc(updated))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @classmethod
    def create(
        cls,
        id: str,
        title: str,
        published_at: datetime,
        *,
        excerpt: str = "",
        body: str = "",
        tags: list[str] | tuple[str, ...] = (),
        **extra: object,
    ) -> Self:
        """Factory method to create a document from primitives."""
        return cls(
            id=id,
            title=title,
            published_at=published_at,
            excerpt=excerpt,
            body=body,
            tags=tuple(tags),
            **extra,
        )

    def field_text(self, field: str) -> str:
        """Return the searchable text of ``field`` (sequence fields are space-joined)."""
        if field not in SEARCH_FIELDS:
            raise KeyError(field)
        value = getattr(self, field)
        if isinstance(value, tuple):
            return " ".join(value)
        return value or ""


class FieldWeights(BaseModel):
    """Static per-field weighting used by the fuzzy matcher.

    A zero weight disables a field. Weights are configuration and are never
    derived from the data being searched.
    """

    model_config = ConfigDict(frozen=True)

    title: float = Field(default=0.0, ge=0.0)
    excerpt: float = Field(default=0.0, ge=0.0)
    body: float = Field(default=0.0, ge=0.0)
    tags: float = Field(default=0.0, ge=0.0)
    categories: float = Field(default=0.0, ge=0.0)
    authors: float = Field(default=0.0, ge=0.0)

    @model_validator(mode="after")
    def _check_positive_weight(self) -> "FieldWeights":
        if not any(weight > 0 for _, weight in self.items()):
            raise ValueError("At least one field weight must be positive")
        return self

    @classmethod
    def search_defaults(cls) -> "FieldWeights":
        """Weights used by free-text search."""
        return cls(title=2.0, excerpt=1.5, body=1.0, tags=1.5)

    @classmethod
    def related_defaults(cls) -> "FieldWeights":
        """Weights used for the content-similarity part of related-document ranking."""
        return cls(title=1.0, excerpt=1.0, body=1.0)

    def items(self) -> list[tuple[str, float]]:
        return [(name, getattr(self, name)) for name in SEARCH_FIELDS]

    def nonzero(self) -> list[tuple[str, float]]:
        return [(name, weight) for name, weight in self.items() if weight > 0]
