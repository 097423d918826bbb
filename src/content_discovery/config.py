"""Centralized configuration for content-discovery using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from content_discovery.domain.model import FieldWeights


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``CONTENT_DISCOVERY_*`` environment variables.

    Thresholds and weights are static configuration; nothing here is derived
    from the documents being searched.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_DISCOVERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Fuzzy thresholds (0 = exact match only, 1 = anything goes)
    search_threshold: float = Field(
        default=0.4, gt=0.0, le=1.0, description="Maximum normalized edit distance for free-text search"
    )
    related_threshold: float = Field(
        default=0.6,
        gt=0.0,
        le=1.0,
        description="Maximum normalized edit distance for the content-similarity part of related ranking",
    )

    # Related ranking
    related_tag_weight: float = Field(default=3.0, ge=0.0, description="Score added per shared tag")
    related_content_weight: float = Field(
        default=2.0, ge=0.0, description="Multiplier applied to content similarity (0..1)"
    )
    related_include_zero_scores: bool = Field(
        default=False,
        description="Pad related results with zero-score candidates when too few positive ones exist",
    )

    # Pagination
    default_page_size: int = Field(default=6, ge=1, description="Page size used when callers pass none")
    default_related_limit: int = Field(default=3, ge=1, description="Related items returned when callers pass none")
    max_page_size: int = Field(default=100, ge=1, description="Largest page size a caller may request")
    candidate_limit: int = Field(
        default=1000, ge=1, description="Maximum documents fetched from the store per call"
    )

    # Search field weights
    title_weight: float = Field(default=2.0, ge=0.0)
    excerpt_weight: float = Field(default=1.5, ge=0.0)
    body_weight: float = Field(default=1.0, ge=0.0)
    tags_weight: float = Field(default=1.5, ge=0.0)
    categories_weight: float = Field(default=0.0, ge=0.0)
    authors_weight: float = Field(default=0.0, ge=0.0)

    # Storage
    data_dir: Path = Field(default=Path("content"), description="Directory read by the filesystem store")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    @model_validator(mode="after")
    def _check_limits(self) -> "Settings":
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        if not any(weight > 0 for weight in self._weight_values()):
            raise ValueError("At least one search field weight must be positive")
        return self

    def _weight_values(self) -> tuple[float, ...]:
        return (
            self.title_weight,
            self.excerpt_weight,
            self.body_weight,
            self.tags_weight,
            self.categories_weight,
            self.authors_weight,
        )

    def search_weights(self) -> FieldWeights:
        """Field weights for free-text search."""
        return FieldWeights(
            title=self.title_weight,
            excerpt=self.excerpt_weight,
            body=self.body_weight,
            tags=self.tags_weight,
            categories=self.categories_weight,
            authors=self.authors_weight,
        )

    def related_weights(self) -> FieldWeights:
        """Field weights for related-document content similarity."""
        return FieldWeights.related_defaults()
