"""Shared test fixtures and configuration."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
import os
from typing import Any

import pytest


# Complete test environment that overrides every configurable value
TEST_ENV = {
    "CONTENT_DISCOVERY_SEARCH_THRESHOLD": "0.4",
    "CONTENT_DISCOVERY_RELATED_THRESHOLD": "0.6",
    "CONTENT_DISCOVERY_RELATED_TAG_WEIGHT": "3.0",
    "CONTENT_DISCOVERY_RELATED_CONTENT_WEIGHT": "2.0",
    "CONTENT_DISCOVERY_RELATED_INCLUDE_ZERO_SCORES": "false",
    "CONTENT_DISCOVERY_DEFAULT_PAGE_SIZE": "6",
    "CONTENT_DISCOVERY_DEFAULT_RELATED_LIMIT": "3",
    "CONTENT_DISCOVERY_MAX_PAGE_SIZE": "100",
    "CONTENT_DISCOVERY_CANDIDATE_LIMIT": "1000",
    "CONTENT_DISCOVERY_LOG_LEVEL": "info",
    "CONTENT_DISCOVERY_LOG_JSON": "true",
}


for key, value in TEST_ENV.items():
    os.environ[key] = value

from content_discovery.domain.model import Document


BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset discovery environment variables before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def make_document() -> Callable[..., Document]:
    """Factory building documents published one day apart by default."""

    def _make(doc_id: str, title: str, *, day: int = 0, **fields: Any) -> Document:
        fields.setdefault("published_at", BASE_TIME + timedelta(days=day))
        return Document(id=doc_id, title=title, **fields)

    return _make


@pytest.fixture
def blog_corpus(make_document) -> list[Document]:
    """Small mixed corpus of posts and papers."""
    return [
        make_document(
            "post-1",
            "Introduction to Transformer Models",
            day=1,
            slug="introduction-to-transformer-models",
            excerpt="An overview of transformer architecture and its applications in NLP.",
            tags=("nlp", "transformers"),
            featured=True,
        ),
        make_document(
            "post-2",
            "Gardening Log",
            day=2,
            slug="gardening-log",
            excerpt="Tomatoes and basil.",
            tags=("garden",),
        ),
        make_document(
            "paper-1",
            "Attention Is All You Need",
            day=3,
            excerpt="Sequence transduction based solely on attention mechanisms.",
            tags=("nlp", "attention"),
            categories=("cs.CL", "cs.LG"),
            authors=("Vaswani", "Shazeer"),
            kind="paper",
        ),
        make_document(
            "paper-2",
            "Deep Residual Learning",
            day=4,
            excerpt="Residual networks for image recognition.",
            tags=("vision",),
            categories=("cs.CV",),
            authors=("He",),
            kind="paper",
        ),
    ]
