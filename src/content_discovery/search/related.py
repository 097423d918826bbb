"""Related-document ranking.

Combines tag overlap with fuzzy content similarity:

    total = tag_weight * |shared tags| + content_weight * (1 - fuzzy distance)

With the default weights (3 per shared tag, at most 2 for content) one shared
tag always outranks any amount of content similarity alone.
"""

from __future__ import annotations

from collections.abc import Sequence

from content_discovery.domain.errors import InvalidArgumentError
from content_discovery.domain.model import Document, FieldWeights
from content_discovery.domain.search import ScoredDocument
from content_discovery.search.fuzzy import DEFAULT_RELATED_THRESHOLD, score_documents


DEFAULT_TAG_WEIGHT = 3.0
DEFAULT_CONTENT_WEIGHT = 2.0


def related_query(target: Document) -> str:
    """Query text used to measure content similarity to ``target``."""
    return f"{target.title} {target.excerpt}".strip()


def score_related(
    target: Document,
    corpus: Sequence[Document],
    *,
    weights: FieldWeights | None = None,
    threshold: float = DEFAULT_RELATED_THRESHOLD,
    tag_weight: float = DEFAULT_TAG_WEIGHT,
    content_weight: float = DEFAULT_CONTENT_WEIGHT,
) -> list[ScoredDocument]:
    """Score every candidate other than ``target``, highest first.

    Equal totals keep corpus order.
    """
    candidates = [document for document in corpus if document.id != target.id]
    if not candidates:
        return []

    target_tags = set(target.tags)
    matches = score_documents(
        related_query(target),
        candidates,
        weights or FieldWeights.related_defaults(),
        threshold,
    )

    scored: list[ScoredDocument] = []
    for candidate, match in zip(candidates, matches):
        tag_score = tag_weight * len(set(candidate.tags) & target_tags)
        content_score = content_weight * match.score if match is not None else 0.0
        scored.append(ScoredDocument(document=candidate, score=tag_score + content_score))

    scored.sort(key=lambda item: item.score, reverse=True)
    return scored


def find_related(
    target: Document,
    corpus: Sequence[Document],
    limit: int,
    *,
    weights: FieldWeights | None = None,
    threshold: float = DEFAULT_RELATED_THRESHOLD,
    tag_weight: float = DEFAULT_TAG_WEIGHT,
    content_weight: float = DEFAULT_CONTENT_WEIGHT,
    include_zero_scores: bool = False,
) -> list[Document]:
    """Return up to ``limit`` documents related to ``target``, never ``target`` itself.

    Zero-score candidates are dropped unless ``include_zero_scores`` is set, in
    which case they fill the remaining slots in corpus order.

    Raises:
        InvalidArgumentError: If ``limit`` is not a positive integer.
    """
    if limit < 1:
        raise InvalidArgumentError(f"Related limit must be a positive integer, got {limit}")

    ranking = score_related(
        target,
        corpus,
        weights=weights,
        threshold=threshold,
        tag_weight=tag_weight,
        content_weight=content_weight,
    )
    if not include_zero_scores:
        ranking = [item for item in ranking if item.score > 0]
    return [item.document for item in ranking[:limit]]
