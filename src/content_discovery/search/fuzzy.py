"""Fuzzy matching for typo-tolerant, order-insensitive document scoring.

Each query token is compared against the tokens of a document field using a
length-normalised Levenshtein distance (0 is exact, 1 is unrelated). A query
token contained in a field token counts as exact whatever its length, so
"transform" hits "transformers" and "ai" hits "openai". Queries drop their
stopwords but fields keep theirs, which lets a stopword-only query such as
"the" still find "The Transformer Paper". A field's distance is the mean of
its query tokens' best distances; token order never matters.

A field passes when its distance is strictly below the threshold. Passing
fields contribute ``weight * (1 - distance)``; the sum is divided by the total
weight of the document's populated, non-zero-weight fields.
"""

from __future__ import annotations

from collections.abc import Sequence

from content_discovery.domain.errors import InvalidArgumentError
from content_discovery.domain.model import Document, FieldWeights
from content_discovery.domain.search import FuzzyMatch
from content_discovery.search.analyzers import tokenize


DEFAULT_SEARCH_THRESHOLD = 0.4
DEFAULT_RELATED_THRESHOLD = 0.6

TokenMemo = dict[tuple[str, str], float]


def levenshtein_distance(s1: str, s2: str, max_distance: int | None = None) -> int:
    """Number of single-character insertions, deletions and substitutions turning ``s1`` into ``s2``.

    Keeps two rows of the DP table. When ``max_distance`` is given the scan
    stops as soon as every cell in a row exceeds it and ``max_distance + 1``
    is returned, which is all a thresholded caller needs to know.

    >>> levenshtein_distance("kitten", "sitting")
    3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    if len(s1) > len(s2):
        s1, s2 = s2, s1

    m, n = len(s1), len(s2)

    if max_distance is not None and n - m > max_distance:
        return max_distance + 1

    prev_row = list(range(m + 1))
    curr_row = [0] * (m + 1)

    for j in range(1, n + 1):
        curr_row[0] = j
        row_min = curr_row[0]
        for i in range(1, m + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            curr_row[i] = min(
                prev_row[i] + 1,
                curr_row[i - 1] + 1,
                prev_row[i - 1] + cost,
            )
            row_min = min(row_min, curr_row[i])

        if max_distance is not None and row_min > max_distance:
            return max_distance + 1

        prev_row, curr_row = curr_row, prev_row

    return prev_row[m]


def token_distance(query_token: str, field_token: str, threshold: float) -> float:
    """Normalised distance between two lowercase tokens.

    Returns 0.0 for an exact or substring hit, the edit distance divided by
    the longer length when that ratio is below ``threshold``, and 1.0
    (a miss) otherwise.
    """
    if query_token in field_token:
        return 0.0

    longest = max(len(query_token), len(field_token))
    max_edits = int(threshold * longest)
    if max_edits == 0:
        return 1.0

    edits = levenshtein_distance(query_token, field_token, max_edits)
    ratio = edits / longest
    return ratio if ratio < threshold else 1.0


def field_distance(
    query_tokens: Sequence[str],
    field_tokens: Sequence[str],
    threshold: float,
    memo: TokenMemo | None = None,
) -> float:
    """Mean best distance of each query token against a field's tokens."""
    if not query_tokens or not field_tokens:
        return 1.0

    vocabulary = set(field_tokens)
    total = 0.0
    for query_token in query_tokens:
        if query_token in vocabulary:
            continue
        best = 1.0
        for field_token in vocabulary:
            key = (query_token, field_token)
            if memo is not None and key in memo:
                distance = memo[key]
            else:
                distance = token_distance(query_token, field_token, threshold)
                if memo is not None:
                    memo[key] = distance
            if distance < best:
                best = distance
                if best == 0.0:
                    break
        total += best
    return total / len(query_tokens)


def _validate(query: str, threshold: float) -> None:
    if not query or not query.strip():
        raise InvalidArgumentError("Search query must be non-empty")
    if not 0.0 < threshold <= 1.0:
        raise InvalidArgumentError(f"Fuzzy threshold must be in (0, 1], got {threshold}")


def _score_tokens(
    query_tokens: Sequence[str],
    document: Document,
    weights: FieldWeights,
    threshold: float,
    memo: TokenMemo | None,
) -> FuzzyMatch | None:
    active_weight = 0.0
    accumulator = 0.0
    passed: dict[str, float] = {}

    for field, weight in weights.nonzero():
        field_tokens = tokenize(document.field_text(field), keep_stopwords=True)
        if not field_tokens:
            continue
        active_weight += weight
        distance = field_distance(query_tokens, field_tokens, threshold, memo)
        if distance < threshold:
            accumulator += weight * (1.0 - distance)
            passed[field] = distance

    if active_weight == 0.0 or not passed:
        return None

    composite = accumulator / active_weight
    return FuzzyMatch(distance=max(0.0, min(1.0, 1.0 - composite)), field_distances=passed)


def score_document(
    query: str,
    document: Document,
    weights: FieldWeights,
    threshold: float = DEFAULT_SEARCH_THRESHOLD,
) -> FuzzyMatch | None:
    """Score one document against ``query``.

    Returns ``None`` when nothing matches, including documents with no
    populated field under a non-zero weight.

    Raises:
        InvalidArgumentError: If the query is blank or the threshold is out of range.
    """
    _validate(query, threshold)
    query_tokens = tokenize(query)
    if not query_tokens:
        return None
    return _score_tokens(query_tokens, document, weights, threshold, memo={})


def score_documents(
    query: str,
    documents: Sequence[Document],
    weights: FieldWeights,
    threshold: float = DEFAULT_SEARCH_THRESHOLD,
) -> list[FuzzyMatch | None]:
    """Score each document independently, returning results in input order."""
    _validate(query, threshold)
    query_tokens = tokenize(query)
    if not query_tokens:
        return [None] * len(documents)

    # Token distances are shared across documents for the duration of this call only
    memo: TokenMemo = {}
    return [_score_tokens(query_tokens, document, weights, threshold, memo) for document in documents]


def rank_matches(
    query: str,
    documents: Sequence[Document],
    weights: FieldWeights,
    threshold: float = DEFAULT_SEARCH_THRESHOLD,
) -> list[tuple[Document, FuzzyMatch]]:
    """Score every document and return the matches, best first.

    Equal scores keep corpus order.
    """
    scored = score_documents(query, documents, weights, threshold)
    matches = [(document, match) for document, match in zip(documents, scored) if match is not None]
    matches.sort(key=lambda pair: pair[1].distance)
    return matches
