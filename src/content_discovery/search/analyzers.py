"""Text analysis for fuzzy matching.

A tokenizer turns text into ``Token`` objects and each filter rewrites the
stream; ``AnalyzerPipeline`` chains them. Only English is supported, and there
is no stemming: typo tolerance comes from edit distance, not from
normalising word forms.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol


@dataclass(slots=True)
class Token:
    text: str
    position: int
    start_char: int
    end_char: int


class Tokenizer(Protocol):
    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


# Word characters plus in-word apostrophes ("don't", "o'reilly")
WORD_PATTERN = r"\w+(?:'\w+)*"

DEFAULT_STOPWORDS = frozenset(
    """
    a an and are as at be but by for from how if in into is it its no not of
    on or such that the their then there these they this to was we what will with
    """.split()
)


class RegexTokenizer:
    """Yield one token per regex match, recording character offsets."""

    def __init__(self, pattern: str = WORD_PATTERN) -> None:
        self.pattern = re.compile(pattern, re.UNICODE)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(match.group(), position, match.start(), match.end())


class LowercaseFilter:
    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            token.text = token.text.lower()
            yield token


class StopFilter:
    """Drop tokens found in a stopword vocabulary (compared lowercased)."""

    def __init__(self, stopwords: Iterable[str] | None = None) -> None:
        self.stopwords = frozenset(word.lower() for word in (DEFAULT_STOPWORDS if stopwords is None else stopwords))

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        return (token for token in tokens if token.text.lower() not in self.stopwords)


class AnalyzerPipeline:
    """Run a tokenizer through a sequence of filters.

    Positions are renumbered after filtering so they stay contiguous.
    """

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] = ()) -> None:
        self.tokenizer = tokenizer
        self.filters = tuple(filters)

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for position, token in enumerate(tokens):
            token.position = position
        return tokens


class StandardAnalyzer(AnalyzerPipeline):
    """Word tokens, lowercased, with stopwords optionally removed."""

    def __init__(self, *, stopwords: Iterable[str] | None = None, remove_stopwords: bool = True) -> None:
        filters: list[TokenFilter] = [LowercaseFilter()]
        if remove_stopwords:
            filters.append(StopFilter(stopwords))
        super().__init__(RegexTokenizer(), filters)


_CONTENT_WORDS = StandardAnalyzer()
_ALL_WORDS = StandardAnalyzer(remove_stopwords=False)


def tokenize(text: str, *, keep_stopwords: bool = False) -> list[str]:
    """Lowercased word tokens of ``text``, stopwords removed unless ``keep_stopwords``.

    Text consisting only of stopwords keeps them, so a search for "the"
    still has something to match.
    """
    if not text:
        return []
    if keep_stopwords:
        return [token.text for token in _ALL_WORDS(text)]
    tokens = _CONTENT_WORDS(text) or _ALL_WORDS(text)
    return [token.text for token in tokens]
