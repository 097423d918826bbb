"""Unit tests for analyzer utilities."""

import pytest

from content_discovery.search.analyzers import (
    AnalyzerPipeline,
    LowercaseFilter,
    RegexTokenizer,
    StandardAnalyzer,
    StopFilter,
    tokenize,
)


@pytest.mark.unit
class TestAnalyzerPipeline:
    def test_regex_tokenizer_records_offsets(self):
        tokens = list(RegexTokenizer()("Deep learning"))

        assert [token.text for token in tokens] == ["Deep", "learning"]
        assert tokens[1].start_char == 5
        assert tokens[1].end_char == 13

    def test_positions_are_renumbered_after_filtering(self):
        pipeline = AnalyzerPipeline(RegexTokenizer(), [LowercaseFilter(), StopFilter()])
        tokens = pipeline("The Attention of Transformers")

        assert [token.text for token in tokens] == ["attention", "transformers"]
        assert [token.position for token in tokens] == [0, 1]

    def test_custom_stopwords(self):
        analyzer = StandardAnalyzer(stopwords=["deep"])
        assert [token.text for token in analyzer("Deep the Learning")] == ["the", "learning"]

    def test_stopwords_can_be_kept(self):
        analyzer = StandardAnalyzer(remove_stopwords=False)
        assert [token.text for token in analyzer("Is All")] == ["is", "all"]


@pytest.mark.unit
class TestTokenize:
    def test_lowercases_and_drops_punctuation(self):
        assert tokenize("Hello, World!") == ["hello", "world"]

    def test_removes_stopwords(self):
        assert tokenize("Attention Is All You Need") == ["attention", "all", "you", "need"]

    def test_only_stopwords_are_kept(self):
        assert tokenize("The") == ["the"]

    def test_keep_stopwords(self):
        assert tokenize("Attention Is All You Need", keep_stopwords=True) == ["attention", "is", "all", "you", "need"]

    def test_empty_text(self):
        assert tokenize("") == []
        assert tokenize("  ...  ") == []
