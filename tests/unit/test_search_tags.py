"""Unit tests for tag and category helpers."""

import pytest

from content_discovery.domain import InvalidArgumentError
from content_discovery.search.tags import (
    count_tags,
    extract_categories,
    extract_tags,
    filter_by_category,
    filter_by_tag,
    filter_by_topic,
)


pytestmark = pytest.mark.unit


def _ids(documents):
    return [document.id for document in documents]


class TestTagIndex:
    def test_extract_tags_is_sorted_and_distinct(self, blog_corpus):
        assert extract_tags(blog_corpus) == ["attention", "garden", "nlp", "transformers", "vision"]

    def test_extract_tags_from_empty_corpus(self):
        assert extract_tags([]) == []

    def test_count_tags(self, blog_corpus):
        assert count_tags(blog_corpus) == [
            ("attention", 1),
            ("garden", 1),
            ("nlp", 2),
            ("transformers", 1),
            ("vision", 1),
        ]

    def test_count_tags_ignores_duplicates_within_a_document(self, make_document):
        doc = make_document("d1", "Title", tags=("nlp", "nlp"))
        assert count_tags([doc]) == [("nlp", 1)]


class TestFilterByTag:
    def test_keeps_corpus_order(self, blog_corpus):
        assert _ids(filter_by_tag(blog_corpus, "nlp")) == ["post-1", "paper-1"]

    def test_is_exact_and_case_sensitive(self, blog_corpus):
        assert filter_by_tag(blog_corpus, "NLP") == []
        assert filter_by_tag(blog_corpus, "nl") == []

    def test_unknown_tag_is_empty(self, blog_corpus):
        assert filter_by_tag(blog_corpus, "cooking") == []

    @pytest.mark.parametrize("tag", ["", "   "])
    def test_blank_tag_is_rejected(self, blog_corpus, tag):
        with pytest.raises(InvalidArgumentError):
            filter_by_tag(blog_corpus, tag)


class TestCategories:
    def test_extract_categories(self, blog_corpus):
        assert extract_categories(blog_corpus) == ["cs.CL", "cs.CV", "cs.LG"]

    def test_filter_by_category_is_exact(self, blog_corpus):
        assert _ids(filter_by_category(blog_corpus, "cs.CV")) == ["paper-2"]
        assert filter_by_category(blog_corpus, "cs") == []

    def test_filter_by_topic_matches_substrings_case_insensitively(self, blog_corpus):
        assert _ids(filter_by_topic(blog_corpus, "CS")) == ["paper-1", "paper-2"]
        assert _ids(filter_by_topic(blog_corpus, "cv")) == ["paper-2"]

    def test_blank_category_is_rejected(self, blog_corpus):
        with pytest.raises(InvalidArgumentError):
            filter_by_category(blog_corpus, " ")
        with pytest.raises(InvalidArgumentError):
            filter_by_topic(blog_corpus, "")
