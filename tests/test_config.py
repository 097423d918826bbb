"""Unit tests for the config module."""

import os
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError
import pytest

from content_discovery.config import Settings
from content_discovery.domain import FieldWeights


pytestmark = pytest.mark.unit


class TestConfig:
    """Test configuration loading and validation."""

    def test_config_defaults_are_applied(self):
        """Test that default values are properly applied."""
        settings = Settings()  # type: ignore[call-arg]
        assert settings.search_threshold == 0.4
        assert settings.related_threshold == 0.6
        assert settings.default_page_size == 6
        assert settings.default_related_limit == 3
        assert settings.related_include_zero_scores is False
        assert settings.data_dir == Path("content")

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults_without_environment(self):
        """Every setting has a usable default."""
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.max_page_size == 100
        assert settings.log_json is True

    @patch.dict(
        os.environ,
        {
            "CONTENT_DISCOVERY_SEARCH_THRESHOLD": "0.25",
            "CONTENT_DISCOVERY_MAX_PAGE_SIZE": "50",
            "CONTENT_DISCOVERY_DATA_DIR": "/srv/posts",
            "CONTENT_DISCOVERY_RELATED_INCLUDE_ZERO_SCORES": "true",
        },
        clear=False,
    )
    def test_environment_overrides(self):
        """Test that prefixed environment variables override defaults."""
        settings = Settings()  # type: ignore[call-arg]
        assert settings.search_threshold == 0.25
        assert settings.max_page_size == 50
        assert settings.data_dir == Path("/srv/posts")
        assert settings.related_include_zero_scores is True

    @pytest.mark.parametrize("threshold", ["0", "-0.1", "1.5"])
    def test_threshold_bounds(self, threshold):
        """Thresholds must lie in (0, 1]."""
        with patch.dict(os.environ, {"CONTENT_DISCOVERY_SEARCH_THRESHOLD": threshold}, clear=False):
            with pytest.raises(ValidationError):
                Settings()  # type: ignore[call-arg]

    def test_default_page_size_cannot_exceed_maximum(self):
        with pytest.raises(ValidationError, match="default_page_size cannot exceed max_page_size"):
            Settings(default_page_size=20, max_page_size=10)  # type: ignore[call-arg]

    def test_requires_a_positive_search_weight(self):
        with pytest.raises(ValidationError, match="At least one search field weight"):
            Settings(title_weight=0, excerpt_weight=0, body_weight=0, tags_weight=0)  # type: ignore[call-arg]

    def test_search_weights(self):
        settings = Settings(categories_weight=0.5)  # type: ignore[call-arg]
        weights = settings.search_weights()

        assert isinstance(weights, FieldWeights)
        assert dict(weights.nonzero()) == {
            "title": 2.0,
            "excerpt": 1.5,
            "body": 1.0,
            "tags": 1.5,
            "categories": 0.5,
        }

    def test_related_weights(self):
        settings = Settings()  # type: ignore[call-arg]
        assert settings.related_weights() == FieldWeights.related_defaults()
