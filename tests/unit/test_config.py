"""Tests for reviewer.config: environment defaults and required secrets."""

import os
from unittest.mock import patch

import pytest

from reviewer.config import ConfigError, ReviewerConfig
from reviewer.gemini import MAX_RETRIES, RETRY_DELAY


class TestReviewerConfig:
    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        config = ReviewerConfig()
        assert config.gemini_model == "gemini-2.0-flash"
        assert config.max_output_tokens == 4000
        assert config.max_concurrency == 5
        assert (config.host, config.port) == ("0.0.0.0", 8080)

    @patch.dict(os.environ, {}, clear=True)
    def test_default_deadline_outlasts_rate_limit_retries(self):
        config = ReviewerConfig()
        assert config.file_timeout > (MAX_RETRIES - 1) * RETRY_DELAY

    @patch.dict(os.environ, {"REVIEW_FILE_TIMEOUT": "0", "REVIEW_MAX_CONCURRENCY": "0"}, clear=True)
    def test_zero_disables_limits(self):
        config = ReviewerConfig()
        assert config.file_timeout == 0
        assert config.max_concurrency == 0

    @patch.dict(os.environ, {"GEMINI_API_KEY": "k"}, clear=True)
    def test_require_missing_secret(self):
        config = ReviewerConfig()
        assert config.require("GEMINI_API_KEY") == "k"
        with pytest.raises(ConfigError, match="GITHUB_TOKEN environment variable is required"):
            config.require("GITHUB_TOKEN")
