"""Environment-based configuration for the code review bot."""

import os


class ConfigError(RuntimeError):
    """A required setting is missing."""


class ReviewerConfig:
    """Settings read from environment variables at construction time."""

    def __init__(self) -> None:
        self.github_token = os.environ.get("GITHUB_TOKEN", "")
        self.gemini_api_key = os.environ.get("GEMINI_API_KEY", "")
        self.gemini_model = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
        self.max_output_tokens = int(os.environ.get("REVIEW_MAX_OUTPUT_TOKENS", "4000"))

        # 0 disables the cap / deadline
        self.max_concurrency = int(os.environ.get("REVIEW_MAX_CONCURRENCY", "5"))
        # must outlast the Gemini 429 retry loop, (MAX_RETRIES - 1) * RETRY_DELAY
        self.file_timeout = float(os.environ.get("REVIEW_FILE_TIMEOUT", "300"))

        self.host = os.environ.get("HOST", "0.0.0.0")
        self.port = int(os.environ.get("PORT", "8080"))
        self.log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

    def require(self, name: str) -> str:
        """Return the secret stored under env var ``name`` or raise ``ConfigError``."""
        value = {
            "GITHUB_TOKEN": self.github_token,
            "GEMINI_API_KEY": self.gemini_api_key,
        }[name]
        if not value:
            raise ConfigError(f"{name} environment variable is required")
        return value
