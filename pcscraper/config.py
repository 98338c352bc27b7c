"""
Run configuration, read once from the environment and never mutated.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError
from .utils import env_flag


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/123.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    # Model backend
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4.1-mini"
    openai_timeout: float = 60.0
    max_content_chars: int = 60_000

    # Browser
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    navigation_timeout_ms: int = 30_000

    # Rate limiting between listings
    min_delay_ms: int = 1_000
    max_delay_ms: int = 3_000

    # Output
    output_dir: str = "output"
    timestamped_output: bool = True

    # Logging
    log_console: str = "INFO"
    log_file: str = "DEBUG"
    log_file_path: Optional[str] = "pcscraper.log"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> "Config":
        """Build a Config from environment variables (and .env when present)."""
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        log_file_path = environ.get("LOG_FILE_PATH", "pcscraper.log")
        return cls(
            openai_api_key=environ.get("OPENAI_API_KEY") or None,
            openai_model=environ.get("OPENAI_MODEL") or cls.openai_model,
            openai_timeout=float(environ.get("OPENAI_TIMEOUT") or cls.openai_timeout),
            headless=env_flag(environ.get("HEADLESS"), True),
            output_dir=environ.get("OUTPUT_DIR") or cls.output_dir,
            timestamped_output=env_flag(environ.get("OUTPUT_TIMESTAMPED"), True),
            log_console=environ.get("LOG_CONSOLE") or cls.log_console,
            log_file=environ.get("LOG_FILE") or cls.log_file,
            log_file_path=log_file_path or None,
        )

    def validate(self) -> None:
        """Validate configuration before any browser work starts."""
        if not self.openai_api_key:
            raise ConfigError("OPENAI_API_KEY environment variable is not set")
        if not 0 <= self.min_delay_ms <= self.max_delay_ms:
            raise ConfigError(
                f"Invalid delay range: [{self.min_delay_ms}, {self.max_delay_ms}] ms"
            )
