"""Centralised settings for the Content Audit service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "CONTENT_AUDIT_USER_AGENT",
            "Mozilla/5.0 (compatible; ContentAuditBot/1.0)",
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    max_response_bytes: int = field(
        default_factory=lambda: int(os.environ.get("MAX_RESPONSE_BYTES", str(5 * 1024 * 1024)))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )

    @property
    def request_headers(self) -> dict[str, str]:
        """Headers sent with every outbound request."""
        return {"User-Agent": self.user_agent}


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level and format to the root logger.

    Safe to call more than once; ``basicConfig`` is a no-op after the first
    handler is installed, so only the level is updated on later calls.
    """
    resolved = (level or settings.log_level).upper()
    logging.basicConfig(level=resolved, format=_LOG_FORMAT)
    logging.getLogger().setLevel(resolved)


# Module-level singleton, import this everywhere:
#   from contentaudit.config import settings
settings = Settings()
