"""Centralised settings for the SectionForge backend.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

No module-level instance is created: the API factory builds one
:class:`Settings` at startup and hands it to every component that needs it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    # ------------------------------------------------------------------
    # Access control
    # ------------------------------------------------------------------
    server_secret: str = field(
        default_factory=lambda: os.environ.get("SERVER_SECRET", "")
    )

    # ------------------------------------------------------------------
    # Model providers
    # ------------------------------------------------------------------
    gemini_api_key: str = field(
        default_factory=lambda: os.environ.get("GEMINI_API_KEY", "")
    )
    openai_api_key: str = field(
        default_factory=lambda: os.environ.get("OPENAI_API_KEY", "")
    )
    gemini_model: str = field(
        default_factory=lambda: os.environ.get("GEMINI_MODEL", "gemini-flash-latest")
    )
    openai_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_MODEL", "gpt-4o")
    )

    # ------------------------------------------------------------------
    # Browser
    # ------------------------------------------------------------------
    navigation_timeout_ms: int = field(
        default_factory=lambda: int(os.environ.get("NAVIGATION_TIMEOUT_MS", "60000"))
    )
    headless: bool = field(
        default_factory=lambda: _env_flag("BROWSER_HEADLESS", "true")
    )

    # ------------------------------------------------------------------
    # Server / logging
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "4000")))
    log_file: str = field(default_factory=lambda: os.environ.get("LOG_FILE", ""))
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )

    @property
    def access_control_enabled(self) -> bool:
        """``True`` when a server secret is configured."""
        return bool(self.server_secret)
