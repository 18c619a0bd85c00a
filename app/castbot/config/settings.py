"""Application settings -- reads from environment and ``.env`` file.

All configuration is consolidated here.  Process environment variables
take precedence over values found in the ``.env`` file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from dotenv import dotenv_values

from ..util.singletons import register_singleton

DEFAULT_DIRECTORY_URL = "https://itunes.apple.com/search"


class Settings:
    """Runtime configuration sourced from environment variables and ``.env``."""

    _DOTENV_ENV: ClassVar[str] = "DOTENV_PATH"

    def __init__(self) -> None:
        self.dotenv_path = Path(os.getenv(self._DOTENV_ENV) or ".env")
        self._file_values: dict[str, str | None] = {}
        self.reload()

    def reload(self) -> None:
        """Re-read the ``.env`` file and environment variables."""
        self._file_values = dotenv_values(self.dotenv_path) if self.dotenv_path.is_file() else {}
        e = self._read

        self.bot_app_id: str = e("BOT_APP_ID")
        self.bot_app_password: str = e("BOT_APP_PASSWORD")
        self.bot_app_tenant_id: str = e("BOT_APP_TENANT_ID")
        self.bot_port: int = int(e("BOT_PORT") or "3978")

        self.log_level: str = (e("LOG_LEVEL") or "INFO").upper()

        self.directory_url: str = e("DIRECTORY_URL") or DEFAULT_DIRECTORY_URL
        self.directory_country: str = e("DIRECTORY_COUNTRY") or "US"
        self.search_limit: int = int(e("SEARCH_LIMIT") or "4")
        self.http_timeout: float = float(e("HTTP_TIMEOUT") or "10")

    @property
    def bot_configured(self) -> bool:
        return bool(self.bot_app_id and self.bot_app_password)

    def _read(self, key: str) -> str:
        return os.getenv(key) or self._file_values.get(key) or ""


# Module-level singleton
cfg = Settings()


def _reset_cfg() -> None:
    # Re-initialise in place so modules holding `cfg` see the new values.
    cfg.__init__()


register_singleton("settings", _reset_cfg)
