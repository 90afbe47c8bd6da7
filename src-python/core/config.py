"""Global application configuration."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Highlight colours accepted by python-docx (WD_COLOR_INDEX member names)
HIGHLIGHT_COLORS = {
    "YELLOW", "BRIGHT_GREEN", "TURQUOISE", "PINK", "BLUE", "RED",
    "DARK_BLUE", "TEAL", "GREEN", "VIOLET", "DARK_RED", "DARK_YELLOW",
    "GRAY_25", "GRAY_50",
}


def _default_data_dir() -> Path:
    """Return the platform-appropriate data directory."""
    if os.name == "nt":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    elif os.uname().sysname == "Darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / "termswap"


class AppConfig(BaseSettings):
    """Application-wide settings — loaded once at startup.

    Every field can be overridden with a ``TERMSWAP_`` environment variable
    (e.g. ``TERMSWAP_PORT=9000``).
    """

    model_config = SettingsConfigDict(env_prefix="TERMSWAP_")

    # Directories
    data_dir: Path = Field(default_factory=_default_data_dir)
    temp_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()) / "termswap")

    # Server
    host: str = "127.0.0.1"
    port: int = Field(default=8920, ge=0, le=65535)   # 0 = random

    # Uploads larger than this are rejected before any processing
    max_upload_mb: int = Field(default=50, ge=1, le=1024)

    # Comparison document
    original_highlight: str = "YELLOW"
    substitute_highlight: str = "BRIGHT_GREEN"
    original_column_label: str = "Original"
    replaced_column_label: str = "Replaced"

    # Logging
    log_format: str = "text"          # "text" | "json"
    log_level: str = "INFO"

    def model_post_init(self, __context: object) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.temp_dir.mkdir(parents=True, exist_ok=True)

        # Load any previously-saved user settings from disk
        self._load_user_settings()

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    # ------------------------------------------------------------------
    # Persistence: user-editable settings are saved to a JSON sidecar
    # ------------------------------------------------------------------

    # Keys that are persisted when changed via the API
    _PERSISTABLE_KEYS: ClassVar[set[str]] = {
        "max_upload_mb",
        "original_highlight", "substitute_highlight",
        "original_column_label", "replaced_column_label",
    }

    @property
    def _settings_path(self) -> Path:
        return self.data_dir / "settings.json"

    def _load_user_settings(self) -> None:
        """Read persisted user settings from disk and apply them."""
        path = self._settings_path
        if not path.exists():
            return
        try:
            data = json.loads(path.read_text(encoding="utf-8-sig"))
            for key, value in data.items():
                if key in self._PERSISTABLE_KEYS and hasattr(self, key):
                    setattr(self, key, value)
            logger.info(f"Loaded user settings from {path}")
        except Exception as exc:
            logger.warning(f"Failed to load settings from {path}: {exc}")

    def save_user_settings(self) -> None:
        """Persist current user-editable settings to disk."""
        data = {k: getattr(self, k) for k in self._PERSISTABLE_KEYS if hasattr(self, k)}
        try:
            self._settings_path.write_text(
                json.dumps(data, indent=2, default=str, ensure_ascii=False),
                encoding="utf-8",
            )
            logger.info(f"Saved user settings to {self._settings_path}")
        except Exception as exc:
            logger.warning(f"Failed to save settings: {exc}")


# Singleton, importable from anywhere
config = AppConfig()
