"""Environment-driven configuration for the inbox server."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _load_env_file() -> None:
    """Load .env from the project root if present."""
    env_path = _PROJECT_ROOT / ".env"
    if not env_path.is_file():
        return
    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith("#") and "=" in stripped:
                key, value = stripped.split("=", 1)
                key, value = key.strip(), value.strip().strip("'\"")
                if key and value and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        pass


_load_env_file()


DEFAULT_APP_NAME = "WhatsApp Inbox Server"
DEFAULT_APP_VERSION = "0.1.0"
VERSION_MARKER = "INBOX_JSONL_WATERMARK_v1"


def _env_int(name: str, fallback: int) -> int:
    try:
        return int(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _get_port() -> int:
    """Get server port, checking PORT first, then INBOX_PORT."""
    port = os.getenv("PORT") or os.getenv("INBOX_PORT")
    if port:
        try:
            return int(port)
        except ValueError:
            pass
    return 8080


def _default_data_dir() -> Path:
    raw = os.getenv("INBOX_DATA_DIR")
    return Path(raw) if raw else _PROJECT_ROOT / "logs"


class Settings(BaseModel):
    """Application settings with lightweight env fallbacks."""

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)

    # Server runtime
    server_host: str = Field(default_factory=lambda: os.getenv("INBOX_HOST", "0.0.0.0"))
    server_port: int = Field(default_factory=_get_port)

    # Meta webhook
    verify_token: Optional[str] = Field(default_factory=lambda: os.getenv("VERIFY_TOKEN"))
    app_secret: Optional[str] = Field(default_factory=lambda: os.getenv("APP_SECRET"))

    # WhatsApp Cloud API
    wa_token: Optional[str] = Field(default_factory=lambda: os.getenv("WA_TOKEN"))
    phone_number_id: Optional[str] = Field(default_factory=lambda: os.getenv("PHONE_NUMBER_ID"))
    graph_api_version: str = Field(default_factory=lambda: os.getenv("GRAPH_API_VERSION", "v25.0"))

    # Operator auth
    ui_user: Optional[str] = Field(default_factory=lambda: os.getenv("UI_USER"))
    ui_pass: Optional[str] = Field(default_factory=lambda: os.getenv("UI_PASS"))

    # Storage
    data_dir: Path = Field(default_factory=_default_data_dir)

    # Read windows
    summary_window_size: int = Field(default_factory=lambda: _env_int("SUMMARY_WINDOW_SIZE", 400))
    message_window_default: int = Field(default_factory=lambda: _env_int("MESSAGE_WINDOW_DEFAULT", 300))
    message_window_max: int = Field(default_factory=lambda: _env_int("MESSAGE_WINDOW_MAX", 3000))

    # HTTP behaviour
    enable_docs: bool = Field(default_factory=lambda: os.getenv("INBOX_ENABLE_DOCS", "0") != "0")
    docs_url: Optional[str] = Field(default_factory=lambda: os.getenv("INBOX_DOCS_URL", "/docs"))

    @property
    def resolved_docs_url(self) -> Optional[str]:
        """Return documentation URL when docs are enabled."""
        return (self.docs_url or "/docs") if self.enable_docs else None

    @property
    def whatsapp_configured(self) -> bool:
        """Flag indicating outbound Cloud API calls are possible."""
        return bool(self.wa_token and self.phone_number_id)

    @property
    def ui_auth_configured(self) -> bool:
        return bool(self.ui_user and self.ui_pass)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
