"""
Configuration helpers for the CMS backend.

Settings are read from the environment (optionally seeded from a `.env` file)
so that routers/services do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_file: Path
    public_dir: Path
    host: str
    port: int
    cors_origins: tuple[str, ...]
    log_level: str
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    smtp_from: str
    contact_recipient: str
    smtp_verify_on_startup: bool

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_password and self.smtp_port)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    load_dotenv()

    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _list(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    smtp_user = os.getenv("SMTP_USER", "")
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_file=Path(os.getenv("DATA_FILE") or ROOT / "server" / "database.json"),
        public_dir=Path(os.getenv("PUBLIC_DIR") or ROOT / "public"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "10000"), 10000),
        cors_origins=_list(os.getenv("CORS_ORIGINS")) or ("*",),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=_int(os.getenv("SMTP_PORT", "587"), 587),
        smtp_user=smtp_user,
        smtp_password=os.getenv("SMTP_PASSWORD") or os.getenv("SMTP_PASS", ""),
        smtp_from=os.getenv("SMTP_FROM") or f'"Creashift Contact" <{smtp_user}>',
        contact_recipient=os.getenv("CONTACT_RECIPIENT") or smtp_user,
        smtp_verify_on_startup=_bool(os.getenv("SMTP_VERIFY_ON_STARTUP"), True),
    )
