# ABOUTME: Explicit configuration value for booklend components.
# ABOUTME: Built once from the environment at the edge and passed into constructors.

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from booklend.errors import ConfigurationError

DEFAULT_DB_PATH = Path.home() / ".booklend" / "library.db"
DEFAULT_PROVIDERS = ("googlebooks", "openbd", "openlibrary")


@dataclass(frozen=True)
class SmtpSettings:
    """Credentials for the reminder email channel."""

    host: str
    port: int
    username: str
    password: str
    sender: str


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration.

    Business logic never reads the environment; it receives this value
    (or the pieces of it it needs) at construction time.
    """

    db_path: Path = DEFAULT_DB_PATH
    timezone: str = "Asia/Tokyo"
    loan_days: int = 14
    reminder_days: int = 2
    providers: tuple[str, ...] = DEFAULT_PROVIDERS
    provider_timeout: float = 3.0
    provider_retries: int = 1
    notify_timeout: float = 10.0
    google_books_api_key: str | None = None
    slack_webhook_url: str | None = None
    smtp: SmtpSettings | None = None

    @property
    def tz(self) -> ZoneInfo:
        """The civil calendar all loan dates are computed in."""
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown timezone: {self.timezone}") from exc

    def with_db_path(self, path: Path | None) -> "Settings":
        """Return a copy pointing at another store file (no-op for None)."""
        if path is None:
            return self
        return replace(self, db_path=path)

    def require_smtp(self) -> SmtpSettings:
        """Return SMTP settings, raising if the email channel is unconfigured."""
        if self.smtp is None:
            raise ConfigurationError(
                "SMTP_HOST, SMTP_USERNAME and SMTP_PASSWORD must be set to send reminders"
            )
        return self.smtp

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ConfigurationError: If a numeric setting does not parse or the
                provider list names an unknown provider.
        """
        env = os.environ if env is None else env

        providers = tuple(
            p.strip().lower()
            for p in env.get("BOOKLEND_PROVIDERS", ",".join(DEFAULT_PROVIDERS)).split(",")
            if p.strip()
        )
        unknown = [p for p in providers if p not in DEFAULT_PROVIDERS]
        if unknown:
            raise ConfigurationError(f"Unknown metadata provider(s): {', '.join(unknown)}")

        smtp = None
        if env.get("SMTP_HOST") and env.get("SMTP_USERNAME") and env.get("SMTP_PASSWORD"):
            smtp = SmtpSettings(
                host=env["SMTP_HOST"],
                port=_int_setting(env, "SMTP_PORT", 587),
                username=env["SMTP_USERNAME"],
                password=env["SMTP_PASSWORD"],
                sender=env.get("SMTP_FROM") or env["SMTP_USERNAME"],
            )

        db = env.get("BOOKLEND_DB")
        return cls(
            db_path=Path(db).expanduser() if db else DEFAULT_DB_PATH,
            timezone=env.get("BOOKLEND_TIMEZONE", "Asia/Tokyo"),
            loan_days=_int_setting(env, "BOOKLEND_LOAN_DAYS", 14),
            reminder_days=_int_setting(env, "BOOKLEND_REMINDER_DAYS", 2),
            providers=providers,
            google_books_api_key=env.get("GOOGLE_BOOKS_API_KEY") or None,
            slack_webhook_url=env.get("SLACK_WEBHOOK_URL") or None,
            smtp=smtp,
        )


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
