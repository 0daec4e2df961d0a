import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

ADMIN_EMAIL = "bradley@neuralcommander.ai"
FROM_EMAIL = "noreply@neuralcommander.ai"
ALPHA_FROM_EMAIL = "hello@neuralcommander.ai"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


def _env_timeout(name: str) -> float | None:
    """Seconds from the environment; unset, blank or invalid means no client-side timeout."""
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring invalid %s=%r", name, value)
        return None
    return seconds if seconds > 0 else None


def _env_log_level(name: str, default: str = "INFO") -> str:
    value = os.getenv(name, "").strip().upper()
    if not value:
        return default
    if value not in LOG_LEVELS:
        logging.getLogger(__name__).warning("Ignoring invalid %s=%r, using %s", name, value, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    sendgrid_api_key: str = ""
    turnstile_secret_key: str = ""
    admin_email: str = ADMIN_EMAIL
    from_email: str = FROM_EMAIL
    alpha_from_email: str = ALPHA_FROM_EMAIL
    require_email_service: bool = False
    # None leaves outbound calls bounded only by the platform's request timeout.
    http_timeout: float | None = None
    log_level: str = "INFO"

    @property
    def email_configured(self) -> bool:
        return bool(self.sendgrid_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            sendgrid_api_key=os.getenv("SENDGRID_API_KEY", "").strip(),
            turnstile_secret_key=os.getenv("TURNSTILE_SECRET_KEY", "").strip(),
            admin_email=os.getenv("ADMIN_EMAIL", ADMIN_EMAIL).strip(),
            from_email=os.getenv("FROM_EMAIL", FROM_EMAIL).strip(),
            alpha_from_email=os.getenv("ALPHA_FROM_EMAIL", ALPHA_FROM_EMAIL).strip(),
            require_email_service=_env_flag("REQUIRE_EMAIL_SERVICE"),
            http_timeout=_env_timeout("HTTP_TIMEOUT"),
            log_level=_env_log_level("LOG_LEVEL"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read configuration once per process. Override in tests via dependency_overrides."""
    return Settings.from_env()
