"""
Runtime configuration for the portal backend.

All settings are read from the environment once (via python-dotenv) into a
single PortalConfig. Authorization helpers receive this object explicitly;
nothing else should read SUPER_ADMIN_EMAIL or ADMIN_EMAILS directly.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()

DEFAULT_ERROR_LOG_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "notifications",
    "logs",
)


class PortalConfig(BaseModel):
    """Settings injected into the record store, authorization and assistant layers."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    super_admin_email: str | None = None
    admin_emails: list[str] = Field(default_factory=list)
    record_store_timeout: float = Field(10.0, gt=0)
    notification_batch_size: int = Field(500, ge=1)
    notes_debug: bool = False
    error_log_dir: str = DEFAULT_ERROR_LOG_DIR
    llm_model: str = "llama3.1:8b"
    llm_timeout: float = Field(240.0, gt=0)

    @field_validator("super_admin_email")
    @classmethod
    def _lowercase_super_admin(cls, value: str | None) -> str | None:
        if not value:
            return None
        return value.lower()

    @field_validator("admin_emails", mode="before")
    @classmethod
    def _split_admin_emails(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple, set)):
            return [str(e).strip().lower() for e in value if str(e).strip()]
        return value


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() in ("1", "true", "yes")


def load_config() -> PortalConfig:
    """Build a PortalConfig from environment variables."""
    settings: dict[str, object] = {
        "supabase_url": os.getenv("SUPABASE_URL"),
        "supabase_service_key": os.getenv("SUPABASE_SERVICE_KEY"),
        "super_admin_email": os.getenv("SUPER_ADMIN_EMAIL"),
        "admin_emails": os.getenv("ADMIN_EMAILS", ""),
        "notes_debug": _env_flag("NOTES_DEBUG"),
    }

    # Only override model defaults when the variable is actually set
    optional = {
        "record_store_timeout": "RECORD_STORE_TIMEOUT_SECONDS",
        "notification_batch_size": "NOTIFICATION_BATCH_SIZE",
        "error_log_dir": "ERROR_LOG_DIR",
        "llm_model": "OLLAMA_MODEL",
        "llm_timeout": "OLLAMA_TIMEOUT_SECONDS",
    }
    for field, env_name in optional.items():
        value = os.getenv(env_name)
        if value:
            settings[field] = value

    return PortalConfig.model_validate(settings)
