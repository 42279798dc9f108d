"""
Environment configuration and logging setup.

Settings come from the process environment and an optional .env file in
the working directory.
"""

import logging
from typing import Annotated, List, Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_PORT = 3000
DEFAULT_SESSION_ID = "default-session"
LANGUAGE_CODE = "en-US"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class Settings(BaseSettings):
    """Recognized options. Blank variables count as unset."""

    port: int = DEFAULT_PORT
    google_project_id: Optional[str] = None
    google_application_credentials: Optional[str] = None
    default_session_id: str = DEFAULT_SESSION_ID
    language_code: str = LANGUAGE_CODE
    cors_origins: Annotated[List[str], NoDecode] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    @field_validator("google_project_id", "google_application_credentials", mode="before")
    @classmethod
    def blank_is_unset(cls, value):
        if isinstance(value, str):
            value = value.strip()
        return value or None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            origins = [o.strip() for o in value.split(",") if o.strip()]
            return origins or ["*"]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, value):
        return str(value).strip().upper() or "INFO"


def load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        names = ", ".join(sorted({str(err["loc"][0]).upper() for err in e.errors()}))
        raise RuntimeError(f"Invalid environment configuration for {names}. Fix your .env file.\n{e}") from e


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("therapy_chat").setLevel(level)
