"""Runtime configuration from environment variables (and a .env file, if present)."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Repo root: src/healthcare_xpress/infrastructure/settings.py -> four levels up
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent.parent

DEFAULT_DATA_FILE = Path("data") / "healthcarexpress.json"
DEFAULT_PHONE_REGION = "SG"

ENV_DATA_FILE = "HXPRESS_DATA_FILE"
ENV_LOG_LEVEL = "HXPRESS_LOG_LEVEL"
ENV_PHONE_REGION = "HXPRESS_PHONE_REGION"


class Settings(BaseModel):
    data_file: Path = DEFAULT_DATA_FILE
    log_level: str = "INFO"
    phone_region: str | None = DEFAULT_PHONE_REGION

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level: {value}. Must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @field_validator("phone_region")
    @classmethod
    def _region_or_none(cls, value: str | None) -> str | None:
        value = (value or "").strip().upper()
        return value or None


def load_env_file() -> None:
    """Load .env from repo root or current dir (first one found)."""
    for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            break


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from the environment. Unset or blank variables keep their defaults."""
    env = os.environ if environ is None else environ
    values: dict[str, str] = {}
    for key, name in (
        (ENV_DATA_FILE, "data_file"),
        (ENV_LOG_LEVEL, "log_level"),
        (ENV_PHONE_REGION, "phone_region"),
    ):
        raw = env.get(key, "").strip()
        if raw:
            values[name] = raw
    return Settings(**values)
