"""Typed configuration — single source of truth for all chatlog runtime settings.

Loading priority (highest to lowest):
  1. Explicit init kwargs (programmatic overrides, tests)
  2. Environment variables: CHATLOG_<SECTION>__<KEY>  (double-underscore separator)
  3. Config file: CHATLOG_CONFIG_FILE env var, or conf/settings.toml at project root
  4. Model field defaults

Example env overrides:
  CHATLOG_INPUT__PATH=/exports/signal/data.json
  CHATLOG_PARSE__STRICT=true
  CHATLOG_LOGGING__LEVEL=DEBUG
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

# Derive project root from this file's location: src/chatlog/config.py → ../../..
_PROJECT_ROOT = Path(__file__).parent.parent.parent
_DEFAULT_CONFIG = _PROJECT_ROOT / "conf" / "settings.toml"


def _config_file() -> Path:
    """Resolve the config file path.

    Returns CHATLOG_CONFIG_FILE if set (raises FileNotFoundError if missing),
    otherwise returns the bundled default at conf/settings.toml.
    """
    if env_val := os.environ.get("CHATLOG_CONFIG_FILE"):
        p = Path(env_val)
        if not p.is_file():
            raise FileNotFoundError(f"CHATLOG_CONFIG_FILE not found: {p}")
        return p
    return _DEFAULT_CONFIG


# ---------------------------------------------------------------------------
# Section models: each maps to a [section] in conf/settings.toml
# ---------------------------------------------------------------------------


class InputSettings(BaseModel):
    """Where the chat log lives and how to decode it."""

    path: Path = Path("./signal-chats/ies/data.json")
    # Empty string means the platform's default text encoding.
    encoding: str = ""


class ParseSettings(BaseModel):
    """Line classification and error-capture behaviour."""

    # Upper bound on ParseError.raw, keeps error reports bounded.
    raw_max_chars: int = 200
    comment_prefix: str = "//"
    # Check every decoded record against the ChatMessage shape.
    strict: bool = False

    @field_validator("raw_max_chars")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"raw_max_chars must be >= 1, got {v}")
        return v

    @field_validator("comment_prefix")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("comment_prefix must not be empty")
        return v


class LoggingSettings(BaseModel):
    """Logging verbosity and output format."""

    level: str = "INFO"
    format: Literal["json", "text"] = "text"

    @field_validator("level", mode="before")
    @classmethod
    def _normalise_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"level must be one of {sorted(valid)}, got {v!r}")
        return v.upper()


# ---------------------------------------------------------------------------
# Root settings class
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """All chatlog runtime settings, fully resolved and validated."""

    input: InputSettings = InputSettings()
    parse: ParseSettings = ParseSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_prefix="CHATLOG_",
        env_nested_delimiter="__",  # CHATLOG_INPUT__PATH → input.path
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # chatlog uses TOML + env only.
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=_config_file()),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings instance (loaded once, cached thereafter).

    Tests should call ``get_settings.cache_clear()`` before each test that
    patches environment variables or the config file.
    """
    return Settings()
