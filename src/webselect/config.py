"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor args       (CLI overrides such as --port)
  2. Environment variables  (WEBSELECT__SERVER__PORT=9090)
  3. webselect.yaml         (searched in cwd, then platform config dir)
  4. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


def _find_config_file() -> str | None:
    """Return the path of the first webselect.yaml found, or None."""
    candidates = [
        Path("webselect.yaml"),
        Path(platformdirs.user_config_dir("webselect")) / "webselect.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    host: str = "localhost"
    port: int = Field(default=8080, ge=0, le=65535)


class CacheSettings(BaseModel):
    max_entries: int = Field(default=10, ge=1)
    ttl_seconds: int = Field(default=3600, ge=1)
    # How often the background task physically drops expired entries
    cleanup_interval_seconds: int = Field(default=300, ge=1)


class FetcherSettings(BaseModel):
    timeout_seconds: float = Field(default=30.0, gt=0)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: WEBSELECT__SERVER__PORT=9090
        env_prefix="WEBSELECT__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    cache: CacheSettings = CacheSettings()
    fetcher: FetcherSettings = FetcherSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
