"""Configuration management for rawkeys.

Every setting has a default that reproduces the standard raw-mode
behavior, so no file is needed. A YAML file can be given explicitly, and
``RAWKEYS_``-prefixed environment variables override individual values.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from rawkeys.domain.models import RawModeProfile
from rawkeys.terminal.config import FlushPolicy

logger = logging.getLogger(__name__)


class RawModeConfig(BaseModel):
    min_bytes: int = Field(default=0, ge=0, le=255, description="VMIN")
    read_timeout: int = Field(
        default=1, ge=0, le=255, description="VTIME, in tenths of a second"
    )
    flush_policy: Literal["now", "drain", "flush"] = Field(default="flush")

    def to_profile(self) -> RawModeProfile:
        return RawModeProfile(min_bytes=self.min_bytes, read_timeout=self.read_timeout)

    def to_flush_policy(self) -> FlushPolicy:
        return FlushPolicy[self.flush_policy.upper()]


class InputConfig(BaseModel):
    quit_key: str = Field(default="q", min_length=1, max_length=1)

    @field_validator("quit_key")
    @classmethod
    def _printable_ascii(cls, value: str) -> str:
        if not (32 <= ord(value) < 127):
            raise ValueError("quit_key must be a printable ASCII character")
        return value

    @property
    def quit_byte(self) -> int:
        return ord(self.quit_key)


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for rawkeys.

    Loads from an optional YAML file and supports environment variable
    overrides such as ``RAWKEYS_RAW_MODE__READ_TIMEOUT=5``.
    """

    model_config = {
        "env_prefix": "RAWKEYS_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    raw_mode: RawModeConfig = Field(default_factory=RawModeConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from an optional YAML file plus environment variables.

    Priority: YAML file > env vars > defaults. With no path, no file is
    read at all.
    """
    yaml_data = {}
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}
            logger.info("Loaded configuration from %s", path)
        else:
            logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
