"""Configuration management for rawkeys.

Loads and validates optional YAML-based configuration with Pydantic
models, with environment variable overrides.
"""

from rawkeys.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
