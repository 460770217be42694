"""Configuration loading and schema.

- YAML-first configuration under configs/*.yaml
- Strict ${ENV_VAR} expansion (missing/empty env vars are errors)
"""

from __future__ import annotations

from election_predicter.config.loader import load_app_config, load_config, resolve_profile_configs
from election_predicter.config.model import AppConfig, LoggingConfig, PredicterConfig
from election_predicter.core.errors import ConfigError

__all__ = [
    "AppConfig",
    "ConfigError",
    "LoggingConfig",
    "PredicterConfig",
    "load_app_config",
    "load_config",
    "resolve_profile_configs",
]
