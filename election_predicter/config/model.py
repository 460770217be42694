from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from election_predicter.candidates.predicter import DEFAULT_METHOD_PREFIX
from election_predicter.core.errors import ConfigError


LOG_FORMATS = ("json", "text")
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"


def log_level_names() -> list[str]:
    """Level names the `logging` module accepts, e.g. DEBUG, INFO."""

    return sorted(logging.getLevelNamesMapping())


@dataclass(frozen=True, slots=True)
class PredicterConfig:
    method_prefix: str = DEFAULT_METHOD_PREFIX


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: str = DEFAULT_LOG_LEVEL
    format: str = DEFAULT_LOG_FORMAT  # noqa: A003


@dataclass(frozen=True, slots=True)
class AppConfig:
    predicter: PredicterConfig = field(default_factory=PredicterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "AppConfig":
        """Build a typed config from the loader's dict, validating types.

        Keys missing from a section keep their built-in defaults.
        """

        predicter = PredicterConfig()
        predicter_raw = raw.get("predicter")
        if predicter_raw is not None:
            if not isinstance(predicter_raw, Mapping):
                raise ConfigError("must be a mapping", path="predicter")
            prefix = predicter_raw.get("method_prefix", DEFAULT_METHOD_PREFIX)
            if not isinstance(prefix, str) or not prefix:
                raise ConfigError("must be a non-empty string", path="predicter.method_prefix")
            predicter = PredicterConfig(method_prefix=prefix)

        log_cfg = LoggingConfig()
        logging_raw = raw.get("logging")
        if logging_raw is not None:
            if not isinstance(logging_raw, Mapping):
                raise ConfigError("must be a mapping", path="logging")
            level = logging_raw.get("level", DEFAULT_LOG_LEVEL)
            if not isinstance(level, str) or not level.strip():
                raise ConfigError("must be a non-empty string", path="logging.level")
            level = level.strip().upper()
            if level not in logging.getLevelNamesMapping():
                raise ConfigError(
                    f"unknown level {level!r}; expected one of {', '.join(log_level_names())}",
                    path="logging.level",
                )
            fmt = logging_raw.get("format", DEFAULT_LOG_FORMAT)
            if fmt not in LOG_FORMATS:
                raise ConfigError(f"must be one of {', '.join(LOG_FORMATS)}", path="logging.format")
            log_cfg = LoggingConfig(level=level, format=fmt)

        return cls(predicter=predicter, logging=log_cfg)

    def to_dict(self) -> dict[str, Any]:
        return {
            "predicter": {"method_prefix": self.predicter.method_prefix},
            "logging": {"level": self.logging.level, "format": self.logging.format},
        }
