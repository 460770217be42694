"""Configuration loader for the predicter.

YAML is the source of truth; `${ENV_VAR}` placeholders in string values are
expanded strictly (missing or empty variables are errors). Profiles live under
`configs/`: `app` loads app.yaml, `dev` overlays dev.yaml on top of it.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml
from dotenv import load_dotenv

from election_predicter.config.model import AppConfig
from election_predicter.core.errors import ConfigError


PROFILES = ("app", "dev")

_PROFILE_FILES: dict[str, tuple[str, ...]] = {
    "app": ("app.yaml",),
    "dev": ("app.yaml", "dev.yaml"),
}

_ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(slots=True)
class _EnvExpander:
    """Expands ${ENV_VAR} placeholders, recording every unresolved one."""

    unresolved: list[str] = field(default_factory=list)

    def expand(self, obj: Any, key_path: str = "") -> Any:
        if isinstance(obj, str):
            return _ENV_PLACEHOLDER_RE.sub(lambda m: self._lookup(m, key_path), obj)
        if isinstance(obj, Mapping):
            return {str(k): self.expand(v, f"{key_path}.{k}" if key_path else str(k)) for k, v in obj.items()}
        if isinstance(obj, list):
            return [self.expand(v, f"{key_path}[{i}]") for i, v in enumerate(obj)]
        return obj

    def _lookup(self, match: re.Match[str], key_path: str) -> str:
        name = match.group(1)
        value = os.getenv(name)
        if value:
            return value
        reason = "missing" if value is None else "empty"
        self.unresolved.append(f"- {name} ({reason}) at {key_path or '<root>'}")
        return match.group(0)


def _merge(base: dict[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay wins; nested sections are merged key by key."""

    out = dict(base)
    for k, v in overlay.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), Mapping):
            out[k] = _merge(dict(out[k]), v)
        else:
            out[k] = v
    return out


def _read_fragment(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigError("Config file not found", path=str(path))
    try:
        fragment = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read YAML config: {e}", path=str(path)) from e
    if fragment is None:
        return {}
    if not isinstance(fragment, Mapping):
        raise ConfigError("Top-level YAML must be a mapping", path=str(path))
    return fragment


def load_config(
    paths: Path | Sequence[Path],
    *,
    load_dotenv_file: bool = True,
    dotenv_path: Path | None = None,
) -> dict[str, Any]:
    """Load YAML config files with strict ${ENV_VAR} expansion.

    Args:
        paths: One or more YAML files. Later files override earlier ones.
        load_dotenv_file: Whether to load a .env file before expansion.
            Variables already set in the environment are never overridden.
        dotenv_path: Optional explicit .env path. Defaults to `.env` in the
            current working directory.

    Raises:
        ConfigError: If a file is missing or invalid, or an env var is
            missing or empty.
    """

    file_list: list[Path] = [paths] if isinstance(paths, Path) else list(paths)
    if not file_list:
        raise ConfigError("No config files provided")

    if load_dotenv_file:
        load_dotenv(dotenv_path or Path.cwd() / ".env", override=False)

    merged: dict[str, Any] = {}
    for p in file_list:
        merged = _merge(merged, _read_fragment(p))

    expander = _EnvExpander()
    expanded = expander.expand(merged)
    if expander.unresolved:
        raise ConfigError("\n".join(["Unresolved environment variables in config:", *expander.unresolved]))

    return expanded


def resolve_profile_configs(*, profile: str, configs_dir: Path) -> list[Path]:
    """Resolve the config file list for a profile.

    - profile=app -> [configs/app.yaml]
    - profile=dev -> [configs/app.yaml, configs/dev.yaml]
    """

    names = _PROFILE_FILES.get(profile)
    if names is None:
        raise ConfigError(f"Unknown profile: {profile}")
    return [configs_dir / name for name in names]


def load_app_config(
    *,
    config_path: Path | None = None,
    profile: str = "app",
    configs_dir: Path | None = None,
) -> tuple[AppConfig, list[Path]]:
    """Load the typed predicter config.

    An explicit `config_path` must exist. Otherwise the profile's files under
    `configs_dir` (default `./configs`) that exist are merged; when none do,
    built-in defaults are returned with an empty file list.
    """

    if config_path is not None:
        paths = [config_path]
    else:
        candidates = resolve_profile_configs(profile=profile, configs_dir=configs_dir or Path.cwd() / "configs")
        paths = [p for p in candidates if p.exists()]
        if not paths:
            return AppConfig(), []

    return AppConfig.from_mapping(load_config(paths)), paths
