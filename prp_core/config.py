"""Publisher settings resolved from arguments, environment and TOML."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError
from .registry_file import REGISTRY_FILENAME

GITHUB_OAUTH_TOKEN_ENV_NAME = "GITHUB_OAUTH"
CONFIG_SECTION = "publisher"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_REMOTE_NAME = "userFork"


@dataclass(frozen=True)
class PublisherSettings:
    github_api_url: str = DEFAULT_GITHUB_API_URL
    timeout_seconds: float = 30.0
    registry_file: str = REGISTRY_FILENAME
    remote_name: str = DEFAULT_REMOTE_NAME
    git_executable: str = "git"
    commit_author_name: str | None = None
    commit_author_email: str | None = None


_ENV_KEYS: dict[str, str] = {
    "github_api_url": "PRP_GITHUB_API_URL",
    "timeout_seconds": "PRP_TIMEOUT_SECONDS",
    "registry_file": "PRP_REGISTRY_FILE",
    "remote_name": "PRP_REMOTE_NAME",
    "git_executable": "PRP_GIT",
    "commit_author_name": "PRP_COMMIT_AUTHOR_NAME",
    "commit_author_email": "PRP_COMMIT_AUTHOR_EMAIL",
}


def load_config_file(path: Path) -> dict[str, Any]:
    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    section = payload.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{CONFIG_SECTION}] in {path} must be a table")
    unknown = sorted(set(section) - set(_ENV_KEYS))
    if unknown:
        raise ConfigError(f"unknown [{CONFIG_SECTION}] keys in {path}: {', '.join(unknown)}")
    return section


def _string_or_none(value: Any) -> str | None:
    if value is None:
        return None
    data = str(value).strip()
    return data if data else None


def load_settings(
    *,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> PublisherSettings:
    env = os.environ if environ is None else environ
    file_values = load_config_file(config_path) if config_path is not None else {}

    resolved: dict[str, Any] = {}
    for key, env_name in _ENV_KEYS.items():
        value = overrides.get(key)
        if value is None:
            value = _string_or_none(env.get(env_name))
        if value is None:
            value = file_values.get(key)
        if value is not None:
            resolved[key] = value

    try:
        if "timeout_seconds" in resolved:
            resolved["timeout_seconds"] = float(resolved["timeout_seconds"])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"timeout_seconds must be a number, got {resolved['timeout_seconds']!r}") from exc
    for key in ("github_api_url", "registry_file", "remote_name", "git_executable"):
        if key in resolved:
            text = _string_or_none(resolved[key])
            if text is None:
                raise ConfigError(f"{key} cannot be empty")
            resolved[key] = text
    for key in ("commit_author_name", "commit_author_email"):
        if key in resolved:
            resolved[key] = _string_or_none(resolved[key])
    if "github_api_url" in resolved:
        resolved["github_api_url"] = resolved["github_api_url"].rstrip("/")
    return PublisherSettings(**resolved)

