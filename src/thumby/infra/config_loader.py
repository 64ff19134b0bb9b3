"""Configuration loader with priority resolution.

The only setting is the optional YouTube Data API key used by the
resolver's fallback path.  Sources, highest priority first:

1. Explicit value (``--api-key``)
2. Explicit config file (``--config PATH``)
3. Environment variable ``THUMBY_YOUTUBE_API_KEY``
4. Project config (``.thumby/config.yaml``, searched upwards from cwd)
5. User config (``{root_dir}/config.yaml``)

Root directory: ``THUMBY_ROOT`` when set, else ``%APPDATA%\\thumby`` on
Windows and ``~/.thumby`` elsewhere.

Config files are YAML mappings::

    youtube_api_key: AIza...
"""

from __future__ import annotations

import enum
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from thumby.core.models import ResolverConfig
from thumby.exceptions import ConfigurationError, EnvironmentError

logger = logging.getLogger(__name__)

API_KEY_ENV = "THUMBY_YOUTUBE_API_KEY"
ROOT_ENV = "THUMBY_ROOT"
CONFIG_FILENAME = "config.yaml"
API_KEY_FIELD = "youtube_api_key"


class ConfigSource(enum.Enum):
    """Where the API key came from."""

    ARGUMENT = "argument"
    FILE = "file"
    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class LoadedConfig:
    config: ResolverConfig
    source: ConfigSource
    path: Path | None = None


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------

def _load_yaml() -> Any:
    try:
        import yaml
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "PyYAML is not installed. Install with: pip install PyYAML",
        ) from exc
    return yaml


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    """Parse *config_path* as a YAML mapping.

    Raises
    ------
    ConfigurationError
        When the file cannot be read, is not valid YAML, or is not a
        mapping.
    """
    yaml = _load_yaml()
    try:
        with open(config_path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read config file {config_path}: {exc.strerror or exc}",
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Config file {config_path} is not valid YAML.",
            hint=str(exc),
        ) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a YAML mapping.",
            hint=f"Expected e.g. '{API_KEY_FIELD}: <key>'",
        )
    return data


def _key_from_file(config_path: Path) -> str | None:
    """Return the API key from an implicitly discovered file, if usable."""
    if not config_path.is_file():
        return None
    try:
        data = _read_yaml_config(config_path)
    except ConfigurationError as exc:
        logger.warning("Ignoring config file: %s", exc)
        return None
    return _clean(data.get(API_KEY_FIELD))


def _clean(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def get_root_dir() -> Path:
    """Return the thumby root directory (may not exist)."""
    env_root = os.environ.get(ROOT_ENV)
    if env_root:
        return Path(env_root).expanduser().resolve()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "thumby"
        return Path.home() / "AppData" / "Roaming" / "thumby"
    return Path.home() / ".thumby"


def find_project_config(start: Path | None = None) -> Path | None:
    """Find ``.thumby/config.yaml`` in *start* (default cwd) or a parent."""
    cwd = start if start is not None else Path.cwd()
    for parent in (cwd, *cwd.parents):
        config_path = parent / ".thumby" / CONFIG_FILENAME
        if config_path.is_file():
            return config_path
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_config(
    api_key: str | None = None,
    config_path: Path | None = None,
) -> LoadedConfig:
    """Resolve the resolver configuration from all sources.

    Raises
    ------
    ConfigurationError
        When *config_path* is given but cannot be used.
    """
    key = _clean(api_key)
    if key:
        return LoadedConfig(ResolverConfig(youtube_api_key=key), ConfigSource.ARGUMENT)

    if config_path is not None:
        if not config_path.is_file():
            raise ConfigurationError(f"Config file not found: {config_path}")
        key = _clean(_read_yaml_config(config_path).get(API_KEY_FIELD))
        logger.debug("Using config file %s", config_path)
        return LoadedConfig(
            ResolverConfig(youtube_api_key=key), ConfigSource.FILE, config_path,
        )

    key = _clean(os.environ.get(API_KEY_ENV))
    if key:
        logger.debug("Using API key from %s", API_KEY_ENV)
        return LoadedConfig(ResolverConfig(youtube_api_key=key), ConfigSource.ENV)

    project_path = find_project_config()
    if project_path is not None:
        key = _key_from_file(project_path)
        if key:
            logger.debug("Using API key from project config %s", project_path)
            return LoadedConfig(
                ResolverConfig(youtube_api_key=key), ConfigSource.PROJECT, project_path,
            )

    user_path = get_root_dir() / CONFIG_FILENAME
    key = _key_from_file(user_path)
    if key:
        logger.debug("Using API key from user config %s", user_path)
        return LoadedConfig(
            ResolverConfig(youtube_api_key=key), ConfigSource.USER, user_path,
        )

    return LoadedConfig(ResolverConfig(), ConfigSource.DEFAULT)
