"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for swagport:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.swagport/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~swagport.models.GlobalConfig`
  JSON file storing import and output defaults.
* **Project config** -- An optional ``./swagport.json`` with the same shape,
  for settings a repository wants to pin.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and global config into the
  final effective configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from swagport.exceptions import ConfigError
from swagport.models import GlobalConfig

_APP_NAME = "swagport"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "swagport.json"

# Environment variable -> dotted config key.
ENV_OVERRIDES = {
    "SWAGPORT_EXPAND": "importer.expand",
    "SWAGPORT_RESPONSE_MIME_TYPE": "importer.response_mime_type",
    "SWAGPORT_TIMEOUT": "importer.timeout",
    "SWAGPORT_FORMAT": "output.format",
}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/swagport/`` (default ``~/.config/swagport/``).
    On macOS/Windows: ``~/.swagport/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/swagport/`` (default ``~/.local/share/swagport/``).
    On macOS/Windows: ``~/.swagport/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def _read_json(path: Path, label: str) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~swagport.models.GlobalConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./swagport.json``.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    return _read_json(path, "project config")


# --- Dotted keys ---


def set_config_value(config: GlobalConfig, key: str, value: Any) -> GlobalConfig:
    """Return a copy of *config* with the dotted *key* set to *value*.

    Values are validated (and coerced, e.g. ``"true"`` -> ``True``) by the
    config models.

    Raises:
        ConfigError: If the key is unknown or the value is invalid.
    """
    section, _, field_name = key.partition(".")
    data = config.model_dump()
    if section not in data or field_name not in data[section]:
        raise ConfigError(f"Unknown config key: {key}")
    data[section][field_name] = value
    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from exc


def _merge_sections(config: GlobalConfig, overrides: dict[str, Any], source: str) -> GlobalConfig:
    data = config.model_dump()
    for section, values in overrides.items():
        if section not in data or not isinstance(values, dict):
            raise ConfigError(f"Unknown config section '{section}' in {source}")
        data[section].update(values)
    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid {source}: {exc}") from exc


# --- Precedence resolution ---


def resolve_config(
    cli_expand: Optional[bool] = None,
    cli_response_mime_type: Optional[str] = None,
    cli_timeout: Optional[float] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (see :data:`ENV_OVERRIDES`)
        3. Project config (``./swagport.json``)
        4. User config (``~/.config/swagport/config.json``)
        5. Defaults

    Raises:
        ConfigError: If any layer holds an unknown key or an invalid value.
    """
    config = load_global_config()

    project = load_project_config()
    if project is not None:
        config = _merge_sections(config, project, "project config")

    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            config = set_config_value(config, key, value)

    cli_values = {
        "importer.expand": cli_expand,
        "importer.response_mime_type": cli_response_mime_type,
        "importer.timeout": cli_timeout,
        "output.format": cli_format,
    }
    for key, value in cli_values.items():
        if value is not None:
            config = set_config_value(config, key, value)

    return config
