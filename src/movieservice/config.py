"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles the optional persistent configuration for movieservice:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.movieservice/`` on macOS and Windows. See :func:`get_config_dir`
  and :func:`get_cache_dir`.
* **Config file** -- a single ``config.json`` holding
  :class:`~movieservice.models.ServiceConfig` fields. The API key may be
  given literally (``api_key``) or through ``api_key_source``.
* **Precedence resolution** -- :func:`load_service_config` merges keyword
  overrides, environment variables, the config file, and model defaults.
* **Credential resolution** -- :func:`resolve_credential` reads the API key
  from an env var, a file, or a literal string.

File writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from movieservice.exceptions import ConfigError
from movieservice.models import ServiceConfig

_APP_NAME = "movieservice"
_CONFIG_FILENAME = "config.json"

ENV_BASE_URL = "MOVIESERVICE_BASE_URL"
ENV_API_KEY = "MOVIESERVICE_API_KEY"
ENV_IMAGE_BASE_URL = "MOVIESERVICE_IMAGE_BASE_URL"


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

    On Linux/BSD: ``$XDG_CONFIG_HOME/movieservice/`` (default
    ``~/.config/movieservice/``). On macOS/Windows: ``~/.movieservice/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    Holds the poster byte store. Cached data can be safely deleted at any
    time.

    On Linux/BSD: ``$XDG_CACHE_HOME/movieservice/`` (default
    ``~/.cache/movieservice/``). On macOS/Windows: ``~/.movieservice/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_path() -> Path:
    """Path to the config file."""
    return get_config_dir() / _CONFIG_FILENAME


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
        fd = None  # prevent double-close below
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


# --- Config file ---


def load_config_file(path: Optional[Path] = None) -> dict[str, Any]:
    """Load the raw config file.

    Args:
        path: Explicit file to read. Defaults to :func:`config_path`.

    Returns:
        The parsed JSON object, or an empty dict if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = path or config_path()
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}", cause=exc) from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config at {path}: expected a JSON object")
    return data


def save_service_config(
    config: ServiceConfig,
    path: Optional[Path] = None,
    api_key_source: Optional[str] = None,
) -> Path:
    """Persist a service configuration atomically.

    Args:
        config: The configuration to save.
        path: Destination file. Defaults to :func:`config_path`.
        api_key_source: When given, written in place of the literal
            ``api_key`` so the secret stays out of the file.

    Returns:
        The path written.
    """
    path = path or config_path()
    data = config.model_dump(mode="json")
    if api_key_source is not None:
        del data["api_key"]
        data["api_key_source"] = api_key_source
    _atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


def load_service_config(path: Optional[Path] = None, **overrides: Any) -> ServiceConfig:
    """Resolve the service configuration with its full precedence chain.

    Precedence (high to low):
        1. Keyword ``overrides`` (any :class:`ServiceConfig` field)
        2. Environment variables (``MOVIESERVICE_BASE_URL``,
           ``MOVIESERVICE_API_KEY``, ``MOVIESERVICE_IMAGE_BASE_URL``)
        3. Config file (``~/.config/movieservice/config.json``)
        4. Model defaults

    Raises:
        ConfigError: If the file is invalid, the credential source cannot
            be resolved, or the merged values fail validation (for example
            no ``base_url`` or ``api_key`` anywhere).
    """
    values = load_config_file(path)
    source = values.pop("api_key_source", None)

    for env_var, field in (
        (ENV_BASE_URL, "base_url"),
        (ENV_API_KEY, "api_key"),
        (ENV_IMAGE_BASE_URL, "image_base_url"),
    ):
        env_value = os.environ.get(env_var)
        if env_value:
            values[field] = env_value

    values.update({k: v for k, v in overrides.items() if v is not None})

    # The credential source is only consulted when nothing above supplied a key.
    if source is not None and "api_key" not in values:
        values["api_key"] = resolve_credential(source)

    try:
        return ServiceConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid service configuration: {exc}", cause=exc) from exc


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve the API credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - anything else -- used literally

    Raises:
        ConfigError: If the env var is unset or the file can't be read.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}", cause=exc) from exc

    return source
