"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for gqlide:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.gqlide/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~gqlide.models.GlobalConfig`
  JSON file storing defaults (output format, extension allow/deny lists).
* **Profiles** -- One JSON file per GraphQL endpoint, each deserialised
  into a :class:`~gqlide.models.Profile`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables and global config into the effective configuration.
* **Credential resolution** -- :func:`resolve_credential` reads secrets
  from env vars, files, literal values or interactive prompts.
* **Local storage** -- a small key/value JSON file standing in for the
  browser's local storage. It holds the authenticated/public toggle under
  :data:`AUTH_PREFERENCE_KEY`.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import getpass
import json
import logging
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Any, Optional

from gqlide.exceptions import ConfigError
from gqlide.models import GlobalConfig, Profile

logger = logging.getLogger(__name__)

_APP_NAME = "gqlide"
_CONFIG_FILENAME = "config.json"
_LOCAL_STORAGE_FILENAME = "local-storage.json"

AUTH_PREFERENCE_KEY = "graphiql:isAuthenticated"
"""Local-storage key holding ``"true"`` or ``"false"`` for the auth toggle."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
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

    On Linux/BSD: ``$XDG_CONFIG_HOME/gqlide/`` (default ``~/.config/gqlide/``).
    On macOS/Windows: ``~/.gqlide/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (local storage, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/gqlide/`` (default ``~/.local/share/gqlide/``).
    On macOS/Windows: ``~/.gqlide/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_profiles_dir() -> Path:
    """Return the profiles directory (``<config_dir>/profiles/``), creating it if necessary."""
    path = get_config_dir() / "profiles"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the error re-raised.
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


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration, returning defaults when the file is absent.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Profiles ---


def _profile_path(name: str) -> Path:
    return get_profiles_dir() / f"{name}.json"


def list_profiles() -> list[str]:
    """Return all profile names found in the profiles directory, sorted alphabetically."""
    return sorted(p.stem for p in get_profiles_dir().glob("*.json") if p.is_file())


def load_profile(name: str) -> Profile:
    """Load and validate a profile from disk.

    Raises:
        ConfigError: If the profile file does not exist, contains invalid
            JSON, or fails Pydantic validation.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Profile.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid profile '{name}' at {path}: {exc}") from exc


def save_profile(profile: Profile) -> None:
    """Persist a profile atomically; the file name is derived from ``profile.name``."""
    data = profile.model_dump(mode="json")
    _atomic_write(_profile_path(profile.name), json.dumps(data, indent=2) + "\n")


def delete_profile(name: str) -> None:
    """Delete a profile's JSON file from disk.

    Raises:
        ConfigError: If the profile does not exist.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    path.unlink()


def profile_exists(name: str) -> bool:
    return _profile_path(name).is_file()


# --- Precedence resolution ---


def resolve_config(
    cli_profile: Optional[str] = None,
    cli_endpoint: Optional[str] = None,
) -> tuple[GlobalConfig, Optional[Profile]]:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_profile``, ``cli_endpoint``)
        2. Environment variables (``GQLIDE_PROFILE``, ``GQLIDE_ENDPOINT``)
        3. User config (``~/.config/gqlide/config.json``)
        4. Defaults

    When no profile is named anywhere but an endpoint is given, an
    ad-hoc profile called ``default`` is built around it.

    Returns:
        A tuple of ``(global_config, active_profile_or_None)``.
    """
    global_cfg = load_global_config()

    resolved_profile_name: Optional[str] = global_cfg.default_profile
    env_profile = os.environ.get("GQLIDE_PROFILE")
    if env_profile:
        resolved_profile_name = env_profile
    if cli_profile is not None:
        resolved_profile_name = cli_profile

    if resolved_profile_name is None and global_cfg.auto_select_single_profile:
        profiles = list_profiles()
        if len(profiles) == 1:
            resolved_profile_name = profiles[0]

    endpoint = cli_endpoint or os.environ.get("GQLIDE_ENDPOINT") or None

    profile: Optional[Profile] = None
    if resolved_profile_name is not None:
        profile = load_profile(resolved_profile_name)
        if endpoint:
            profile.endpoint = endpoint
    elif endpoint:
        profile = Profile(name="default", endpoint=endpoint)

    return global_cfg, profile


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"value:LITERAL"`` -- the literal text after the prefix
        - ``"prompt"`` -- prompts user interactively (requires a TTY)

    Raises:
        ConfigError: If the source can't be resolved.
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
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source.startswith("value:"):
        return source[6:]

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Enter credential: ")

    raise ConfigError(f"Unknown credential source format: {source}")


# --- Local storage ---


def _local_storage_path() -> Path:
    return get_data_dir() / _LOCAL_STORAGE_FILENAME


def _read_local_storage() -> dict[str, Any]:
    path = _local_storage_path()
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable local storage at %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def get_local_item(key: str) -> Optional[str]:
    """Return the string stored under *key*, or ``None`` when it is absent."""
    value = _read_local_storage().get(key)
    return None if value is None else str(value)


def set_local_item(key: str, value: str) -> None:
    """Store *value* under *key*, keeping every other key intact."""
    data = _read_local_storage()
    data[key] = value
    _atomic_write(_local_storage_path(), json.dumps(data, indent=2) + "\n")


def load_auth_preference() -> bool:
    """Read the persisted authenticated/public toggle.

    Anything other than the literal ``"false"`` counts as authenticated,
    so a fresh install starts in authenticated mode.
    """
    return get_local_item(AUTH_PREFERENCE_KEY) != "false"


def save_auth_preference(is_authenticated: bool) -> None:
    """Persist the authenticated/public toggle as ``"true"`` or ``"false"``."""
    set_local_item(AUTH_PREFERENCE_KEY, "true" if is_authenticated else "false")
