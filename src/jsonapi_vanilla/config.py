"""Configuration management with XDG paths, atomic writes, and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.jsonapi-vanilla/`` on macOS and Windows.  See :func:`get_config_dir`
  and :func:`get_data_dir`.
* **Global config** -- a single :class:`~jsonapi_vanilla.models.GlobalConfig`
  JSON file holding output defaults.
* **Precedence resolution** -- :func:`resolve_config` layers environment
  variables and CLI flags over the stored config.

Writes go through a temp-file-then-rename (:func:`_atomic_write`) so a crash
never leaves a half-written config behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from jsonapi_vanilla.exceptions import ConfigError
from jsonapi_vanilla.models import GlobalConfig, OutputConfig

_APP_NAME = "jsonapi-vanilla"
_CONFIG_FILENAME = "config.json"
_ENV_FORMAT = "JSONAPI_VANILLA_FORMAT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/BSD)."""
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

    On Linux/BSD: ``$XDG_CONFIG_HOME/jsonapi-vanilla/`` (default
    ``~/.config/jsonapi-vanilla/``).  On macOS/Windows: ``~/.jsonapi-vanilla/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/jsonapi-vanilla/`` (default
    ``~/.local/share/jsonapi-vanilla/``).  On macOS/Windows:
    ``~/.jsonapi-vanilla/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to *path* atomically using a sibling temp file and ``os.replace``."""
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
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration, or defaults when no file exists.

    Raises:
        ConfigError: If the file exists but holds invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_config(cli_format: Optional[str] = None) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_format``)
        2. Environment variable ``JSONAPI_VANILLA_FORMAT``
        3. User config (``~/.config/jsonapi-vanilla/config.json``)
        4. Defaults

    Raises:
        ConfigError: If the stored config or an override is invalid.
    """
    config = load_global_config()

    fmt = cli_format or os.environ.get(_ENV_FORMAT) or None
    if fmt is not None:
        try:
            config.output = OutputConfig.model_validate(
                {**config.output.model_dump(), "format": fmt}
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid output format {fmt!r}") from exc

    return config
