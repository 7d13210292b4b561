"""Configuration file management for subtrackr."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CONFIG: dict[str, Any] = {
    "currency": "KRW",
    "upcoming_days": 7,
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "subtrackr" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(dict(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If config file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


class ConfigError(ValueError):
    """Raised when the config file cannot be read or holds a bad value."""


def _check_setting(name: str, value: Any) -> Any:
    """Validate a configured value against its default's type.

    Raises:
        ConfigError: If the value has the wrong type or is out of range.
    """
    if name == "upcoming_days":
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"'upcoming_days' must be a whole number of days, got {value!r}")
        return value

    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{name}' must be a non-empty string, got {value!r}")
    return value.strip()


def get_setting(name: str, config_path: Path | None = None) -> Any:
    """Get a single setting, falling back to its default.

    Args:
        name: Setting name (e.g. "currency").
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configured value, or the default when the file or key is missing.

    Raises:
        KeyError: If name is not a known setting.
        ConfigError: If the config file is not valid TOML or the value is invalid.
    """
    if name not in DEFAULT_CONFIG:
        raise KeyError(f"Unknown setting '{name}'")

    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return DEFAULT_CONFIG[name]
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Config file is not valid TOML: {e}") from e

    if name not in config:
        return DEFAULT_CONFIG[name]
    return _check_setting(name, config[name])
