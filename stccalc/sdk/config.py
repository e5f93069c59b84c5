"""Configuration management for stc-calc.

Configuration is split into two files:

1. defaults.yaml - shipped with the package (stccalc/config/defaults.yaml)
   - tax_rates and broker_fees used when the user sets nothing

2. profile.yaml - the user's overrides
   - tax_rates: any of federal, medicare, social_security, state, local
   - broker_fees: any of commission_rate, minimum_fee, flat_fee

An optional settings.json in the config directory may point "profile" at
a profile.yaml elsewhere.

Config directory resolution:
1. STC_CALC_CONFIG_PATH environment variable (if set)
2. $XDG_CONFIG_HOME/stc-calc/ (default ~/.config/stc-calc/)
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .schemas import StcConfig

logger = logging.getLogger(__name__)

APP_NAME = "stc-calc"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"
CONFIG_SECTIONS = ("tax_rates", "broker_fees")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. STC_CALC_CONFIG_PATH environment variable
    2. ~/.config/stc-calc/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("STC_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings.json (empty dict if it doesn't exist)."""
    settings_file = get_settings_path()
    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def get_profile_path() -> Path:
    """Get the path to profile.yaml (may not exist yet).

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in the config directory
    """
    custom_profile = load_settings().get("profile")
    if custom_profile:
        return Path(custom_profile).expanduser()
    return get_config_dir() / PROFILE_FILENAME


def get_defaults_path() -> Path:
    return Path(__file__).parent.parent / "config" / "defaults.yaml"


def load_defaults() -> dict:
    """Load the shipped default tax rates and broker fees."""
    with open(get_defaults_path(), "r") as f:
        return yaml.safe_load(f)


def load_profile() -> dict:
    """Load user overrides from profile.yaml (empty dict if not found)."""
    profile_path = get_profile_path()
    if not profile_path.exists():
        return {}

    try:
        with open(profile_path, "r") as f:
            profile = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {profile_path}: {e}") from e

    if not isinstance(profile, dict):
        raise ConfigError(f"{profile_path} must contain a mapping, got {type(profile).__name__}")
    return profile


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Save user overrides to profile.yaml.

    Returns:
        Path to the saved profile file
    """
    if path is None:
        path = get_profile_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False)

    return path


def _merge(defaults: dict, profile: dict) -> dict:
    merged = copy.deepcopy(defaults)
    for section, values in profile.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def build_config(profile: dict) -> StcConfig:
    """Validate profile overrides on top of the defaults.

    Raises:
        ConfigError: If a key is unknown or a value is not a number
    """
    merged = _merge(load_defaults(), profile)
    try:
        return StcConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration:\n{e}") from e


def load_config() -> StcConfig:
    """Load the effective configuration: defaults overlaid with profile.yaml."""
    config = build_config(load_profile())
    logger.debug(f"loaded config from {get_profile_path()}: {config.model_dump()}")
    return config


def save_config(config: StcConfig) -> Path:
    """Write a complete configuration to profile.yaml."""
    return save_profile(config.model_dump())


def get_config_value(key: str) -> Any:
    """Get an effective config value by dot-notation key.

    Args:
        key: e.g. "tax_rates.state" or "broker_fees.minimum_fee"

    Raises:
        KeyError: If the key does not name a config value
    """
    value = load_config().model_dump()
    for part in key.split("."):
        if not isinstance(value, dict) or part not in value:
            raise KeyError(key)
        value = value[part]
    return value


def set_config_value(key: str, value: Any) -> Path:
    """Set a config value in profile.yaml by dot-notation key.

    The updated profile is validated before it is written, so an unknown
    key or a non-numeric value leaves profile.yaml unchanged.

    Args:
        key: "<section>.<name>", e.g. "tax_rates.state"
        value: New value

    Returns:
        Path to the saved profile file

    Raises:
        ConfigError: Unknown key or invalid value
    """
    parts = key.split(".")
    if len(parts) != 2 or parts[0] not in CONFIG_SECTIONS:
        raise ConfigError(
            f"Invalid key '{key}'. Use <section>.<name> with section one of: {', '.join(CONFIG_SECTIONS)}"
        )

    section, name = parts
    profile = load_profile()
    current = profile.setdefault(section, {})
    if not isinstance(current, dict):
        raise ConfigError(f"'{section}' in {get_profile_path()} is not a mapping")
    current[name] = value

    validated = build_config(profile)
    current[name] = getattr(getattr(validated, section), name)
    return save_profile(profile)


def reset_config() -> bool:
    """Delete profile.yaml so the defaults apply again.

    Returns:
        True if a profile was removed
    """
    profile_path = get_profile_path()
    if not profile_path.exists():
        return False
    profile_path.unlink()
    return True
