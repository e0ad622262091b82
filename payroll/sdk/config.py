"""Configuration management for Payroll Ledger.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - data_dir: custom directory for the CSV data files
   - strict_validation: reject inverted leave ranges and negative fields
   - backup_on_save: copy each data file to <file>.bak before overwriting

2. rules.yaml - Optional payroll rules override (see rules.py)
   - tax brackets, allowance rates, default leave days

Config directory resolution:
1. PAYROLL_CONFIG_PATH environment variable (if set)
2. ~/.config/payroll-ledger/ (XDG_CONFIG_HOME fallback)

Data path resolution:
1. settings.json "data_dir" key (if set via CLI)
2. XDG_DATA_HOME/payroll-ledger/ or ~/.local/share/payroll-ledger/
"""

import json
import os
from pathlib import Path
from typing import Any


APP_NAME = "payroll-ledger"
SETTINGS_FILENAME = "settings.json"
RULES_FILENAME = "rules.yaml"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. PAYROLL_CONFIG_PATH environment variable
    2. ~/.config/payroll-ledger/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("PAYROLL_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def get_rules_path() -> Path:
    """Get the path to rules.yaml (may not exist yet)."""
    return get_config_dir() / RULES_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "data_dir", "strict_validation")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_data_path() -> Path:
    """Get the data directory path.

    Uses the "data_dir" setting when present, otherwise
    XDG_DATA_HOME/payroll-ledger/.

    Returns:
        Path to the data directory (created if doesn't exist)
    """
    custom = get_setting("data_dir")
    if custom:
        data_path = Path(custom).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


def is_strict() -> bool:
    """True if strict validation is enabled in settings.json."""
    return bool(get_setting("strict_validation", False))
