"""Configuration loading and management for shipit."""

from pathlib import Path

from .core.exceptions import ConfigFileError, ConfigValidationError
from .core.settings import find_config_file, load_settings

VALID_LOG_LEVELS = {"debug", "info", "warning", "error"}

# Config keys that can be set via `shipit config`
CONFIGURABLE_KEYS = {
    "runner.max_buffer": {
        "type": int,
        "default": 10 * 1024 * 1024,
        "description": "Maximum bytes of output captured per command before it is killed",
    },
    "runner.timeout": {
        "type": float,
        "default": 900,
        "description": "Seconds before a command is killed (0 disables the timeout)",
    },
    "git.remote": {
        "type": str,
        "default": "origin",
        "description": "Remote that deploys are pushed to",
    },
    "git.default_branch": {
        "type": str,
        "default": "main",
        "description": "Branch pushed when the current branch cannot be determined",
    },
    "git.commit_message": {
        "type": str,
        "default": "deploy: automatic",
        "description": "Commit message used for deploy commits",
    },
    "build.command": {
        "type": str,
        "default": "npm run build",
        "description": "Command that builds the project before a Vercel deploy",
    },
    "vercel.command": {
        "type": str,
        "default": "npx vercel",
        "description": "Vercel CLI invocation",
    },
    "vercel.secret_key": {
        "type": str,
        "default": "vercelToken",
        "description": "Secret store key holding the Vercel token",
    },
    "vercel.default_name": {
        "type": str,
        "default": "deploy-project",
        "description": "Project name used when none can be derived",
    },
    "secrets.path": {
        "type": str,
        "default": None,
        "description": "Path of the secret store file (default ~/.shipit/secrets.json)",
    },
    "logging.level": {
        "type": str,
        "default": "warning",
        "description": "Log level (debug, info, warning, error)",
    },
    "logging.console": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to stderr",
    },
    "logging.file": {
        "type": bool,
        "default": True,
        "description": "Output debug logs to ~/.shipit/shipit.log",
    },
}

# Section order used when writing config.toml
_SECTIONS = ["runner", "git", "build", "vercel", "secrets", "logging"]


def _get_default_config() -> dict:
    """Get default config from Pydantic models."""
    from .core.models.config import ShipitConfig

    return ShipitConfig().to_dict()


def _get_nested(d: dict, key: str, default=None):
    """Get a nested key like 'git.remote'."""
    parts = key.split(".")
    for part in parts:
        if isinstance(d, dict) and part in d:
            d = d[part]
        else:
            return default
    return d


def _set_nested(d: dict, key: str, value):
    """Set a nested key like 'git.remote'."""
    parts = key.split(".")
    for part in parts[:-1]:
        if part not in d:
            d[part] = {}
        d = d[part]
    d[parts[-1]] = value


def _toml_value(val) -> str:
    """Format a scalar as a TOML value."""
    if isinstance(val, bool):
        return str(val).lower()
    if isinstance(val, str):
        escaped = val.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return str(val)


def load_config(config_path: Path | None = None, start_dir: str | None = None) -> dict:
    """
    Load configuration from file.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        Configuration dict with defaults applied
    """
    settings = load_settings(config_path=config_path, start_dir=start_dir)
    return settings.to_dict()


def get_shipit_dir(start_dir: str | None = None) -> Path:
    """
    Get the .shipit directory path, creating it if needed.

    Returns:
        Path to .shipit directory in start_dir or cwd.
    """
    base = Path(start_dir) if start_dir else Path.cwd()
    shipit_dir = base / ".shipit"
    shipit_dir.mkdir(exist_ok=True)
    return shipit_dir


def get_config_path_for_write(start_dir: str | None = None) -> Path:
    """
    Get the path where config should be written.

    Prefers existing .shipit/config.toml, otherwise creates one in start_dir or cwd.
    """
    existing = find_config_file(start_dir)
    if existing and existing.name == "config.toml":
        return existing

    shipit_dir = get_shipit_dir(start_dir)
    return shipit_dir / "config.toml"


def save_config(config: dict, config_path: Path):
    """
    Save configuration to a .shipit/config.toml file.

    Only saves non-default values.
    """
    # Build TOML content manually (to avoid adding tomlkit dependency)
    lines = []

    defaults = _get_default_config()

    for section in _SECTIONS:
        section_lines = []
        for key, val in config.get(section, {}).items():
            default_val = defaults.get(section, {}).get(key)
            if val != default_val and val is not None:
                section_lines.append(f"{key} = {_toml_value(val)}")

        if section_lines:
            lines.append(f"[{section}]")
            lines.extend(section_lines)
            lines.append("")

    try:
        config_path.write_text("\n".join(lines))
    except OSError as e:
        raise ConfigFileError(
            f"Cannot write config file: {e}", file_path=str(config_path), cause=e
        ) from e


def config_get(key: str, start_dir: str | None = None):
    """Get a config value."""
    config = load_config(start_dir=start_dir)
    return _get_nested(config, key)


def config_set(key: str, value: str, start_dir: str | None = None):
    """Set a config value and save to .shipit/config.toml."""
    from typing import Any

    if key not in CONFIGURABLE_KEYS:
        raise ConfigValidationError(
            f"Unknown config key: {key}. Valid keys: {', '.join(CONFIGURABLE_KEYS.keys())}",
            key=key,
        )

    key_info = CONFIGURABLE_KEYS[key]
    typed_value: Any

    if key_info["type"] is bool:  # type: ignore[index]
        if value.lower() in ("true", "1", "yes", "on"):
            typed_value = True
        elif value.lower() in ("false", "0", "no", "off"):
            typed_value = False
        else:
            raise ConfigValidationError(f"Invalid boolean value: {value}", key=key, value=value)
    elif key_info["type"] in (int, float):  # type: ignore[index]
        try:
            typed_value = key_info["type"](value)  # type: ignore[operator]
        except ValueError as e:
            raise ConfigValidationError(
                f"Invalid number: {value}", key=key, value=value, cause=e
            ) from e
        if typed_value < 0:
            raise ConfigValidationError(f"Value must not be negative: {value}", key=key, value=value)
    elif key == "logging.level":
        if value.lower() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"Invalid log level: {value}. "
                f"Valid levels: {', '.join(sorted(VALID_LOG_LEVELS))}",
                key=key,
                value=value,
            )
        typed_value = value.lower()
    else:
        if not value.strip():
            raise ConfigValidationError(f"{key} must not be empty", key=key, value=value)
        typed_value = value

    config = load_config(start_dir=start_dir)
    _set_nested(config, key, typed_value)

    # Validate the merged result before it reaches disk
    from pydantic import ValidationError

    from .core.models.config import ShipitConfig

    try:
        ShipitConfig.from_dict({s: config.get(s, {}) for s in _SECTIONS})
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid value for {key}: {e.errors()[0]['msg']}", key=key, value=value, cause=e
        ) from e

    config_path = get_config_path_for_write(start_dir)
    save_config(config, config_path)

    return config_path, typed_value


def config_list():
    """List all configurable keys with descriptions."""
    return CONFIGURABLE_KEYS
