"""
flowtable.config.loader - Configuration file loading.

Finds and parses .flowtable.toml, merges it over the defaults and
applies FLOWTABLE_<SECTION>_<KEY> environment overrides.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomlkit

from flowtable.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, OUTPUT_FORMATS

ENV_PREFIX = "FLOWTABLE_"


def find_config_file(start_dir: Path) -> Optional[Path]:
    """Find the nearest configuration file, walking up from start_dir.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to the config file, or None if not found
    """
    current = start_dir.resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge override into a copy of base.

    Nested dicts are merged key by key; any other value in override
    replaces the one in base.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment variable value into a typed value.

    Booleans ("true"/"false", any case) and JSON arrays/objects are
    decoded; everything else, including malformed JSON, stays a string.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply FLOWTABLE_<SECTION>_<KEY> variables to config in place.

    FLOWTABLE_RENDER_SHOW_IDS=false sets config["render"]["show_ids"].
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        config.setdefault(section, {})[key] = _try_parse_env_value(raw)
    return config


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of config with environment overrides applied."""
    return _apply_env_overrides(copy.deepcopy(config))


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Check a configuration for invalid values.

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []
    render = config.get("render", {})
    if not isinstance(render, dict):
        return ["[render] must be a table"]

    fmt = render.get("format", "text")
    if fmt not in OUTPUT_FORMATS:
        errors.append(
            f"render.format must be one of {', '.join(OUTPUT_FORMATS)} (got {fmt!r})"
        )
    if not isinstance(render.get("indent", ""), str):
        errors.append("render.indent must be a string")
    if not isinstance(render.get("show_ids", True), bool):
        errors.append("render.show_ids must be true or false")
    return errors


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from a TOML file, merged over the defaults.

    Args:
        config_path: Path to the configuration file

    Returns:
        Configuration dict

    Raises:
        ValueError: If the file contains invalid settings
    """
    text = config_path.read_text(encoding="utf-8")
    user_config = tomlkit.parse(text).unwrap()

    config = merge_configs(DEFAULT_CONFIG, user_config)
    config = _apply_env_overrides(config)

    errors = validate_config(config)
    if errors:
        raise ValueError(f"Invalid configuration in {config_path}: " + "; ".join(errors))
    return config


def get_config_value(config: Dict[str, Any], dotted_key: str, default: Any = None) -> Any:
    """Look up a value by dotted key, e.g. "render.indent"."""
    current: Any = config
    for part in dotted_key.split("."):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current
