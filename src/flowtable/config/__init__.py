"""
flowtable.config - Configuration loading and defaults
"""

from flowtable.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from flowtable.config.loader import (
    apply_env_overrides,
    find_config_file,
    get_config_value,
    load_config,
    merge_configs,
    validate_config,
)

__all__ = [
    "load_config",
    "find_config_file",
    "merge_configs",
    "validate_config",
    "apply_env_overrides",
    "get_config_value",
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
]
