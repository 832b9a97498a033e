"""
flowtable.config.defaults - Default configuration values.
"""

from typing import Any, Dict

CONFIG_FILENAME = ".flowtable.toml"

OUTPUT_FORMATS = ("text", "json", "csv")

DEFAULT_CONFIG: Dict[str, Any] = {
    "render": {
        # text | json | csv
        "format": "text",
        # Repeated once per depth level in text output
        "indent": "  ",
        # Show node ids next to labels in text output
        "show_ids": True,
    },
}
