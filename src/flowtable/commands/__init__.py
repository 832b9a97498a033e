"""
flowtable.commands - CLI command implementations
"""

from flowtable.commands import config_cmd, render

__all__ = [
    "config_cmd",
    "render",
]
