"""
CLI command handlers.

Organized by functional domain:
- sorting.py: sort, check and stats commands
- config.py: configuration commands
"""

from .config import cmd_config
from .sorting import cmd_check, cmd_sort, cmd_stats

__all__ = [
    "cmd_check",
    "cmd_config",
    "cmd_sort",
    "cmd_stats",
]
