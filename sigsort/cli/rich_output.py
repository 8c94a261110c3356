"""
Rich terminal output utilities for the sigsort CLI.

Status messages go to stderr so that stdout only ever carries command
results (sorted text, JSON, tables). Plain mode prints the same content
without markup or colors.
"""

import json
from typing import Any, Dict, List, Union

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table


class RichOutputManager:
    """Manages rich terminal output with a plain-text mode."""

    def __init__(self, use_rich: bool = True, no_color: bool = False):
        """Initialize the output manager."""
        self.use_rich = use_rich
        self.console = Console(highlight=False, emoji=False, no_color=no_color or not use_rich)
        self.err_console = Console(stderr=True, highlight=False, emoji=False, no_color=no_color or not use_rich)

    def _message(self, symbol: str, style: str, message: str) -> None:
        if self.use_rich:
            self.err_console.print(f"[{style}]{symbol}[/{style}] {message}")
        else:
            self.err_console.print(f"{symbol} {message}", markup=False, soft_wrap=True)

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self._message("✓", "green", message)

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self._message("⚠", "yellow", message)

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self._message("✗", "red", message)

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self._message("ℹ", "blue", message)

    def create_table(self, title: str, columns: List[str]) -> Union[Table, Dict]:
        """Create a table; a plain dict in plain mode."""
        if self.use_rich:
            table = Table(title=title, show_header=True, header_style="bold blue")
            for column in columns:
                table.add_column(column)
            return table
        return {"title": title, "columns": columns, "rows": []}

    def add_table_row(self, table: Union[Table, Dict], *values) -> None:
        """Add a row to the table."""
        if isinstance(table, Table):
            table.add_row(*[str(v) for v in values])
        else:
            table["rows"].append(values)

    def print_table(self, table: Union[Table, Dict]) -> None:
        """Print the table."""
        if isinstance(table, Table):
            self.console.print(table)
            return

        self.console.print(f"\n{table['title']}", markup=False, soft_wrap=True)
        self.console.print("-" * len(table["title"]), markup=False, soft_wrap=True)

        header = " | ".join(table["columns"])
        self.console.print(header, markup=False, soft_wrap=True)
        self.console.print("-" * len(header), markup=False, soft_wrap=True)

        for row in table["rows"]:
            self.console.print(" | ".join(str(v) for v in row), markup=False, soft_wrap=True)
        self.console.print()

    def print_json(self, data: Any) -> None:
        """Print JSON data, highlighted in rich mode."""
        json_str = json.dumps(data, indent=2, default=str)
        if self.use_rich and self.console.is_terminal:
            self.console.print(Syntax(json_str, "json", theme="monokai"))
        else:
            self.console.print(json_str, markup=False, soft_wrap=True)


# Global instance
rich_output = RichOutputManager()


def set_rich_enabled(enabled: bool, no_color: bool = False) -> None:
    """Enable or disable rich output globally."""
    global rich_output
    rich_output = RichOutputManager(use_rich=enabled, no_color=no_color)


def get_rich_output() -> RichOutputManager:
    """Get the global rich output manager."""
    return rich_output
