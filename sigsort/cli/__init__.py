"""Command-line interface support: terminal output, formatters and command handlers."""
