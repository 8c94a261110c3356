"""
Configuration commands for the sigsort CLI (show, init, validate).
"""

from ...config import ConfigurationError, SigsortConfig
from ..rich_output import get_rich_output


def cmd_config(args) -> int:
    """Handle config command."""
    output = get_rich_output()

    if args.config_action == "show":
        config = SigsortConfig.load(getattr(args, "config", None))
        print("Current sigsort Configuration:")
        print(config.get_config_summary())
        return 0

    if args.config_action == "init":
        config = SigsortConfig.default()
        config.to_file(args.path, args.format)
        output.print_success(f"Default configuration file created at {args.path}")
        return 0

    if args.config_action == "validate":
        try:
            SigsortConfig.load(args.config_file, use_env=False, validate=True)
        except ConfigurationError as e:
            output.print_error(f"Configuration file is invalid: {e}")
            return 1
        output.print_success(f"Configuration file {args.config_file} is valid")
        return 0

    output.print_error("Specify a config action: show, init or validate")
    return 1
