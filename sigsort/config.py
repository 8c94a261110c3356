"""
Configuration system for sigsort

Provides configuration management with support for files and environment variables.
Includes validation, default value handling, and configuration merging.
"""

import os
import json
import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any
import logging

from .errors import SigsortError

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("rbs", "json", "yaml")
MAX_INDENT = 8


class ConfigurationError(SigsortError):
    """Raised when configuration validation fails."""

    pass


def _parse_bool(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    return None


class ConfigurationManager:
    """Manages configuration loading, validation, and merging."""

    DEFAULT_CONFIG_PATHS = [
        "sigsort.json",
        "sigsort.yaml",
        "sigsort.yml",
        ".sigsort.json",
        ".sigsort.yaml",
        ".sigsort.yml",
        os.path.expanduser("~/.sigsort.yaml"),
    ]

    @staticmethod
    def find_config_file(search_paths: Optional[List[str]] = None) -> Optional[str]:
        """Find the first existing configuration file."""
        paths = search_paths or ConfigurationManager.DEFAULT_CONFIG_PATHS

        for path in paths:
            if os.path.exists(path):
                return path
        return None

    @staticmethod
    def load_config_file(config_path: str) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.endswith((".yaml", ".yml")):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid configuration file format: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")
        return data

    @staticmethod
    def load_env_config() -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config = {}

        sort = {}
        if os.getenv("SIGSORT_RECURSIVE"):
            recursive = _parse_bool(os.getenv("SIGSORT_RECURSIVE"))
            if recursive is None:
                logger.warning("Invalid SIGSORT_RECURSIVE value, using default")
            else:
                sort["recursive"] = recursive

        if sort:
            config["sort"] = sort

        output = {}
        if os.getenv("SIGSORT_INDENT"):
            try:
                output["indent"] = int(os.getenv("SIGSORT_INDENT"))
            except ValueError:
                logger.warning("Invalid SIGSORT_INDENT value, using default")

        if os.getenv("SIGSORT_OUTPUT_FORMAT"):
            output_format = os.getenv("SIGSORT_OUTPUT_FORMAT").lower()
            if output_format in OUTPUT_FORMATS:
                output["format"] = output_format
            else:
                logger.warning("Invalid SIGSORT_OUTPUT_FORMAT value, using default")

        if os.getenv("SIGSORT_BACKUP_ENABLED"):
            backup = _parse_bool(os.getenv("SIGSORT_BACKUP_ENABLED"))
            if backup is None:
                logger.warning("Invalid SIGSORT_BACKUP_ENABLED value, using default")
            else:
                output["backup_enabled"] = backup

        if output:
            config["output"] = output

        return config

    @staticmethod
    def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge multiple configuration dictionaries, with later ones taking precedence."""
        result = {}

        for config in configs:
            if not config:
                continue

            for key, value in config.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = ConfigurationManager.merge_configs(result[key], value)
                else:
                    result[key] = value

        return result

    @staticmethod
    def validate_config(config_data: Dict[str, Any]) -> None:
        """Validate configuration data."""
        for section in ("sort", "output"):
            if section in config_data and not isinstance(config_data[section], dict):
                raise ConfigurationError(f"'{section}' must be a mapping")

        if "sort" in config_data:
            sort = config_data["sort"]

            if "recursive" in sort and not isinstance(sort["recursive"], bool):
                raise ConfigurationError("recursive must be true or false")

        if "output" in config_data:
            output = config_data["output"]

            if "indent" in output:
                indent = output["indent"]
                if isinstance(indent, bool) or not isinstance(indent, int):
                    raise ConfigurationError("indent must be an integer")
                if not 0 <= indent <= MAX_INDENT:
                    raise ConfigurationError(f"indent must be between 0 and {MAX_INDENT}")

            if "format" in output and output["format"] not in OUTPUT_FORMATS:
                raise ConfigurationError(f"format must be one of: {list(OUTPUT_FORMATS)}")

            if "backup_enabled" in output and not isinstance(output["backup_enabled"], bool):
                raise ConfigurationError("backup_enabled must be true or false")


@dataclass
class SortConfig:
    """Configuration for member sorting."""

    recursive: bool = True


@dataclass
class OutputConfig:
    """Configuration for writing results."""

    indent: int = 2
    format: str = "rbs"
    backup_enabled: bool = False


@dataclass
class SigsortConfig:
    """Main configuration class for sigsort."""

    sort_settings: SortConfig = field(default_factory=SortConfig)
    output_settings: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def default(cls) -> "SigsortConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        use_env: bool = True,
        validate: bool = True,
    ) -> "SigsortConfig":
        """
        Load configuration from multiple sources with precedence:
        1. Default values
        2. Configuration file
        3. Environment variables (if use_env=True)

        Args:
            config_path: Path to configuration file. If None, searches for default files.
            use_env: Whether to load environment variables
            validate: Whether to validate the configuration
        """
        configs_to_merge = []

        file_config = {}
        if config_path:
            file_config = ConfigurationManager.load_config_file(config_path)
        else:
            found_config = ConfigurationManager.find_config_file()
            if found_config:
                file_config = ConfigurationManager.load_config_file(found_config)
                logger.info(f"Loaded configuration from: {found_config}")

        configs_to_merge.append(file_config)

        if use_env:
            configs_to_merge.append(ConfigurationManager.load_env_config())

        merged_config = ConfigurationManager.merge_configs(*configs_to_merge)

        if validate:
            ConfigurationManager.validate_config(merged_config)

        sort_config = SortConfig()
        for key, value in merged_config.get("sort", {}).items():
            if hasattr(sort_config, key):
                setattr(sort_config, key, value)

        output_config = OutputConfig()
        for key, value in merged_config.get("output", {}).items():
            if hasattr(output_config, key):
                setattr(output_config, key, value)

        return cls(sort_settings=sort_config, output_settings=output_config)

    @classmethod
    def from_file(cls, config_path: str) -> "SigsortConfig":
        """Load configuration from a JSON or YAML file only."""
        return cls.load(config_path=config_path, use_env=False)

    @classmethod
    def from_env(cls) -> "SigsortConfig":
        """Load configuration from default files and environment variables."""
        return cls.load(config_path=None, use_env=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "sort": asdict(self.sort_settings),
            "output": asdict(self.output_settings),
        }

    def to_file(self, config_path: str, format: str = "json") -> None:
        """
        Save configuration to file.

        Args:
            config_path: Path to save configuration
            format: File format ('json' or 'yaml')
        """
        config_data = self.to_dict()

        try:
            with open(config_path, "w", encoding="utf-8") as f:
                if format.lower() == "yaml":
                    yaml.dump(config_data, f, default_flow_style=False, indent=2)
                else:
                    json.dump(config_data, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Error saving configuration file: {e}")

    def validate(self) -> None:
        """Validate the current configuration."""
        ConfigurationManager.validate_config(self.to_dict())

    def get_config_summary(self) -> str:
        """Get a human-readable summary of the configuration."""
        return f"""sigsort Configuration Summary:
Sort:
  - Recursive: {self.sort_settings.recursive}

Output:
  - Indent: {self.output_settings.indent}
  - Format: {self.output_settings.format}
  - Backup enabled: {self.output_settings.backup_enabled}
"""


def load_config(config_path: Optional[str] = None, use_env: bool = True) -> SigsortConfig:
    """
    Load configuration from file and/or environment variables.

    Args:
        config_path: Path to configuration file
        use_env: Whether to load environment variables

    Returns:
        SigsortConfig: Loaded configuration
    """
    return SigsortConfig.load(config_path=config_path, use_env=use_env)
