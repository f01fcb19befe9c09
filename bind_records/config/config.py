"""
Configuration module for bind-records.
"""

import os
import re
from pathlib import Path
from typing import List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

# Searched in order when no path is given
DEFAULT_CONFIG_PATHS = (
    Path("./bind-records.yaml"),
    Path("./bind-records.yml"),
    Path("/etc/bind-records/bind-records.yaml"),
    Path("/etc/bind-records/config.yaml"),
)

ENV_REFERENCE = re.compile(r"\$\{([^}]+)\}")


class RecordConfig(BaseModel):
    """A desired DNS record as declared in the configuration file."""

    name: str
    type: str
    content: List[str] = Field(default_factory=list)
    zone: Optional[str] = None
    server: Optional[str] = None
    ttl: Optional[int] = Field(default=None, ge=0)
    ensure: Literal["present", "absent"] = "present"
    ddns_key: Optional[str] = None

    @field_validator("type")
    @classmethod
    def _upper_type(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("content", mode="before")
    @classmethod
    def _content_list(cls, value):
        if value is None:
            return []
        if isinstance(value, (str, int)):
            return [str(value)]
        return [str(v) for v in value]


class Config(BaseModel):
    """Configuration for bind-records."""

    # Transport configuration
    dig: str = "dig"
    nsupdate: str = "nsupdate"
    tries: int = 5
    timeout: str = "30s"

    # Record defaults
    default_server: Optional[str] = None
    default_ddns_key: Optional[str] = None
    default_ttl: int = 300

    # Controller configuration
    interval: str = "1m"
    once: bool = True
    dry_run: bool = False
    fail_on_error: bool = True

    # Desired records
    records: List[RecordConfig] = Field(default_factory=list)

    # Logging configuration
    log_level: str = "info"

    @classmethod
    def from_yaml(cls, config_path: Optional[Union[str, Path]] = None) -> "Config":
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Config: Config instance populated with values from the YAML file
        """
        paths = [Path(config_path)] if config_path else list(DEFAULT_CONFIG_PATHS)

        config_data = {}
        path = next((p for p in paths if p.is_file()), None)
        if path is not None:
            raw = cls._substitute_env_vars(path.read_text(encoding="utf-8"))
            config_data = yaml.safe_load(raw) or {}

        return cls(**cls._flatten_config(config_data))

    @staticmethod
    def _substitute_env_vars(content: str) -> str:
        """
        Expand ${VAR} and ${VAR:-fallback} references from the environment.

        Args:
            content: Raw YAML text

        Returns:
            str: YAML text with references expanded, unset variables become empty
        """

        def expand(match):
            name, _, fallback = match.group(1).partition(":-")
            return os.environ.get(name, fallback)

        return ENV_REFERENCE.sub(expand, content)

    @staticmethod
    def _flatten_config(config_data: dict) -> dict:
        """
        Flatten nested configuration.

        Args:
            config_data: Nested configuration data

        Returns:
            dict: Flattened configuration data
        """
        flat_config = {}

        # Transport configuration
        transport = config_data.get("transport") or {}
        flat_config["dig"] = transport.get("dig", "dig")
        flat_config["nsupdate"] = transport.get("nsupdate", "nsupdate")
        flat_config["tries"] = transport.get("tries", 5)
        flat_config["timeout"] = str(transport.get("timeout", "30s"))

        # Record defaults
        defaults = config_data.get("defaults") or {}
        flat_config["default_server"] = defaults.get("server")
        flat_config["default_ddns_key"] = defaults.get("ddns_key")
        flat_config["default_ttl"] = defaults.get("ttl", 300)

        # Controller configuration
        controller = config_data.get("controller") or {}
        flat_config["interval"] = str(controller.get("interval", "1m"))
        flat_config["once"] = controller.get("once", True)
        flat_config["dry_run"] = controller.get("dry_run", False)
        flat_config["fail_on_error"] = controller.get("fail_on_error", True)

        # Desired records
        flat_config["records"] = config_data.get("records") or []

        # Logging configuration
        logging = config_data.get("logging") or {}
        flat_config["log_level"] = logging.get("level", "info")

        return flat_config

    @staticmethod
    def parse_duration(duration_str: str, default: int = 60) -> int:
        """
        Parse a duration string like '15m' into seconds.

        Args:
            duration_str: Duration string
            default: Seconds returned when the string cannot be parsed

        Returns:
            int: Duration in seconds
        """
        if not duration_str:
            return default

        # Pattern for duration string (e.g., 15m, 1h, 30s), bare numbers are seconds
        match = re.match(r"^(\d+)([smhd]?)$", duration_str.strip())
        if not match:
            return default

        value, unit = match.groups()
        value = int(value)

        # Convert to seconds
        if unit == "m":
            return value * 60
        elif unit == "h":
            return value * 60 * 60
        elif unit == "d":
            return value * 60 * 60 * 24

        return value
