"""Configuration management for the goxsd generator."""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .logger import LogLevel

_GO_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class OutputFormat(str, Enum):
    """Output format options."""
    GO = "go"
    JSON = "json"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: LogLevel = LogLevel.INFO


@dataclass
class SerializerConfig:
    """Output serialization configuration."""
    pretty: bool = True


@dataclass
class Config:
    """Main configuration for the goxsd generator."""

    # Input/Output
    input_file: Optional[Path] = None
    output_file: Optional[Path] = None
    output_format: OutputFormat = OutputFormat.GO

    # Go emission
    package_name: str = "main"
    export: bool = False
    prefix: str = ""

    # System Configuration
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    serializer: SerializerConfig = field(default_factory=SerializerConfig)

    def validate(self) -> List[str]:
        """Validate configuration and return any errors."""
        errors = []

        if self.input_file and not self.input_file.exists():
            errors.append(f"Input file does not exist: {self.input_file}")

        if self.input_file and self.input_file.suffix.lower() not in {'.xsd', '.xml'}:
            errors.append(f"Input file must have .xsd or .xml extension: {self.input_file}")

        if self.output_file and not self.output_file.parent.exists():
            errors.append(f"Output directory does not exist: {self.output_file.parent}")

        if not _GO_IDENTIFIER.match(self.package_name):
            errors.append(f"Package name is not a valid Go identifier: {self.package_name}")

        if self.prefix and not re.match(r"^[A-Za-z0-9_]+$", self.prefix):
            errors.append(f"Prefix may only contain letters, digits and underscores: {self.prefix}")

        return errors

    @classmethod
    def from_cli_args(cls, **kwargs) -> "Config":
        """Create config from CLI arguments."""
        config = cls()

        for key, value in kwargs.items():
            if hasattr(config, key) and value is not None:
                setattr(config, key, value)

        if kwargs.get("output_format") is not None:
            config.output_format = OutputFormat(kwargs["output_format"])

        if kwargs.get("log_level") is not None:
            config.logging.level = LogLevel(kwargs["log_level"])

        if kwargs.get("pretty") is not None:
            config.serializer.pretty = kwargs["pretty"]

        return config
