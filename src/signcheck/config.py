"""Configuration management for signcheck using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from linkset_parser import DEFAULT_CONFIG

CONFIG_FILE_NAME = ".signcheck.json"


class Profile(str, Enum):
    """Signposting profiles a link set can be validated against."""
    LEVEL1 = "level1"
    LEVEL2_RECIPE = "level2-recipe"
    LEVEL2_DISCOVERY = "level2-discovery"


class ReportFormat(str, Enum):
    """Report format types."""
    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class ValidationConfig(BaseModel):
    """Validation configuration section."""
    profiles: list[Profile] = Field(default_factory=lambda: [Profile.LEVEL1])
    fail_on_warnings: bool = Field(alias="failOnWarnings", default=False)

    @field_validator("profiles")
    @classmethod
    def validate_profiles(cls, v):
        if not v:
            raise ValueError("at least one validation profile is required")
        return v

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, extra="forbid")


class ParserConfig(BaseModel):
    """Parser configuration section."""
    max_bytes: int = Field(alias="maxBytes", default=DEFAULT_CONFIG["max_bytes"])

    @field_validator("max_bytes")
    @classmethod
    def validate_max_bytes(cls, v):
        if v < 1:
            raise ValueError("max_bytes must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_parser_config(self) -> dict:
        """Configuration dict understood by LinkSetJsonParser."""
        return {"max_bytes": self.max_bytes}


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: ReportFormat = ReportFormat.TABLE

    model_config = ConfigDict(use_enum_values=True, extra="forbid")


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True, extra="forbid")


class SigncheckConfig(BaseModel):
    """Complete signcheck configuration model."""
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> SigncheckConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .signcheck.json

    Returns:
        SigncheckConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return SigncheckConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except (TypeError, ValidationError) as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e

    return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .signcheck.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> SigncheckConfig:
    """Create default configuration: Level 1 profile, table output."""
    return SigncheckConfig()
