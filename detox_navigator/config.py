"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Defaults reproduce the standard CIWA bands and summary layout
"""

import os
from functools import lru_cache
from typing import Literal, cast
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator
from rich.console import Console
from rich.table import Table

# Load environment variables from .env file
load_dotenv()

DEFAULT_STORAGE_KEY = "home_detox_navigator_v1"


class StorageConfig(BaseModel):
    """Where the persisted blob lives."""

    path: str = Field(
        default="./data/navigator_storage.json", description="JSON file backing the key-value store"
    )
    key: str = Field(
        default=DEFAULT_STORAGE_KEY, min_length=1, description="Versioned key of the store blob"
    )


class SeverityConfig(BaseModel):
    """CIWA band thresholds, inclusive at the lower edge of each band."""

    watch_threshold: float = Field(default=10.0, description="Lowest score flagged as watch")
    escalate_threshold: float = Field(default=15.0, description="Lowest score flagged as escalate")

    @model_validator(mode="after")
    def bands_are_ordered(self) -> "SeverityConfig":
        if self.watch_threshold >= self.escalate_threshold:
            raise ValueError("watch_threshold must be below escalate_threshold")
        return self


class SummaryConfig(BaseModel):
    """Aftercare summary layout."""

    title: str = Field(default="Home Detox Summary", min_length=1)
    date_format: str = Field(default="%m/%d/%Y", description="strftime format for dates")
    time_format: str = Field(default="%I:%M %p", description="strftime format for hour:minute")
    timezone: str | None = Field(default=None, description="IANA zone; None means host local time")

    @field_validator("timezone")
    def validate_timezone(cls, v):
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    def tzinfo(self) -> ZoneInfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Component configs
    storage: StorageConfig = Field(default_factory=StorageConfig)
    severity: SeverityConfig = Field(default_factory=SeverityConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        v = val.strip().upper()
        return cast(
            Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    def _format_to_literal(val: str | None, debug: bool) -> Literal["json", "console"]:
        if val is None:
            return "console" if debug else "json"
        return "console" if val.strip().lower() == "console" else "json"

    # Detect environment
    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    storage_config = StorageConfig(
        path=os.getenv("DETOX_STORAGE_PATH", "./data/navigator_storage.json"),
        key=os.getenv("DETOX_STORAGE_KEY", DEFAULT_STORAGE_KEY),
    )

    severity_config = SeverityConfig(
        watch_threshold=float(os.getenv("CIWA_WATCH_THRESHOLD", "10")),
        escalate_threshold=float(os.getenv("CIWA_ESCALATE_THRESHOLD", "15")),
    )

    summary_config = SummaryConfig(
        title=os.getenv("SUMMARY_TITLE", "Home Detox Summary"),
        date_format=os.getenv("SUMMARY_DATE_FORMAT", "%m/%d/%Y"),
        time_format=os.getenv("SUMMARY_TIME_FORMAT", "%I:%M %p"),
        timezone=os.getenv("SUMMARY_TIMEZONE") or None,
    )

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format=_format_to_literal(os.getenv("LOG_FORMAT"), debug),
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        storage=storage_config,
        severity=severity_config,
        summary=summary_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def print_config_summary(console: Console | None = None) -> None:
    """Print configuration summary for debugging."""
    config = get_config()
    console = console or Console()

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", config.environment)
    table.add_row("Debug Mode", str(config.debug))
    table.add_row("Log Level", f"{config.logging.level} ({config.logging.format})")
    table.add_row("Storage File", config.storage.path)
    table.add_row("Storage Key", config.storage.key)
    table.add_row(
        "CIWA Bands",
        f"watch >= {config.severity.watch_threshold:g}, "
        f"escalate >= {config.severity.escalate_threshold:g}",
    )
    table.add_row("Summary Title", config.summary.title)
    table.add_row("Summary Timezone", config.summary.timezone or "local")

    console.print(table)
