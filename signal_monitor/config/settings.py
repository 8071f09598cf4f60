"""Configuration settings models using Pydantic."""

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from signal_monitor.core.domain.models import Range
from signal_monitor.core.services.monitor import Monitor


class RangeSettings(BaseModel):
    """Bounds of one range."""

    model_config = ConfigDict(frozen=True)

    min: float = Field(..., description="Lower bound (inclusive)")
    max: float = Field(..., description="Upper bound (inclusive)")

    @model_validator(mode='after')
    def validate_bounds(self):
        if not self.min <= self.max:
            raise ValueError(f"min <= max is false (min={self.min}, max={self.max})")
        return self

    def to_range(self) -> Range:
        return Range.new(self.min, self.max)


class ChannelSettings(BaseModel):
    """Monitored channel configuration."""

    # INI and environment values arrive as numbers when they look like one
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field("channel", min_length=1, description="Channel name used in logs")
    domain: RangeSettings = Field(
        default_factory=lambda: RangeSettings(min=0, max=255),
        description="Raw input range"
    )
    destination: RangeSettings = Field(
        default_factory=lambda: RangeSettings(min=0.0, max=1.0),
        description="Normalized output range"
    )
    nominal: RangeSettings = Field(
        default_factory=lambda: RangeSettings(min=0.2, max=0.7),
        description="Healthy sub-range of destination"
    )
    error_threshold: Optional[float] = Field(
        None, gt=0, description="Deviation, in nominal widths, that is an error on its own"
    )
    history_depth: int = Field(2, ge=2, description="Samples kept per channel")

    @model_validator(mode='after')
    def validate_nominal(self):
        if not (self.destination.min <= self.nominal.min and self.nominal.max <= self.destination.max):
            raise ValueError("Nominal range must be contained in destination range")
        return self

    def build_monitor(self) -> Monitor:
        return Monitor.new(
            self.domain.to_range(),
            self.destination.to_range(),
            self.nominal.to_range(),
            error_threshold=self.error_threshold,
        )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format"
    )
    file_enabled: bool = Field(False, description="Enable file logging")
    console_enabled: bool = Field(True, description="Enable console logging")
    log_directory: Path = Field(Path("logs"), description="Log file directory")
    max_file_size_mb: int = Field(10, gt=0, description="Maximum log file size")
    backup_count: int = Field(5, gt=0, description="Number of backup log files")

    @field_validator('level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class SignalMonitorSettings(BaseModel):
    """Main configuration settings for the signal monitor."""

    environment: str = Field("development", description="Environment (dev/prod/test)")
    debug: bool = Field(False, description="Enable debug mode")

    channel: ChannelSettings = Field(default_factory=ChannelSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    custom_settings: Dict[str, Any] = Field(default_factory=dict, description="Custom settings")

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        valid_envs = ['development', 'production', 'testing']
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    def get_log_path(self, filename: str) -> Path:
        """Get full path to a log file."""
        return self.logging.log_directory / filename
