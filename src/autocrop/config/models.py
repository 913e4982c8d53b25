"""
Pydantic models for autocrop configuration.

Defines the configuration schema with validation and defaults for the
border scanners, the output writer and logging.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.settings import ExhaustedEdge, HashProfile, ScanSettings


class LogLevel(str, Enum):
    """Supported logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ScanMethod(str, Enum):
    """Border location strategies."""
    HASH = "hash"
    NAIVE = "naive"


class ScanConfig(BaseModel):
    """Configuration for border scanning."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True, validate_assignment=True)

    method: ScanMethod = Field(
        default=ScanMethod.HASH,
        description="Scanner used to locate the content rectangle"
    )
    profile: HashProfile = Field(
        default=HashProfile.EXTENDED,
        description="Line hash profile for the hash scanner"
    )
    dark_limit: int = Field(
        default=128,
        ge=0,
        le=255,
        description="Luminance at or below which a pixel counts as dark"
    )
    near_black: int = Field(
        default=30,
        ge=0,
        le=255,
        description="Luminance below which a pixel counts as near-black"
    )
    near_white: int = Field(
        default=230,
        ge=0,
        le=255,
        description="Luminance above which a pixel counts as near-white"
    )
    contrast_ratio: float = Field(
        default=0.12,
        ge=0.0,
        le=1.0,
        description="Share of saturated pixels that sets a window's contrast bit"
    )
    saturated_min_distance: int = Field(
        default=1,
        ge=1,
        description="Hash distance marking a border after a fully uniform line"
    )
    mixed_min_distance: int = Field(
        default=3,
        ge=1,
        description="Hash distance marking a border after a mixed line"
    )
    simple_min_distance: int = Field(
        default=1,
        ge=1,
        description="Hash distance marking a border with the simple profile"
    )
    exhausted_edge: ExhaustedEdge = Field(
        default=ExhaustedEdge.COLLAPSE,
        description="Edge placement when a scan finds no border"
    )

    @model_validator(mode="after")
    def validate_saturation_limits(self) -> "ScanConfig":
        """Validate that the near-black limit lies below the near-white limit."""
        if self.near_black >= self.near_white:
            raise ValueError("near_black must be less than near_white")
        return self

    def to_settings(self) -> ScanSettings:
        """Convert to the frozen settings consumed by the scanners."""
        return ScanSettings(
            profile=HashProfile(self.profile),
            dark_limit=self.dark_limit,
            near_black=self.near_black,
            near_white=self.near_white,
            contrast_ratio=self.contrast_ratio,
            saturated_min_distance=self.saturated_min_distance,
            mixed_min_distance=self.mixed_min_distance,
            simple_min_distance=self.simple_min_distance,
            exhausted_edge=ExhaustedEdge(self.exhausted_edge),
        )


class OutputConfig(BaseModel):
    """Configuration for writing cropped images."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    suffix: str = Field(
        default="_cropped",
        description="Suffix appended to the input file stem"
    )
    image_format: Optional[str] = Field(
        default=None,
        description="Output extension (e.g. 'png'); None keeps the input format"
    )
    jpeg_quality: int = Field(
        default=95,
        ge=0,
        le=100,
        description="JPEG quality for saved images"
    )
    save_debug_images: bool = Field(
        default=False,
        description="Whether to save the detected rectangle drawn on the input"
    )
    debug_dir: Optional[str] = Field(
        default=None,
        description="Directory for debug images (defaults to <output>/debug)"
    )

    @field_validator('image_format')
    @classmethod
    def validate_image_format(cls, v):
        """Normalise the output extension."""
        if v is None:
            return v
        v = v.lower().lstrip('.')
        if v not in ('png', 'jpg', 'jpeg', 'tif', 'tiff', 'bmp', 'webp'):
            raise ValueError(f"Unsupported output format: {v}")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging setup."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True, validate_assignment=True)

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Base logging level"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional log file path"
    )
    use_rich: bool = Field(
        default=True,
        description="Whether to use rich console output"
    )
    format_style: str = Field(
        default="detailed",
        pattern="^(simple|detailed|minimal)$",
        description="Logging format style"
    )


class Config(BaseModel):
    """Main configuration model."""

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        use_enum_values=True,
    )

    scan: ScanConfig = Field(
        default_factory=ScanConfig,
        description="Border scanning configuration"
    )
    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description="Output configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration"
    )

    version: str = Field(
        default="1.0.0",
        description="Configuration version"
    )
    description: Optional[str] = Field(
        default=None,
        description="Configuration description"
    )
