"""
Configuration management for Muqassim.

Uses Pydantic Settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables with the MUQASSIM_ prefix.
"""

from typing import Literal
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MuqassimSettings(BaseSettings):
    """
    Configuration settings for Muqassim.

    All settings can be overridden via environment variables with MUQASSIM_ prefix.

    Example:
        export MUQASSIM_SILENCE_THRESHOLD="0.05"
        export MUQASSIM_MIN_SILENCE_DURATION="1.2"
        export MUQASSIM_MP3_BITRATE="192"
    """

    model_config = SettingsConfigDict(
        env_prefix="MUQASSIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ============ Auto-segmentation ============

    silence_threshold: float = Field(
        default=0.02,
        description="Amplitude (0-1) at or below which a sample counts as silence",
        ge=0.0,
        le=1.0,
    )

    min_silence_duration: float = Field(
        default=0.8,
        description="Seconds of continuous silence that close a sound segment",
        ge=0.0,
    )

    min_sound_duration: float = Field(
        default=0.5,
        description="Shortest sound segment (seconds) kept as a region",
        ge=0.0,
    )

    padding: float = Field(
        default=0.2,
        description="Seconds added before and after each detected region",
        ge=0.0,
    )

    # ============ Annotation ============

    default_segment_length: float = Field(
        default=2.0,
        description="Length in seconds of a manually added segment",
        gt=0.0,
    )

    # ============ Overlay ============

    drift_tolerance: float = Field(
        default=0.1,
        description="Dead-band (seconds) before overlay positions are rewritten",
        ge=0.0,
    )

    ayah_color: str = Field(
        default="rgba(79, 70, 229, 0.2)",
        description="Overlay color for ayah segments",
    )

    aameen_color: str = Field(
        default="rgba(168, 85, 247, 0.2)",
        description="Overlay color for the aameen segment",
    )

    # ============ Encoding ============

    mp3_bitrate: int = Field(
        default=128,
        description="MP3 bitrate in kbps for slice export",
        ge=32,
        le=320,
    )

    mp3_quality: int = Field(
        default=2,
        description="LAME quality setting (0 best, 9 fastest)",
        ge=0,
        le=9,
    )

    # ============ Output Settings ============

    output_dir: Path = Field(
        default=Path("output"),
        description="Directory for output files",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level used by the command line tool",
    )

    # ============ Validators ============

    @field_validator("output_dir", mode="before")
    @classmethod
    def convert_to_path(cls, v: str | Path) -> Path:
        """Convert string paths to Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v


# Default settings instance
_default_settings: MuqassimSettings | None = None


def get_settings() -> MuqassimSettings:
    """
    Get the default settings instance (lazily created).

    Returns:
        MuqassimSettings: The default settings
    """
    global _default_settings
    if _default_settings is None:
        _default_settings = MuqassimSettings()
    return _default_settings


def configure(**kwargs) -> MuqassimSettings:
    """
    Create and set new default settings.

    Args:
        **kwargs: Settings to override

    Returns:
        MuqassimSettings: The new settings instance
    """
    global _default_settings
    _default_settings = MuqassimSettings(**kwargs)
    return _default_settings
