"""
Configuration management for Solarshade.
"""

from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Can be configured via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SOLARSHADE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Roof sampling
    grid_size_m: float = Field(default=2.0, gt=0, description="Roof sampling cell size (m)")
    min_sample_elevation_deg: float = Field(
        default=10.0, description="Samples with the sun at or below this elevation are skipped"
    )
    sample_hours: Tuple[int, ...] = Field(default=(9, 12, 15), description="Local solar hours sampled per day")
    sample_day: int = Field(default=15, ge=1, le=28, description="Day of month sampled")
    sample_year: int = Field(default=2024, description="Calendar year used for sample dates")

    # Shadow cone
    default_cone_half_angle_deg: float = Field(
        default=5.0, gt=0, description="Shadow half-angle when an obstacle has no width"
    )

    # Critical periods and recommendations
    critical_shading_pct: float = Field(default=30.0, description="Sample shading above this is critical")
    high_loss_pct: float = Field(default=20.0, description="Annual loss that triggers relocation advice")
    low_loss_pct: float = Field(default=5.0, description="Annual loss below which the site is excellent")
    winter_summer_ratio: float = Field(default=2.0, description="Winter/summer loss ratio for tilt advice")
    tall_tree_height_m: float = Field(default=10.0, description="Trees taller than this need pruning")
    building_proximity_factor: float = Field(
        default=2.0, description="Buildings closer than this times their height need elevated mounting"
    )

    # Hourly synthesis
    direct_fraction: float = Field(default=0.8, ge=0, le=1, description="DNI share of GHI")
    min_temperature_hour: int = Field(default=6, ge=0, le=23, description="Hour of daily minimum temperature")
    temperature_amplitude_c: float = Field(default=8.0, ge=0, description="Day/night temperature swing (°C)")
    default_avg_temperature_c: float = Field(default=15.0, description="Average temperature when none supplied")

    # Obstacle estimation
    default_building_height_m: float = Field(default=10.0, gt=0, description="Nearby building height estimate")

    # Logging
    log_level: str = Field(default="INFO", description="Console log level")

    # API
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, description="Port for the REST API")

    @property
    def diffuse_fraction(self) -> float:
        return 1.0 - self.direct_fraction


# Global settings instance
settings = Settings()
