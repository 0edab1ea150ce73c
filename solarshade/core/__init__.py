"""Core data models and configuration."""

from .config import Settings, settings
from .models import (
    SEASON_MONTHS,
    CriticalPeriod,
    HorizonPoint,
    HourlyIrradiance,
    LocationType,
    MonthlyIrradianceRecord,
    ObstacleType,
    PVSystemPotential,
    RoofFootprint,
    Season,
    ShadingAnalysis,
    ShadingObstacle,
    SolarPosition,
)

__all__ = [
    # Config
    "Settings",
    "settings",
    # Enums
    "ObstacleType",
    "LocationType",
    "Season",
    "SEASON_MONTHS",
    # Models
    "SolarPosition",
    "HourlyIrradiance",
    "HorizonPoint",
    "MonthlyIrradianceRecord",
    "PVSystemPotential",
    "ShadingObstacle",
    "RoofFootprint",
    "CriticalPeriod",
    "ShadingAnalysis",
]
