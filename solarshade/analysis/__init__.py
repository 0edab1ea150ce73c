"""Irradiance synthesis, tilt heuristics and shading analysis."""

from .irradiance import get_hourly_irradiance, get_monthly_hourly_profiles
from .obstacles import estimate_common_obstacles
from .shading_solar import (
    analyze_annual_shading,
    calculate_roof_shading_percentage,
    generate_shading_recommendations,
    identify_primary_shading_cause,
    roof_grid,
)
from .tilt import get_optimal_tilt, monthly_optimal_tilts

__all__ = [
    "get_hourly_irradiance",
    "get_monthly_hourly_profiles",
    "get_optimal_tilt",
    "monthly_optimal_tilts",
    "estimate_common_obstacles",
    "analyze_annual_shading",
    "calculate_roof_shading_percentage",
    "generate_shading_recommendations",
    "identify_primary_shading_cause",
    "roof_grid",
]
