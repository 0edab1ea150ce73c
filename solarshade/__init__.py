"""
Solarshade - Solar geometry and roof shading estimates.

Sun position, hourly irradiance synthesis, tilt heuristics and an annual
shading analyzer for rooftop PV planning.
"""

from .analysis.irradiance import get_hourly_irradiance
from .analysis.obstacles import estimate_common_obstacles
from .analysis.shading_solar import analyze_annual_shading
from .analysis.tilt import get_optimal_tilt
from .geometry.solar_position import get_solar_position
from .utils.validation import InvalidInputError

__version__ = "0.1.0"

__all__ = [
    "get_solar_position",
    "get_hourly_irradiance",
    "get_optimal_tilt",
    "analyze_annual_shading",
    "estimate_common_obstacles",
    "InvalidInputError",
]
