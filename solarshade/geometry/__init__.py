"""
Geometry Module - Sun position and obstacle shadows.

Calculates:
- Sun elevation and azimuth for a place and local time
- Shadow length and binary shadow cones behind obstacles
- Horizon profile of an obstacle set
"""

from .shadow import (
    cone_half_angle,
    edge_offset,
    horizon_profile,
    is_point_in_shadow,
    shadow_length,
    shadow_mask,
)
from .solar_position import (
    angular_difference,
    equation_of_time,
    get_solar_position,
    julian_day_number,
    normalize_angle,
    solar_declination,
)

__all__ = [
    'get_solar_position',
    'julian_day_number',
    'solar_declination',
    'equation_of_time',
    'normalize_angle',
    'angular_difference',
    'shadow_length',
    'cone_half_angle',
    'edge_offset',
    'shadow_mask',
    'is_point_in_shadow',
    'horizon_profile',
]
