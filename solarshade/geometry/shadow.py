"""
Shadow Geometry Engine.

Binary single-cone shadow model:
- An obstacle stands on a bearing from the roof reference centre, its base
  `reference_offset + obstacle.distance` meters out.
- Its shadow is a cone with the apex at that base, pointing away from the
  sun (sun azimuth + 180°), reaching height / tan(elevation) meters.
- The cone half-angle is atan2(width / 2, distance), or a fixed default
  when the obstacle has no width.

A point is either inside a cone or not. There is no penumbra and no
partial shading fraction per point. With the sun at or below the horizon
every point counts as shadowed.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Union

import numpy as np

from ..core.config import settings as default_settings
from ..core.models import HorizonPoint, RoofFootprint, ShadingObstacle, SolarPosition
from ..utils.validation import validate_finite, validate_non_negative, validate_obstacle, validate_positive
from .solar_position import angular_difference, normalize_angle

ArrayLike = Union[float, np.ndarray]


def shadow_length(height: float, elevation: float) -> float:
    """
    Length of the shadow cast by a vertical object.

    Args:
        height: Object height above the shaded plane (m)
        elevation: Sun elevation (degrees)

    Returns:
        Shadow length in meters; infinite when the sun is at or below the horizon.
    """
    if elevation <= 0:
        return math.inf
    return height / math.tan(math.radians(elevation))


def cone_half_angle(obstacle: ShadingObstacle, default_half_angle: Optional[float] = None) -> float:
    """Angular half-width of an obstacle's shadow cone in degrees."""
    if obstacle.width:
        return math.degrees(math.atan2(obstacle.width / 2.0, obstacle.distance))
    if default_half_angle is None:
        default_half_angle = default_settings.default_cone_half_angle_deg
    return default_half_angle


def edge_offset(roof: RoofFootprint, azimuth: float) -> float:
    """
    Distance from the centre of a rectangular roof to its edge along a bearing.

    Width runs east-west, depth north-south.
    """
    rad = math.radians(azimuth)
    east, north = abs(math.sin(rad)), abs(math.cos(rad))

    reach_east = (roof.width / 2.0) / east if east > 1e-12 else math.inf
    reach_north = (roof.depth / 2.0) / north if north > 1e-12 else math.inf
    return min(reach_east, reach_north)


def polar_to_local(distance: ArrayLike, azimuth: ArrayLike) -> tuple:
    """(distance, bearing) to (east, north) offsets."""
    rad = np.radians(azimuth)
    return distance * np.sin(rad), distance * np.cos(rad)


def shadow_mask(
    point_distances: ArrayLike,
    point_azimuths: ArrayLike,
    obstacle: ShadingObstacle,
    sun: SolarPosition,
    reference_offset: float = 0.0,
    default_half_angle: Optional[float] = None,
) -> np.ndarray:
    """
    Vectorised shadow test for many points against one obstacle.

    Points are given in polar form around the reference centre. Inputs are
    trusted; use is_point_in_shadow for validated single-point queries.

    Returns:
        Boolean array, True where the point is in the obstacle's shadow.
    """
    distances = np.asarray(point_distances, dtype=float)
    azimuths = np.asarray(point_azimuths, dtype=float)

    if sun.elevation <= 0:
        return np.ones(np.broadcast(distances, azimuths).shape, dtype=bool)

    length = shadow_length(obstacle.height, sun.elevation)
    shadow_azimuth = normalize_angle(sun.azimuth + 180.0)
    half_angle = cone_half_angle(obstacle, default_half_angle)

    point_east, point_north = polar_to_local(distances, azimuths)
    base_east, base_north = polar_to_local(reference_offset + obstacle.distance, obstacle.azimuth)

    dx = point_east - base_east
    dy = point_north - base_north
    reach = np.hypot(dx, dy)

    bearing = np.degrees(np.arctan2(dx, dy))
    deviation = np.abs((bearing - shadow_azimuth) % 360.0)
    deviation = np.where(deviation > 180.0, 360.0 - deviation, deviation)
    # A point on the obstacle base has no bearing; it is under the obstacle
    deviation = np.where(reach == 0, 0.0, deviation)

    return (deviation <= half_angle) & (reach <= length)


def is_point_in_shadow(
    point_distance: float,
    point_azimuth: float,
    obstacle: ShadingObstacle,
    sun: SolarPosition,
    reference_offset: float = 0.0,
    default_half_angle: Optional[float] = None,
) -> bool:
    """
    Decide whether a roof point lies in one obstacle's shadow.

    Args:
        point_distance: Distance of the point from the reference centre (m)
        point_azimuth: Bearing of the point from the reference centre (degrees)
        obstacle: The shading obstacle
        sun: Current sun position
        reference_offset: Distance from the reference centre to the roof edge
            along the obstacle's bearing (m). Zero treats the reference
            centre as the roof edge.
        default_half_angle: Cone half-angle for obstacles without width

    Returns:
        True if the point is shadowed (always True with the sun down).

    Raises:
        InvalidInputError: If the obstacle or the point is invalid
    """
    validate_obstacle(obstacle)
    validate_non_negative(point_distance, "point_distance")
    validate_finite(point_azimuth, "point_azimuth")
    validate_non_negative(reference_offset, "reference_offset")

    return bool(
        shadow_mask(
            point_distance,
            point_azimuth,
            obstacle,
            sun,
            reference_offset=reference_offset,
            default_half_angle=default_half_angle,
        )
    )


def horizon_profile(
    obstacles: Iterable[ShadingObstacle],
    step_deg: float = 10.0,
    default_half_angle: Optional[float] = None,
) -> List[HorizonPoint]:
    """
    Skyline seen from the roof edge.

    For each azimuth bin, the highest angular elevation of any obstacle whose
    angular extent covers the bin. Bins with no obstacle report 0°.
    """
    step = validate_positive(step_deg, "step_deg")
    validated = [validate_obstacle(obstacle) for obstacle in obstacles]

    profile = []
    for azimuth in np.arange(0.0, 360.0, step):
        elevation = 0.0
        for obstacle in validated:
            half_angle = cone_half_angle(obstacle, default_half_angle)
            if angular_difference(float(azimuth), obstacle.azimuth) <= half_angle:
                elevation = max(elevation, obstacle.angular_elevation)
        profile.append(HorizonPoint(azimuth=float(azimuth), elevation=elevation))
    return profile
