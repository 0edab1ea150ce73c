"""
Annual Shading Analysis.

Estimates how much of a roof's yearly solar potential nearby obstacles
take away:
- Samples the 15th of every month at 09:00, 12:00 and 15:00 local solar time
- Skips samples with the sun too low to matter
- Counts shadowed cells of a regular roof grid per sample
- Averages per season and over the year
- Flags critical periods and suggests mitigations

Cost is samples × cells × obstacles cone tests, a few thousand for a
typical roof, so everything runs synchronously.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..core.config import Settings, settings as default_settings
from ..core.models import (
    SEASON_MONTHS,
    CriticalPeriod,
    ObstacleType,
    RoofFootprint,
    Season,
    ShadingAnalysis,
    ShadingObstacle,
    SolarPosition,
)
from ..geometry.shadow import edge_offset, shadow_mask
from ..geometry.solar_position import angular_difference, get_solar_position
from ..utils.validation import (
    validate_coordinates,
    validate_obstacles,
    validate_positive,
    validate_roof_footprint,
)

logger = logging.getLogger(__name__)

UNKNOWN_CAUSE = "Unknown obstacle"

RECOMMEND_RELOCATE = "Consider relocating panels to less shaded roof areas"
RECOMMEND_REMOVAL = "Evaluate tree trimming or removal options"
RECOMMEND_TILT = "Winter shading is significant - consider higher tilt angles"
RECOMMEND_PRUNING = "Large trees detected - regular pruning may improve performance"
RECOMMEND_ELEVATED = "Nearby buildings cause significant shading - consider elevated mounting"
RECOMMEND_EXCELLENT = "Minimal shading detected - excellent site for solar installation"


def roof_grid(roof: RoofFootprint, grid_size: float = 2.0) -> Tuple[np.ndarray, np.ndarray]:
    """
    Cell centres of a roof grid, relative to the roof centre.

    Returns:
        Flat (distance, azimuth) arrays, one entry per cell. Azimuth is the
        bearing from the roof centre, 0 = north.
    """
    cells_x = math.ceil(roof.width / grid_size)
    cells_y = math.ceil(roof.depth / grid_size)

    east = (np.arange(cells_x) + 0.5) * grid_size - roof.width / 2.0
    north = (np.arange(cells_y) + 0.5) * grid_size - roof.depth / 2.0
    east_grid, north_grid = np.meshgrid(east, north, indexing="ij")

    east_flat = east_grid.ravel()
    north_flat = north_grid.ravel()
    distances = np.hypot(east_flat, north_flat)
    azimuths = np.degrees(np.arctan2(east_flat, north_flat)) % 360.0
    return distances, azimuths


def calculate_roof_shading_percentage(
    obstacles: List[ShadingObstacle],
    sun: SolarPosition,
    roof: RoofFootprint,
    grid_size: float = 2.0,
    default_half_angle: Optional[float] = None,
    grid: Optional[Tuple[np.ndarray, np.ndarray]] = None,
) -> float:
    """
    Percentage of roof cells shadowed by any obstacle at one sun position.

    Args:
        obstacles: Validated obstacles
        sun: Sun position
        roof: Roof footprint
        grid_size: Cell size (m)
        default_half_angle: Cone half-angle for obstacles without width
        grid: Precomputed roof_grid output, reused across samples

    Returns:
        Shaded share of cells, 0-100
    """
    distances, azimuths = grid if grid is not None else roof_grid(roof, grid_size)
    if distances.size == 0:
        return 0.0

    shaded = np.zeros(distances.shape, dtype=bool)
    for obstacle in obstacles:
        shaded |= shadow_mask(
            distances,
            azimuths,
            obstacle,
            sun,
            reference_offset=edge_offset(roof, obstacle.azimuth),
            default_half_angle=default_half_angle,
        )

    return float(shaded.mean() * 100.0)


def identify_primary_shading_cause(
    obstacles: List[ShadingObstacle],
    sun: SolarPosition,
) -> str:
    """
    Name the obstacle most likely responsible for shading at a sun position.

    Only obstacles roughly between the sun and the roof (within 90° of the
    sun's azimuth) qualify; among those the highest height/distance ratio wins.
    """
    relevant = [
        obstacle for obstacle in obstacles
        if angular_difference(obstacle.azimuth, sun.azimuth) < 90
    ]
    if not relevant:
        return UNKNOWN_CAUSE

    primary = max(relevant, key=lambda obstacle: obstacle.height_distance_ratio)
    return primary.description or f"{primary.category.value} at {primary.azimuth:.0f}°"


def generate_shading_recommendations(
    annual_loss: float,
    seasonal_losses: Dict[str, float],
    obstacles: List[ShadingObstacle],
    settings: Optional[Settings] = None,
) -> List[str]:
    """Mitigation suggestions from fixed threshold rules, in priority order."""
    settings = settings or default_settings
    recommendations = []

    if annual_loss > settings.high_loss_pct:
        recommendations.append(RECOMMEND_RELOCATE)
        recommendations.append(RECOMMEND_REMOVAL)

    winter = seasonal_losses.get(Season.WINTER.value, 0.0)
    summer = seasonal_losses.get(Season.SUMMER.value, 0.0)
    if winter > summer * settings.winter_summer_ratio:
        recommendations.append(RECOMMEND_TILT)

    if any(
        obstacle.category == ObstacleType.TREE and obstacle.height > settings.tall_tree_height_m
        for obstacle in obstacles
    ):
        recommendations.append(RECOMMEND_PRUNING)

    if any(
        obstacle.category == ObstacleType.BUILDING
        and obstacle.distance < obstacle.height * settings.building_proximity_factor
        for obstacle in obstacles
    ):
        recommendations.append(RECOMMEND_ELEVATED)

    if annual_loss < settings.low_loss_pct:
        recommendations.append(RECOMMEND_EXCELLENT)

    return recommendations


def analyze_annual_shading(
    latitude: float,
    longitude: float,
    obstacles: Optional[Iterable[ShadingObstacle]] = None,
    roof: Optional[RoofFootprint] = None,
    settings: Optional[Settings] = None,
) -> ShadingAnalysis:
    """
    Analyze shading on a roof throughout the year.

    Args:
        latitude: Site latitude (degrees)
        longitude: Site longitude (degrees)
        obstacles: Shading obstacles; none means an unobstructed site
        roof: Rectangular roof footprint (default 20 m × 20 m)
        settings: Override thresholds and sampling configuration

    Returns:
        ShadingAnalysis with annual and seasonal losses, critical periods
        and recommendations

    Raises:
        InvalidInputError: If coordinates, obstacles or roof are invalid
    """
    settings = settings or default_settings
    lat, lon = validate_coordinates(latitude, longitude)
    obstacles = validate_obstacles(obstacles)
    roof = validate_roof_footprint(roof or RoofFootprint())
    grid_size = validate_positive(settings.grid_size_m, "grid_size_m")

    grid = roof_grid(roof, grid_size)
    # Sample at local mean solar time so 12:00 is close to solar noon
    solar_timezone = lon / 15.0

    result = ShadingAnalysis(grid_cells=int(grid[0].size))
    total_loss = 0.0

    for season, months in SEASON_MONTHS.items():
        season_loss = 0.0
        season_samples = 0

        for month in months:
            for hour in settings.sample_hours:
                sample_time = datetime(settings.sample_year, month, settings.sample_day, hour)
                sun = get_solar_position(lat, lon, sample_time, solar_timezone)

                if sun.elevation <= settings.min_sample_elevation_deg:
                    continue

                shading_pct = calculate_roof_shading_percentage(
                    obstacles,
                    sun,
                    roof,
                    grid_size=grid_size,
                    default_half_angle=settings.default_cone_half_angle_deg,
                    grid=grid,
                )
                season_loss += shading_pct
                season_samples += 1
                total_loss += shading_pct
                result.samples_analyzed += 1

                if shading_pct > settings.critical_shading_pct:
                    result.critical_periods.append(CriticalPeriod(
                        time_of_day=f"{hour}:00",
                        season=season.value,
                        shading_percentage=shading_pct,
                        cause=identify_primary_shading_cause(obstacles, sun),
                        month=month,
                    ))

        result.seasonal_losses[season.value] = (
            season_loss / season_samples if season_samples > 0 else 0.0
        )
        logger.debug(
            f"{season.value}: {season_samples} samples, "
            f"{result.seasonal_losses[season.value]:.1f}% shading",
            extra={"season": season.value},
        )

    result.annual_shading_loss = (
        total_loss / result.samples_analyzed if result.samples_analyzed > 0 else 0.0
    )
    result.recommendations = generate_shading_recommendations(
        result.annual_shading_loss,
        result.seasonal_losses,
        obstacles,
        settings,
    )

    logger.info(
        f"Annual shading loss {result.annual_shading_loss:.1f}% "
        f"from {len(obstacles)} obstacles over {result.samples_analyzed} samples",
        extra={"site": f"{lat:.2f},{lon:.2f}"},
    )
    return result
