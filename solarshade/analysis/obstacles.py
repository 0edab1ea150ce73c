"""
Default obstacle sets for a coarse location classification.

Used when no site survey is available: a typical neighbourhood for the
classification, scaled by the height of nearby buildings.
"""

import logging
from typing import List, Optional

from ..core.config import Settings, settings as default_settings
from ..core.models import LocationType, ObstacleType, ShadingObstacle
from ..utils.validation import validate_location_type, validate_positive

logger = logging.getLogger(__name__)


def estimate_common_obstacles(
    location_type: str,
    building_height: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> List[ShadingObstacle]:
    """
    Typical obstacles for an urban, suburban or rural site.

    Args:
        location_type: "urban", "suburban" or "rural"
        building_height: Height of surrounding buildings (m)
        settings: Override configuration

    Returns:
        Obstacles in a fixed order for the classification

    Raises:
        InvalidInputError: If the classification is unknown or the height invalid
    """
    settings = settings or default_settings
    kind = validate_location_type(location_type)
    if building_height is None:
        building_height = settings.default_building_height_m
    height = validate_positive(building_height, "building_height")

    if kind == LocationType.URBAN:
        obstacles = [
            ShadingObstacle(
                category=ObstacleType.BUILDING,
                height=height * 1.5,
                distance=15.0,
                azimuth=180.0,
                width=20.0,
                description="Adjacent building (south)",
            ),
            ShadingObstacle(
                category=ObstacleType.BUILDING,
                height=height * 0.8,
                distance=12.0,
                azimuth=135.0,
                width=15.0,
                description="Neighboring building (southeast)",
            ),
        ]
    elif kind == LocationType.SUBURBAN:
        obstacles = [
            ShadingObstacle(
                category=ObstacleType.TREE,
                height=15.0,
                distance=20.0,
                azimuth=200.0,
                width=8.0,
                description="Large tree (southwest)",
            ),
            ShadingObstacle(
                category=ObstacleType.BUILDING,
                height=height * 0.9,
                distance=25.0,
                azimuth=160.0,
                width=12.0,
                description="Neighbor house",
            ),
        ]
    else:
        obstacles = [
            ShadingObstacle(
                category=ObstacleType.TREE,
                height=12.0,
                distance=30.0,
                azimuth=220.0,
                width=6.0,
                description="Isolated tree",
            ),
        ]

    logger.debug(f"Estimated {len(obstacles)} obstacles for {kind.value} site")
    return obstacles
