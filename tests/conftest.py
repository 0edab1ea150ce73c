"""
Pytest configuration and fixtures for Solarshade tests.

Provides reusable test fixtures for:
- Reference sites
- Obstacles and roofs
- Solar database payloads
"""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from solarshade.core.config import Settings
from solarshade.core.models import ObstacleType, RoofFootprint, ShadingObstacle
from solarshade.utils.logging_config import ensure_logging

# Configure logging once, before any CLI runner swaps the output streams
ensure_logging()


# =============================================================================
# SITE FIXTURES
# =============================================================================

@pytest.fixture
def copenhagen():
    """Copenhagen (lat, lon)."""
    return (55.6, 12.6)


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs, cleaned up after test."""
    tmp = tempfile.mkdtemp(prefix="solarshade_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


# =============================================================================
# SHADING FIXTURES
# =============================================================================

@pytest.fixture
def roof() -> RoofFootprint:
    """Default 20 m × 20 m roof."""
    return RoofFootprint(width=20.0, depth=20.0)


@pytest.fixture
def south_building() -> ShadingObstacle:
    """15 m building 10 m south of the roof, no width."""
    return ShadingObstacle(
        category=ObstacleType.BUILDING,
        height=15.0,
        distance=10.0,
        azimuth=180.0,
        description="Building south",
    )


@pytest.fixture
def north_building() -> ShadingObstacle:
    """Same building placed north of the roof."""
    return ShadingObstacle(
        category=ObstacleType.BUILDING,
        height=15.0,
        distance=10.0,
        azimuth=0.0,
        description="Building north",
    )


@pytest.fixture
def wide_tower() -> ShadingObstacle:
    """30 m, 40 m wide block right next to the roof on the south side."""
    return ShadingObstacle(
        category=ObstacleType.BUILDING,
        height=30.0,
        distance=2.0,
        azimuth=180.0,
        width=40.0,
        description="Tower block south",
    )


@pytest.fixture
def obstacles_file(temp_dir, south_building) -> Path:
    """JSON obstacle survey with a single south building."""
    path = temp_dir / "obstacles.json"
    path.write_text(json.dumps({
        "obstacles": [
            {
                "type": "building",
                "height": south_building.height,
                "distance": south_building.distance,
                "azimuth": south_building.azimuth,
                "description": south_building.description,
            }
        ]
    }))
    return path


# =============================================================================
# SOLAR DATABASE FIXTURES
# =============================================================================

# Typical monthly horizontal irradiation (kWh/m²) and temperature for Copenhagen
COPENHAGEN_H_SUN = [18.6, 33.6, 74.4, 120.0, 161.2, 171.0, 167.4, 136.4, 90.0, 49.6, 21.0, 13.0]
COPENHAGEN_T2M = [1.0, 1.2, 3.5, 7.9, 12.4, 15.8, 18.3, 18.1, 14.6, 10.1, 5.6, 2.3]


@pytest.fixture
def monthly_payload() -> dict:
    """Single-year monthly irradiation payload."""
    return {
        "outputs": {
            "monthly": [
                {"year": 2020, "month": month, "H_sun": h_sun, "T2m": t2m}
                for month, (h_sun, t2m) in enumerate(zip(COPENHAGEN_H_SUN, COPENHAGEN_T2M), start=1)
            ]
        }
    }


@pytest.fixture
def pv_payload() -> dict:
    """PV system calculation payload for a 1 kWp system at optimal angles."""
    return {
        "inputs": {
            "mounting_system": {
                "fixed": {
                    "slope": {"value": 40, "optimal": True},
                    "azimuth": {"value": 0, "optimal": False},
                }
            }
        },
        "outputs": {
            "monthly": [
                {"month": month, "E_m": 20.0 + month} for month in range(1, 13)
            ],
            "totals": {"E_y": 1000.0, "H_year": 1250.0},
        },
    }
