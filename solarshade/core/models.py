"""
Data models for solar geometry and shading analysis.

All values are created on demand for a single calculation and never
persisted. Angles are degrees, lengths meters, irradiance W/m² unless a
field says otherwise.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# =============================================================================
# ENUMS
# =============================================================================


class ObstacleType(str, Enum):
    BUILDING = "building"
    TREE = "tree"
    TERRAIN = "terrain"
    STRUCTURE = "structure"


class LocationType(str, Enum):
    URBAN = "urban"
    SUBURBAN = "suburban"
    RURAL = "rural"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


# Month triples per season, in sampling order
SEASON_MONTHS: Dict[Season, Tuple[int, int, int]] = {
    Season.SPRING: (3, 4, 5),
    Season.SUMMER: (6, 7, 8),
    Season.AUTUMN: (9, 10, 11),
    Season.WINTER: (12, 1, 2),
}


# =============================================================================
# SOLAR GEOMETRY
# =============================================================================


@dataclass(frozen=True)
class SolarPosition:
    """Sun position for one place and instant."""

    elevation: float  # -90..90, above horizon when > 0
    azimuth: float  # 0..360 from true north, clockwise
    zenith: float  # 90 - elevation
    hour_angle: float  # 15° per hour from local solar noon

    @property
    def is_daylight(self) -> bool:
        return self.elevation > 0


@dataclass(frozen=True)
class HourlyIrradiance:
    """Irradiance and temperature for one hour of a representative day."""

    hour: int  # 0-23
    ghi: float  # Global horizontal (W/m²)
    dni: float  # Direct normal share (W/m²)
    dhi: float  # Diffuse horizontal share (W/m²)
    temperature: float  # Ambient (°C)


@dataclass(frozen=True)
class HorizonPoint:
    """Obstacle elevation angle seen from the roof in one azimuth bin."""

    azimuth: float
    elevation: float


# =============================================================================
# UPSTREAM SOLAR DATABASE RECORDS
# =============================================================================


@dataclass(frozen=True)
class MonthlyIrradianceRecord:
    """Monthly aggregate supplied by the solar database."""

    month: int  # 1-12
    avg_daily_irradiance: float  # kWh/m²/day
    avg_temperature: float  # °C

    @property
    def month_name(self) -> str:
        return calendar.month_name[self.month]

    @property
    def days_in_month(self) -> int:
        # Non-leap year, as the database reports climatological months
        return calendar.monthrange(2023, self.month)[1]

    @property
    def total_irradiance(self) -> float:
        """Monthly sum in kWh/m²."""
        return self.avg_daily_irradiance * self.days_in_month


@dataclass(frozen=True)
class PVSystemPotential:
    """Yearly PV potential of a 1 kWp reference system."""

    yearly_output: float  # kWh/kWp
    monthly_output: Tuple[float, ...]  # kWh per month
    performance_ratio: float  # 0-1
    optimal_tilt: Optional[float] = None
    optimal_azimuth: Optional[float] = None


# =============================================================================
# SHADING
# =============================================================================


@dataclass(frozen=True)
class ShadingObstacle:
    """An object near the roof that can cast a shadow on it."""

    category: ObstacleType
    height: float  # m above roof level
    distance: float  # m from roof edge
    azimuth: float  # bearing from roof, 0=north
    width: Optional[float] = None  # m
    description: str = ""

    @property
    def height_distance_ratio(self) -> float:
        return self.height / self.distance

    @property
    def angular_elevation(self) -> float:
        """Elevation angle of the obstacle top seen from the roof edge (degrees)."""
        return math.degrees(math.atan2(self.height, self.distance))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShadingObstacle":
        return cls(
            category=ObstacleType(data.get("category", data.get("type", "building"))),
            height=float(data["height"]),
            distance=float(data["distance"]),
            azimuth=float(data["azimuth"]),
            width=float(data["width"]) if data.get("width") is not None else None,
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class RoofFootprint:
    """Rectangular roof, width along east-west and depth along north-south."""

    width: float = 20.0
    depth: float = 20.0

    @property
    def area(self) -> float:
        return self.width * self.depth


@dataclass
class CriticalPeriod:
    """A sampled instant where shading exceeds the critical threshold."""

    time_of_day: str
    season: str
    shading_percentage: float
    cause: str
    month: int = 0


@dataclass
class ShadingAnalysis:
    """Results from annual shading analysis."""

    annual_shading_loss: float = 0.0  # % of potential energy, 0-100
    seasonal_losses: Dict[str, float] = field(
        default_factory=lambda: {season.value: 0.0 for season in Season}
    )
    critical_periods: List[CriticalPeriod] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    # Sampling bookkeeping
    samples_analyzed: int = 0
    grid_cells: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
