"""
Input validation utilities for Solarshade.

Every public calculation validates its inputs here before computing.
Nothing is clamped: out-of-range or non-finite values raise
InvalidInputError naming the offending field.

Usage:
    from solarshade.utils.validation import (
        validate_coordinates,
        validate_obstacle,
        InvalidInputError,
    )

    lat, lon = validate_coordinates(55.6, 12.6)
"""

import logging
import math
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Tuple

from ..core.models import LocationType, ObstacleType, RoofFootprint, ShadingObstacle

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when an input is non-finite, out of range or malformed."""

    def __init__(self, message: str, field: str = "", suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field = field
        self.suggestions = suggestions or []


def validate_finite(value: Any, field: str) -> float:
    """
    Coerce to float and reject NaN/inf.

    Raises:
        InvalidInputError: If value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number: got {value!r}", field=field)
    try:
        number = float(value)
    except (ValueError, TypeError):
        raise InvalidInputError(f"{field} must be a number: got {value!r}", field=field)

    if not math.isfinite(number):
        raise InvalidInputError(f"{field} must be finite: got {number}", field=field)

    return number


def validate_positive(value: Any, field: str) -> float:
    """Finite and strictly greater than zero."""
    number = validate_finite(value, field)
    if number <= 0:
        raise InvalidInputError(
            f"{field} must be greater than 0: got {number}",
            field=field,
        )
    return number


def validate_non_negative(value: Any, field: str) -> float:
    """Finite and greater than or equal to zero."""
    number = validate_finite(value, field)
    if number < 0:
        raise InvalidInputError(
            f"{field} cannot be negative: got {number}",
            field=field,
        )
    return number


def validate_coordinates(latitude: Any, longitude: Any) -> Tuple[float, float]:
    """
    Validate geographic coordinates.

    Args:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees

    Returns:
        Tuple of (latitude, longitude)

    Raises:
        InvalidInputError: If coordinates are invalid
    """
    lat = validate_finite(latitude, "latitude")
    lon = validate_finite(longitude, "longitude")

    if not (-90 <= lat <= 90):
        raise InvalidInputError(
            f"Invalid latitude {lat}: must be between -90 and 90",
            field="latitude",
        )

    if not (-180 <= lon <= 180):
        raise InvalidInputError(
            f"Invalid longitude {lon}: must be between -180 and 180",
            field="longitude",
            suggestions=["Longitude is positive east of Greenwich, negative west"],
        )

    return (lat, lon)


def validate_timezone(offset: Any) -> float:
    """Hours from UTC, -14..14."""
    tz = validate_finite(offset, "timezone")
    if not (-14 <= tz <= 14):
        raise InvalidInputError(
            f"Invalid timezone offset {tz}: must be between -14 and 14 hours",
            field="timezone",
        )
    return tz


def validate_month(month: Any) -> int:
    """Calendar month 1..12."""
    if isinstance(month, bool) or not isinstance(month, (int, float)):
        raise InvalidInputError(f"Month must be an integer: got {month!r}", field="month")
    if not math.isfinite(month) or month != int(month) or not (1 <= month <= 12):
        raise InvalidInputError(
            f"Invalid month {month}: must be an integer from 1 to 12",
            field="month",
        )
    return int(month)


def validate_timestamp(timestamp: Any) -> datetime:
    """
    Accept a datetime, a date (taken at midnight) or an ISO-8601 string.

    Raises:
        InvalidInputError: If the value is not a valid date/time
    """
    if isinstance(timestamp, datetime):
        return timestamp
    if isinstance(timestamp, date):
        return datetime(timestamp.year, timestamp.month, timestamp.day)
    if isinstance(timestamp, str):
        try:
            return datetime.fromisoformat(timestamp)
        except ValueError:
            raise InvalidInputError(
                f"Invalid timestamp '{timestamp}'",
                field="timestamp",
                suggestions=["Use ISO-8601 like '2024-06-21T12:00:00'"],
            )
    raise InvalidInputError(
        f"Timestamp must be a date or datetime: got {type(timestamp).__name__}",
        field="timestamp",
    )


def validate_obstacle(obstacle: ShadingObstacle) -> ShadingObstacle:
    """
    Validate a shading obstacle.

    Height and distance must be strictly positive; width, when given,
    must be strictly positive too.
    """
    if not isinstance(obstacle.category, ObstacleType):
        raise InvalidInputError(
            f"Unknown obstacle category {obstacle.category!r}",
            field="obstacle.category",
            suggestions=[f"Valid categories are: {', '.join(t.value for t in ObstacleType)}"],
        )
    validate_positive(obstacle.height, "obstacle.height")
    validate_positive(obstacle.distance, "obstacle.distance")
    azimuth = validate_finite(obstacle.azimuth, "obstacle.azimuth")
    if not (0 <= azimuth <= 360):
        raise InvalidInputError(
            f"Invalid obstacle azimuth {azimuth}: must be between 0 and 360",
            field="obstacle.azimuth",
            suggestions=["Use a compass bearing from the roof: 0=north, 90=east, 180=south"],
        )
    if obstacle.width is not None:
        validate_positive(obstacle.width, "obstacle.width")
    return obstacle


def validate_obstacles(obstacles: Optional[Iterable[ShadingObstacle]]) -> List[ShadingObstacle]:
    return [validate_obstacle(obstacle) for obstacle in (obstacles or [])]


def validate_roof_footprint(roof: RoofFootprint) -> RoofFootprint:
    validate_positive(roof.width, "roof.width")
    validate_positive(roof.depth, "roof.depth")
    return roof


def validate_location_type(location_type: Any) -> LocationType:
    """
    Normalize a coarse location classification.

    Raises:
        InvalidInputError: If the classification is unknown
    """
    if isinstance(location_type, LocationType):
        return location_type

    normalized = str(location_type or "").lower().strip()
    try:
        return LocationType(normalized)
    except ValueError:
        raise InvalidInputError(
            f"Invalid location type '{location_type}'",
            field="location_type",
            suggestions=[f"Valid types are: {', '.join(t.value for t in LocationType)}"],
        )
