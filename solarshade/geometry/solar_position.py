"""
Solar Position Calculator.

Single-pass low-precision solar coordinates (mean longitude, mean anomaly,
ecliptic longitude) turned into local elevation and azimuth:
- Julian Day Number of the calendar date
- Declination from the ecliptic longitude and a fixed obliquity
- Equation of time from mean longitude and right ascension
- Hour angle from local solar time

Accuracy is a fraction of a degree for mid latitudes, which is plenty for
shading estimates. Not an ephemeris.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Optional

from ..core.models import SolarPosition
from ..utils.validation import validate_coordinates, validate_timestamp, validate_timezone

logger = logging.getLogger(__name__)

J2000_JULIAN_DAY = 2451545.0
OBLIQUITY_DEG = 23.439


def normalize_angle(angle: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    wrapped = angle % 360.0
    # Tiny negative inputs round up to exactly 360.0
    if wrapped >= 360.0:
        wrapped -= 360.0
    return wrapped


def signed_angle(angle: float) -> float:
    """Wrap an angle in degrees into [-180, 180)."""
    return normalize_angle(angle + 180.0) - 180.0


def angular_difference(a: float, b: float) -> float:
    """Smallest absolute difference between two bearings, 0..180 degrees."""
    diff = normalize_angle(a - b)
    return 360.0 - diff if diff > 180.0 else diff


def julian_day_number(year: int, month: int, day: int) -> int:
    """Julian Day Number (noon-based, integer) of a Gregorian calendar date."""
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def _solar_longitudes(n: float) -> tuple[float, float]:
    """Mean longitude L and ecliptic longitude lambda (degrees) for day offset n."""
    mean_longitude = normalize_angle(280.460 + 0.9856474 * n)
    mean_anomaly = math.radians(normalize_angle(357.528 + 0.9856003 * n))
    ecliptic_longitude = (
        mean_longitude
        + 1.915 * math.sin(mean_anomaly)
        + 0.020 * math.sin(2 * mean_anomaly)
    )
    return mean_longitude, ecliptic_longitude


def solar_declination(n: float) -> float:
    """Sun declination in degrees for day offset n from J2000."""
    _, ecliptic_longitude = _solar_longitudes(n)
    return math.degrees(
        math.asin(
            math.sin(math.radians(OBLIQUITY_DEG)) * math.sin(math.radians(ecliptic_longitude))
        )
    )


def equation_of_time(n: float) -> float:
    """
    Equation of time in minutes for day offset n from J2000.

    Positive when the apparent sun is ahead of the mean sun.
    """
    mean_longitude, ecliptic_longitude = _solar_longitudes(n)
    lam = math.radians(ecliptic_longitude)
    right_ascension = math.degrees(
        math.atan2(math.cos(math.radians(OBLIQUITY_DEG)) * math.sin(lam), math.cos(lam))
    )
    return 4.0 * signed_angle(mean_longitude - right_ascension)


def get_solar_position(
    latitude: float,
    longitude: float,
    timestamp: Any,
    timezone: Optional[float] = None,
) -> SolarPosition:
    """
    Calculate sun position for a location and local clock time.

    Args:
        latitude: Degrees, positive north (-90..90)
        longitude: Degrees, positive east (-180..180)
        timestamp: datetime, date or ISO-8601 string in local clock time
        timezone: Hours from UTC. Defaults to the timestamp's own UTC offset
            when it is timezone-aware, otherwise 0.

    Returns:
        SolarPosition. Elevation <= 0 means the sun is below the horizon;
        that is a valid result, not an error.

    Raises:
        InvalidInputError: If any input is non-finite or out of range
    """
    lat, lon = validate_coordinates(latitude, longitude)
    moment = validate_timestamp(timestamp)

    if timezone is None:
        offset = moment.utcoffset()
        timezone = offset.total_seconds() / 3600.0 if offset is not None else 0.0
    tz = validate_timezone(timezone)

    n = julian_day_number(moment.year, moment.month, moment.day) - J2000_JULIAN_DAY
    declination = math.radians(solar_declination(n))

    time_correction = 4.0 * (lon - tz * 15.0) + equation_of_time(n)  # minutes
    solar_time = _clock_hours(moment) + time_correction / 60.0
    hour_angle = signed_angle(15.0 * (solar_time - 12.0))

    phi = math.radians(lat)
    h = math.radians(hour_angle)

    sin_elevation = (
        math.sin(declination) * math.sin(phi)
        + math.cos(declination) * math.cos(phi) * math.cos(h)
    )
    # Rounding can push the sum a hair past +/-1 at the poles
    elevation = math.degrees(math.asin(max(-1.0, min(1.0, sin_elevation))))

    azimuth = math.degrees(
        math.atan2(
            math.sin(h),
            math.cos(h) * math.sin(phi) - math.tan(declination) * math.cos(phi),
        )
    )

    position = SolarPosition(
        elevation=elevation,
        azimuth=normalize_angle(azimuth + 180.0),
        zenith=90.0 - elevation,
        hour_angle=hour_angle,
    )
    logger.debug(
        f"Sun at ({lat:.3f}, {lon:.3f}) {moment.isoformat()}: "
        f"elevation={position.elevation:.2f} azimuth={position.azimuth:.2f}"
    )
    return position


def _clock_hours(moment: datetime) -> float:
    return moment.hour + moment.minute / 60.0 + moment.second / 3600.0
