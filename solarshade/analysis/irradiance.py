"""
Hourly Irradiance Synthesizer.

Turns a daily irradiation total (kWh/m²/day, typically a monthly average
from the solar database) into a 24-hour curve for one representative day:
- Clear-sky relative intensity from an air-mass proxy per hour
- Scaled so the hours add back up to the daily total
- Fixed direct/diffuse split of the global value
- Sinusoidal day/night temperature around the monthly average

The direct/diffuse split is a declared simplification, not a radiative
transfer model.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..core.config import Settings, settings as default_settings
from ..core.models import HourlyIrradiance, MonthlyIrradianceRecord
from ..geometry.solar_position import get_solar_position
from ..utils.validation import (
    validate_coordinates,
    validate_finite,
    validate_month,
    validate_non_negative,
    validate_timestamp,
)

logger = logging.getLogger(__name__)

CLEAR_SKY_PEAK_W_M2 = 1000.0
ATMOSPHERIC_TRANSMITTANCE = 0.7
AIR_MASS_EXPONENT = 0.678


def clear_sky_relative(elevation: float) -> float:
    """Relative horizontal clear-sky irradiance for a sun elevation (degrees)."""
    if elevation <= 0:
        return 0.0
    sin_elevation = math.sin(math.radians(elevation))
    air_mass = 1.0 / sin_elevation
    clear_sky = CLEAR_SKY_PEAK_W_M2 * ATMOSPHERIC_TRANSMITTANCE ** (air_mass ** AIR_MASS_EXPONENT)
    return max(0.0, clear_sky * sin_elevation)


def hourly_temperature(
    hour: float,
    avg_temperature: float,
    min_temperature_hour: int = 6,
    amplitude: float = 8.0,
) -> float:
    """
    Ambient temperature at an hour of the day.

    Coldest at min_temperature_hour, warmest twelve hours later, swinging
    by +/- amplitude around the average. This deliberately replaces the
    avg + 8*sin((h - 6) * 15deg) curve, which sits at the average at 06:00
    and peaks at noon, so that min_temperature_hour really is the minimum.
    """
    phase = 2.0 * math.pi * (hour - min_temperature_hour) / 24.0
    return avg_temperature - amplitude * math.cos(phase)


def get_hourly_irradiance(
    latitude: float,
    longitude: float,
    day: Any,
    daily_total: float,
    avg_temperature: Optional[float] = None,
    timezone: float = 0.0,
    settings: Optional[Settings] = None,
) -> List[HourlyIrradiance]:
    """
    Synthesize 24 hourly irradiance samples for one day.

    Args:
        latitude: Degrees, positive north
        longitude: Degrees, positive east
        day: Representative date (date, datetime or ISO string)
        daily_total: Daily irradiation on the horizontal (kWh/m²/day), >= 0
        avg_temperature: Average ambient temperature (°C)
        timezone: Hours from UTC of the hour labels
        settings: Override configuration

    Returns:
        24 HourlyIrradiance values. Their GHI sums, in kWh/m², to daily_total.
        When the sun never rises the curve is all zeros.

    Raises:
        InvalidInputError: If coordinates, date or daily_total are invalid
    """
    settings = settings or default_settings
    lat, lon = validate_coordinates(latitude, longitude)
    total = validate_non_negative(daily_total, "daily_total")
    moment = validate_timestamp(day)
    if avg_temperature is None:
        avg_temperature = settings.default_avg_temperature_c
    avg_temperature = validate_finite(avg_temperature, "avg_temperature")

    relative = []
    for hour in range(24):
        # Middle of the hour represents the whole hour
        sample = datetime(moment.year, moment.month, moment.day, hour, 30)
        sun = get_solar_position(lat, lon, sample, timezone)
        relative.append(clear_sky_relative(sun.elevation))

    relative_sum = sum(relative)
    if relative_sum > 0:
        scale = total * 1000.0 / relative_sum
    else:
        scale = 0.0
        logger.info(
            f"No daylight at ({lat:.2f}, {lon:.2f}) on {moment.date()}; returning zero irradiance"
        )

    direct = settings.direct_fraction
    hourly = []
    for hour, value in enumerate(relative):
        ghi = value * scale
        hourly.append(HourlyIrradiance(
            hour=hour,
            ghi=ghi,
            dni=ghi * direct,
            dhi=ghi * (1.0 - direct),
            temperature=hourly_temperature(
                hour,
                avg_temperature,
                min_temperature_hour=settings.min_temperature_hour,
                amplitude=settings.temperature_amplitude_c,
            ),
        ))

    return hourly


def daily_total_kwh(hourly: Iterable[HourlyIrradiance]) -> float:
    """Sum of hourly GHI converted back to kWh/m²."""
    return sum(sample.ghi for sample in hourly) / 1000.0


def get_monthly_hourly_profiles(
    latitude: float,
    longitude: float,
    records: Iterable[MonthlyIrradianceRecord],
    year: Optional[int] = None,
    timezone: float = 0.0,
    settings: Optional[Settings] = None,
) -> Dict[int, List[HourlyIrradiance]]:
    """
    Representative-day curves for each month of solar database records.

    The sample day of every month (the 15th by default) stands for the
    month, at the record's average irradiance and temperature.
    """
    settings = settings or default_settings
    year = year or settings.sample_year

    profiles = {}
    for record in records:
        month = validate_month(record.month)
        profiles[month] = get_hourly_irradiance(
            latitude,
            longitude,
            datetime(year, month, settings.sample_day),
            record.avg_daily_irradiance,
            avg_temperature=record.avg_temperature,
            timezone=timezone,
            settings=settings,
        )
        logger.debug(f"{record.month_name}: peak GHI {max(h.ghi for h in profiles[month]):.0f} W/m²")

    return dict(sorted(profiles.items()))
