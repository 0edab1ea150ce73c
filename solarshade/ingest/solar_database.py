"""
Solar database record parsing.

Converts PVGIS-style JSON payloads (already fetched by the caller) into
MonthlyIrradianceRecord and PVSystemPotential values. No network I/O
happens here.

Monthly payload shape:
    {"outputs": {"monthly": [{"year": 2020, "month": 1, "H_sun": 21.4, "T2m": 0.8}, ...]}}

H_sun is the monthly global horizontal sum in kWh/m². Multi-year series
are averaged per calendar month.
"""

from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..core.models import MonthlyIrradianceRecord, PVSystemPotential
from ..utils.validation import (
    InvalidInputError,
    validate_coordinates,
    validate_finite,
    validate_month,
    validate_non_negative,
    validate_positive,
)

logger = logging.getLogger(__name__)

# Coverage boxes: (lat_min, lat_max, lon_min, lon_max)
COVERAGE_REGIONS: Dict[str, Tuple[float, float, float, float]] = {
    "europe": (25.0, 75.0, -40.0, 65.0),
    "africa": (-40.0, 40.0, -25.0, 60.0),
}


def _monthly_entries(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    try:
        entries = payload["outputs"]["monthly"]
    except (KeyError, TypeError):
        raise InvalidInputError(
            "Solar database payload has no outputs.monthly section",
            field="outputs.monthly",
        )
    if not isinstance(entries, list) or not entries:
        raise InvalidInputError(
            "Solar database payload has no monthly entries",
            field="outputs.monthly",
        )
    return entries


def _entry_value(entry: Dict[str, Any], key: str) -> Any:
    if key not in entry:
        raise InvalidInputError(
            f"Monthly entry is missing '{key}'",
            field=f"outputs.monthly.{key}",
        )
    return entry[key]


def parse_monthly_records(payload: Dict[str, Any]) -> List[MonthlyIrradianceRecord]:
    """
    Parse a monthly irradiation payload into average-daily records.

    Args:
        payload: Decoded PVGIS-style JSON

    Returns:
        One record per calendar month present, sorted by month

    Raises:
        InvalidInputError: If the payload is malformed
    """
    irradiation = defaultdict(list)
    temperature = defaultdict(list)

    for entry in _monthly_entries(payload):
        month = validate_month(_entry_value(entry, "month"))
        irradiation[month].append(validate_non_negative(_entry_value(entry, "H_sun"), "H_sun"))
        temperature[month].append(validate_finite(_entry_value(entry, "T2m"), "T2m"))

    records = []
    for month in sorted(irradiation):
        monthly_sum = sum(irradiation[month]) / len(irradiation[month])
        records.append(MonthlyIrradianceRecord(
            month=month,
            avg_daily_irradiance=monthly_sum / calendar.monthrange(2023, month)[1],
            avg_temperature=sum(temperature[month]) / len(temperature[month]),
        ))

    logger.debug(f"Parsed {len(records)} monthly records")
    return records


def parse_pv_system_potential(payload: Dict[str, Any], peak_power: float = 1.0) -> PVSystemPotential:
    """
    Parse a PV system calculation payload.

    Performance ratio is yearly output over peak_power × yearly horizontal
    irradiation. Optimal tilt and azimuth are only reported when the payload
    marks them as optimized.

    Raises:
        InvalidInputError: If the payload is malformed
    """
    peak = validate_positive(peak_power, "peak_power")

    monthly = [
        validate_non_negative(_entry_value(entry, "E_m"), "E_m")
        for entry in sorted(_monthly_entries(payload), key=lambda e: _entry_value(e, "month"))
    ]

    try:
        totals = payload["outputs"]["totals"]
        yearly_output = validate_non_negative(totals["E_y"], "E_y")
        yearly_irradiation = validate_positive(totals["H_year"], "H_year")
    except (KeyError, TypeError):
        raise InvalidInputError(
            "Solar database payload has no E_y/H_year totals",
            field="outputs.totals",
        )

    fixed = (
        payload.get("inputs", {})
        .get("mounting_system", {})
        .get("fixed", {})
    )
    slope = fixed.get("slope", {})
    azimuth = fixed.get("azimuth", {})

    return PVSystemPotential(
        yearly_output=yearly_output,
        monthly_output=tuple(monthly),
        performance_ratio=yearly_output / (peak * yearly_irradiation),
        optimal_tilt=float(slope["value"]) if slope.get("optimal") else None,
        optimal_azimuth=float(azimuth["value"]) if azimuth.get("optimal") else None,
    )


def summarize_year(records: Iterable[MonthlyIrradianceRecord]) -> Dict[str, float]:
    """Yearly irradiation total (kWh/m²) and mean temperature (°C)."""
    records = list(records)
    if not records:
        return {"total_irradiance": 0.0, "avg_temperature": 0.0}
    return {
        "total_irradiance": sum(record.total_irradiance for record in records),
        "avg_temperature": sum(record.avg_temperature for record in records) / len(records),
    }


def is_location_supported(latitude: float, longitude: float) -> bool:
    """Whether the solar database covers a location."""
    return supported_region(latitude, longitude) is not None


def supported_region(latitude: float, longitude: float) -> Optional[str]:
    """Name of the first coverage region containing a location, if any."""
    lat, lon = validate_coordinates(latitude, longitude)
    for name, (lat_min, lat_max, lon_min, lon_max) in COVERAGE_REGIONS.items():
        if lat_min <= lat <= lat_max and lon_min <= lon <= lon_max:
            return name
    return None
