"""
Optimal Tilt Estimator.

Heuristic only: the annual optimum is taken as |latitude| and a monthly
optimum adds a coarse cosine correction (steeper in the winter months).
This is not an optimization over irradiance data.
"""

import math
from typing import List, Optional

from ..utils.validation import InvalidInputError, validate_finite, validate_month

SEASONAL_AMPLITUDE_DEG = 15.0


def get_optimal_tilt(latitude: float, month: Optional[int] = None) -> float:
    """
    Estimate the optimal fixed-panel tilt in degrees.

    Args:
        latitude: Site latitude (-90..90)
        month: Optional calendar month (1-12) for a monthly optimum

    Returns:
        Tilt from horizontal in degrees
    """
    lat = validate_finite(latitude, "latitude")
    if not (-90 <= lat <= 90):
        raise InvalidInputError(
            f"Invalid latitude {lat}: must be between -90 and 90",
            field="latitude",
        )

    if month is None:
        return abs(lat)

    month = validate_month(month)
    seasonal_adjustment = SEASONAL_AMPLITUDE_DEG * math.cos(math.radians((month - 1) * 30))
    return abs(lat) + seasonal_adjustment


def monthly_optimal_tilts(latitude: float) -> List[float]:
    """Optimal tilt for January through December."""
    return [get_optimal_tilt(latitude, month) for month in range(1, 13)]
