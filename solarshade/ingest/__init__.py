"""Solar database record parsing."""

from .solar_database import (
    is_location_supported,
    parse_monthly_records,
    parse_pv_system_potential,
    summarize_year,
    supported_region,
)

__all__ = [
    "parse_monthly_records",
    "parse_pv_system_potential",
    "summarize_year",
    "is_location_supported",
    "supported_region",
]
