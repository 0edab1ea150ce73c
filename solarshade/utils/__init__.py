"""Utility modules."""

from .logging_config import (
    setup_logging,
    ensure_logging,
    ConsoleFormatter,
    JsonLinesFormatter,
)
from .validation import (
    validate_coordinates,
    validate_finite,
    validate_location_type,
    validate_month,
    validate_obstacle,
    validate_timestamp,
    InvalidInputError,
)

__all__ = [
    # Logging
    "setup_logging",
    "ensure_logging",
    "ConsoleFormatter",
    "JsonLinesFormatter",
    # Validation
    "validate_coordinates",
    "validate_finite",
    "validate_location_type",
    "validate_month",
    "validate_obstacle",
    "validate_timestamp",
    "InvalidInputError",
]
