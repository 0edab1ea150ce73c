"""Tests for the optimal tilt heuristic."""
import math

import pytest

from solarshade.analysis.tilt import get_optimal_tilt, monthly_optimal_tilts
from solarshade.utils.validation import InvalidInputError


class TestAnnualTilt:
    """Annual optimum is |latitude|."""

    def test_northern(self):
        assert get_optimal_tilt(40.0) == 40.0

    def test_southern_uses_absolute_latitude(self):
        assert get_optimal_tilt(-33.9) == pytest.approx(33.9)

    def test_equator(self):
        assert get_optimal_tilt(0.0) == 0.0


class TestMonthlyTilt:
    """Monthly optimum adds a cosine seasonal correction."""

    def test_january_steepest(self):
        assert get_optimal_tilt(40.0, 1) == pytest.approx(55.0)

    def test_july_flattest(self):
        assert get_optimal_tilt(40.0, 7) == pytest.approx(25.0)

    def test_equinox_months_near_annual(self):
        assert get_optimal_tilt(40.0, 4) == pytest.approx(40.0, abs=1e-9)
        assert get_optimal_tilt(40.0, 10) == pytest.approx(40.0, abs=1e-9)

    def test_monthly_list(self):
        tilts = monthly_optimal_tilts(55.6)
        assert len(tilts) == 12
        assert tilts[0] == max(tilts)
        assert tilts[6] == min(tilts)


class TestTiltValidation:
    """Invalid inputs raise InvalidInputError."""

    def test_month_out_of_range(self):
        with pytest.raises(InvalidInputError):
            get_optimal_tilt(40.0, 13)

    def test_month_zero(self):
        with pytest.raises(InvalidInputError):
            get_optimal_tilt(40.0, 0)

    def test_fractional_month(self):
        with pytest.raises(InvalidInputError):
            get_optimal_tilt(40.0, 2.5)

    def test_nan_latitude(self):
        with pytest.raises(InvalidInputError):
            get_optimal_tilt(math.nan)

    def test_latitude_out_of_range(self):
        with pytest.raises(InvalidInputError):
            get_optimal_tilt(-95.0)
