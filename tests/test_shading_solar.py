"""
Tests for the annual shading analyzer.

Covers:
- Roof sampling grid
- Per-sample shading percentage
- Primary cause attribution
- Recommendation rules
- Full-year analysis scenarios
"""

import math

import numpy as np
import pytest

from solarshade.analysis.shading_solar import (
    RECOMMEND_ELEVATED,
    RECOMMEND_EXCELLENT,
    RECOMMEND_PRUNING,
    RECOMMEND_RELOCATE,
    RECOMMEND_REMOVAL,
    RECOMMEND_TILT,
    UNKNOWN_CAUSE,
    analyze_annual_shading,
    calculate_roof_shading_percentage,
    generate_shading_recommendations,
    identify_primary_shading_cause,
    roof_grid,
)
from solarshade.core.config import Settings
from solarshade.core.models import ObstacleType, RoofFootprint, ShadingObstacle, SolarPosition
from solarshade.utils.validation import InvalidInputError


def sun_at(elevation, azimuth):
    return SolarPosition(elevation=elevation, azimuth=azimuth, zenith=90.0 - elevation, hour_angle=0.0)


class TestRoofGrid:
    """Tests for the roof sampling grid."""

    def test_cell_count(self, roof):
        distances, azimuths = roof_grid(roof, 2.0)
        assert distances.shape == azimuths.shape == (100,)

    def test_partial_cells_rounded_up(self, roof):
        distances, _ = roof_grid(roof, 3.0)
        assert distances.size == 49

    def test_cells_inside_roof(self, roof):
        distances, _ = roof_grid(roof, 2.0)
        assert distances.max() == pytest.approx(math.hypot(9.0, 9.0))
        assert distances.min() == pytest.approx(math.hypot(1.0, 1.0))

    def test_azimuth_range(self, roof):
        _, azimuths = roof_grid(roof, 2.0)
        assert np.all((azimuths >= 0) & (azimuths < 360))


class TestRoofShadingPercentage:
    """Tests for per-sample shading."""

    def test_no_obstacles(self, roof):
        assert calculate_roof_shading_percentage([], sun_at(30.0, 180.0), roof) == 0.0

    def test_sun_down_fully_shaded(self, roof, south_building):
        assert calculate_roof_shading_percentage([south_building], sun_at(-5.0, 0.0), roof) == 100.0

    def test_bounded(self, roof, wide_tower, south_building):
        for elevation in (2.0, 10.0, 30.0, 60.0):
            for azimuth in (90.0, 135.0, 180.0, 225.0, 270.0):
                pct = calculate_roof_shading_percentage(
                    [wide_tower, south_building], sun_at(elevation, azimuth), roof
                )
                assert 0.0 <= pct <= 100.0

    def test_more_obstacles_never_less_shade(self, roof, south_building, wide_tower):
        sun = sun_at(20.0, 170.0)
        one = calculate_roof_shading_percentage([south_building], sun, roof)
        both = calculate_roof_shading_percentage([south_building, wide_tower], sun, roof)
        assert both >= one


class TestPrimaryCause:
    """Tests for critical period attribution."""

    def test_no_obstacles(self):
        assert identify_primary_shading_cause([], sun_at(20.0, 180.0)) == UNKNOWN_CAUSE

    def test_obstacle_behind_roof_ignored(self, north_building):
        assert identify_primary_shading_cause([north_building], sun_at(20.0, 180.0)) == UNKNOWN_CAUSE

    def test_highest_ratio_wins(self, south_building, wide_tower):
        cause = identify_primary_shading_cause([south_building, wide_tower], sun_at(20.0, 180.0))
        assert cause == "Tower block south"

    def test_description_fallback(self):
        unnamed = ShadingObstacle(ObstacleType.TREE, 12.0, 6.0, 200.0)
        cause = identify_primary_shading_cause([unnamed], sun_at(20.0, 180.0))
        assert cause.startswith("tree")


class TestRecommendations:
    """Tests for recommendation rules."""

    def test_clean_site(self, settings):
        recs = generate_shading_recommendations(
            0.0, {"spring": 0.0, "summer": 0.0, "autumn": 0.0, "winter": 0.0}, [], settings
        )
        assert recs == [RECOMMEND_EXCELLENT]

    def test_heavy_shading(self, settings):
        recs = generate_shading_recommendations(
            25.0, {"spring": 20.0, "summer": 20.0, "autumn": 25.0, "winter": 35.0}, [], settings
        )
        assert recs == [RECOMMEND_RELOCATE, RECOMMEND_REMOVAL]

    def test_winter_dominated(self, settings):
        recs = generate_shading_recommendations(
            8.0, {"spring": 5.0, "summer": 2.0, "autumn": 10.0, "winter": 15.0}, [], settings
        )
        assert RECOMMEND_TILT in recs
        assert RECOMMEND_EXCELLENT not in recs

    def test_tall_tree(self, settings):
        tree = ShadingObstacle(ObstacleType.TREE, 15.0, 20.0, 200.0)
        recs = generate_shading_recommendations(10.0, {"winter": 0.0, "summer": 0.0}, [tree], settings)
        assert recs == [RECOMMEND_PRUNING]

    def test_close_building(self, settings, south_building):
        recs = generate_shading_recommendations(10.0, {"winter": 0.0, "summer": 0.0}, [south_building], settings)
        assert recs == [RECOMMEND_ELEVATED]

    def test_thresholds_configurable(self, south_building):
        strict = Settings(_env_file=None, low_loss_pct=0.0, building_proximity_factor=0.5)
        recs = generate_shading_recommendations(0.0, {}, [south_building], strict)
        assert recs == []


class TestAnnualShadingScenarios:
    """End-to-end annual analysis."""

    def test_unobstructed_site(self, copenhagen):
        """No obstacles: zero loss and an excellent-site recommendation."""
        lat, lon = copenhagen
        result = analyze_annual_shading(lat, lon, [])
        assert result.annual_shading_loss == 0.0
        assert all(loss == 0.0 for loss in result.seasonal_losses.values())
        assert result.critical_periods == []
        assert result.recommendations == [RECOMMEND_EXCELLENT]
        assert result.grid_cells == 100
        assert 0 < result.samples_analyzed <= 36

    def test_default_obstacles_none(self, copenhagen):
        lat, lon = copenhagen
        assert analyze_annual_shading(lat, lon).annual_shading_loss == 0.0

    def test_south_building_shades_winter_more(self, copenhagen, south_building):
        """A building south of the roof hurts most when the sun is low."""
        lat, lon = copenhagen
        result = analyze_annual_shading(lat, lon, [south_building])
        assert result.seasonal_losses["winter"] > result.seasonal_losses["summer"]
        assert result.seasonal_losses["winter"] > 0
        assert RECOMMEND_TILT in result.recommendations
        assert RECOMMEND_ELEVATED in result.recommendations

    def test_north_building_casts_no_shade(self, copenhagen, north_building):
        lat, lon = copenhagen
        result = analyze_annual_shading(lat, lon, [north_building])
        assert result.annual_shading_loss == 0.0

    def test_tower_block_critical_periods(self, copenhagen, wide_tower):
        lat, lon = copenhagen
        result = analyze_annual_shading(lat, lon, [wide_tower])
        assert result.annual_shading_loss > 20.0
        assert result.critical_periods
        for period in result.critical_periods:
            assert period.shading_percentage > 30.0
            assert period.time_of_day in ("9:00", "12:00", "15:00")
            assert period.season in result.seasonal_losses
            assert 1 <= period.month <= 12
        assert any(period.cause == "Tower block south" for period in result.critical_periods)
        assert RECOMMEND_RELOCATE in result.recommendations
        assert RECOMMEND_REMOVAL in result.recommendations

    def test_losses_bounded(self, copenhagen, wide_tower, south_building):
        lat, lon = copenhagen
        result = analyze_annual_shading(lat, lon, [wide_tower, south_building])
        assert 0.0 <= result.annual_shading_loss <= 100.0
        for loss in result.seasonal_losses.values():
            assert 0.0 <= loss <= 100.0

    def test_annual_is_mean_of_samples(self, copenhagen, south_building):
        """Annual loss lies between the smallest and largest seasonal loss."""
        lat, lon = copenhagen
        result = analyze_annual_shading(lat, lon, [south_building])
        losses = result.seasonal_losses.values()
        assert min(losses) <= result.annual_shading_loss <= max(losses)

    def test_southern_hemisphere_north_obstacle(self, north_building):
        """South of the tropics the sun is in the north, so is the shade."""
        result = analyze_annual_shading(-33.9, 18.4, [north_building])
        assert result.annual_shading_loss > 0.0

    def test_custom_roof(self, copenhagen, south_building):
        lat, lon = copenhagen
        result = analyze_annual_shading(lat, lon, [south_building], RoofFootprint(width=10.0, depth=6.0))
        assert result.grid_cells == 15

    def test_critical_threshold_configurable(self, copenhagen, wide_tower):
        lat, lon = copenhagen
        relaxed = Settings(_env_file=None, critical_shading_pct=100.0)
        result = analyze_annual_shading(lat, lon, [wide_tower], settings=relaxed)
        assert result.critical_periods == []

    def test_to_dict(self, copenhagen, wide_tower):
        lat, lon = copenhagen
        data = analyze_annual_shading(lat, lon, [wide_tower]).to_dict()
        assert set(data) >= {"annual_shading_loss", "seasonal_losses", "critical_periods", "recommendations"}
        assert isinstance(data["critical_periods"][0], dict)


class TestAnnualShadingValidation:
    """Invalid inputs raise InvalidInputError."""

    def test_nan_latitude(self):
        with pytest.raises(InvalidInputError):
            analyze_annual_shading(math.nan, 12.6, [])

    def test_zero_height_obstacle(self, copenhagen):
        lat, lon = copenhagen
        flat = ShadingObstacle(ObstacleType.BUILDING, 0.0, 10.0, 180.0)
        with pytest.raises(InvalidInputError) as exc:
            analyze_annual_shading(lat, lon, [flat])
        assert exc.value.field == "obstacle.height"

    def test_negative_distance_obstacle(self, copenhagen):
        lat, lon = copenhagen
        bad = ShadingObstacle(ObstacleType.TREE, 10.0, -3.0, 180.0)
        with pytest.raises(InvalidInputError):
            analyze_annual_shading(lat, lon, [bad])

    def test_wrapped_obstacle_azimuth(self, copenhagen):
        lat, lon = copenhagen
        wrapped = ShadingObstacle(ObstacleType.BUILDING, 15.0, 10.0, 540.0)
        with pytest.raises(InvalidInputError) as exc:
            analyze_annual_shading(lat, lon, [wrapped])
        assert exc.value.field == "obstacle.azimuth"

    def test_invalid_roof(self, copenhagen):
        lat, lon = copenhagen
        with pytest.raises(InvalidInputError):
            analyze_annual_shading(lat, lon, [], RoofFootprint(width=0.0, depth=10.0))
