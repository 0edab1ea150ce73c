"""Tests for typical obstacle estimation."""
import pytest

from solarshade.analysis.obstacles import estimate_common_obstacles
from solarshade.core.models import LocationType, ObstacleType
from solarshade.utils.validation import InvalidInputError


class TestEstimateCommonObstacles:
    """Test estimate_common_obstacles."""

    def test_urban(self):
        """Urban sites have two buildings scaled by the local height."""
        obstacles = estimate_common_obstacles("urban", building_height=12.0)
        assert [o.category for o in obstacles] == [ObstacleType.BUILDING, ObstacleType.BUILDING]
        assert obstacles[0].height == pytest.approx(18.0)
        assert obstacles[0].azimuth == 180.0
        assert obstacles[1].height == pytest.approx(9.6)
        assert obstacles[1].azimuth == 135.0

    def test_suburban(self):
        obstacles = estimate_common_obstacles("suburban")
        assert [o.category for o in obstacles] == [ObstacleType.TREE, ObstacleType.BUILDING]
        assert obstacles[0].height == 15.0
        assert obstacles[1].height == pytest.approx(9.0)  # 0.9 × default 10 m

    def test_rural(self):
        obstacles = estimate_common_obstacles("rural")
        assert len(obstacles) == 1
        assert obstacles[0].category == ObstacleType.TREE
        assert obstacles[0].description == "Isolated tree"

    def test_case_insensitive_and_enum(self):
        assert estimate_common_obstacles(" Urban ") == estimate_common_obstacles(LocationType.URBAN)

    def test_default_height(self):
        assert estimate_common_obstacles("urban")[0].height == pytest.approx(15.0)

    def test_all_obstacles_have_width(self):
        for kind in LocationType:
            for obstacle in estimate_common_obstacles(kind):
                assert obstacle.width and obstacle.width > 0
                assert obstacle.height > 0 and obstacle.distance > 0

    def test_unknown_location_type(self):
        with pytest.raises(InvalidInputError) as exc:
            estimate_common_obstacles("downtown")
        assert exc.value.field == "location_type"
        assert exc.value.suggestions

    def test_invalid_building_height(self):
        with pytest.raises(InvalidInputError):
            estimate_common_obstacles("urban", building_height=-5.0)
