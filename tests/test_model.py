"""Tests for the domain model: vectors, route points, settings, pursuit state."""

import math

import pytest
from pydantic import ValidationError

from pathchase.model import (
    ChaseSettings,
    EntityTarget,
    PointTarget,
    PursuitState,
    RouteAction,
    RouteParams,
    RoutePoint,
    TargetKind,
    Vector3,
)
from pathchase.sandbox import SimPart


class TestVector3:
    """Tests for Vector3 arithmetic and distances."""

    def test_arithmetic(self) -> None:
        """Addition, subtraction and scaling are component-wise."""
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        assert a + b == Vector3(5, 7, 9)
        assert b - a == Vector3(3, 3, 3)
        assert a * 2 == Vector3(2, 4, 6)
        assert 2 * a == Vector3(2, 4, 6)

    def test_distances(self) -> None:
        """distance_to is 3D; planar_distance_to ignores y."""
        a = Vector3(0, 0, 0)
        b = Vector3(3, 12, 4)
        assert a.distance_to(b) == 13
        assert a.planar_distance_to(b) == 5

    def test_magnitude(self) -> None:
        """Magnitude is the Euclidean length."""
        assert math.isclose(Vector3(1, 1, 1).magnitude, math.sqrt(3))

    def test_with_y(self) -> None:
        """with_y swaps only the vertical component."""
        assert Vector3(1, 2, 3).with_y(9) == Vector3(1, 9, 3)

    def test_hashable_and_immutable(self) -> None:
        """Vectors are frozen and usable as dict keys."""
        v = Vector3(1, 2, 3)
        assert {v: "x"}[Vector3(1, 2, 3)] == "x"
        with pytest.raises(AttributeError):
            v.x = 5  # type: ignore[misc]

    def test_from_sequence(self) -> None:
        """from_sequence needs exactly three values."""
        assert Vector3.from_sequence([1, 2, 3]) == Vector3(1.0, 2.0, 3.0)
        with pytest.raises(ValueError):
            Vector3.from_sequence([1, 2])


class TestRouteModel:
    """Tests for route points and params."""

    def test_route_point_defaults(self) -> None:
        """Route points default to no action."""
        point = RoutePoint(Vector3(1, 0, 0))
        assert point.action == RouteAction.NONE
        assert point.requires_jump is False
        assert RoutePoint(Vector3(), RouteAction.JUMP).requires_jump is True

    def test_route_params_defaults(self) -> None:
        """RouteParams has sensible defaults."""
        params = RouteParams()
        assert params.agent_radius == 2.0
        assert params.agent_can_jump is True
        assert params.costs == {}

    def test_route_params_validation(self) -> None:
        """Non-positive spacing is rejected."""
        with pytest.raises(ValidationError):
            RouteParams(waypoint_spacing=0)

    def test_route_params_frozen(self) -> None:
        """RouteParams cannot be changed after creation."""
        params = RouteParams()
        with pytest.raises(ValidationError):
            params.agent_radius = 5.0  # type: ignore[misc]


class TestTargets:
    """Tests for target variants."""

    def test_point_kind(self) -> None:
        """PointTarget reports the POINT kind."""
        assert PointTarget(Vector3()).kind == TargetKind.POINT

    def test_describe_uses_entity_name(self) -> None:
        """Entity descriptions include kind and name."""
        target = EntityTarget(SimPart("crate"), TargetKind.PART)
        assert target.describe() == "part 'crate'"


class TestChaseSettings:
    """Tests for ChaseSettings."""

    def test_defaults(self) -> None:
        """Default tunables."""
        settings = ChaseSettings()
        assert settings.recalc_interval == 0.5
        assert settings.waypoint_reach_distance == 4.0

    def test_accepts_aliases(self) -> None:
        """External names are accepted on construction."""
        settings = ChaseSettings.model_validate(
            {"recalcIntervalSeconds": 1.0, "waypointReachDistance": 2.0}
        )
        assert settings.recalc_interval == 1.0
        assert settings.waypoint_reach_distance == 2.0

    @pytest.mark.parametrize("field", ["recalc_interval", "waypoint_reach_distance"])
    def test_must_be_positive(self, field: str) -> None:
        """Both tunables must be > 0."""
        with pytest.raises(ValidationError):
            ChaseSettings(**{field: 0})

    def test_field_for_key(self) -> None:
        """Keys map by field name or alias."""
        assert ChaseSettings.field_for_key("waypointReachDistance") == "waypoint_reach_distance"
        assert ChaseSettings.field_for_key("recalc_interval") == "recalc_interval"
        assert ChaseSettings.field_for_key("speed") is None

    def test_merged_applies_known_and_reports_unknown(self) -> None:
        """merged() applies known keys and lists unknown ones."""
        settings, ignored = ChaseSettings().merged(
            {"waypointReachDistance": 6, "turbo": True, "recalc_interval": 2}
        )
        assert settings.waypoint_reach_distance == 6
        assert settings.recalc_interval == 2
        assert ignored == ["turbo"]

    def test_merged_returns_new_instance(self) -> None:
        """merged() leaves the original untouched."""
        original = ChaseSettings()
        original.merged({"waypoint_reach_distance": 9})
        assert original.waypoint_reach_distance == 4.0

    def test_merged_validates(self) -> None:
        """Invalid values are rejected."""
        with pytest.raises(ValidationError):
            ChaseSettings().merged({"waypointReachDistance": -1})

    def test_is_reached_inclusive(self) -> None:
        """Reach checks are inclusive of the threshold."""
        settings, _ = ChaseSettings().merged({"waypointReachDistance": 6})
        assert settings.is_reached(5.9)
        assert settings.is_reached(6.0)
        assert not settings.is_reached(6.1)


class TestPursuitState:
    """Tests for PursuitState."""

    def test_reset(self) -> None:
        """reset() clears progress and records the new target."""
        state = PursuitState(
            waypoints=[RoutePoint(Vector3())],
            current_index=3,
            last_recalc_time=1.0,
            last_target_position=Vector3(1, 1, 1),
        )
        target = PointTarget(Vector3(5, 0, 5))
        state.reset(target=target, recalc_time=2.0)

        assert state.waypoints == []
        assert state.current_index == 0
        assert state.last_recalc_time == 2.0
        assert state.target == target
        assert state.last_target_position is None

    def test_current_waypoint(self) -> None:
        """current_waypoint is None when the index is out of range."""
        points = [RoutePoint(Vector3(1, 0, 0)), RoutePoint(Vector3(2, 0, 0))]
        state = PursuitState(waypoints=points, current_index=1)
        assert state.current_waypoint is points[1]
        state.current_index = 2
        assert state.current_waypoint is None
