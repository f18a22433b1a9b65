"""Chase tunables and the mutable per-controller pursuit state."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from pathchase.model.route import RoutePoint
from pathchase.model.target import Target
from pathchase.model.vector import Vector3

if TYPE_CHECKING:
    from pathchase.config import PursuitConfig


class ChaseSettings(BaseModel):
    """Tunables read by every pursuit cycle.

    Fields can be addressed by their Python name or by their external alias
    (``recalcIntervalSeconds``, ``waypointReachDistance``).

    Attributes:
        recalc_interval: Minimum seconds between two accepted chase starts.
        waypoint_reach_distance: Planar distance at or below which a
            waypoint counts as reached.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    recalc_interval: float = Field(
        default=0.5,
        gt=0,
        alias="recalcIntervalSeconds",
        description="Minimum seconds between accepted chase starts",
    )
    waypoint_reach_distance: float = Field(
        default=4.0,
        gt=0,
        alias="waypointReachDistance",
        description="Planar distance that counts as arriving at a waypoint",
    )

    @classmethod
    def field_for_key(cls, key: str) -> str | None:
        """Map a field name or alias to the field name, or None if unknown."""
        for name, info in cls.model_fields.items():
            if key in (name, info.alias):
                return name
        return None

    @classmethod
    def from_config(cls, config: PursuitConfig) -> ChaseSettings:
        """Seed settings from environment configuration."""
        return cls(
            recalc_interval=config.recalc_interval,
            waypoint_reach_distance=config.waypoint_reach_distance,
        )

    def merged(self, updates: Mapping[str, Any]) -> tuple[ChaseSettings, list[str]]:
        """Return validated settings with known keys from ``updates`` applied.

        Args:
            updates: Partial settings keyed by field name or alias.

        Returns:
            Tuple of (new settings, list of ignored unknown keys).

        Raises:
            pydantic.ValidationError: If a known key carries an invalid value.
        """
        values = self.model_dump()
        ignored: list[str] = []
        for key, value in updates.items():
            name = self.field_for_key(key)
            if name is None:
                ignored.append(key)
                continue
            values[name] = value
        return ChaseSettings.model_validate(values), ignored

    def is_reached(self, distance: float) -> bool:
        """Whether a waypoint at ``distance`` counts as reached (inclusive)."""
        return distance <= self.waypoint_reach_distance


@dataclass
class PursuitState:
    """Mutable pursuit bookkeeping.

    Reset when a chase starts or stops. Between those points only the loop
    of the current generation writes to it.
    """

    waypoints: list[RoutePoint] = field(default_factory=list)
    current_index: int = 0
    last_recalc_time: float | None = None
    target: Target | None = None
    last_target_position: Vector3 | None = None  # held when the target can't be resolved

    def reset(self, target: Target | None = None, recalc_time: float | None = None) -> None:
        """Clear route progress and start tracking ``target``."""
        self.waypoints = []
        self.current_index = 0
        self.last_recalc_time = recalc_time
        self.target = target
        self.last_target_position = None

    @property
    def current_waypoint(self) -> RoutePoint | None:
        """Waypoint currently being steered toward, if the index is in range."""
        if 0 <= self.current_index < len(self.waypoints):
            return self.waypoints[self.current_index]
        return None
