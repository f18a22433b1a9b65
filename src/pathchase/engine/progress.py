"""Waypoint progress: pick the steering target and decide when to advance."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pathchase.model.route import RoutePoint
from pathchase.model.vector import Vector3

# Index the tracker falls back to once a route is exhausted
WRAP_INDEX = 1


@dataclass(frozen=True)
class ProgressDecision:
    """Outcome of one progress step.

    Attributes:
        index: Waypoint index to store for the next cycle.
        destination: Where to send the agent, already flattened to its
            height, or None when there is nothing to move toward.
        waypoint: The waypoint being steered toward, if any.
        reached: Whether the steered waypoint was within reach this cycle.
    """

    index: int
    destination: Vector3 | None = None
    waypoint: RoutePoint | None = None
    reached: bool = False

    @property
    def requires_jump(self) -> bool:
        return self.waypoint is not None and self.waypoint.requires_jump


def neutralize_position(point: Vector3, agent_position: Vector3) -> Vector3:
    """Flatten ``point`` onto the agent's current height.

    The controller never commands vertical movement; climbing and falling
    are left to locomotion and to jump actions on the route.
    """
    return point.with_y(agent_position.y)


def advance(
    current_index: int,
    waypoints: Sequence[RoutePoint],
    agent_position: Vector3,
    reach_distance: float,
) -> ProgressDecision:
    """Decide where the agent steers this cycle and whether the index moves.

    ``waypoints[current_index]`` is the active target. When the agent is
    within ``reach_distance`` of it (planar, inclusive) the index advances by
    one. Once the index runs past the end of the route the agent is sent back
    toward the first waypoint and the index wraps to ``WRAP_INDEX``; this
    also happens for an empty route, which produces no destination.

    Args:
        current_index: Index stored by the previous cycle.
        waypoints: Reduced steering waypoints for this cycle.
        agent_position: Current agent position.
        reach_distance: Arrival threshold.

    Returns:
        ProgressDecision with the next index and the move to issue.
    """
    if 0 <= current_index < len(waypoints):
        waypoint = waypoints[current_index]
        destination = neutralize_position(waypoint.position, agent_position)
        reached = agent_position.planar_distance_to(destination) <= reach_distance
        return ProgressDecision(
            index=current_index + 1 if reached else current_index,
            destination=destination,
            waypoint=waypoint,
            reached=reached,
        )

    if not waypoints:
        return ProgressDecision(index=WRAP_INDEX)

    first = waypoints[0]
    return ProgressDecision(
        index=WRAP_INDEX,
        destination=neutralize_position(first.position, agent_position),
        waypoint=first,
    )
