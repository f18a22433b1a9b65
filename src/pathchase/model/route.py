"""Route data: points emitted by a route engine and the parameters used to build one."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pathchase.model.vector import Vector3


class RouteAction(StrEnum):
    """Action the agent must perform on arrival at a route point."""

    NONE = "none"
    WALK = "walk"
    JUMP = "jump"
    CUSTOM = "custom"


@dataclass(frozen=True)
class RoutePoint:
    """A single point on a computed route.

    Produced by the route engine and never mutated afterwards.
    """

    position: Vector3
    action: RouteAction = RouteAction.NONE
    label: str | None = None  # engine-specific tag, e.g. a link or material name

    @property
    def requires_jump(self) -> bool:
        return self.action == RouteAction.JUMP


@dataclass(frozen=True)
class RouteRequest:
    """Start and end of one route computation, rebuilt every cycle."""

    start: Vector3
    end: Vector3


class RouteParams(BaseModel):
    """Parameters a route engine needs to build a route handle for an agent.

    Supplied once when the controller is constructed and reused every time
    the route handle has to be recreated.

    Attributes:
        agent_radius: Horizontal clearance the agent needs.
        agent_height: Vertical clearance the agent needs.
        agent_can_jump: Whether the engine may emit jump actions.
        waypoint_spacing: Preferred distance between emitted points.
        costs: Per-material traversal cost overrides.
    """

    model_config = ConfigDict(frozen=True)

    agent_radius: float = Field(default=2.0, gt=0, description="Agent clearance radius")
    agent_height: float = Field(default=5.0, gt=0, description="Agent clearance height")
    agent_can_jump: bool = Field(default=True, description="Whether jumps are allowed")
    waypoint_spacing: float = Field(default=4.0, gt=0, description="Spacing between points")
    costs: dict[str, float] = Field(default_factory=dict, description="Material costs")
