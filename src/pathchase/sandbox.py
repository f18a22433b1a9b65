"""In-process sandbox: a kinematic agent, simple entities, and a straight-line route engine.

These are reference collaborators for the demo and the test-suite. The
route engine does no search; it lays points along the straight segment
between start and end at the requested spacing.
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, field

from pathchase.errors import RouteEngineUnavailableError
from pathchase.model.route import RouteAction, RouteParams, RoutePoint
from pathchase.model.vector import Vector3


@dataclass
class SimClock:
    """Manually advanced clock, callable like ``time.monotonic``."""

    now: float = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@dataclass
class SimPart:
    """A named, positioned body."""

    name: str
    position: Vector3 = field(default_factory=Vector3)


@dataclass
class SimModel:
    """A composite entity located by its primary part."""

    name: str
    primary_part: SimPart | None = None


@dataclass
class SimCharacter:
    """A body made of named parts."""

    name: str
    parts: dict[str, SimPart] = field(default_factory=dict)

    def find_part(self, name: str) -> SimPart | None:
        return self.parts.get(name)


@dataclass
class SimPlayer:
    """A player whose character may be absent (e.g. while respawning)."""

    name: str
    character: SimCharacter | None = None


@dataclass
class SimAgent:
    """A kinematic agent that walks in the x/z plane toward its last move order.

    Vertical motion is not simulated; jumps are only counted.

    Attributes:
        name: Agent name, used in logs.
        position: Centre of the agent.
        height: Distance from centre to feet.
        speed: Walk speed in units per second.
    """

    name: str
    position: Vector3 = field(default_factory=Vector3)
    height: float = 3.0
    speed: float = 16.0
    destination: Vector3 | None = None
    move_orders: int = 0
    jumps: int = 0

    @property
    def foot_position(self) -> Vector3:
        return self.position - Vector3(0.0, self.height, 0.0)

    def move_to(self, destination: Vector3) -> None:
        self.destination = destination
        self.move_orders += 1

    def jump(self) -> None:
        self.jumps += 1

    def step(self, dt: float) -> None:
        """Advance the agent ``dt`` seconds toward its destination."""
        if self.destination is None:
            return
        goal = self.destination.with_y(self.position.y)
        offset = goal - self.position
        distance = offset.magnitude
        travel = self.speed * dt
        if distance <= travel:
            self.position = goal
            self.destination = None
        else:
            self.position = self.position + offset * (travel / distance)


@dataclass
class OrbitingMover:
    """Moves a part around a circle in the x/z plane, one step at a time."""

    part: SimPart
    center: Vector3
    radius: float
    angular_speed: float  # radians per second
    angle: float = 0.0

    def step(self, dt: float) -> None:
        self.angle += self.angular_speed * dt
        self.part.position = Vector3(
            self.center.x + self.radius * math.cos(self.angle),
            self.center.y,
            self.center.z + self.radius * math.sin(self.angle),
        )


@dataclass
class StraightLineRoute:
    """Route handle owned by ``StraightLineRouteEngine``."""

    params: RouteParams
    points: list[RoutePoint] = field(default_factory=list)
    alive: bool = True

    def destroy(self) -> None:
        self.alive = False
        self.points = []


def straight_line_points(
    start: Vector3,
    end: Vector3,
    spacing: float,
    jump_rise: float | None = None,
) -> list[RoutePoint]:
    """Lay route points from ``start`` to ``end`` no more than ``spacing`` apart.

    A point gets the JUMP action when it sits more than ``jump_rise`` above
    its predecessor; with ``jump_rise`` None no jumps are emitted.
    """
    count = max(1, math.ceil(start.distance_to(end) / spacing))
    points = [RoutePoint(start)]
    previous = start
    for i in range(1, count + 1):
        position = start + (end - start) * (i / count)
        action = RouteAction.WALK
        if jump_rise is not None and position.y - previous.y > jump_rise:
            action = RouteAction.JUMP
        points.append(RoutePoint(position, action))
        previous = position
    return points


class StraightLineRouteEngine:
    """Route engine that plans straight segments, with optional latency.

    Example:
        >>> engine = StraightLineRouteEngine(latency=0.01)
        >>> handle = engine.create(RouteParams(waypoint_spacing=2.0))
        >>> await engine.compute(handle, Vector3(), Vector3(10, 0, 0))
        >>> len(engine.get_waypoints(handle))
        6
    """

    def __init__(self, latency: float = 0.0) -> None:
        self.latency = latency
        self.created: list[StraightLineRoute] = []
        self.requests: list[tuple[Vector3, Vector3]] = []

    def create(self, params: RouteParams) -> StraightLineRoute:
        route = StraightLineRoute(params)
        self.created.append(route)
        return route

    async def compute(self, handle: StraightLineRoute, start: Vector3, end: Vector3) -> None:
        if not handle.alive:
            raise RouteEngineUnavailableError("route handle has been destroyed")
        self.requests.append((start, end))
        await asyncio.sleep(self.latency)
        params = handle.params
        jump_rise = params.agent_height / 2 if params.agent_can_jump else None
        handle.points = straight_line_points(start, end, params.waypoint_spacing, jump_rise)

    def get_waypoints(self, handle: StraightLineRoute) -> list[RoutePoint]:
        return list(handle.points)
