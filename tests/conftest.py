"""Shared fixtures and fakes for pathchase tests.

Coroutine tests wrap their body in ``asyncio.run`` rather than relying on a
pytest asyncio plugin.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import pytest

from pathchase.config import PursuitConfig
from pathchase.debug import DebugSink, RecordingDebugSink
from pathchase.engine.controller import PursuitController
from pathchase.logging_config import PACKAGE_LOGGER
from pathchase.model.route import RouteParams, RoutePoint
from pathchase.model.vector import Vector3
from pathchase.sandbox import SimAgent, SimClock, straight_line_points


@dataclass
class TrackingAgent(SimAgent):
    """SimAgent that remembers every move order."""

    moves: list[Vector3] = field(default_factory=list)

    def move_to(self, destination: Vector3) -> None:
        super().move_to(destination)
        self.moves.append(destination)


class ScriptedRouteEngine:
    """Straight-line route engine with hooks for holding and failing computations.

    Attributes:
        gate: When set, every compute waits for this event before finishing.
        failures: Exceptions raised, in order, by the next compute calls.
        fixed_points: When set, returned instead of a straight line.
    """

    def __init__(self, spacing: float = 4.0) -> None:
        self.spacing = spacing
        self.created = 0
        self.calls: list[tuple[Vector3, Vector3]] = []
        self.completed: list[tuple[Vector3, Vector3]] = []
        self.gate: asyncio.Event | None = None
        self.failures: list[BaseException] = []
        self.fixed_points: Sequence[RoutePoint] | None = None

    def create(self, params: RouteParams) -> dict[str, Any]:
        self.created += 1
        return {"params": params, "points": []}

    async def compute(self, handle: dict[str, Any], start: Vector3, end: Vector3) -> None:
        self.calls.append((start, end))
        if self.failures:
            raise self.failures.pop(0)
        gate = self.gate
        if gate is not None:
            await gate.wait()
        else:
            await asyncio.sleep(0)
        if self.fixed_points is not None:
            handle["points"] = list(self.fixed_points)
        else:
            handle["points"] = straight_line_points(start, end, self.spacing)
        self.completed.append((start, end))

    def get_waypoints(self, handle: dict[str, Any]) -> list[RoutePoint]:
        return list(handle["points"])


async def spin(times: int = 10) -> None:
    """Give background tasks ``times`` turns on the event loop."""
    for _ in range(times):
        await asyncio.sleep(0)


def make_config(**overrides: Any) -> PursuitConfig:
    """Pursuit config for tests: no tick delay unless overridden."""
    values: dict[str, Any] = {"tick_interval": 0.0}
    values.update(overrides)
    return PursuitConfig(**values)


def make_agent(position: Vector3 | None = None, height: float = 3.0) -> TrackingAgent:
    """A tracking agent standing at ``position`` (default origin at height 3)."""
    return TrackingAgent(
        "chaser",
        position=position if position is not None else Vector3(0.0, 3.0, 0.0),
        height=height,
    )


def make_controller(
    agent: TrackingAgent | None = None,
    engine: ScriptedRouteEngine | None = None,
    clock: SimClock | None = None,
    sink: DebugSink | None = None,
    **config_overrides: Any,
) -> PursuitController:
    """Controller wired to test doubles."""
    return PursuitController(
        agent or make_agent(),
        engine or ScriptedRouteEngine(),
        RouteParams(),
        config=make_config(**config_overrides),
        debug_sink=sink or RecordingDebugSink(),
        clock=clock or SimClock(),
    )


@pytest.fixture
def clock() -> SimClock:
    return SimClock()


@pytest.fixture
def engine() -> ScriptedRouteEngine:
    return ScriptedRouteEngine()


@pytest.fixture
def agent() -> TrackingAgent:
    return make_agent()


@pytest.fixture
def sink() -> RecordingDebugSink:
    return RecordingDebugSink()


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Undo configure_logging() side effects so caplog keeps seeing records."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
