"""Pursuit loop: one cancellable, generation-stamped chase task per agent."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING

from pathchase.engine.progress import ProgressDecision, advance
from pathchase.engine.reducer import reduce_waypoints
from pathchase.engine.resolver import resolve_target
from pathchase.errors import RouteComputeError, RouteEngineUnavailableError
from pathchase.model.route import RoutePoint, RouteRequest

if TYPE_CHECKING:
    from pathchase.engine.controller import PursuitController
    from pathchase.model.target import Target
    from pathchase.model.vector import Vector3

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Lifecycle of a pursuit loop."""

    IDLE = "idle"
    RUNNING = "running"
    SUPERSEDED = "superseded"
    STOPPED = "stopped"
    FAULTED = "faulted"


class PursuitLoop:
    """Drives an agent toward a target, one cycle per tick.

    Each loop carries the generation token it was spawned with. Before any
    write to the controller's pursuit state, and again after the route
    computation returns, it checks that its token is still the current one;
    a stale loop discards what it has and ends without touching the state.

    Cycle sequence:
    1. Check generation
    2. Resolve the target (hold last known position if it vanished)
    3-4. Compute the route from the agent's feet (handle created lazily)
    5. Re-check generation, reduce the route, store waypoints
    6. Draw debug markers if enabled
    7. Advance progress and issue the move (and jump)
    8. Yield for one tick
    """

    def __init__(self, controller: PursuitController, generation: int, target: Target) -> None:
        self._controller = controller
        self.generation = generation
        self.target = target
        self.state = LoopState.IDLE
        self.cycles = 0
        self._target_lost = False

    def is_current(self) -> bool:
        """Whether this loop's generation is still the controller's current one."""
        return self._controller.generation == self.generation

    async def run(self) -> None:
        """Run cycles until superseded, cancelled, or a collaborator fails.

        Never raises except for cancellation; unexpected errors are logged
        and end the loop in the FAULTED state.
        """
        agent_name = self._controller.agent.name
        self.state = LoopState.RUNNING
        logger.debug(
            "Generation %d started for %s chasing %s",
            self.generation,
            agent_name,
            self.target.describe(),
        )
        try:
            while self.is_current():
                await self.run_cycle()
                await asyncio.sleep(self._controller.tick_interval)
        except asyncio.CancelledError:
            self.state = LoopState.STOPPED
            logger.debug("Generation %d for %s cancelled", self.generation, agent_name)
            raise
        except Exception:
            self.state = LoopState.FAULTED
            logger.exception(
                "Pursuit loop for %s faulted (generation %d, %d cycles)",
                agent_name,
                self.generation,
                self.cycles,
            )
            return

        self.state = LoopState.SUPERSEDED
        logger.debug(
            "Generation %d for %s superseded by %d after %d cycles",
            self.generation,
            agent_name,
            self._controller.generation,
            self.cycles,
        )

    async def run_cycle(self) -> ProgressDecision | None:
        """Execute one pursuit cycle.

        Returns:
            The progress decision applied this cycle, or None if the cycle
            was skipped (stale generation, unknown target position, or a
            failed route computation).
        """
        if not self.is_current():
            return None

        controller = self._controller
        agent = controller.agent
        target_position = self._resolve_target()
        if target_position is None:
            return None

        request = RouteRequest(start=agent.foot_position, end=target_position)
        try:
            raw_points = await controller.planner.plan(request, is_current=self.is_current)
        except RouteEngineUnavailableError as e:
            logger.warning(
                "Route engine unavailable for %s, recreating next cycle: %s", agent.name, e
            )
            return None
        except RouteComputeError as e:
            logger.warning("Route computation failed for %s, skipping cycle: %s", agent.name, e)
            return None

        # The computation suspended; a newer generation may have started meanwhile
        if raw_points is None or not self.is_current():
            return None

        state = controller.state
        waypoints = reduce_waypoints(raw_points)
        state.waypoints = waypoints

        if controller.debug_enabled:
            self._draw_debug(waypoints)

        decision = advance(
            state.current_index,
            waypoints,
            agent.position,
            controller.settings.waypoint_reach_distance,
        )
        state.current_index = decision.index
        if decision.destination is not None:
            agent.move_to(decision.destination)
            if decision.requires_jump:
                agent.jump()

        self.cycles += 1
        return decision

    def _resolve_target(self) -> Vector3 | None:
        state = self._controller.state
        position = resolve_target(self.target, self._controller.root_part_name)
        if position is not None:
            if self._target_lost:
                logger.info("Target %s located again", self.target.describe())
                self._target_lost = False
            state.last_target_position = position
            return position

        if not self._target_lost:
            logger.warning(
                "Target %s cannot be located, holding last known position %s",
                self.target.describe(),
                state.last_target_position,
            )
            self._target_lost = True
        return state.last_target_position

    def _draw_debug(self, waypoints: list[RoutePoint]) -> None:
        sink = self._controller.debug_sink
        sink.ensure_container()
        sink.clear()
        for waypoint in waypoints:
            sink.draw_marker(waypoint.position)
