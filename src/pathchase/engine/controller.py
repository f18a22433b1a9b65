"""PursuitController: public API for chasing a target with one agent."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from pathchase.config import PursuitConfig, get_pursuit_config
from pathchase.debug import DebugSink, LoggingDebugSink
from pathchase.engine.loop import LoopState, PursuitLoop
from pathchase.engine.resolver import classify_target
from pathchase.errors import InvalidTargetKindError, StaleGenerationError
from pathchase.model.entities import Agent
from pathchase.model.route import RouteParams
from pathchase.model.state import ChaseSettings, PursuitState
from pathchase.routing import RouteEngine, RoutePlanner

logger = logging.getLogger(__name__)


class PursuitController:
    """Chases targets with a single agent without blocking the caller.

    Each accepted chase mints a new generation and spawns a ``PursuitLoop``
    task on the running event loop. Starting another chase supersedes the
    previous loop, which notices at its next check and ends without writing
    to the shared state. ``stop`` cancels the active loop outright.

    Example:
        >>> controller = PursuitController(agent, engine, RouteParams())
        >>> controller.chase_target(enemy)       # inside a running event loop
        True
        >>> controller.configure_chase({"waypointReachDistance": 6})
        >>> controller.stop()
    """

    def __init__(
        self,
        agent: Agent,
        route_engine: RouteEngine,
        route_params: RouteParams | None = None,
        *,
        config: PursuitConfig | None = None,
        debug_sink: DebugSink | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the controller.

        Args:
            agent: The agent to drive. Not owned by the controller.
            route_engine: Engine used to compute routes.
            route_params: Parameters for (re)creating the route handle.
            config: Pursuit configuration. Loaded from the environment if omitted.
            debug_sink: Receiver for waypoint markers while debug is enabled.
            clock: Monotonic time source used for chase rate limiting.
        """
        self._agent = agent
        self._config = config or get_pursuit_config()
        self._settings = ChaseSettings.from_config(self._config)
        self._state = PursuitState()
        self._planner = RoutePlanner(
            route_engine,
            route_params,
            timeout=self._config.route_timeout,
            max_attempts=self._config.route_max_attempts,
            initial_wait=self._config.route_retry_initial_wait,
            max_wait=self._config.route_retry_max_wait,
        )
        self._debug_sink: DebugSink = debug_sink or LoggingDebugSink(agent.name)
        self._debug_enabled = self._config.debug
        self._clock = clock

        self._generation = 0
        self._loop: PursuitLoop | None = None
        self._task: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    # Read-only views

    @property
    def agent(self) -> Agent:
        return self._agent

    @property
    def config(self) -> PursuitConfig:
        return self._config

    @property
    def settings(self) -> ChaseSettings:
        return self._settings

    @property
    def state(self) -> PursuitState:
        return self._state

    @property
    def generation(self) -> int:
        """Token of the current generation; bumped by every chase start and stop."""
        return self._generation

    @property
    def planner(self) -> RoutePlanner:
        return self._planner

    @property
    def debug_sink(self) -> DebugSink:
        return self._debug_sink

    @property
    def debug_enabled(self) -> bool:
        return self._debug_enabled

    @property
    def tick_interval(self) -> float:
        return self._config.tick_interval

    @property
    def root_part_name(self) -> str:
        return self._config.root_part_name

    @property
    def loop(self) -> PursuitLoop | None:
        """The loop of the current generation, if one is active."""
        return self._loop

    @property
    def is_chasing(self) -> bool:
        return self._task is not None and not self._task.done()

    def is_reached(self, distance: float) -> bool:
        """Whether a waypoint ``distance`` away counts as reached under current settings."""
        return self._settings.is_reached(distance)

    def check_generation(self, generation: int) -> None:
        """Raise if ``generation`` is not the current one.

        Raises:
            StaleGenerationError: If the token is stale.
        """
        if generation != self._generation:
            raise StaleGenerationError(generation, self._generation)

    # Operations

    def chase_target(self, target: Any) -> bool:
        """Start chasing ``target``, replacing any current chase.

        Must be called from inside a running event loop. Calls arriving
        within ``recalc_interval`` of the last accepted one are ignored.

        Args:
            target: A point (Vector3 or 3-number sequence) or an entity.

        Returns:
            True if a new generation was started, False if the target was
            rejected or the call was rate limited.
        """
        try:
            classified = classify_target(target)
        except InvalidTargetKindError as e:
            logger.warning("%s will not chase: %s", self._agent.name, e)
            return False

        now = self._clock()
        last = self._state.last_recalc_time
        if last is not None and now - last < self._settings.recalc_interval:
            logger.debug(
                "%s chase request rate limited (%.3fs since last, interval %.3fs)",
                self._agent.name,
                now - last,
                self._settings.recalc_interval,
            )
            return False

        event_loop = asyncio.get_running_loop()

        self._generation += 1
        self._state.reset(target=classified, recalc_time=now)
        loop = PursuitLoop(self, self._generation, classified)
        task = event_loop.create_task(
            loop.run(), name=f"pursuit-{self._agent.name}-{self._generation}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._loop = loop
        self._task = task

        logger.debug(
            "%s chasing %s (generation %d)",
            self._agent.name,
            classified.describe(),
            self._generation,
        )
        return True

    def move_to(self, target: Any) -> bool:
        """Alias for ``chase_target``."""
        return self.chase_target(target)

    def stop(self) -> None:
        """Halt the agent and cancel the active chase.

        Safe to call at any time, including when nothing is being chased.
        """
        self._debug_sink.clear()
        self._agent.move_to(self._agent.position)
        self._state.reset()
        self._generation += 1

        loop, task = self._loop, self._task
        self._loop = None
        self._task = None
        if task is not None and not task.done():
            task.cancel()
        if loop is not None and loop.state is LoopState.IDLE:
            # Cancelled before its first step; run() will never mark it
            loop.state = LoopState.STOPPED
        if loop is not None:
            logger.debug("%s stopped chasing (generation %d)", self._agent.name, loop.generation)

    def configure_chase(self, updates: Mapping[str, Any]) -> ChaseSettings:
        """Merge known chase settings; unknown keys are ignored.

        Args:
            updates: Partial settings keyed by field name or alias.

        Returns:
            The settings now in effect.

        Raises:
            pydantic.ValidationError: If a known key has an invalid value.
                Settings are left unchanged in that case.
        """
        settings, ignored = self._settings.merged(updates)
        for key in ignored:
            logger.debug("Ignoring unknown chase setting %r", key)
        if settings != self._settings:
            logger.info("%s chase settings updated: %s", self._agent.name, settings)
        self._settings = settings
        return settings

    def set_debug(self, enabled: bool) -> None:
        """Toggle debug markers; turning them off clears what was drawn."""
        enabled = bool(enabled)
        if enabled == self._debug_enabled:
            return
        self._debug_enabled = enabled
        if not enabled:
            self._debug_sink.clear()
        logger.debug("%s debug markers %s", self._agent.name, "on" if enabled else "off")

    async def join(self) -> None:
        """Wait for the current loop task to finish.

        A running chase only ends when stopped or superseded, so this is
        normally awaited after ``stop``.
        """
        task = self._task
        if task is not None:
            await asyncio.wait({task})

    async def aclose(self) -> None:
        """Stop the chase, cancel superseded loops still in flight, and wait for all."""
        self.stop()
        pending = set(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(pending)

    def __repr__(self) -> str:
        return (
            f"PursuitController("
            f"agent={self._agent.name!r}, "
            f"generation={self._generation}, "
            f"chasing={self.is_chasing}, "
            f"settings={self._settings!r}"
            f")"
        )
