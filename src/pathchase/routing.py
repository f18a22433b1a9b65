"""Route engine interface and the planner that drives it for one controller.

The route engine itself is external. ``RoutePlanner`` owns the engine handle
for a single controller, recreates it on demand, serializes computations,
and applies the optional timeout and bounded retry around each call.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pathchase.errors import RouteComputeError, RouteEngineUnavailableError
from pathchase.model.route import RouteParams, RoutePoint, RouteRequest
from pathchase.model.vector import Vector3

logger = logging.getLogger(__name__)


class RouteEngine(Protocol):
    """External route computation capability.

    ``compute`` may take a while and is awaited; results are read back
    through ``get_waypoints`` on the same handle. Implementations signal a
    transient failure with ``RouteComputeError`` and a dead handle with
    ``RouteEngineUnavailableError``.
    """

    def create(self, params: RouteParams) -> Any: ...

    async def compute(self, handle: Any, start: Vector3, end: Vector3) -> None: ...

    def get_waypoints(self, handle: Any) -> Sequence[RoutePoint]: ...


class RoutePlanner:
    """Lazily created route handle plus serialized, retried computation.

    Example:
        >>> planner = RoutePlanner(engine, RouteParams(), max_attempts=3)
        >>> points = await planner.plan(RouteRequest(start, end))
    """

    def __init__(
        self,
        engine: RouteEngine,
        params: RouteParams | None = None,
        *,
        timeout: float | None = None,
        max_attempts: int = 1,
        initial_wait: float = 0.05,
        max_wait: float = 1.0,
    ) -> None:
        """Initialize the planner.

        Args:
            engine: Route engine used to create handles and compute routes.
            params: Routing parameters, reused on every handle recreation.
            timeout: Optional timeout for one compute call, in seconds.
            max_attempts: Attempts per plan when computation fails transiently.
            initial_wait: Backoff before the first retry, in seconds.
            max_wait: Upper bound on the backoff, in seconds.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._engine = engine
        self._params = params or RouteParams()
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._initial_wait = initial_wait
        self._max_wait = max_wait
        self._handle: Any = None
        self._lock = asyncio.Lock()

        self.handles_created = 0
        self.computations = 0
        self.failures = 0

    @property
    def engine(self) -> RouteEngine:
        return self._engine

    @property
    def params(self) -> RouteParams:
        return self._params

    @property
    def has_handle(self) -> bool:
        return self._handle is not None

    def ensure_handle(self) -> Any:
        """Return the route handle, creating it from the stored params if missing."""
        if self._handle is None:
            self._handle = self._engine.create(self._params)
            self.handles_created += 1
            if self.handles_created > 1:
                logger.debug("Recreated route handle (#%d)", self.handles_created)
        return self._handle

    def discard_handle(self) -> None:
        """Forget the current handle so the next plan recreates it."""
        self._handle = None

    async def plan(
        self,
        request: RouteRequest,
        is_current: Callable[[], bool] | None = None,
    ) -> list[RoutePoint] | None:
        """Compute a route and return its raw points.

        The compute call and the read-back happen under one lock, so two
        callers sharing this planner never read each other's results.

        Args:
            request: Start and end of the route.
            is_current: Checked once the lock is held and again after the
                computation returns; when it reports False nothing is
                computed, or the result is discarded.

        Returns:
            Raw route points, or None if the caller went stale meanwhile.

        Raises:
            RouteEngineUnavailableError: The handle died; it has been discarded.
            RouteComputeError: Computation kept failing after all attempts.
        """
        async with self._lock:
            # The caller may have gone stale while waiting for the lock
            if is_current is not None and not is_current():
                return None
            handle = self.ensure_handle()
            try:
                await self._compute_with_retry(handle, request)
            except RouteEngineUnavailableError:
                if self._handle is handle:
                    self.discard_handle()
                self.failures += 1
                raise
            except RouteComputeError:
                self.failures += 1
                raise

            if is_current is not None and not is_current():
                return None
            return list(self._engine.get_waypoints(handle))

    async def _compute_with_retry(self, handle: Any, request: RouteRequest) -> None:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._initial_wait, max=self._max_wait),
            retry=(
                retry_if_exception_type(RouteComputeError)
                & retry_if_not_exception_type(RouteEngineUnavailableError)
            ),
            before_sleep=self._log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                await self._compute_once(handle, request)

    async def _compute_once(self, handle: Any, request: RouteRequest) -> None:
        self.computations += 1
        compute = self._engine.compute(handle, request.start, request.end)
        if self._timeout is None:
            await compute
            return
        try:
            await asyncio.wait_for(compute, timeout=self._timeout)
        except TimeoutError as e:
            raise RouteComputeError(
                f"Route computation timed out after {self._timeout}s"
            ) from e

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.debug(
            "Route computation failed (attempt %d/%d), retrying: %s",
            retry_state.attempt_number,
            self._max_attempts,
            exc,
        )
