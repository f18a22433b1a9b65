"""Exception hierarchy for pursuit control.

Only ``InvalidTargetKindError`` reaches callers of the controller, and only
as a logged warning; the other errors are recovered inside the pursuit loop.
"""

from __future__ import annotations

from typing import Any


class PursuitError(Exception):
    """Base class for all pursuit errors."""


class InvalidTargetKindError(PursuitError, TypeError):
    """The object handed to a chase is neither a point nor a known entity.

    Attributes:
        target: The rejected object.
    """

    def __init__(self, target: Any) -> None:
        super().__init__(
            f"Cannot chase object of type {type(target).__name__}: "
            "expected a point or an entity with a position, primary part or character"
        )
        self.target = target


class TargetUnresolvableError(PursuitError):
    """A previously valid entity target has no position right now."""

    def __init__(self, description: str) -> None:
        super().__init__(f"Target {description} cannot be located")
        self.description = description


class RouteComputeError(PursuitError):
    """A route computation failed in a way that may succeed on retry."""


class RouteEngineUnavailableError(RouteComputeError):
    """The route handle is gone or unusable and must be recreated."""


class StaleGenerationError(PursuitError):
    """A write was attempted on behalf of a generation that is no longer current.

    Attributes:
        generation: The stale generation token.
        current: The controller's current token.
    """

    def __init__(self, generation: int, current: int) -> None:
        super().__init__(f"Generation {generation} is stale (current is {current})")
        self.generation = generation
        self.current = current
