"""Structural interfaces for the scene objects the controller reads and drives.

The controller never owns these objects. Anything that exposes the right
attributes can be chased or driven; the sandbox module ships simple
implementations.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pathchase.model.vector import Vector3


@runtime_checkable
class Part(Protocol):
    """A single positioned body."""

    @property
    def position(self) -> Vector3: ...


@runtime_checkable
class Model(Protocol):
    """A composite entity steered by its primary part, which may be absent."""

    @property
    def primary_part(self) -> Part | None: ...


class Character(Protocol):
    """A composite body whose parts can be looked up by name."""

    def find_part(self, name: str) -> Part | None: ...


@runtime_checkable
class Player(Protocol):
    """A controller of a character; the character comes and goes (respawns)."""

    @property
    def character(self) -> Character | None: ...


@runtime_checkable
class Agent(Protocol):
    """The entity being driven along the route.

    ``foot_position`` is ``position`` lowered by the agent's height; routes
    start there so the engine plans from ground level.
    """

    name: str

    @property
    def position(self) -> Vector3: ...

    @property
    def foot_position(self) -> Vector3: ...

    def move_to(self, destination: Vector3) -> None: ...

    def jump(self) -> None: ...
