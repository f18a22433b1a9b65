"""Pursuit targets: a fixed point or a live reference to an entity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pathchase.model.vector import Vector3


class TargetKind(StrEnum):
    """Kinds of target the resolver knows how to locate."""

    POINT = "point"
    PART = "part"
    MODEL = "model"
    PLAYER = "player"


@dataclass(frozen=True)
class PointTarget:
    """A fixed position in space."""

    position: Vector3

    @property
    def kind(self) -> TargetKind:
        return TargetKind.POINT

    def describe(self) -> str:
        return f"point {self.position}"


@dataclass(frozen=True)
class EntityTarget:
    """A live entity whose position is looked up again every cycle."""

    entity: Any
    kind: TargetKind

    def describe(self) -> str:
        name = getattr(self.entity, "name", None) or type(self.entity).__name__
        return f"{self.kind.value} {name!r}"


Target = PointTarget | EntityTarget
