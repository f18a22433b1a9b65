"""Target resolution: classify what is being chased and locate it each cycle."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from numbers import Real
from typing import Any

from pathchase.errors import InvalidTargetKindError, TargetUnresolvableError
from pathchase.model.entities import Model, Part, Player
from pathchase.model.target import EntityTarget, PointTarget, Target, TargetKind
from pathchase.model.vector import Vector3

logger = logging.getLogger(__name__)

DEFAULT_ROOT_PART = "RootPart"


def classify_target(obj: Any) -> Target:
    """Turn a chase request into a Target.

    Entities are matched structurally, most specific first: anything with a
    ``character`` is a player, anything with a ``primary_part`` is a model,
    anything with a ``position`` is a part.

    Args:
        obj: A Target, a Vector3, a 3-number sequence, or an entity.

    Returns:
        The classified target.

    Raises:
        InvalidTargetKindError: If the object is none of the above.
    """
    if isinstance(obj, PointTarget | EntityTarget):
        return obj
    if isinstance(obj, Vector3):
        return PointTarget(obj)
    if _is_coordinate_triple(obj):
        return PointTarget(Vector3.from_sequence(list(obj)))
    if isinstance(obj, Player):
        return EntityTarget(obj, TargetKind.PLAYER)
    if isinstance(obj, Model):
        return EntityTarget(obj, TargetKind.MODEL)
    if isinstance(obj, Part):
        return EntityTarget(obj, TargetKind.PART)
    raise InvalidTargetKindError(obj)


def _is_coordinate_triple(obj: Any) -> bool:
    if isinstance(obj, str | bytes) or not isinstance(obj, Sequence):
        return False
    return len(obj) == 3 and all(
        isinstance(v, Real) and not isinstance(v, bool) for v in obj
    )


def resolve_target(target: Target, root_part_name: str = DEFAULT_ROOT_PART) -> Vector3 | None:
    """Locate a target right now.

    Never cached: entity targets move, and their parts can disappear (a
    model losing its primary part, a player between characters).

    Args:
        target: The classified target.
        root_part_name: Part looked up on a player's character.

    Returns:
        Current position, or None if the entity cannot be located.
    """
    if isinstance(target, PointTarget):
        return target.position

    entity = target.entity
    if target.kind == TargetKind.PART:
        return entity.position
    if target.kind == TargetKind.MODEL:
        part = entity.primary_part
        return part.position if part is not None else None
    if target.kind == TargetKind.PLAYER:
        character = entity.character
        if character is None:
            return None
        root = character.find_part(root_part_name)
        return root.position if root is not None else None

    logger.warning("No resolution rule for target kind %s", target.kind)
    return None


def require_target_position(target: Target, root_part_name: str = DEFAULT_ROOT_PART) -> Vector3:
    """Strict variant of ``resolve_target``.

    Raises:
        TargetUnresolvableError: If the target cannot be located.
    """
    position = resolve_target(target, root_part_name)
    if position is None:
        raise TargetUnresolvableError(target.describe())
    return position
