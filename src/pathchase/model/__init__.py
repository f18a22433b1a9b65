"""Domain model: vectors, route points, targets, entity interfaces, pursuit state."""

from pathchase.model.entities import Agent, Character, Model, Part, Player
from pathchase.model.route import RouteAction, RouteParams, RoutePoint, RouteRequest
from pathchase.model.state import ChaseSettings, PursuitState
from pathchase.model.target import EntityTarget, PointTarget, Target, TargetKind
from pathchase.model.vector import Vector3

__all__ = [
    "Agent",
    "Character",
    "ChaseSettings",
    "EntityTarget",
    "Model",
    "Part",
    "Player",
    "PointTarget",
    "PursuitState",
    "RouteAction",
    "RouteParams",
    "RoutePoint",
    "RouteRequest",
    "Target",
    "TargetKind",
    "Vector3",
]
