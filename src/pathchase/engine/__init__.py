"""Pursuit engine: waypoint reducer, progress tracker, target resolver, loop, controller."""

from pathchase.engine.controller import PursuitController
from pathchase.engine.loop import LoopState, PursuitLoop
from pathchase.engine.progress import ProgressDecision, advance, neutralize_position
from pathchase.engine.reducer import MERGE_TOLERANCE, reduce_waypoints
from pathchase.engine.resolver import classify_target, require_target_position, resolve_target

__all__ = [
    "MERGE_TOLERANCE",
    "LoopState",
    "ProgressDecision",
    "PursuitController",
    "PursuitLoop",
    "advance",
    "classify_target",
    "neutralize_position",
    "reduce_waypoints",
    "require_target_position",
    "resolve_target",
]
