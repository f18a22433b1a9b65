"""pathchase - Cancellable pursuit path-following for simulated agents."""

from pathchase.engine.controller import PursuitController
from pathchase.logging_config import configure_logging, get_logger
from pathchase.model.route import RouteParams
from pathchase.model.vector import Vector3

__version__ = "0.1.0"

__all__ = [
    "PursuitController",
    "RouteParams",
    "Vector3",
    "__version__",
    "configure_logging",
    "get_logger",
]
