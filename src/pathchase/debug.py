"""Debug visualization side channel for computed waypoints."""

from __future__ import annotations

import logging
from typing import Protocol

from pathchase.model.vector import Vector3

logger = logging.getLogger(__name__)


class DebugSink(Protocol):
    """Receives waypoint markers while debug output is enabled."""

    def ensure_container(self) -> None: ...

    def clear(self) -> None: ...

    def draw_marker(self, position: Vector3) -> None: ...


class LoggingDebugSink:
    """Debug sink that writes each marker as a debug log line."""

    def __init__(self, name: str = "pathchase") -> None:
        self._name = name
        self._markers = 0

    def ensure_container(self) -> None:
        pass

    def clear(self) -> None:
        if self._markers:
            logger.debug("[%s] cleared %d markers", self._name, self._markers)
        self._markers = 0

    def draw_marker(self, position: Vector3) -> None:
        self._markers += 1
        logger.debug("[%s] marker %d at %s", self._name, self._markers, position)


class RecordingDebugSink:
    """Debug sink that keeps markers in memory.

    Useful for tests and for renderers that poll instead of being pushed to.
    """

    def __init__(self) -> None:
        self.markers: list[Vector3] = []
        self.container_ready = False
        self.clear_count = 0

    def ensure_container(self) -> None:
        self.container_ready = True

    def clear(self) -> None:
        self.markers.clear()
        self.clear_count += 1

    def draw_marker(self, position: Vector3) -> None:
        self.markers.append(position)
