"""Waypoint reduction: collapse a dense route into steering waypoints."""

from __future__ import annotations

from collections.abc import Sequence

from pathchase.model.route import RoutePoint

# Consecutive points closer than this are treated as the same place
MERGE_TOLERANCE = 0.2


def reduce_waypoints(
    points: Sequence[RoutePoint],
    tolerance: float = MERGE_TOLERANCE,
) -> list[RoutePoint]:
    """Reduce a raw route to the waypoints worth steering toward.

    Scans from the end toward the start and drops every point that lies
    within ``tolerance`` of its predecessor, which collapses the clusters
    route engines emit around sharp turns and standing starts. A forward
    sweep then drops any survivor that a zig-zag left within ``tolerance``
    of the point kept before it. The first surviving point is the agent's
    own position, so it is dropped as well. Runs in O(n).

    Args:
        points: Route points in travel order, start first.
        tolerance: Inclusive distance at which two neighbours merge.

    Returns:
        New list of steering waypoints, empty when the route has nowhere
        to go. The input is not modified.
    """
    merged = _drop_close_successors(_merge_pass(points, tolerance), tolerance)
    if len(merged) <= 1:
        return []
    return merged[1:]


def _merge_pass(points: Sequence[RoutePoint], tolerance: float) -> list[RoutePoint]:
    """End-to-start sweep keeping each point farther than tolerance from its predecessor."""
    survivors: list[RoutePoint] = []
    for i in range(len(points) - 1, 0, -1):
        if points[i].position.distance_to(points[i - 1].position) > tolerance:
            survivors.append(points[i])
    if points:
        survivors.append(points[0])
    survivors.reverse()
    return survivors


def _drop_close_successors(points: list[RoutePoint], tolerance: float) -> list[RoutePoint]:
    kept: list[RoutePoint] = []
    for point in points:
        if kept and point.position.distance_to(kept[-1].position) <= tolerance:
            continue
        kept.append(point)
    return kept
