"""Command-line interface for pathchase: run a simulated chase in the sandbox."""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import dataclass
from typing import Any, TextIO

from pathchase import __version__
from pathchase.config import PursuitConfig
from pathchase.debug import RecordingDebugSink
from pathchase.engine.controller import PursuitController
from pathchase.logging_config import configure_logging
from pathchase.model.route import RouteParams
from pathchase.model.vector import Vector3
from pathchase.sandbox import (
    OrbitingMover,
    SimAgent,
    SimCharacter,
    SimClock,
    SimPart,
    SimPlayer,
    StraightLineRouteEngine,
)

# Scheduler yields granted to the pursuit loop per simulated tick
YIELDS_PER_TICK = 3


@dataclass
class DemoResult:
    """Summary of a demo run."""

    ticks: int
    final_distance: float
    closest_distance: float
    move_orders: int
    jumps: int
    generations: int
    markers: int  # most debug markers shown at once


def _build_target(kind: str, part: SimPart, root_part_name: str) -> Any:
    if kind == "point":
        return part.position
    if kind == "player":
        character = SimCharacter("runner", {root_part_name: part})
        return SimPlayer("runner", character)
    return part


async def run_demo(
    ticks: int = 300,
    dt: float = 1 / 30,
    speed: float = 16.0,
    target_kind: str = "part",
    debug: bool = False,
    report_every: int = 30,
    out: TextIO | None = None,
) -> DemoResult:
    """Chase a target orbiting the origin and report progress.

    Args:
        ticks: Number of simulated ticks.
        dt: Simulated seconds per tick.
        speed: Agent walk speed in units per second.
        target_kind: 'point', 'part' or 'player'.
        debug: Record debug markers for computed waypoints.
        report_every: Print a trace line every N ticks (0 disables).
        out: Stream for the trace. Defaults to stdout.

    Returns:
        DemoResult with distances and counters.
    """
    out = out or sys.stdout
    clock = SimClock()
    config = PursuitConfig(tick_interval=0.0, debug=debug)

    agent = SimAgent("chaser", position=Vector3(0.0, 3.0, 0.0), speed=speed)
    quarry = SimPart(config.root_part_name, Vector3(30.0, 0.0, 0.0))
    mover = OrbitingMover(quarry, center=Vector3(), radius=30.0, angular_speed=0.3)
    sink = RecordingDebugSink()

    controller = PursuitController(
        agent,
        StraightLineRouteEngine(),
        RouteParams(),
        config=config,
        debug_sink=sink,
        clock=clock,
    )
    controller.chase_target(_build_target(target_kind, quarry, config.root_part_name))

    closest = float("inf")
    markers = 0
    distance = agent.position.planar_distance_to(quarry.position)
    try:
        for tick in range(1, ticks + 1):
            for _ in range(YIELDS_PER_TICK):
                await asyncio.sleep(0)
            mover.step(dt)
            agent.step(dt)
            clock.advance(dt)

            distance = agent.position.planar_distance_to(quarry.position)
            closest = min(closest, distance)
            markers = max(markers, len(sink.markers))
            if report_every and tick % report_every == 0:
                state = controller.state
                print(
                    f"t={clock.now:6.2f}s agent={agent.position} target={quarry.position} "
                    f"dist={distance:6.2f} waypoint={state.current_index}/{len(state.waypoints)}",
                    file=out,
                )
    finally:
        await controller.aclose()

    return DemoResult(
        ticks=ticks,
        final_distance=distance,
        closest_distance=closest,
        move_orders=agent.move_orders,
        jumps=agent.jumps,
        generations=controller.generation,
        markers=markers,
    )


def main(args: list[str] | None = None) -> int:
    """Run the pathchase demo.

    Args:
        args: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(
        prog="pathchase",
        description="pathchase - simulated pursuit along computed routes",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=300,
        help="Number of simulated ticks (default: 300)",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=1 / 30,
        help="Simulated seconds per tick (default: 1/30)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=16.0,
        help="Agent walk speed in units per second (default: 16)",
    )
    parser.add_argument(
        "--target-kind",
        choices=("point", "part", "player"),
        default="part",
        help="What to chase (default: part)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Record debug markers for computed waypoints",
    )
    parser.add_argument(
        "--log-format",
        choices=("text", "json"),
        default=None,
        help="Log output format (default: LOG_FORMAT or text)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parsed = parser.parse_args(args)
    if parsed.ticks < 1:
        parser.error("--ticks must be at least 1")
    if parsed.dt <= 0:
        parser.error("--dt must be positive")

    configure_logging(format_type=parsed.log_format)

    result = asyncio.run(
        run_demo(
            ticks=parsed.ticks,
            dt=parsed.dt,
            speed=parsed.speed,
            target_kind=parsed.target_kind,
            debug=parsed.debug,
        )
    )

    print(
        f"Finished {result.ticks} ticks: final distance {result.final_distance:.2f}, "
        f"closest {result.closest_distance:.2f}, {result.move_orders} move orders, "
        f"{result.jumps} jumps, {result.markers} debug markers"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
