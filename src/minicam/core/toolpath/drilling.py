"""Point-to-point drilling strategy.

Sequence per hole
-----------------
1. Rapid to (x, y, rapid_z) above the hole.
2. Rapid down to (x, y, retract_z).
3. Feed to (x, y, depth).
4. Optional dwell at the bottom.
5. Rapid back to retract_z, then to rapid_z.

Holes are visited in the order given; no path ordering is attempted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..geometry import Point2D, Point3D
from .base import MoveCommand, ToolPath


@dataclass
class DrillingParams:
    """Heights and feeds for the drilling cycle."""

    depth: float              # hole bottom (negative, below stock top)
    retract_z: float          # clearance above the hole between plunges
    rapid_z: float            # safe height for moves between holes
    feed_rate: float          # plunge feed
    dwell: Optional[float] = None  # seconds at the bottom


def generate_drilling_toolpath(
    points: Iterable[Point2D],
    params: DrillingParams,
    operation_name: str = "drilling",
) -> ToolPath:
    """Generate the drilling toolpath for *points*.

    The path starts above the first hole at ``rapid_z`` so the opening
    rapid is a zero-length move for the preview; the G-code emitter drops it
    when the machine is already there.
    """
    points = list(points)
    toolpath = ToolPath(operation_name=operation_name)
    if points:
        first = points[0]
        toolpath.set_initial_position(Point3D(first.x, first.y, params.rapid_z))

    for pt in points:
        toolpath.add_move(MoveCommand.rapid(pt.x, pt.y, params.rapid_z))
        toolpath.add_move(MoveCommand.rapid(pt.x, pt.y, params.retract_z))
        toolpath.add_move(
            MoveCommand.linear(pt.x, pt.y, params.depth, params.feed_rate))
        if params.dwell is not None and params.dwell > 0:
            toolpath.add_dwell(params.dwell)
        toolpath.add_move(MoveCommand.rapid(pt.x, pt.y, params.retract_z))
        toolpath.add_move(MoveCommand.rapid(pt.x, pt.y, params.rapid_z))

    return toolpath
