"""Core toolpath data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from ..geometry import ORIGIN_3D, BoundingBox3D, Point3D


class MoveType(Enum):
    """Type of CNC motion."""
    RAPID = "rapid"          # G0, no cutting
    LINEAR = "linear"        # G1, cutting feed
    ARC_CW = "arc_cw"        # G2
    ARC_CCW = "arc_ccw"      # G3

    @property
    def is_arc(self) -> bool:
        return self in (MoveType.ARC_CW, MoveType.ARC_CCW)


@dataclass(frozen=True)
class MoveCommand:
    """A single motion directive.

    A ``None`` coordinate means "unchanged".  Arc commands are built with
    :meth:`arc` (centre offsets) or :meth:`arc_radius`; building them any
    other way raises ``ValueError``.
    """

    move_type: MoveType
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    feed_rate: Optional[float] = None
    i: Optional[float] = None
    j: Optional[float] = None
    k: Optional[float] = None
    r: Optional[float] = None

    def __post_init__(self) -> None:
        has_offsets = self.i is not None or self.j is not None or self.k is not None
        has_radius = self.r is not None
        if not self.move_type.is_arc:
            if has_offsets or has_radius:
                raise ValueError(
                    f"{self.move_type.name} move cannot carry arc parameters"
                )
            return
        if self.x is None and self.y is None:
            raise ValueError("Arc move needs an X or Y target")
        if has_offsets and has_radius:
            raise ValueError("Arc move takes either I/J/K offsets or a radius, not both")
        if has_offsets and (self.i is None or self.j is None):
            raise ValueError("Arc move needs both I and J centre offsets")
        if not has_offsets and not has_radius:
            raise ValueError("Arc move needs I/J centre offsets or a radius R")

    @classmethod
    def rapid(cls, x=None, y=None, z=None) -> MoveCommand:
        return cls(MoveType.RAPID, x, y, z)

    @classmethod
    def linear(cls, x=None, y=None, z=None, feed_rate=None) -> MoveCommand:
        return cls(MoveType.LINEAR, x, y, z, feed_rate)

    @classmethod
    def arc(
        cls,
        move_type: MoveType,
        x: Optional[float],
        y: Optional[float],
        z: Optional[float],
        i: float,
        j: float,
        k: Optional[float] = None,
        feed_rate: Optional[float] = None,
    ) -> MoveCommand:
        """Arc to (x, y[, z]) about the centre at offset (i, j[, k]) from the start."""
        if not move_type.is_arc:
            raise ValueError(
                f"Arc constructor can only be used for ARC_CW or ARC_CCW, got {move_type.name}"
            )
        return cls(move_type, x, y, z, feed_rate, i=i, j=j, k=k)

    @classmethod
    def arc_radius(
        cls,
        move_type: MoveType,
        x: Optional[float],
        y: Optional[float],
        z: Optional[float],
        r: float,
        feed_rate: Optional[float] = None,
    ) -> MoveCommand:
        if not move_type.is_arc:
            raise ValueError(
                f"Arc radius constructor can only be used for ARC_CW or ARC_CCW, got {move_type.name}"
            )
        return cls(move_type, x, y, z, feed_rate, r=r)


@dataclass(frozen=True)
class Dwell:
    """Pause at the current position for *seconds* (G4)."""
    seconds: float


@dataclass(frozen=True)
class ToolPathSegment:
    """A move resolved against the position that preceded it."""
    command: MoveCommand
    start: Point3D
    end: Point3D

    @property
    def move_type(self) -> MoveType:
        return self.command.move_type

    @property
    def feed_rate(self) -> Optional[float]:
        return self.command.feed_rate


Directive = Union[ToolPathSegment, Dwell]


class ToolPath:
    """Ordered, append-only sequence of resolved moves for one operation.

    Dwells are kept in order with the segments (see :attr:`directives`) but
    do not move the tool, so consecutive segments always chain:
    ``segments[i].end == segments[i + 1].start``.
    """

    def __init__(self, operation_name: str = "") -> None:
        self.operation_name = operation_name
        self._directives: list[Directive] = []
        self._segments: list[ToolPathSegment] = []
        self._current = ORIGIN_3D

    @property
    def current_position(self) -> Point3D:
        return self._current

    @property
    def segments(self) -> tuple[ToolPathSegment, ...]:
        return tuple(self._segments)

    @property
    def directives(self) -> tuple[Directive, ...]:
        return tuple(self._directives)

    @property
    def is_empty(self) -> bool:
        return not self._directives

    def set_initial_position(self, position: Point3D) -> None:
        """Override the starting cursor.  Only allowed before the first move."""
        if self._segments:
            raise RuntimeError("Initial position must be set before the first move")
        self._current = position

    def add_move(self, move: MoveCommand) -> ToolPathSegment:
        start = self._current
        end = Point3D(
            start.x if move.x is None else move.x,
            start.y if move.y is None else move.y,
            start.z if move.z is None else move.z,
        )
        seg = ToolPathSegment(move, start, end)
        self._segments.append(seg)
        self._directives.append(seg)
        self._current = end
        return seg

    def add_dwell(self, seconds: float) -> Dwell:
        dwell = Dwell(seconds)
        self._directives.append(dwell)
        return dwell

    def get_points(self) -> Iterator[Point3D]:
        """First segment start followed by every segment end."""
        if not self._segments:
            return
        yield self._segments[0].start
        for seg in self._segments:
            yield seg.end

    def get_bounds(self) -> BoundingBox3D:
        return BoundingBox3D.from_points(self.get_points())

    def reset(self) -> None:
        self._directives.clear()
        self._segments.clear()
        self._current = ORIGIN_3D

    def __len__(self) -> int:
        return len(self._segments)
