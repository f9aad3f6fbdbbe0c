"""Machining operations.

A CamOperation knows how to check its own parameters and compile itself
into a ToolPath.  The emitter only sees that capability, so new operation
kinds plug in without touching G-code generation.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .geometry import Point2D
from .primitives import Point2DPrimitive
from .toolpath.base import ToolPath
from .toolpath.drilling import DrillingParams, generate_drilling_toolpath


class OperationKind(Enum):
    DRILLING = "drilling"


@dataclass
class OperationParameters:
    """Machine-level inputs shared by every operation in a job (mm, mm/min)."""

    tool_diameter: float = 0.0
    safe_height: float = 10.0
    default_feed_rate: float = 100.0
    rapid_feed_rate: float = 1000.0


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :meth:`CamOperation.validate`.  Never raised."""

    is_valid: bool
    errors: tuple[str, ...] = ()

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(True)

    @classmethod
    def failure(cls, errors: Iterable[str]) -> ValidationResult:
        return cls(False, tuple(errors))

    def __bool__(self) -> bool:
        return self.is_valid


@dataclass
class CamOperation(ABC):
    """Base for all operations: identity, display name and ordering."""

    name: str = ""
    enabled: bool = True
    order: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    @abstractmethod
    def kind(self) -> OperationKind:
        ...

    @abstractmethod
    def validate(self, parameters: OperationParameters) -> ValidationResult:
        ...

    @abstractmethod
    def generate_tool_path(self, parameters: OperationParameters) -> ToolPath:
        ...


@dataclass
class DrillingOperation(CamOperation):
    """Drill holes at a list of XY points."""

    drill_points: list[Point2D] = field(default_factory=list)
    depth: float = 0.0            # negative, e.g. -10 is 10 mm down
    retract_height: float = 1.0
    rapid_height: float = 10.0
    feed_rate: float = 100.0      # mm/min
    dwell_time: Optional[float] = None  # seconds

    @property
    def kind(self) -> OperationKind:
        return OperationKind.DRILLING

    @classmethod
    def from_primitives(
        cls,
        primitives: Iterable[Point2DPrimitive],
        **kwargs,
    ) -> DrillingOperation:
        """Build an operation drilling at each point primitive, in order."""
        return cls(drill_points=[p.point for p in primitives], **kwargs)

    def validate(self, parameters: OperationParameters) -> ValidationResult:
        errors: list[str] = []

        if not self.drill_points:
            errors.append("Drilling operation must have at least one drill point.")
        if self.depth >= 0:
            errors.append("Drilling depth must be negative (below the surface).")
        if self.retract_height <= self.depth:
            errors.append("Retract height must be greater than drilling depth.")
        if self.rapid_height <= self.retract_height:
            errors.append("Rapid height must be greater than retract height.")
        if self.feed_rate <= 0:
            errors.append("Feed rate must be greater than zero.")
        if self.dwell_time is not None and self.dwell_time < 0:
            errors.append("Dwell time cannot be negative.")

        if errors:
            return ValidationResult.failure(errors)
        return ValidationResult.success()

    def generate_tool_path(self, parameters: OperationParameters) -> ToolPath:
        params = DrillingParams(
            depth=self.depth,
            retract_z=self.retract_height,
            rapid_z=self.rapid_height,
            feed_rate=self.feed_rate,
            dwell=self.dwell_time,
        )
        return generate_drilling_toolpath(
            self.drill_points, params, operation_name=self.name)
