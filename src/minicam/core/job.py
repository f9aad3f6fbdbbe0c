"""Job orchestrator: ties operations + program settings together.

The CamJob class is the top-level entry point for the CLI and any UI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from ..config.settings import ProgramConfiguration
from ..gcode.generator import GCodeGenerator
from .operation import CamOperation, OperationParameters, ValidationResult
from .toolpath.base import ToolPath


class OperationValidationError(RuntimeError):
    """An enabled operation failed validation."""

    def __init__(self, operation: CamOperation, result: ValidationResult) -> None:
        self.operation = operation
        self.errors = result.errors
        super().__init__(
            f"Operation {operation.name!r} is invalid: " + "; ".join(result.errors))


@dataclass
class CamJob:
    """A complete CAM job: ordered operations + program configuration."""

    name: str = "Untitled"
    operations: list[CamOperation] = field(default_factory=list)
    config: ProgramConfiguration = field(default_factory=ProgramConfiguration)
    parameters: OperationParameters = field(default_factory=OperationParameters)

    def add_operation(self, op: CamOperation) -> CamOperation:
        """Append *op*, placing it after the current last operation."""
        if self.operations:
            op.order = max(o.order for o in self.operations) + 1
        self.operations.append(op)
        return op

    def ordered_operations(self) -> list[CamOperation]:
        """Operations by execution order (stable for equal orders)."""
        return sorted(self.operations, key=lambda o: o.order)

    def enabled_operations(self) -> list[CamOperation]:
        return [op for op in self.ordered_operations() if op.enabled]

    def validate(self) -> list[tuple[CamOperation, ValidationResult]]:
        """(operation, result) for each enabled operation that fails validation."""
        failures = []
        for op in self.enabled_operations():
            result = op.validate(self.parameters)
            if not result.is_valid:
                failures.append((op, result))
        return failures

    def compute_tool_paths(self) -> list[ToolPath]:
        """Compile every enabled operation into its tool path.

        Raises
        ------
        OperationValidationError:
            If an enabled operation fails validation.
        """
        toolpaths: list[ToolPath] = []
        for op in self.enabled_operations():
            result = op.validate(self.parameters)
            if not result.is_valid:
                raise OperationValidationError(op, result)
            toolpaths.append(op.generate_tool_path(self.parameters))
        return toolpaths

    def generate_gcode(
        self,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> list[str]:
        """Generate the G-code program for this job."""
        generator = GCodeGenerator(
            self.config, self.parameters, clock or datetime.now)
        return generator.generate(self.ordered_operations())
