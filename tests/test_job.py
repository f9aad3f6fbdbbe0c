"""Tests for the job orchestrator."""

from datetime import datetime

import pytest

from minicam.config.settings import CodeGenerationSettings, ProgramConfiguration
from minicam.core.geometry import Point2D
from minicam.core.job import CamJob, OperationValidationError
from minicam.core.operation import DrillingOperation


def _drill(name: str, *points, **kwargs) -> DrillingOperation:
    return DrillingOperation(
        name=name, drill_points=[Point2D(*p) for p in points], depth=-3.0, **kwargs)


@pytest.fixture
def job() -> CamJob:
    j = CamJob(name="Plate", config=ProgramConfiguration(
        CodeGenerationSettings(use_line_numbers=False, generate_comments=True)))
    j.add_operation(_drill("First", (1, 1)))
    j.add_operation(_drill("Second", (2, 2), (3, 3)))
    return j


class TestCamJob:
    def test_add_operation_assigns_order(self, job):
        assert [op.order for op in job.operations] == [0, 1]
        op = job.add_operation(_drill("Third", (4, 4)))
        assert op.order == 2

    def test_ordered_operations(self, job):
        job.operations[0].order = 5
        assert [op.name for op in job.ordered_operations()] == ["Second", "First"]

    def test_enabled_operations(self, job):
        job.operations[1].enabled = False
        assert [op.name for op in job.enabled_operations()] == ["First"]

    def test_validate_reports_failures(self, job):
        assert job.validate() == []
        job.operations[1].feed_rate = 0.0
        failures = job.validate()
        assert len(failures) == 1
        op, result = failures[0]
        assert op.name == "Second"
        assert result.errors == ("Feed rate must be greater than zero.",)

    def test_compute_tool_paths(self, job):
        toolpaths = job.compute_tool_paths()
        assert [tp.operation_name for tp in toolpaths] == ["First", "Second"]
        assert [len(tp) for tp in toolpaths] == [5, 10]

    def test_compute_tool_paths_raises_on_invalid(self, job):
        job.operations[0].drill_points = []
        with pytest.raises(OperationValidationError) as exc_info:
            job.compute_tool_paths()
        assert exc_info.value.operation is job.operations[0]
        assert "at least one drill point" in str(exc_info.value)

    def test_generate_gcode(self, job):
        lines = job.generate_gcode(clock=lambda: datetime(2026, 3, 1, 8, 0, 0))
        assert lines[0] == "O0001 (Program)"
        assert lines[1] == ";(File created: 08:00:00 01.03.2026)"
        assert lines.index("; First") < lines.index("; Second")
        assert lines[-2:] == ["M30", "%"]

    def test_generate_gcode_follows_order(self, job):
        job.operations[0].order = 9
        lines = job.generate_gcode(clock=lambda: datetime(2026, 3, 1))
        assert lines.index("; Second") < lines.index("; First")
