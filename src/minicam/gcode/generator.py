"""G-code generator -- operations + program settings to G-code lines.

Program layout
--------------
::

    O0001 (Program)            header, never numbered
    ;(File created: ...)       only with comments on
    N0010 G54                  work coordinate system      (optional)
    N0020 G90                  absolute coordinates        (optional)
    N0030 G92 X0.000 ...       origin offset               (optional)
    N0040 M3 S1000             spindle start [+ G4 delay]  (optional)
    N0050 M8                   coolant on                  (optional)
    N0060 ; Drill holes        per operation: comment + tool path
    ...
    N0200 G0 X0.000 ...        move to end point           (optional)
    N0210 M5 / M9              spindle / coolant off       (optional)
    N0220 M30
    %                          never numbered

Move optimisation:
    The generator tracks the last commanded X/Y/Z.  An axis whose target
    prints the same as the tracked value at the configured precision is
    left out; a move with no axes left is dropped entirely and does not use
    up a line number.  Axes start unknown unless G92 sets them.

All working state lives in a per-call ``_Emitter``; a ``GCodeGenerator``
can be shared between threads.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, Optional

from ..config import defaults
from ..config.settings import (
    EffectiveConfiguration,
    ProgramConfiguration,
    resolve_configuration,
)
from ..core.operation import CamOperation, OperationParameters
from ..core.toolpath.base import Dwell, MoveType, ToolPath, ToolPathSegment
from .gcode_writer import (
    alias_command,
    comment,
    coordinates_equal,
    fmt,
    format_coordinate,
    number_line,
    paren_comment,
)
from .validate import validate_configuration

logger = logging.getLogger(__name__)

PROGRAM_NUMBER = "O0001"
PROGRAM_END = "M30"
END_MARKER = "%"

_MOTION_WORDS = {
    MoveType.RAPID: "G0",
    MoveType.LINEAR: "G1",
    MoveType.ARC_CW: "G2",
    MoveType.ARC_CCW: "G3",
}


# ---------------------------------------------------------------------------
# Per-call emitter state
# ---------------------------------------------------------------------------


class _Emitter:
    """Output buffer, line counter and tracked tool position for one call."""

    def __init__(self, cfg: EffectiveConfiguration) -> None:
        self.cfg = cfg
        self.cg = cfg.code_generation
        self.lines: list[str] = []
        self.line_number = self.cg.start_line_number
        self.decimals = self.cg.decimal_places
        self.x: Optional[float] = None
        self.y: Optional[float] = None
        self.z: Optional[float] = None
        self.feed: Optional[float] = None

    # -- output ------------------------------------------------------------

    def add_line(self, line: str) -> None:
        """Append *line*, numbered when line numbers are on."""
        if not line.strip():
            self.add_blank()
            return
        if self.cg.use_line_numbers:
            self.lines.append(number_line(self.line_number, line))
            self.line_number += self.cg.line_number_step
        else:
            self.lines.append(line)

    def add_unnumbered(self, line: str) -> None:
        self.lines.append(line)

    def add_blank(self) -> None:
        self.lines.append("")

    def command(self, word: str) -> str:
        return alias_command(word, self.cg.format_commands)

    def coord(self, value: float) -> str:
        return format_coordinate(value, self.decimals)

    # -- moves -------------------------------------------------------------

    def _axis_words(
        self,
        x: Optional[float],
        y: Optional[float],
        z: Optional[float],
    ) -> tuple[list[str], dict[str, float]]:
        """Words for the axes that actually change, and their new values."""
        words: list[str] = []
        updates: dict[str, float] = {}
        for axis, target in (("x", x), ("y", y), ("z", z)):
            if target is None:
                continue
            if coordinates_equal(getattr(self, axis), target, self.decimals):
                continue
            words.append(f"{axis.upper()}{self.coord(target)}")
            updates[axis] = target
        return words, updates

    def _feed_word(self, feed: Optional[float]) -> Optional[str]:
        if feed is None:
            return None
        word = f"F{fmt(feed)}"
        if self.feed is not None and word == f"F{fmt(self.feed)}":
            return None
        return word

    def add_move(
        self,
        word: str,
        x: Optional[float],
        y: Optional[float],
        z: Optional[float],
        feed: Optional[float] = None,
        arc_words: Iterable[str] = (),
        force: bool = False,
    ) -> bool:
        """Emit a motion line with unchanged axes removed.

        Returns False (and emits nothing) when no axis changes, unless
        *force* is set.
        """
        words, updates = self._axis_words(x, y, z)
        if not words and not force:
            return False

        parts = [self.command(word), *words, *arc_words]
        feed_word = self._feed_word(feed)
        if feed_word is not None:
            parts.append(feed_word)
            self.feed = feed

        for axis, value in updates.items():
            setattr(self, axis, value)
        self.add_line(" ".join(parts))
        return True

    def add_segment(self, seg: ToolPathSegment) -> bool:
        cmd = seg.command
        if cmd.move_type is MoveType.RAPID:
            return self.add_move("G0", cmd.x, cmd.y, cmd.z)
        if cmd.move_type is MoveType.LINEAR:
            return self.add_move("G1", cmd.x, cmd.y, cmd.z, cmd.feed_rate)

        if not self.cg.allow_arcs:
            logger.warning(
                "Arcs are disabled; %s to %s emitted as a straight G1",
                cmd.move_type.name, seg.end,
            )
            return self.add_move("G1", cmd.x, cmd.y, cmd.z, cmd.feed_rate)

        if cmd.r is not None:
            arc_words = [f"R{self.coord(cmd.r)}"]
            full_circle = False
        else:
            arc_words = [f"I{self.coord(cmd.i)}", f"J{self.coord(cmd.j)}"]
            if cmd.k is not None:
                arc_words.append(f"K{self.coord(cmd.k)}")
            full_circle = True
        return self.add_move(
            _MOTION_WORDS[cmd.move_type], cmd.x, cmd.y, cmd.z, cmd.feed_rate,
            arc_words=arc_words, force=full_circle,
        )

    def add_dwell(self, dwell: Dwell) -> None:
        self.add_line(f"{self.command('G4')} P{fmt(dwell.seconds)}")

    def add_tool_path(self, tool_path: ToolPath) -> int:
        """Render every directive of *tool_path*; returns lines emitted."""
        before = len(self.lines)
        for directive in tool_path.directives:
            if isinstance(directive, Dwell):
                self.add_dwell(directive)
            else:
                self.add_segment(directive)
        return len(self.lines) - before


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class GCodeGenerator:
    """Compile operations into a G-code program.

    Parameters
    ----------
    config:
        Program settings (code generation, spindle, coolant).  Read, never
        modified.
    parameters:
        Machine-level operation parameters passed to every operation.
    clock:
        Source of the "file created" timestamp; inject a fixed clock for
        reproducible output.
    """

    def __init__(
        self,
        config: ProgramConfiguration,
        parameters: Optional[OperationParameters] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config
        self._parameters = parameters or OperationParameters()
        self._clock = clock

    def generate(self, operations: Iterable[CamOperation]) -> list[str]:
        """Generate the program for the enabled *operations*, in order.

        Operations that fail :meth:`CamOperation.validate` are skipped with a
        warning.  Never raises on bad settings: unparsable numbers are
        treated as absent.
        """
        cfg = resolve_configuration(self._config)
        for issue in validate_configuration(self._config).issues:
            logger.debug("settings %s: %s", issue.setting, issue.message)

        em = _Emitter(cfg)
        enabled = [op for op in operations if op.enabled]

        self._write_header(em)
        self._write_program_start(em)
        em.add_blank()

        emitted_ops = 0
        for op in enabled:
            result = op.validate(self._parameters)
            if not result.is_valid:
                logger.warning(
                    "Skipping operation %r: %s", op.name, "; ".join(result.errors))
                continue
            self._write_operation(em, op, op.generate_tool_path(self._parameters))
            em.add_blank()
            emitted_ops += 1

        self._write_program_end(em)

        lines = [line for line in em.lines if line.strip()]
        logger.debug(
            "Generated %d lines for %d of %d enabled operations",
            len(lines), emitted_ops, len(enabled),
        )
        return lines

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _write_header(self, em: _Emitter) -> None:
        if em.cg.generate_comments:
            em.add_unnumbered(f"{PROGRAM_NUMBER} (Program)")
            now = self._clock()
            em.add_unnumbered(paren_comment(
                f"File created: {now:%H:%M:%S} {now:%d.%m.%Y}"))
        else:
            em.add_unnumbered(PROGRAM_NUMBER)

    def _write_program_start(self, em: _Emitter) -> None:
        cg = em.cg
        spindle = em.cfg.spindle

        if cg.coordinate_system is not None:
            em.add_line(cg.coordinate_system)

        if cg.set_absolute_coordinates:
            em.add_line(em.command("G90"))

        if cg.set_zeros_at_start:
            words = []
            for axis, value in (("x", cg.x0), ("y", cg.y0), ("z", cg.z0)):
                if value is None:
                    continue
                words.append(f"{axis.upper()}{em.coord(value)}")
                setattr(em, axis, value)
            if words:
                em.add_line(" ".join([em.command("G92"), *words]))

        if spindle.enable_command is not None:
            line = spindle.enable_command
            if spindle.speed is not None:
                line += f" S{spindle.speed}"
            em.add_line(line)
            if spindle.delay_word is not None:
                em.add_line(f"{em.command('G4')} {spindle.delay_word}")

        if em.cfg.coolant.enable_at_start:
            em.add_line(defaults.COOLANT_ON)

    def _write_operation(self, em: _Emitter, op: CamOperation, tool_path: ToolPath) -> None:
        if em.cg.generate_comments:
            em.add_line(comment(op.name))
        emitted = em.add_tool_path(tool_path)
        logger.debug("Operation %r: %d segments, %d lines",
                     op.name, len(tool_path), emitted)

    def _write_program_end(self, em: _Emitter) -> None:
        cg = em.cg
        if cg.move_to_point_at_end:
            em.add_move("G0", cg.x, cg.y, cg.z)

        if em.cfg.spindle.disable_after_operations:
            em.add_line(defaults.SPINDLE_STOP)

        if em.cfg.coolant.disable_at_end:
            em.add_line(defaults.COOLANT_OFF)

        em.add_line(PROGRAM_END)
        em.add_unnumbered(END_MARKER)


def generate_gcode(
    operations: Iterable[CamOperation],
    config: Optional[ProgramConfiguration] = None,
    parameters: Optional[OperationParameters] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> list[str]:
    """One-shot convenience wrapper around :class:`GCodeGenerator`."""
    generator = GCodeGenerator(config or ProgramConfiguration(), parameters, clock)
    return generator.generate(operations)
