"""CLI entry point: ``python -m minicam --drill 10,10 --depth -5 -o holes.nc``"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import defaults
from .config.settings import (
    CodeGenerationSettings,
    CoolantSettings,
    ProgramConfiguration,
    SpindleSettings,
)
from .core.geometry import Point2D
from .core.job import CamJob, OperationValidationError
from .core.operation import DrillingOperation
from .gcode.gcode_writer import write_program
from .gcode.validate import validate_configuration


def _point(text: str) -> Point2D:
    try:
        x, y = (float(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y, got {text!r}") from None
    return Point2D(x, y)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="minicam",
        description="Generate a drilling G-code program.",
    )
    p.add_argument("-o", "--output", type=Path, default=None,
                   help="Output .nc file (default: print to stdout)")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Debug logging")

    # Drilling operation
    p.add_argument("--drill", type=_point, action="append", default=[],
                   metavar="X,Y", help="Hole position (repeatable)")
    p.add_argument("--name", default="Drilling",
                   help="Operation name (default: Drilling)")
    p.add_argument("--depth", type=float, default=-5.0,
                   help="Hole depth, negative (default: -5)")
    p.add_argument("--retract", type=float, default=1.0,
                   help="Retract height (default: 1)")
    p.add_argument("--rapid-height", type=float, default=10.0,
                   help="Safe rapid height (default: 10)")
    p.add_argument("--feed", type=float, default=100.0,
                   help="Plunge feed, mm/min (default: 100)")
    p.add_argument("--dwell", type=float, default=None,
                   help="Dwell at hole bottom, seconds")

    # Code generation
    p.add_argument("--no-line-numbers", action="store_true",
                   help="Do not number lines")
    p.add_argument("--start-line", default=None,
                   help="First line number (default: 10)")
    p.add_argument("--line-step", default=None,
                   help="Line number increment (default: 10)")
    p.add_argument("--comments", action="store_true",
                   help="Emit header and operation comments")
    p.add_argument("--format-commands", action="store_true",
                   help="Write G0..G4 as G00..G04")
    p.add_argument("--wcs", choices=defaults.COORDINATE_SYSTEMS, default=None,
                   help="Select a work coordinate system at program start")
    p.add_argument("--decimals", type=int, default=None,
                   help=f"Coordinate decimal places (default: {defaults.DECIMAL_PLACES})")
    p.add_argument("--no-g92", action="store_true",
                   help="Do not set zeros with G92")
    p.add_argument("--origin", default=None, metavar="X,Y,Z",
                   help="G92 values; leave a field empty to skip that axis")
    p.add_argument("--end-point", default=None, metavar="X,Y,Z",
                   help="Rapid to this point before ending the program")

    # Spindle / coolant
    p.add_argument("--spindle", choices=defaults.SPINDLE_ENABLE_COMMANDS, default=None,
                   help="Start the spindle (M3/M4) before operations and stop it after")
    p.add_argument("--rpm", default=None, help="Spindle speed S word")
    p.add_argument("--spindle-delay", default=None, metavar="VALUE",
                   help="Dwell after spindle start")
    p.add_argument("--delay-param", choices=defaults.SPINDLE_DELAY_PARAMETERS,
                   default=None, help="Dwell word (default: F)")
    p.add_argument("--coolant", action="store_true",
                   help="Coolant on at start, off at end")

    p.add_argument("--skip-validate", action="store_true",
                   help="Skip settings checks")
    return p


def _xyz(text: str | None) -> tuple[str | None, str | None, str | None]:
    if text is None:
        return None, None, None
    parts = (text.split(",") + ["", "", ""])[:3]
    return parts[0], parts[1], parts[2]


def _build_config(args: argparse.Namespace) -> ProgramConfiguration:
    x0, y0, z0 = _xyz(args.origin)
    x, y, z = _xyz(args.end_point)
    code_gen = CodeGenerationSettings(
        use_line_numbers=not args.no_line_numbers,
        start_line_number=args.start_line,
        line_number_step=args.line_step,
        generate_comments=args.comments,
        format_commands=args.format_commands,
        set_work_coordinate_system=args.wcs is not None,
        coordinate_system=args.wcs,
        set_zeros_at_start=not args.no_g92,
        x0=x0, y0=y0, z0=z0,
        move_to_point_at_end=args.end_point is not None,
        x=x, y=y, z=z,
        decimal_places=args.decimals,
    )
    spindle = SpindleSettings(
        add_spindle_code=args.spindle is not None,
        enable_spindle_before_operations=True,
        spindle_enable_command=args.spindle,
        set_spindle_speed=args.rpm is not None,
        spindle_speed=args.rpm,
        add_spindle_delay_after_enable=args.spindle_delay is not None,
        spindle_delay_parameter=args.delay_param,
        spindle_delay_value=args.spindle_delay,
        disable_spindle_after_operations=True,
    )
    coolant = CoolantSettings(
        add_coolant_code=args.coolant,
        enable_coolant_at_start=True,
        disable_coolant_at_end=True,
    )
    return ProgramConfiguration(code_gen, spindle, coolant)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.drill:
        print("Error: at least one --drill X,Y is required", file=sys.stderr)
        return 1

    config = _build_config(args)

    if not args.skip_validate:
        result = validate_configuration(config)
        if result.has_errors:
            print("SETTINGS ERRORS:", file=sys.stderr)
            for issue in result.issues:
                if issue.severity == "error":
                    print(f"  ERROR: {issue.message}", file=sys.stderr)
            return 1
        for issue in result.issues:
            print(f"  Warning: {issue.message}", file=sys.stderr)

    job = CamJob(name=args.name, config=config)
    job.add_operation(DrillingOperation(
        name=args.name,
        drill_points=args.drill,
        depth=args.depth,
        retract_height=args.retract,
        rapid_height=args.rapid_height,
        feed_rate=args.feed,
        dwell_time=args.dwell,
    ))

    try:
        toolpaths = job.compute_tool_paths()
    except OperationValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    moves = sum(len(tp) for tp in toolpaths)
    print(f"Computed {len(toolpaths)} operation(s), {moves} moves", file=sys.stderr)

    lines = job.generate_gcode()
    if args.output is None:
        for line in lines:
            print(line)
    else:
        write_program(lines, args.output)
        print(f"Wrote {args.output}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
