"""Sanity checks on program settings before generating G-code.

The generator never fails on bad settings: a number that does not parse is
treated as absent and the dependent word or line is dropped.  These checks
report such silently-dropped values so the caller can warn the user.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import defaults
from ..config.settings import ProgramConfiguration, parse_int, parse_number


@dataclass
class ValidationIssue:
    """A single problem found in the settings."""

    severity: str  # "error" or "warning"
    message: str
    setting: str = ""


@dataclass
class ValidationResult:
    """Result of checking a configuration."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity == "warning" for i in self.issues)

    @property
    def is_ok(self) -> bool:
        return len(self.issues) == 0


def _check_number(result: ValidationResult, setting: str, text, what: str) -> None:
    # Unset fields fall back to defaults; only explicit non-blank text is checked.
    if text is None or not text.strip():
        return
    if parse_number(text) is None:
        result.issues.append(ValidationIssue(
            "warning",
            f"{what} {text!r} is not a number and will be ignored",
            setting,
        ))


def validate_configuration(config: ProgramConfiguration) -> ValidationResult:
    """Check *config* for values the generator would silently drop.

    Checks performed:
    - Start / end coordinates parse as numbers
    - Line number start and step parse as integers (step must be positive)
    - Decimal places is within 0..MAX_DECIMAL_PLACES
    - Spindle speed and delay value parse as numbers
    - Work coordinate system and spindle command are known codes
    """
    result = ValidationResult()
    cg = config.code_generation
    sp = config.spindle

    for axis in ("x0", "y0", "z0"):
        _check_number(result, axis, getattr(cg, axis),
                      f"Start coordinate {axis[0].upper()}")
    for axis in ("x", "y", "z"):
        _check_number(result, axis, getattr(cg, axis),
                      f"End point {axis.upper()}")

    for name, label in (("start_line_number", "Start line number"),
                        ("line_number_step", "Line number step")):
        text = getattr(cg, name)
        if text is None:
            continue
        value = parse_int(text)
        if value is None:
            result.issues.append(ValidationIssue(
                "warning", f"{label} {text!r} is not an integer; using 10", name))
        elif name == "line_number_step" and value <= 0:
            result.issues.append(ValidationIssue(
                "error", f"{label} must be positive, got {value}", name))

    if cg.decimal_places is not None and cg.decimal_places < 0:
        result.issues.append(ValidationIssue(
            "warning",
            f"Decimal places {cg.decimal_places} is negative; using 0",
            "decimal_places",
        ))
    elif (cg.decimal_places is not None
          and cg.decimal_places > defaults.MAX_DECIMAL_PLACES):
        result.issues.append(ValidationIssue(
            "warning",
            f"Decimal places {cg.decimal_places} is too large; "
            f"using {defaults.MAX_DECIMAL_PLACES}",
            "decimal_places",
        ))

    if cg.coordinate_system and cg.coordinate_system.strip() not in defaults.COORDINATE_SYSTEMS:
        result.issues.append(ValidationIssue(
            "warning",
            f"Unknown work coordinate system {cg.coordinate_system!r}",
            "coordinate_system",
        ))

    _check_number(result, "spindle_speed", sp.spindle_speed, "Spindle speed")
    _check_number(result, "spindle_delay_value", sp.spindle_delay_value, "Spindle delay")

    if (sp.spindle_enable_command
            and sp.spindle_enable_command.strip() not in defaults.SPINDLE_ENABLE_COMMANDS):
        result.issues.append(ValidationIssue(
            "warning",
            f"Unknown spindle enable command {sp.spindle_enable_command!r}",
            "spindle_enable_command",
        ))
    if (sp.spindle_delay_parameter
            and sp.spindle_delay_parameter.strip() not in defaults.SPINDLE_DELAY_PARAMETERS):
        result.issues.append(ValidationIssue(
            "warning",
            f"Unknown spindle delay parameter {sp.spindle_delay_parameter!r}",
            "spindle_delay_parameter",
        ))

    return result
