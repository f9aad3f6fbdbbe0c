"""Program configuration: the option groups consumed by the G-code generator.

Each group is a flat record of optional fields.  ``None`` means "unset" and
is replaced by the matching value from :mod:`.defaults` only when
:func:`resolve_configuration` runs at the start of generation; stored
settings keep their ``None``.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Optional

from . import defaults

_FLOAT_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")
_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")
_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse an invariant-culture decimal number; anything else is ``None``."""
    if text is None or not _FLOAT_RE.match(text):
        return None
    return float(text)


def parse_int(text: Optional[str]) -> Optional[int]:
    if text is None or not _INT_RE.match(text):
        return None
    return int(text)


def _snake(key: str) -> str:
    return _CAMEL_RE.sub(r"_\1", key).lower()


class _SettingsRecord:
    """to_dict / from_dict shared by the option groups."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        """Build from a dict with snake_case or CamelCase keys; unknown keys ignored."""
        names = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _snake(key)
            if name in names:
                kwargs[name] = value
        return cls(**kwargs)


@dataclass
class CodeGenerationSettings(_SettingsRecord):
    use_line_numbers: Optional[bool] = None
    start_line_number: Optional[str] = None
    line_number_step: Optional[str] = None
    generate_comments: Optional[bool] = None
    allow_arcs: Optional[bool] = None
    format_commands: Optional[bool] = None
    set_work_coordinate_system: Optional[bool] = None
    coordinate_system: Optional[str] = None
    set_absolute_coordinates: Optional[bool] = None
    allow_relative_coordinates: Optional[bool] = None
    set_zeros_at_start: Optional[bool] = None
    x0: Optional[str] = None
    y0: Optional[str] = None
    z0: Optional[str] = None
    move_to_point_at_end: Optional[bool] = None
    x: Optional[str] = None
    y: Optional[str] = None
    z: Optional[str] = None
    decimal_places: Optional[int] = None


@dataclass
class SpindleSettings(_SettingsRecord):
    add_spindle_code: Optional[bool] = None
    set_spindle_speed: Optional[bool] = None
    spindle_speed: Optional[str] = None
    enable_spindle_before_operations: Optional[bool] = None
    spindle_enable_command: Optional[str] = None
    add_spindle_delay_after_enable: Optional[bool] = None
    spindle_delay_parameter: Optional[str] = None
    spindle_delay_value: Optional[str] = None
    disable_spindle_after_operations: Optional[bool] = None


@dataclass
class CoolantSettings(_SettingsRecord):
    add_coolant_code: Optional[bool] = None
    enable_coolant_at_start: Optional[bool] = None
    disable_coolant_at_end: Optional[bool] = None


@dataclass
class ProgramConfiguration:
    """The three independent option groups handed to the generator."""

    code_generation: CodeGenerationSettings = field(default_factory=CodeGenerationSettings)
    spindle: SpindleSettings = field(default_factory=SpindleSettings)
    coolant: CoolantSettings = field(default_factory=CoolantSettings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code_generation": self.code_generation.to_dict(),
            "spindle": self.spindle.to_dict(),
            "coolant": self.coolant.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgramConfiguration:
        groups = {_snake(k): v for k, v in data.items()}
        return cls(
            code_generation=CodeGenerationSettings.from_dict(groups.get("code_generation") or {}),
            spindle=SpindleSettings.from_dict(groups.get("spindle") or {}),
            coolant=CoolantSettings.from_dict(groups.get("coolant") or {}),
        )


# ---------------------------------------------------------------------------
# Effective (resolved) values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EffectiveCodeGeneration:
    use_line_numbers: bool
    start_line_number: int
    line_number_step: int
    generate_comments: bool
    allow_arcs: bool
    format_commands: bool
    coordinate_system: Optional[str]       # None: do not emit a WCS line
    set_absolute_coordinates: bool
    allow_relative_coordinates: bool
    set_zeros_at_start: bool
    x0: Optional[float]
    y0: Optional[float]
    z0: Optional[float]
    move_to_point_at_end: bool
    x: Optional[float]
    y: Optional[float]
    z: Optional[float]
    decimal_places: int


@dataclass(frozen=True)
class EffectiveSpindle:
    enable_command: Optional[str]          # None: no spindle start line
    speed: Optional[str]                   # validated numeric text for the S word
    delay_word: Optional[str]              # e.g. "P2" or "F2"; None: no dwell
    disable_after_operations: bool


@dataclass(frozen=True)
class EffectiveCoolant:
    enable_at_start: bool
    disable_at_end: bool


@dataclass(frozen=True)
class EffectiveConfiguration:
    code_generation: EffectiveCodeGeneration
    spindle: EffectiveSpindle
    coolant: EffectiveCoolant


def _pick(value, default):
    return default if value is None else value


def _coordinate(text: Optional[str]) -> Optional[float]:
    return parse_number(_pick(text, defaults.COORDINATE))


def _non_blank(text: Optional[str]) -> Optional[str]:
    if text is None or not text.strip():
        return None
    return text.strip()


def resolve_code_generation(s: CodeGenerationSettings) -> EffectiveCodeGeneration:
    start = parse_int(_pick(s.start_line_number, defaults.START_LINE_NUMBER))
    step = parse_int(_pick(s.line_number_step, defaults.LINE_NUMBER_STEP))
    decimals = _pick(s.decimal_places, defaults.DECIMAL_PLACES)
    wcs = None
    if _pick(s.set_work_coordinate_system, defaults.SET_WORK_COORDINATE_SYSTEM):
        wcs = _non_blank(_pick(s.coordinate_system, defaults.DEFAULT_COORDINATE_SYSTEM))

    return EffectiveCodeGeneration(
        use_line_numbers=_pick(s.use_line_numbers, defaults.USE_LINE_NUMBERS),
        start_line_number=parse_int(defaults.START_LINE_NUMBER) if start is None else start,
        line_number_step=parse_int(defaults.LINE_NUMBER_STEP) if step is None else step,
        generate_comments=_pick(s.generate_comments, defaults.GENERATE_COMMENTS),
        allow_arcs=_pick(s.allow_arcs, defaults.ALLOW_ARCS),
        format_commands=_pick(s.format_commands, defaults.FORMAT_COMMANDS),
        coordinate_system=wcs,
        set_absolute_coordinates=_pick(
            s.set_absolute_coordinates, defaults.SET_ABSOLUTE_COORDINATES),
        allow_relative_coordinates=_pick(
            s.allow_relative_coordinates, defaults.ALLOW_RELATIVE_COORDINATES),
        set_zeros_at_start=_pick(s.set_zeros_at_start, defaults.SET_ZEROS_AT_START),
        x0=_coordinate(s.x0),
        y0=_coordinate(s.y0),
        z0=_coordinate(s.z0),
        move_to_point_at_end=_pick(s.move_to_point_at_end, defaults.MOVE_TO_POINT_AT_END),
        x=_coordinate(s.x),
        y=_coordinate(s.y),
        z=_coordinate(s.z),
        decimal_places=min(max(0, decimals), defaults.MAX_DECIMAL_PLACES),
    )


def resolve_spindle(s: SpindleSettings) -> EffectiveSpindle:
    enabled = _pick(s.add_spindle_code, defaults.ADD_SPINDLE_CODE)

    command = None
    speed = None
    delay_word = None
    if enabled and _pick(s.enable_spindle_before_operations,
                         defaults.ENABLE_SPINDLE_BEFORE_OPERATIONS):
        command = _non_blank(_pick(s.spindle_enable_command,
                                   defaults.DEFAULT_SPINDLE_ENABLE_COMMAND))

    if command is not None:
        if _pick(s.set_spindle_speed, defaults.SET_SPINDLE_SPEED):
            text = _non_blank(_pick(s.spindle_speed, defaults.SPINDLE_SPEED))
            if parse_number(text) is not None:
                speed = text
        if _pick(s.add_spindle_delay_after_enable, defaults.ADD_SPINDLE_DELAY_AFTER_ENABLE):
            param = _non_blank(_pick(s.spindle_delay_parameter,
                                     defaults.DEFAULT_SPINDLE_DELAY_PARAMETER))
            value = _non_blank(_pick(s.spindle_delay_value, defaults.SPINDLE_DELAY_VALUE))
            if param is not None and parse_number(value) is not None:
                if param == defaults.DELAY_PARAMETER_P_DECIMAL:
                    param = defaults.DELAY_PARAMETER_P
                delay_word = f"{param}{value}"

    return EffectiveSpindle(
        enable_command=command,
        speed=speed,
        delay_word=delay_word,
        disable_after_operations=bool(enabled) and _pick(
            s.disable_spindle_after_operations, defaults.DISABLE_SPINDLE_AFTER_OPERATIONS),
    )


def resolve_coolant(s: CoolantSettings) -> EffectiveCoolant:
    enabled = _pick(s.add_coolant_code, defaults.ADD_COOLANT_CODE)
    return EffectiveCoolant(
        enable_at_start=bool(enabled) and _pick(
            s.enable_coolant_at_start, defaults.ENABLE_COOLANT_AT_START),
        disable_at_end=bool(enabled) and _pick(
            s.disable_coolant_at_end, defaults.DISABLE_COOLANT_AT_END),
    )


def resolve_configuration(config: ProgramConfiguration) -> EffectiveConfiguration:
    """Replace every unset field with its default and parse numeric text."""
    return EffectiveConfiguration(
        code_generation=resolve_code_generation(config.code_generation),
        spindle=resolve_spindle(config.spindle),
        coolant=resolve_coolant(config.coolant),
    )
