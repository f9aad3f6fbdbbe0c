"""Low-level G-code line formatting helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

# Short motion/dwell words and their two-digit spellings.
_LONG_FORMS = {"G0": "G00", "G1": "G01", "G2": "G02", "G3": "G03", "G4": "G04"}


def fmt(value: float, decimals: int = 4) -> str:
    """Format a float for G-code, stripping trailing zeros."""
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_coordinate(value: float, decimals: int) -> str:
    """Fixed-point with exactly *decimals* places, e.g. ``10.000``."""
    text = f"{value:.{decimals}f}"
    if text.startswith("-") and not text.strip("-0."):
        text = text[1:]
    return text


def round_to(value: float, decimals: int) -> float:
    return round(value, decimals)


def coordinates_equal(a: Optional[float], b: Optional[float], decimals: int) -> bool:
    """Compare two coordinates as they would print with *decimals* places.

    ``None`` (unknown) only equals ``None``.
    """
    if a is None or b is None:
        return a is None and b is None
    ra, rb = round_to(a, decimals), round_to(b, decimals)
    if ra == rb:
        return True
    tolerance = min(1e-4, 0.5 * 10.0 ** -decimals)
    return abs(ra - rb) < tolerance


def alias_command(command: str, long_form: bool) -> str:
    """``G0`` -> ``G00`` (and so on up to G4) when *long_form* is set."""
    if long_form:
        return _LONG_FORMS.get(command, command)
    return command


def comment(text: str) -> str:
    """Semicolon line comment."""
    return f"; {text}"


def paren_comment(text: str) -> str:
    """``;(...)`` comment; parentheses inside *text* are stripped."""
    cleaned = text.replace("(", "").replace(")", "")
    return f";({cleaned})"


def number_line(number: int, line: str) -> str:
    return f"N{number:04d} {line}"


def write_program(lines: Iterable[str], path: Path) -> None:
    """Write *lines* to *path*, one per line, with a trailing newline."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n")
