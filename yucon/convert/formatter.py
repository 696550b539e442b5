"""
Output formatting for conversion results.

Three styles, matching the command-line ``-s``, ``-d`` and ``-v`` options:

    simple        25.4
    descriptive   25.4 mm
    verbose       1 in = 25.4 mm

Numbers are rendered in general (``%g``) notation. Without a precision the
shortest form that reads back as the same float is used; with one, that many
significant digits. Unit names are rebuilt
from the parsed token: a recalled unit shows its canonical name rather than
``:``, and a metric prefix is kept in front of the name.
"""

from __future__ import annotations

from enum import Enum

from yucon.convert.engine import ConversionResult
from yucon.convert.escape import UnitToken
from yucon.units.types import UnitRecord

MAX_PRECISION = 17


class OutputFormat(str, Enum):
    SIMPLE = "simple"
    DESCRIPTIVE = "descriptive"
    VERBOSE = "verbose"

    @classmethod
    def from_name(cls, name: str) -> OutputFormat:
        """Accept a full name or its first letter (``s``, ``d``, ``v``)."""
        key = name.strip().lower()
        for fmt in cls:
            if key in (fmt.value, fmt.value[0]):
                return fmt
        raise ValueError(f"unknown output format: {name!r}")


def format_number(value: float, precision: int | None = None) -> str:
    """Render ``value`` with ``precision`` significant digits, or the shortest round-trippable form."""
    if precision is not None:
        return f"{value:.{precision}g}"
    for digits in range(1, MAX_PRECISION + 1):
        text = f"{value:.{digits}g}"
        if float(text) == value:
            return text
    return repr(value)


def display_name(token: UnitToken, unit: UnitRecord) -> str:
    """Return the unit name to print for a token: prefix letter plus alias or canonical name."""
    name = unit.canonical_name if token.recall else token.name
    return f"{token.prefix or ''}{name}"


def simple(value: float, precision: int | None = None) -> str:
    return format_number(value, precision)


def descriptive(value: float, unit_name: str, precision: int | None = None) -> str:
    return f"{format_number(value, precision)} {unit_name}"


def verbose(
    original: float,
    input_name: str,
    value: float,
    output_name: str,
    precision: int | None = None,
) -> str:
    return (
        f"{format_number(original, precision)} {input_name} = "
        f"{format_number(value, precision)} {output_name}"
    )


def format_result(
    result: ConversionResult,
    fmt: OutputFormat = OutputFormat.SIMPLE,
    precision: int | None = None,
) -> str:
    """Render a ConversionResult in the requested style."""
    match fmt:
        case OutputFormat.SIMPLE:
            return simple(result.result, precision)
        case OutputFormat.DESCRIPTIVE:
            return descriptive(
                result.result, display_name(result.output_token, result.output_unit), precision
            )
        case OutputFormat.VERBOSE:
            return verbose(
                result.value,
                display_name(result.input_token, result.input_unit),
                result.result,
                display_name(result.output_token, result.output_unit),
                precision,
            )
        case _:
            raise ValueError(f"unknown output format: {fmt!r}")
