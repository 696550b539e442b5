"""
Conversion error taxonomy.

Every failure the engine can report is a ConversionError subclass. Errors
are non-fatal: callers print the message and carry on, or exit in one-shot
mode. Each error records which argument of the conversion triggered it
(``side``) so a front end can point at the offending token.

  input value     InvalidInputError, NonNumericInputError
  token syntax    UnknownPrefixError, NoNameGivenError, NoNameAllowedError
  resolution      UnitNotFoundError, RecallUnsetError
  semantic        IncompatibleUnitsError, OutputOutOfRangeError
"""

from __future__ import annotations

from enum import Enum

from yucon.units.types import QuantityKind


class Side(str, Enum):
    """Which argument of a conversion an error or recall slot refers to."""

    VALUE = "value"
    INPUT = "input"
    OUTPUT = "output"


class ConversionError(Exception):
    """Base class for all conversion failures.

    Attributes:
        side: The conversion argument that caused the failure, if any.
        text: The offending token or value text, if any.
    """

    def __init__(self, message: str, side: Side | None = None, text: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.side = side
        self.text = text

    def with_side(self, side: Side) -> ConversionError:
        """Attach the side after the fact; used when a token parser does not know it."""
        self.side = side
        return self


# ── Input value ────────────────────────────────────────────────────────────────


class InvalidInputError(ConversionError):
    """The value is NaN or infinite."""

    def __init__(self, text: str, message: str | None = None) -> None:
        super().__init__(message or f"out of range value: {text}", Side.VALUE, text)


class NonNumericInputError(InvalidInputError):
    """The value text does not parse as a number at all."""

    def __init__(self, text: str) -> None:
        super().__init__(text, f"expected number, found: {text}")


# ── Token syntax ───────────────────────────────────────────────────────────────


class UnknownPrefixError(ConversionError):
    def __init__(self, text: str, side: Side | None = None) -> None:
        super().__init__(f"unknown metric prefix in {text!r}", side, text)


class NoNameGivenError(ConversionError):
    def __init__(self, text: str, side: Side | None = None) -> None:
        super().__init__(f"no name given after metric prefix in {text!r}", side, text)


class NoNameAllowedError(ConversionError):
    def __init__(self, text: str, side: Side | None = None) -> None:
        super().__init__(f"no name allowed after ':' (recall last) in {text!r}", side, text)


# ── Resolution ─────────────────────────────────────────────────────────────────


class UnitNotFoundError(ConversionError):
    def __init__(self, name: str, side: Side) -> None:
        direction = "from" if side == Side.INPUT else "to"
        super().__init__(f"converting {direction} unknown unit: {name}", side, name)
        self.name = name


class RecallUnsetError(ConversionError):
    def __init__(self, side: Side) -> None:
        what = "value" if side == Side.VALUE else f"{side.value} unit"
        super().__init__(f"unable to recall last {what}: not set", side, ":")


# ── Semantic ───────────────────────────────────────────────────────────────────


class IncompatibleUnitsError(ConversionError):
    def __init__(self, input_kind: QuantityKind, output_kind: QuantityKind) -> None:
        super().__init__(
            f"incompatible unit types: attempted to convert {input_kind.value} to {output_kind.value}"
        )
        self.input_kind = input_kind
        self.output_kind = output_kind


class OutputOutOfRangeError(ConversionError):
    def __init__(self, result: float) -> None:
        super().__init__(f"output value is out of range: {result}", Side.OUTPUT)
        self.result = result


__all__ = [
    "ConversionError",
    "IncompatibleUnitsError",
    "InvalidInputError",
    "NoNameAllowedError",
    "NoNameGivenError",
    "NonNumericInputError",
    "OutputOutOfRangeError",
    "RecallUnsetError",
    "Side",
    "UnitNotFoundError",
    "UnknownPrefixError",
]
