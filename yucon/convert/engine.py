"""
ConversionEngine: resolves unit tokens against the catalog and converts values.

A value ``x`` in unit ``A`` maps to unit ``B`` of the same kind as

    ((x * prefix_A + offset_A) * (factor_A / factor_B) - offset_B) / prefix_B

Prefix multipliers are applied to the raw number before the input offset is
added, and the output offset is removed before dividing by the output prefix.
This is the only ordering that composes metric prefixes with affine scales
such as temperature.

The engine owns the recall state ("last value", "last input unit", "last
output unit") used by the ``:`` shorthand. One engine is one session; use
separate engines for independent sessions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from yucon.convert.errors import (
    ConversionError,
    IncompatibleUnitsError,
    InvalidInputError,
    NonNumericInputError,
    OutputOutOfRangeError,
    RecallUnsetError,
    Side,
    UnitNotFoundError,
)
from yucon.convert.escape import RECALL_MARKER, UnitToken, parse_unit_token
from yucon.logging import get_logger
from yucon.units.catalog import UnitCatalog, get_catalog
from yucon.units.types import UnitRecord

logger = get_logger(__name__)


@dataclass
class RecallState:
    """Values remembered from the last successful conversion."""

    last_value: float | None = None
    last_input: UnitRecord | None = None
    last_output: UnitRecord | None = None

    def unit(self, side: Side) -> UnitRecord | None:
        match side:
            case Side.INPUT:
                return self.last_input
            case Side.OUTPUT:
                return self.last_output
            case _:
                raise ValueError(f"no unit slot for side {side!r}")

    def clear(self) -> None:
        self.last_value = None
        self.last_input = None
        self.last_output = None


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a successful conversion.

    Attributes:
        value: The numeric input after recall, before any prefix scaling.
        result: The converted number in the output unit (with output prefix).
        input_token / output_token: Parsed unit tokens, original text included.
        input_unit / output_unit: The records the tokens resolved to.
    """

    value: float
    result: float
    input_token: UnitToken
    input_unit: UnitRecord
    output_token: UnitToken
    output_unit: UnitRecord


class ConversionEngine:
    """
    Converts values between catalog units and remembers the last ones used.

    Instantiate with a custom catalog (e.g. in tests); the default is the
    catalog built from the bundled data file.
    """

    def __init__(self, catalog: UnitCatalog | None = None) -> None:
        self.catalog = catalog if catalog is not None else get_catalog()
        self.recall = RecallState()

    # ── Argument resolution ────────────────────────────────────────────────────

    def parse_value(self, text: str) -> float:
        """Parse the numeric argument, honouring ``:`` for the last value."""
        text = text.strip()
        if text == RECALL_MARKER:
            if self.recall.last_value is None:
                raise RecallUnsetError(Side.VALUE)
            return self.recall.last_value

        # float() also takes digit separators ("1_000"), which are not number syntax here.
        if "_" in text:
            raise NonNumericInputError(text)
        try:
            value = float(text)
        except ValueError:
            raise NonNumericInputError(text) from None

        # Zero and negative values are valid; only non-finite input is rejected.
        if not math.isfinite(value):
            raise InvalidInputError(text)
        return value

    def resolve_unit(self, text: str, side: Side) -> tuple[UnitToken, UnitRecord]:
        """Parse a unit token and resolve it by recall or by catalog lookup."""
        try:
            token = parse_unit_token(text)
        except ConversionError as exc:
            raise exc.with_side(side)

        if token.name is None:
            unit = self.recall.unit(side)
            if unit is None:
                raise RecallUnsetError(side)
            return token, unit

        unit = self.catalog.find_by_name(token.name)
        if unit is None:
            raise UnitNotFoundError(token.name, side)
        return token, unit

    # ── Conversion ─────────────────────────────────────────────────────────────

    def convert(self, number_text: str, from_token: str, to_token: str) -> ConversionResult:
        """
        Convert ``number_text`` from the unit named by ``from_token`` to ``to_token``.

        Returns
        -------
        ConversionResult
            The converted value plus the resolved tokens and records.

        Raises
        ------
        ConversionError
            Any subclass from yucon.convert.errors. Recall state is only
            updated when the conversion succeeds.
        """
        value = self.parse_value(number_text)
        in_token, in_unit = self.resolve_unit(from_token, Side.INPUT)
        out_token, out_unit = self.resolve_unit(to_token, Side.OUTPUT)

        if in_unit.kind != out_unit.kind:
            raise IncompatibleUnitsError(in_unit.kind, out_unit.kind)

        if in_unit is out_unit and in_token.multiplier == out_token.multiplier:
            result = value
        else:
            result = (
                (value * in_token.multiplier + in_unit.offset) * (in_unit.factor / out_unit.factor)
                - out_unit.offset
            ) / out_token.multiplier

        if not math.isfinite(result):
            raise OutputOutOfRangeError(result)

        self.recall.last_value = value
        self.recall.last_input = in_unit
        self.recall.last_output = out_unit

        logger.debug("%r %s -> %s = %r", value, in_token.text, out_token.text, result)
        return ConversionResult(
            value=value,
            result=result,
            input_token=in_token,
            input_unit=in_unit,
            output_token=out_token,
            output_unit=out_unit,
        )

    # ── Recall state ───────────────────────────────────────────────────────────

    def remember_value(self, text: str) -> float:
        """Seed the recalled value from text; ``:`` is rejected."""
        if text.strip() == RECALL_MARKER:
            raise ValueError("recall variables must be literals")
        value = self.parse_value(text)
        self.recall.last_value = value
        return value

    def remember_unit(self, side: Side, text: str) -> UnitRecord:
        """Seed a recalled unit from a plain unit name; prefixes and ``:`` are rejected."""
        token = parse_unit_token(text)
        if token.recall or token.prefix is not None:
            raise ValueError("recall variables must be literals")
        _, unit = self.resolve_unit(text, side)
        match side:
            case Side.INPUT:
                self.recall.last_input = unit
            case Side.OUTPUT:
                self.recall.last_output = unit
            case _:
                raise ValueError(f"no unit slot for side {side!r}")
        return unit

    def reset(self) -> None:
        self.recall.clear()
