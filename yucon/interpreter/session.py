"""
Line interpreter shared by the interactive and batch front ends.

Interpreter.execute() takes one line of user input and returns a
CommandResult describing what to print. It performs no I/O itself, so the
CLI decides where output and errors go (console, output file, stderr).

A line is either a command (``help``, ``format d``, ``input_unit mm``, ...)
or a conversion ``<number> <input_unit> <output_unit>``. Conversion errors
are reported in the result and never end the session.
"""

from __future__ import annotations

from dataclasses import dataclass

from yucon.convert.engine import ConversionEngine
from yucon.convert.errors import ConversionError, Side
from yucon.convert.formatter import (
    OutputFormat,
    format_number,
    format_result,
)
from yucon.interpreter.messages import INTERACTIVE_HELP, version_text
from yucon.units.types import QuantityKind

NOT_SET = "[not set]"
OKAY = "Okay."


@dataclass(frozen=True)
class CommandResult:
    """What a single input line produced.

    Attributes:
        output: Text for the result stream, or None.
        error: Error message (without the ``Error:`` prefix), or None.
        exit: True when the session should end.
        converted: True when the line was a successful conversion.
    """

    output: str | None = None
    error: str | None = None
    exit: bool = False
    converted: bool = False


class Interpreter:
    """
    Stateful line interpreter around one ConversionEngine.

    The output format can be changed mid-session with the ``format``
    command; recall state lives on the engine. A precision of None prints
    the shortest form that reads back as the same number.
    """

    def __init__(
        self,
        engine: ConversionEngine,
        fmt: OutputFormat = OutputFormat.SIMPLE,
        precision: int | None = None,
    ) -> None:
        self.engine = engine
        self.format = fmt
        self.precision = precision

    def execute(self, line: str) -> CommandResult:
        tokens = line.split()
        if not tokens or tokens[0].startswith("#"):
            return CommandResult()

        command, args = tokens[0], tokens[1:]
        match command:
            case "exit" | "quit":
                return CommandResult(exit=True)
            case "help":
                return CommandResult(output=INTERACTIVE_HELP)
            case "version":
                return CommandResult(output=version_text())
            case "format":
                return self._format(args)
            case "value":
                return self._value(args)
            case "input_unit":
                return self._unit_slot(Side.INPUT, args)
            case "output_unit":
                return self._unit_slot(Side.OUTPUT, args)
            case "units":
                return self._units(args)
            case _:
                return self.convert(tokens)

    def convert(self, tokens: list[str]) -> CommandResult:
        """Run a ``<number> <input_unit> <output_unit>`` conversion."""
        if len(tokens) < 3:
            if len(tokens) == 1 and not _looks_numeric(tokens[0]):
                return CommandResult(error=f"unrecognized command: {tokens[0]}")
            return CommandResult(error="incomplete conversion: expected <number> <input_unit> <output_unit>")
        if len(tokens) > 3:
            return CommandResult(error=f"too many arguments: found unexpected trailing argument {tokens[3]}")

        try:
            result = self.engine.convert(*tokens)
        except ConversionError as exc:
            return CommandResult(error=exc.message)
        return CommandResult(output=format_result(result, self.format, self.precision), converted=True)

    # ── Commands ───────────────────────────────────────────────────────────────

    def _format(self, args: list[str]) -> CommandResult:
        if not args:
            return CommandResult(output=f"format: {self.format.value}")
        if len(args) > 1:
            return CommandResult(error=f"too many arguments: {' '.join(args[1:])}")
        try:
            self.format = OutputFormat.from_name(args[0])
        except ValueError as exc:
            return CommandResult(error=str(exc))
        return CommandResult(output=OKAY)

    def _value(self, args: list[str]) -> CommandResult:
        if not args:
            value = self.engine.recall.last_value
            shown = NOT_SET if value is None else format_number(value, self.precision)
            return CommandResult(output=f"value: {shown}")
        if len(args) > 1:
            return CommandResult(error=f"too many arguments: {' '.join(args[1:])}")
        try:
            self.engine.remember_value(args[0])
        except (ConversionError, ValueError) as exc:
            return CommandResult(error=f"unable to set value: {exc}")
        return CommandResult(output=OKAY)

    def _unit_slot(self, side: Side, args: list[str]) -> CommandResult:
        label = f"{side.value}_unit"
        if not args:
            unit = self.engine.recall.unit(side)
            return CommandResult(output=f"{label}: {NOT_SET if unit is None else unit.canonical_name}")
        if len(args) > 1:
            return CommandResult(error=f"too many arguments: {' '.join(args[1:])}")
        try:
            self.engine.remember_unit(side, args[0])
        except (ConversionError, ValueError) as exc:
            return CommandResult(error=f"unable to set {label}: {exc}")
        return CommandResult(output=OKAY)

    def _units(self, args: list[str]) -> CommandResult:
        catalog = self.engine.catalog
        if args:
            try:
                kinds = [QuantityKind(" ".join(args))]
            except ValueError:
                known = ", ".join(k.value for k in QuantityKind)
                return CommandResult(error=f"unknown unit type: {' '.join(args)} (known: {known})")
        else:
            kinds = catalog.kinds()

        lines: list[str] = []
        for kind in kinds:
            lines.append(f"{kind.value}:")
            lines.extend(f"    {', '.join(unit.names)}" for unit in catalog.by_kind(kind))
        return CommandResult(output="\n".join(lines))


def _looks_numeric(text: str) -> bool:
    if text == ":":
        return True
    try:
        float(text)
    except ValueError:
        return False
    return True
