"""Command line interface for yucon."""

from __future__ import annotations

import argparse
import re
import sys
from contextlib import ExitStack
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import TextIO

from yucon import PROGRAM_TITLE
from yucon.config import Settings, SettingsError, load_settings, resolve_units_file
from yucon.convert.engine import ConversionEngine
from yucon.convert.formatter import MAX_PRECISION, OutputFormat
from yucon.interpreter.messages import DESCRIPTION, EPILOG, USAGE, version_text
from yucon.interpreter.session import CommandResult, Interpreter
from yucon.logging import get_logger, set_level
from yucon.units.catalog import DATA_FILE, UnitCatalog, get_catalog
from yucon.units.loader import CatalogLoadError

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_CONVERSION_ERROR = 1
EXIT_USAGE = 2
EXIT_STARTUP = 3
EXIT_FILE_ERROR = 4

HINT = "Try '-h' or '--help' options for more details"


class _Emitter:
    """Writes results to the console and, optionally, an output file."""

    def __init__(self, console: TextIO, err: TextIO, file: TextIO | None = None, quiet: bool = False) -> None:
        self.console = console
        self.err = err
        self.file = file
        self.quiet = quiet

    def result(self, text: str) -> None:
        if not self.quiet:
            print(text, file=self.console)
        if self.file is not None:
            print(text, file=self.file)

    def info(self, text: str) -> None:
        print(text, file=self.console)

    def error(self, text: str) -> None:
        print(f"Error: {text}", file=self.err)


_PLAIN_NEGATIVE = re.compile(r"^-\d+$|^-\d*\.\d+$")


def _protect_negative_values(argv: list[str]) -> list[str]:
    """
    Rewrite negative numbers that argparse would take for options.

    argparse already reads ``-40`` and ``-.5`` as positionals; exponent forms
    such as ``-1e3`` are rewritten as plain decimals (``-1000``) wherever they
    appear, so options may come before or after the conversion.
    """
    fixed: list[str] = []
    for arg in argv:
        if arg.startswith("-") and "_" not in arg and not _PLAIN_NEGATIVE.match(arg):
            try:
                number = Decimal(arg)
            except InvalidOperation:
                number = None
            if number is not None and number.is_finite():
                arg = format(number, "f")
        fixed.append(arg)
    return fixed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yucon",
        usage=USAGE,
        description=f"{PROGRAM_TITLE}\n\n{DESCRIPTION}",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("values", nargs="*", metavar="arg", help="#### <input_unit> <output_unit>, or the batch input file")

    fmt = parser.add_mutually_exclusive_group()
    fmt.add_argument("-s", dest="format", action="store_const", const=OutputFormat.SIMPLE, help="simple output (value only)")
    fmt.add_argument("-d", dest="format", action="store_const", const=OutputFormat.DESCRIPTIVE, help="descriptive output (value and output unit)")
    fmt.add_argument("-v", dest="format", action="store_const", const=OutputFormat.VERBOSE, help="verbose output (input and output values and units)")

    parser.add_argument("-b", dest="batch", action="store_true", help="batch conversion from the input file, or stdin")
    parser.add_argument("-o", dest="output", type=Path, metavar="FILE", help="also write results to FILE")
    parser.add_argument("-q", dest="quiet", action="store_true", help="with -o, suppress console output")
    parser.add_argument("-p", "--precision", type=int, metavar="N", help="significant digits in printed numbers (default: shortest exact form)")
    parser.add_argument("--units", type=Path, metavar="FILE", help="units data file to load")
    parser.add_argument("--config", type=Path, metavar="FILE", help="YAML settings file")
    parser.add_argument("--log-level", metavar="LEVEL", help="logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--version", action="version", version=version_text())
    return parser


def _load_catalog(path: Path) -> UnitCatalog:
    if path == DATA_FILE:
        return get_catalog()
    return UnitCatalog.from_file(path)


# ── Modes ──────────────────────────────────────────────────────────────────────


def run_one_shot(interpreter: Interpreter, values: list[str], emit: _Emitter) -> int:
    result = interpreter.convert(values)
    if result.error is not None:
        emit.error(result.error)
        print(HINT, file=emit.err)
        return EXIT_CONVERSION_ERROR
    emit.result(result.output or "")
    return EXIT_OK


def run_batch(interpreter: Interpreter, lines: TextIO, emit: _Emitter) -> int:
    """Convert one ``<number> <input_unit> <output_unit>`` per line; malformed lines are skipped."""
    status = EXIT_OK
    for line_no, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens or tokens[0].startswith("#"):
            continue
        if len(tokens) != 3:
            logger.warning("line %d: expected <number> <input_unit> <output_unit>; skipped", line_no)
            continue

        result = interpreter.convert(tokens)
        if result.error is not None:
            emit.error(f"line {line_no}: {result.error}")
            status = EXIT_CONVERSION_ERROR
        elif result.output is not None:
            emit.result(result.output)
    return status


def run_interactive(interpreter: Interpreter, emit: _Emitter) -> int:
    emit.info(f"{PROGRAM_TITLE}\nType 'help' for assistance.")
    while True:
        try:
            line = input("\n> ")
        except EOFError:
            break
        except KeyboardInterrupt:
            emit.info("")
            break

        result: CommandResult = interpreter.execute(line)
        if result.exit:
            break
        if result.error is not None:
            emit.error(result.error)
            emit.info("Type 'help' for assistance.")
        elif result.output is not None:
            emit.result(result.output)
    return EXIT_OK


# ── Entry point ────────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_protect_negative_values(list(sys.argv[1:] if argv is None else argv)))

    if args.quiet and args.output is None:
        parser.error("-q requires an output file (-o FILE)")
    if args.batch and len(args.values) > 1:
        parser.error(f"-b: expects input file as last argument: found unexpected trailing argument: {args.values[1]}")
    if not args.batch:
        if len(args.values) == 0 and args.output is not None:
            parser.error("file output not allowed in interactive mode")
        if 0 < len(args.values) < 3:
            parser.error("incomplete conversion. Expected an input and output unit")
        if len(args.values) > 3:
            parser.error(f"found unexpected trailing argument: {args.values[3]}")
    if args.precision is not None and not 1 <= args.precision <= MAX_PRECISION:
        parser.error(f"precision must be from 1 to {MAX_PRECISION}")

    emit = _Emitter(console=sys.stdout, err=sys.stderr, quiet=args.quiet)

    try:
        settings: Settings = load_settings(args.config)
        set_level(args.log_level or settings.log_level)
    except (SettingsError, ValueError) as exc:
        emit.error(str(exc))
        return EXIT_STARTUP

    try:
        catalog = _load_catalog(resolve_units_file(args.units, settings))
    except CatalogLoadError as exc:
        emit.error(str(exc))
        return EXIT_STARTUP

    interpreter = Interpreter(
        ConversionEngine(catalog),
        fmt=args.format or settings.output_format,
        precision=args.precision if args.precision is not None else settings.precision,
    )

    with ExitStack() as stack:
        if args.output is not None:
            try:
                emit.file = stack.enter_context(open(args.output, "w", encoding="utf-8"))
            except OSError as exc:
                emit.error(f"unable to write output file {args.output}: {exc.strerror}")
                return EXIT_FILE_ERROR

        if args.batch:
            if not args.values:
                return run_batch(interpreter, sys.stdin, emit)
            try:
                source = stack.enter_context(open(args.values[0], encoding="utf-8", errors="replace"))
            except OSError as exc:
                emit.error(f"unable to open input file '{args.values[0]}': {exc.strerror}")
                return EXIT_FILE_ERROR
            return run_batch(interpreter, source, emit)

        if args.values:
            return run_one_shot(interpreter, args.values, emit)

        return run_interactive(interpreter, emit)


if __name__ == "__main__":
    sys.exit(main())
