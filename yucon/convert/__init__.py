"""convert: conversion engine, escape-sequence parser and output formatting."""

from yucon.convert.engine import ConversionEngine, ConversionResult, RecallState
from yucon.convert.errors import (
    ConversionError,
    IncompatibleUnitsError,
    InvalidInputError,
    NoNameAllowedError,
    NoNameGivenError,
    NonNumericInputError,
    OutputOutOfRangeError,
    RecallUnsetError,
    Side,
    UnitNotFoundError,
    UnknownPrefixError,
)
from yucon.convert.escape import UnitToken, parse_unit_token
from yucon.convert.formatter import OutputFormat, display_name, format_result

__all__ = [
    # Engine
    "ConversionEngine",
    "ConversionResult",
    "RecallState",
    # Tokens
    "UnitToken",
    "parse_unit_token",
    # Formatting
    "OutputFormat",
    "display_name",
    "format_result",
    # Errors
    "Side",
    "ConversionError",
    "InvalidInputError",
    "NonNumericInputError",
    "UnknownPrefixError",
    "NoNameGivenError",
    "NoNameAllowedError",
    "UnitNotFoundError",
    "RecallUnsetError",
    "IncompatibleUnitsError",
    "OutputOutOfRangeError",
]
