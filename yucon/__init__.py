"""
yucon: general purpose unit converter.

Converts a value between two units of the same physical quantity, with
metric-prefix (``_k``) and recall-last (``:``) shorthand in unit arguments.

    >>> from yucon import ConversionEngine, OutputFormat, format_result
    >>> engine = ConversionEngine()
    >>> format_result(engine.convert("1", "in", "mm"), OutputFormat.VERBOSE)
    '1 in = 25.4 mm'
"""

from yucon.convert import ConversionEngine, ConversionError, ConversionResult, OutputFormat, format_result
from yucon.units import QuantityKind, UnitCatalog, UnitRecord, get_catalog

__version__ = "0.2.0"

PROGRAM_TITLE = f"YUCON - General Purpose Unit Converter - v{__version__}"

__all__ = [
    "ConversionEngine",
    "ConversionError",
    "ConversionResult",
    "OutputFormat",
    "format_result",
    "QuantityKind",
    "UnitCatalog",
    "UnitRecord",
    "get_catalog",
    "PROGRAM_TITLE",
    "__version__",
]
