"""
SI metric prefixes keyed by their single-letter symbol.

Letters are case-sensitive. Micro is the ASCII ``u``; deca is ``D``.
"""

from __future__ import annotations

from types import MappingProxyType

PREFIXES: MappingProxyType[str, float] = MappingProxyType(
    {
        "Y": 1e24,
        "Z": 1e21,
        "E": 1e18,
        "P": 1e15,
        "T": 1e12,
        "G": 1e9,
        "M": 1e6,
        "k": 1e3,
        "h": 1e2,
        "D": 1e1,
        "d": 1e-1,
        "c": 1e-2,
        "m": 1e-3,
        "u": 1e-6,
        "n": 1e-9,
        "p": 1e-12,
        "f": 1e-15,
        "a": 1e-18,
        "z": 1e-21,
        "y": 1e-24,
    }
)


def prefix_value(symbol: str) -> float | None:
    """Return the multiplier for a prefix letter, or None if it is not one."""
    return PREFIXES.get(symbol)
