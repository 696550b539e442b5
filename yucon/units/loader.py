"""
Units data file loader.

The data file is line oriented. A unit is a group of four consecutive lines:

    names=inch,in
    type=length
    factor=25.4
    offset=0

``names``, ``type``, ``factor`` and ``offset`` must appear in that order with
nothing between them. Every other line is a comment. A comment (or a key out
of order) inside a group discards the group entirely; partial records are
never produced. A ``names=`` line always starts a fresh group, even when it
interrupts one.

Groups that are well ordered but carry bad values (unknown type, factor that
is not a finite nonzero number) are discarded with a warning.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from pathlib import Path

from yucon.logging import get_logger
from yucon.units.types import QuantityKind, UnitRecord

logger = get_logger(__name__)

_KEYS = ("names", "type", "factor", "offset")


class CatalogLoadError(Exception):
    """Raised when the units data file is missing, unreadable, or yields no units."""


def _split_key(line: str) -> tuple[str, str] | None:
    """Return ``(key, value)`` for a ``key=value`` line with a known key, else None."""
    for key in _KEYS:
        marker = f"{key}="
        if line.startswith(marker):
            return key, line[len(marker) :]
    return None


def _parse_float(text: str) -> float | None:
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _build_record(fields: dict[str, str], line_no: int) -> UnitRecord | None:
    names = tuple(n.strip() for n in fields["names"].split(",") if n.strip())
    if not names:
        logger.warning("line %d: unit group has no names; discarded", line_no)
        return None

    try:
        kind = QuantityKind(fields["type"].strip())
    except ValueError:
        logger.warning(
            "line %d: unknown unit type %r for %s; discarded", line_no, fields["type"].strip(), names[0]
        )
        return None

    factor = _parse_float(fields["factor"])
    if factor is None or factor == 0:
        logger.warning("line %d: bad factor %r for %s; discarded", line_no, fields["factor"].strip(), names[0])
        return None

    offset = _parse_float(fields["offset"])
    if offset is None:
        logger.warning("line %d: bad offset %r for %s; discarded", line_no, fields["offset"].strip(), names[0])
        return None

    return UnitRecord(names=names, kind=kind, factor=factor, offset=offset)


def parse_units(lines: Iterable[str]) -> Iterator[UnitRecord]:
    """Yield a UnitRecord for every complete, valid group in ``lines``, in file order."""
    pending: dict[str, str] = {}

    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        split = _split_key(line)

        if split is not None and split[0] == "names":
            if pending:
                logger.debug("line %d: incomplete group for %r discarded", line_no, pending["names"])
            pending = {"names": split[1]}
            continue

        if not pending:
            continue

        expected = _KEYS[len(pending)]
        if split is None or split[0] != expected:
            logger.debug("line %d: expected %s=, group for %r discarded", line_no, expected, pending["names"])
            pending = {}
            continue

        pending[expected] = split[1]
        if len(pending) == len(_KEYS):
            record = _build_record(pending, line_no)
            pending = {}
            if record is not None:
                yield record


def load_units_text(text: str) -> list[UnitRecord]:
    return list(parse_units(text.splitlines()))


def load_units_file(path: Path) -> list[UnitRecord]:
    """Read and parse a units data file.

    Raises CatalogLoadError if the file cannot be read or decoded, or contains
    no usable unit groups, since no conversions are possible without a catalog.
    """
    try:
        with open(path, encoding="utf-8") as f:
            records = list(parse_units(f))
    except OSError as exc:
        raise CatalogLoadError(f"units file missing or unreadable: {path}: {exc.strerror}") from exc
    except UnicodeDecodeError as exc:
        raise CatalogLoadError(f"units file is not valid UTF-8: {path}: byte {exc.start}") from exc

    if not records:
        raise CatalogLoadError(f"units file contains no usable units: {path}")
    logger.info("loaded %d units from %s", len(records), path)
    return records
