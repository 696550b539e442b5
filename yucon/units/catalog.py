"""
Unit catalog: holds every UnitRecord loaded at startup and answers name lookups.

The catalog is an insertion-ordered list searched linearly across all
aliases. Lookup is total: it returns exactly one record or None. Aliases are
expected to be unique across the catalog; if the data breaks that rule the
first-registered record wins and a warning is logged when the duplicate is
registered.

A module-level catalog built from the bundled data file is available through
get_catalog(). Build a UnitCatalog directly to use another data file (e.g. in
tests or from the command line).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from yucon.logging import get_logger
from yucon.units.loader import load_units_file, load_units_text
from yucon.units.types import QuantityKind, UnitRecord

logger = get_logger(__name__)

DATA_FILE = Path(__file__).parent / "data" / "units.cfg"


class UnitCatalog:
    """
    Ordered, read-mostly collection of unit records.

    Records are only added during startup via register(); nothing removes or
    reorders them afterwards.
    """

    def __init__(self, records: Iterable[UnitRecord] = ()) -> None:
        self._records: list[UnitRecord] = []
        for record in records:
            self.register(record)

    # ── Construction ───────────────────────────────────────────────────────────

    @classmethod
    def from_file(cls, path: Path) -> UnitCatalog:
        return cls(load_units_file(path))

    @classmethod
    def from_text(cls, text: str) -> UnitCatalog:
        return cls(load_units_text(text))

    def register(self, record: UnitRecord) -> None:
        """Append a record. Aliases already taken stay bound to the earlier record."""
        for name in record.names:
            existing = self.find_by_name(name)
            if existing is not None:
                logger.warning(
                    "alias %r of %s already belongs to %s; first registered unit wins",
                    name,
                    record.canonical_name,
                    existing.canonical_name,
                )
        self._records.append(record)

    # ── Query API ──────────────────────────────────────────────────────────────

    def find_by_name(self, name: str) -> UnitRecord | None:
        """Return the first record with an alias exactly equal to ``name``, or None."""
        for record in self._records:
            if name in record.names:
                return record
        return None

    def kinds(self) -> list[QuantityKind]:
        """Quantity kinds present in the catalog, in order of first appearance."""
        seen: dict[QuantityKind, None] = {}
        for record in self._records:
            seen.setdefault(record.kind, None)
        return list(seen)

    def by_kind(self, kind: QuantityKind) -> list[UnitRecord]:
        return [r for r in self._records if r.kind == kind]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[UnitRecord]:
        return iter(self._records)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find_by_name(name) is not None


# ── Module-level catalog ───────────────────────────────────────────────────────
#
# Built eagerly at import time from the bundled data file. The catalog is
# read-only after construction.

_catalog: UnitCatalog = UnitCatalog.from_file(DATA_FILE)


def get_catalog() -> UnitCatalog:
    """Return the catalog built from the bundled units data file."""
    return _catalog
