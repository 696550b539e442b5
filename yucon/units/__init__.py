from .catalog import UnitCatalog, get_catalog
from .loader import CatalogLoadError, load_units_file, load_units_text, parse_units
from .prefixes import PREFIXES, prefix_value
from .types import QuantityKind, UnitRecord

__all__ = [
    # Types
    "QuantityKind",
    "UnitRecord",
    # Prefixes
    "PREFIXES",
    "prefix_value",
    # Loading
    "CatalogLoadError",
    "parse_units",
    "load_units_text",
    "load_units_file",
    # Catalog
    "UnitCatalog",
    "get_catalog",
]
