"""Storage adapters implementing CatalogSource."""

from __future__ import annotations

from pathlib import Path

from compgraph.core.catalog import CatalogSource
from compgraph.core.errors import InvalidArgument
from compgraph.sources.sqlite import CATALOG_SCHEMA, SqliteCatalog
from compgraph.sources.yaml_catalog import catalog_from_dict, load_yaml_catalog

SQLITE_SUFFIXES = (".sqlite", ".sqlite3", ".db")
YAML_SUFFIXES = (".yaml", ".yml")


def open_catalog(path: str | Path) -> CatalogSource:
    """Open a catalog file, picking the adapter by suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in SQLITE_SUFFIXES:
        return SqliteCatalog(path)
    if suffix in YAML_SUFFIXES:
        return load_yaml_catalog(path)
    raise InvalidArgument(
        f"Unsupported catalog file type {suffix!r}",
        path=str(path),
        allowed=[*SQLITE_SUFFIXES, *YAML_SUFFIXES],
    )


__all__ = [
    "CATALOG_SCHEMA",
    "SqliteCatalog",
    "catalog_from_dict",
    "load_yaml_catalog",
    "open_catalog",
]
