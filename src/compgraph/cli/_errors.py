"""CLI error handling and catalog loading."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Any, Callable

import typer

from compgraph.cli._config import get_config
from compgraph.core.catalog import CatalogSnapshot
from compgraph.core.errors import CatalogError, InvalidArgument
from compgraph.projectors.targets import dump_json
from compgraph.settings import CatalogSettings, get_settings
from compgraph.sources import SqliteCatalog, open_catalog


def handle_error(err: CatalogError) -> None:
    """Print a structured error to stderr and exit."""
    typer.echo(dump_json({"error": err.to_dict()}), err=True)
    raise typer.Exit(1)


def catalog_errors(f: Callable) -> Callable:
    """Decorator turning CatalogError into a JSON error and exit code 1."""

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except CatalogError as err:
            handle_error(err)

    return wrapper


def load_settings() -> CatalogSettings:
    return get_settings(get_config().settings_path)


def load_snapshot(catalog: Path | None) -> CatalogSnapshot:
    """Open the catalog file and take one snapshot of it."""
    path = catalog or get_config().catalog_path
    if path is None:
        raise InvalidArgument(
            "No catalog given. Pass --catalog or set COMPGRAPH_CATALOG",
        )
    source = open_catalog(path)
    try:
        return CatalogSnapshot.from_source(source)
    finally:
        if isinstance(source, SqliteCatalog):
            source.close()


def emit(payload: Any, as_yaml: bool = False) -> None:
    """Write a result to stdout as JSON (or YAML)."""
    if as_yaml:
        from compgraph.projectors.targets import dump_yaml

        typer.echo(dump_yaml(payload), nl=False)
    else:
        typer.echo(dump_json(payload))


CatalogOption = typer.Option(
    None,
    "--catalog",
    "-c",
    help="Catalog file (.sqlite/.db or .yaml/.yml). Defaults to $COMPGRAPH_CATALOG.",
)
