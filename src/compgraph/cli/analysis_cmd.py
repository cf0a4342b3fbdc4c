"""CLI commands for similarity and conflict checks."""

from __future__ import annotations

from pathlib import Path

import typer

from compgraph.analysis import check_conflicts, find_similar
from compgraph.cli._errors import CatalogOption, catalog_errors, emit, load_settings, load_snapshot


@catalog_errors
def similar(
    identifier: str = typer.Argument(..., help="Component name or id"),
    min_shared: int = typer.Option(None, "--min-shared", "-m", help="Minimum shared tags"),
    limit: int = typer.Option(None, "--limit", "-n", help="Max results"),
    catalog: Path = CatalogOption,
) -> None:
    """Components sharing tags with the given one."""
    result = find_similar(
        load_snapshot(catalog),
        identifier,
        min_shared_tags=min_shared,
        limit=limit,
        settings=load_settings(),
    )
    emit(result.to_dict())


@catalog_errors
def conflicts(
    identifiers: list[str] = typer.Argument(..., help="Components used together"),
    catalog: Path = CatalogOption,
) -> None:
    """Report conflicts and warnings for components used on one page."""
    report = check_conflicts(load_snapshot(catalog), identifiers, load_settings())
    emit(report.to_dict())
