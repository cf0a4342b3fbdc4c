"""CLI commands for resolving and searching components."""

from __future__ import annotations

from pathlib import Path

import typer

from compgraph.cli._errors import CatalogOption, catalog_errors, emit, load_settings, load_snapshot
from compgraph.resolve import EntityResolver


@catalog_errors
def resolve(
    identifiers: list[str] = typer.Argument(..., help="Component names or ids"),
    catalog: Path = CatalogOption,
) -> None:
    """Resolve names (typos welcome) or ids to catalog components.

    Exits 1 when any identifier has no match; suggestions are included.
    """
    resolver = EntityResolver(load_snapshot(catalog), load_settings())
    results = resolver.resolve_many(identifiers)
    payload = [r.to_dict() for r in results]
    emit(payload[0] if len(payload) == 1 else payload)
    if not all(r.found for r in results):
        raise typer.Exit(1)


@catalog_errors
def search(
    query: str = typer.Argument(..., help="Free-text query"),
    limit: int = typer.Option(None, "--limit", "-n", help="Max results"),
    catalog: Path = CatalogOption,
) -> None:
    """Ranked fuzzy search over component names and titles."""
    snapshot = load_snapshot(catalog)
    hits = EntityResolver(snapshot, load_settings()).search(query, limit=limit)
    emit(
        {
            "query": query,
            "results": [h.to_dict() for h in hits],
            "count": len(hits),
            "entities_considered": len(snapshot),
        }
    )
