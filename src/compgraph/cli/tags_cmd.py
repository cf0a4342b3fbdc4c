"""CLI commands for tag discovery."""

from __future__ import annotations

from pathlib import Path

import typer

from compgraph.analysis import available_tags, find_by_tag
from compgraph.cli._errors import CatalogOption, catalog_errors, emit, load_snapshot

app = typer.Typer(help="Discover components by tag.")


@app.command("find")
@catalog_errors
def find(
    tags: list[str] = typer.Argument(..., help="Tags to match"),
    tag_type: str = typer.Option(None, "--type", "-t", help="Only tags of this type"),
    match: str = typer.Option("any", "--match", help="any | all"),
    catalog: Path = CatalogOption,
) -> None:
    """Components carrying any (or all) of the tags."""
    emit(find_by_tag(load_snapshot(catalog), tags, tag_type=tag_type, match_mode=match).to_dict())


@app.command("list")
@catalog_errors
def list_tags(
    tag_type: str = typer.Option(None, "--type", "-t", help="Only tags of this type"),
    catalog: Path = CatalogOption,
) -> None:
    """All tags grouped by type, with component counts."""
    emit(available_tags(load_snapshot(catalog), tag_type=tag_type))
