"""CLI commands for relationships, graphs and dependency trees."""

from __future__ import annotations

from pathlib import Path

import typer

from compgraph.cli._errors import CatalogOption, catalog_errors, emit, load_settings, load_snapshot
from compgraph.core.models import parse_relation_types
from compgraph.graph import DependencyTraverser, GraphAssembler
from compgraph.relationships import find_related


@catalog_errors
def related(
    identifier: str = typer.Argument(..., help="Component name or id"),
    relation_type: str = typer.Option(None, "--type", "-t", help="Only this relationship type"),
    as_yaml: bool = typer.Option(False, "--yaml", help="Output YAML instead of JSON"),
    catalog: Path = CatalogOption,
) -> None:
    """Show what a component points at and what points at it."""
    wanted = parse_relation_types([relation_type])[0] if relation_type else None
    result = find_related(load_snapshot(catalog), identifier, wanted, load_settings())
    emit(result.to_dict(), as_yaml=as_yaml)


@catalog_errors
def graph(
    identifiers: list[str] = typer.Argument(None, help="Components to include (default: all)"),
    types: list[str] = typer.Option(None, "--type", "-t", help="Relationship type (repeatable)"),
    output_format: str = typer.Option(
        "cytoscape", "--format", "-f", help="cytoscape | d3 | mermaid"
    ),
    as_yaml: bool = typer.Option(False, "--yaml", help="Output YAML instead of JSON"),
    catalog: Path = CatalogOption,
) -> None:
    """Build a relationship graph in the chosen format.

    Mermaid output prints the diagram text directly.
    """
    assembler = GraphAssembler(load_snapshot(catalog), load_settings())
    result = assembler.build(identifiers or None, types or None, output_format=output_format)
    if result["format"].lower() == "mermaid" and not as_yaml:
        typer.echo(result["graph"]["syntax"], nl=False)
        return
    emit(result, as_yaml=as_yaml)


@catalog_errors
def deps(
    identifier: str = typer.Argument(..., help="Component name or id"),
    depth: int = typer.Option(None, "--depth", "-d", help="Max hops (default from settings)"),
    catalog: Path = CatalogOption,
) -> None:
    """Walk requires/contains edges outward from a component."""
    traverser = DependencyTraverser(load_snapshot(catalog), load_settings())
    emit(traverser.traverse(identifier, max_depth=depth).to_dict())
