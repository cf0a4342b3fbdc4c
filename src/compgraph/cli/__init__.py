"""compgraph CLI -- typer-based command interface.

Commands:
    compgraph resolve <name>...        Resolve names or ids (typo tolerant)
    compgraph search <query>           Ranked fuzzy search
    compgraph related <name>           Outgoing and incoming relationships
    compgraph graph [<name>...]        Relationship graph (cytoscape/d3/mermaid)
    compgraph deps <name>              Dependency tree
    compgraph similar <name>           Components sharing tags
    compgraph conflicts <name>...      Conflict report for components used together
    compgraph tags find/list           Tag discovery
"""

from __future__ import annotations

import typer

from compgraph.cli import analysis_cmd, graph_cmd, query, tags_cmd
from compgraph.observability import ObservabilityConfig, bind_query_context, setup_logging

app = typer.Typer(
    name="compgraph",
    help="Query a UI component catalog: resolve, relate, graph and check components.",
    no_args_is_help=True,
)


@app.callback()
def _setup(ctx: typer.Context) -> None:
    setup_logging(ObservabilityConfig())
    bind_query_context(command=ctx.invoked_subcommand)


app.command("resolve")(query.resolve)
app.command("search")(query.search)
app.command("related")(graph_cmd.related)
app.command("graph")(graph_cmd.graph)
app.command("deps")(graph_cmd.deps)
app.command("similar")(analysis_cmd.similar)
app.command("conflicts")(analysis_cmd.conflicts)
app.add_typer(tags_cmd.app, name="tags")


def main() -> None:
    """Entry point for the compgraph CLI."""
    app()
