"""MermaidTarget -- line-oriented flowchart text."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Any

from compgraph.core.models import Graph, RelationType

_UNSAFE = re.compile(r"[^0-9A-Za-z_]")


def mermaid_id(name: str) -> str:
    """Make a component name safe as a Mermaid node identifier."""
    ident = _UNSAFE.sub("_", name)
    if not ident or ident[0].isdigit():
        ident = f"n_{ident}"
    return ident


def _node_ids(graph: Graph) -> dict[int, str]:
    """Sanitized name per node, suffixed with the entity id where two would clash."""
    base = {n.id: mermaid_id(n.entity.canonical_name) for n in graph.nodes}
    counts = Counter(base.values())
    return {
        node_id: f"{ident}_{node_id}" if counts[ident] > 1 else ident
        for node_id, ident in base.items()
    }


@dataclass
class MermaidTarget:
    """Serialize a graph to Mermaid flowchart syntax.

    One box line per node, then one arrow line per edge: `==>` for
    requires, `-->` otherwise, labelled with the type unless generic.
    Implements the GraphTarget[dict] protocol.
    """

    direction: str = "TD"

    def serialize(self, graph: Graph) -> dict[str, Any]:
        lines = [f"graph {self.direction}"]
        ids = _node_ids(graph)
        for n in graph.nodes:
            label = n.entity.canonical_name.replace('"', "'")
            lines.append(f'  {ids[n.id]}["{label}"]')

        lines.append("")

        for e in graph.edges:
            arrow = "==>" if e.type == RelationType.REQUIRES else "-->"
            label = "" if e.type == RelationType.RELATED else f"|{e.type.value}|"
            lines.append(f"  {ids[e.source_id]} {arrow}{label} {ids[e.target_id]}")

        return {
            "syntax": "\n".join(lines) + "\n",
            "format": "mermaid",
            "usage": "Paste this into a Mermaid renderer or GitHub markdown",
        }
