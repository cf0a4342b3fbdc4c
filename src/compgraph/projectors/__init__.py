"""Projectors - serialize assembled graphs into caller-selected formats.

Built-in formats:
- cytoscape: interactive-graph elements + a fixed style table
- d3: force-layout nodes and links
- mermaid: line-oriented flowchart text
"""

from compgraph.projectors.base import GraphTarget
from compgraph.projectors.registry import (
    available_targets,
    get_target,
    register_target,
    reset,
)
from compgraph.projectors.targets import CytoscapeTarget, D3Target, MermaidTarget

__all__ = [
    "CytoscapeTarget",
    "D3Target",
    "GraphTarget",
    "MermaidTarget",
    "available_targets",
    "get_target",
    "register_target",
    "reset",
]
