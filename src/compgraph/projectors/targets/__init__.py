"""Projection targets -- serialize graphs to output formats."""

from compgraph.projectors.targets._serialize import dump_json, dump_yaml
from compgraph.projectors.targets.cytoscape import CytoscapeTarget
from compgraph.projectors.targets.d3 import D3Target
from compgraph.projectors.targets.mermaid import MermaidTarget

__all__ = [
    "CytoscapeTarget",
    "D3Target",
    "MermaidTarget",
    "dump_json",
    "dump_yaml",
]
