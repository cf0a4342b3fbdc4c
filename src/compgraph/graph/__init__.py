"""Graph assembly and dependency traversal over a catalog snapshot."""

from compgraph.graph.assembler import GraphAssembler, merge_edges
from compgraph.graph.traverser import DependencyNode, DependencyTraverser, TraversalResult

__all__ = [
    "DependencyNode",
    "DependencyTraverser",
    "GraphAssembler",
    "TraversalResult",
    "merge_edges",
]
