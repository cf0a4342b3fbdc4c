"""Graph projection protocol: serialize an assembled Graph to a format."""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from compgraph.core.models import Graph

T = TypeVar("T", covariant=True)


@runtime_checkable
class GraphTarget(Protocol[T]):
    """Serializes a graph to a target format."""

    def serialize(self, graph: Graph) -> T:
        """Serialize the graph."""
        ...
