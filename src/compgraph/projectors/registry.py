"""Projection registry - register and retrieve graph serializers by format name."""

from __future__ import annotations

from typing import Any

from compgraph.core.errors import InvalidArgument
from compgraph.projectors.base import GraphTarget
from compgraph.projectors.targets import CytoscapeTarget, D3Target, MermaidTarget

_BUILTIN_TARGETS: dict[str, type] = {
    "cytoscape": CytoscapeTarget,
    "d3": D3Target,
    "mermaid": MermaidTarget,
}

_targets: dict[str, type] = dict(_BUILTIN_TARGETS)


def reset() -> None:
    """Restore the built-in targets only. Use in test fixtures for isolation."""
    _targets.clear()
    _targets.update(_BUILTIN_TARGETS)


def register_target(name: str, cls: type) -> None:
    _targets[name.strip().lower()] = cls


def get_target(name: str, **kwargs: Any) -> GraphTarget:
    key = name.strip().lower()
    if key not in _targets:
        raise InvalidArgument(
            f"Unknown graph format: {name!r}. Available: {list(_targets)}",
            format=name,
            allowed=list(_targets),
        )
    return _targets[key](**kwargs)


def available_targets() -> list[str]:
    return list(_targets)
