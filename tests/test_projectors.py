"""Tests for graph serializers and the format registry."""

from __future__ import annotations

import json

import pytest
import yaml

from compgraph.core import Complexity, Entity, InvalidArgument, RelationType, TagAssignment, TagType
from compgraph.core.models import Graph, GraphNode, GraphStatistics, RelationshipEdge
from compgraph.projectors import (
    CytoscapeTarget,
    D3Target,
    MermaidTarget,
    available_targets,
    get_target,
    register_target,
)
from compgraph.projectors.targets import dump_json, dump_yaml
from compgraph.projectors.targets.mermaid import mermaid_id


@pytest.fixture()
def graph() -> Graph:
    nodes = [
        GraphNode(
            Entity(1, "file-upload", "File upload", Complexity.COMPLEX, requires_script=True),
            [TagAssignment(1, "form", TagType.CATEGORY), TagAssignment(1, "upload")],
        ),
        GraphNode(Entity(2, "button", "Button", Complexity.SIMPLE)),
        GraphNode(Entity(3, "site-header", "Site header")),
    ]
    edges = [
        RelationshipEdge(1, 2, RelationType.REQUIRES, 0.8),
        RelationshipEdge(3, 2, RelationType.SUGGESTS, 0.3),
        RelationshipEdge(3, 1, RelationType.RELATED, 0.3),
    ]
    stats = GraphStatistics(nodes=3, edges=3, entities_considered=3, relationship_types=[])
    return Graph(nodes=nodes, edges=edges, statistics=stats)


class TestCytoscape:
    def test_nodes(self, graph):
        out = CytoscapeTarget().serialize(graph)
        data = out["elements"]["nodes"][0]["data"]
        assert data["id"] == "1"
        assert data["label"] == "file-upload"
        assert data["category"] == "form"
        assert data["complexity"] == "complex"
        assert data["requires_script"] is True
        assert len(data["tags"]) == 2

    def test_uncategorized(self, graph):
        out = CytoscapeTarget().serialize(graph)
        assert out["elements"]["nodes"][1]["data"]["category"] == "uncategorized"

    def test_edges(self, graph):
        out = CytoscapeTarget().serialize(graph)
        assert out["elements"]["edges"][0]["data"] == {
            "id": "e0",
            "source": "1",
            "target": "2",
            "type": "requires",
            "weight": 0.8,
        }

    def test_style_table_static(self, graph):
        out = CytoscapeTarget().serialize(graph)
        selectors = [s["selector"] for s in out["style"]]
        assert 'edge[type="requires"]' in selectors
        assert 'node[complexity="simple"]' in selectors

    def test_style_optional(self, graph):
        assert "style" not in CytoscapeTarget(include_style=False).serialize(graph)


class TestD3:
    def test_shape(self, graph):
        out = D3Target().serialize(graph)
        assert out["nodes"][0]["group"] == "form"
        assert out["nodes"][1]["group"] == "default"
        assert out["links"][1] == {"source": "3", "target": "2", "value": 0.3, "type": "suggests"}


class TestMermaid:
    def test_sanitized_ids(self):
        assert mermaid_id("file-upload") == "file_upload"
        assert mermaid_id("3d view") == "n_3d_view"

    def test_syntax(self, graph):
        syntax = MermaidTarget().serialize(graph)["syntax"]
        lines = syntax.splitlines()
        assert lines[0] == "graph TD"
        assert '  file_upload["file-upload"]' in lines
        assert "  file_upload ==>|requires| button" in lines
        assert "  site_header -->|suggests| button" in lines
        assert "  site_header --> file_upload" in lines

    def test_blank_line_between_sections(self, graph):
        syntax = MermaidTarget().serialize(graph)["syntax"]
        assert '["site-header"]\n\n  file_upload' in syntax

    def test_payload_keys(self, graph):
        out = MermaidTarget().serialize(graph)
        assert out["format"] == "mermaid"
        assert "usage" in out

    def test_clashing_names_get_distinct_ids(self):
        nodes = [
            GraphNode(Entity(1, "button", "Button")),
            GraphNode(Entity(2, "button", "Button (legacy)")),
            GraphNode(Entity(3, "file-upload", "File upload")),
            GraphNode(Entity(4, "file_upload", "File upload v2")),
            GraphNode(Entity(5, "icon", "Icon")),
        ]
        edges = [
            RelationshipEdge(3, 2, RelationType.REQUIRES, 0.8),
            RelationshipEdge(4, 1, RelationType.CONTAINS, 0.3),
        ]
        stats = GraphStatistics(nodes=5, edges=2, entities_considered=5, relationship_types=[])
        lines = MermaidTarget().serialize(Graph(nodes, edges, stats))["syntax"].splitlines()

        boxes = [line.split("[", 1)[0].strip() for line in lines[1:6]]
        assert boxes == ["button_1", "button_2", "file_upload_3", "file_upload_4", "icon"]
        assert '  button_1["button"]' in lines
        assert "  file_upload_3 ==>|requires| button_2" in lines
        assert "  file_upload_4 -->|contains| button_1" in lines


class TestRegistry:
    def test_builtins(self):
        assert set(available_targets()) >= {"cytoscape", "d3", "mermaid"}

    def test_case_insensitive(self):
        assert isinstance(get_target("D3"), D3Target)

    def test_unknown(self):
        with pytest.raises(InvalidArgument, match="Unknown graph format"):
            get_target("dot")

    def test_register_custom(self, graph):
        class CountTarget:
            def serialize(self, graph):
                return {"nodes": len(graph.nodes)}

        register_target("count", CountTarget)
        assert get_target("count").serialize(graph) == {"nodes": 3}

    def test_register_name_case_insensitive(self, graph):
        class CountTarget:
            def serialize(self, graph):
                return {"nodes": len(graph.nodes)}

        register_target("NodeCount", CountTarget)
        assert "nodecount" in available_targets()
        assert get_target("NodeCount").serialize(graph) == {"nodes": 3}

    def test_kwargs_forwarded(self):
        assert get_target("mermaid", direction="LR").direction == "LR"


class TestSerialize:
    def test_json(self):
        assert json.loads(dump_json({"name": "bouton é"})) == {"name": "bouton é"}
        assert "é" in dump_json({"name": "é"})

    def test_yaml_keeps_order(self):
        text = dump_yaml({"z": 1, "a": 2})
        assert text.index("z:") < text.index("a:")
        assert yaml.safe_load(text) == {"z": 1, "a": 2}
