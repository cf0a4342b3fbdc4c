"""Tests for graph assembly, statistics and format selection."""

from __future__ import annotations

import pytest

from compgraph.core import Entity, InvalidArgument, NotFound, RelationType
from compgraph.core.models import GraphNode, RelationshipEdge
from compgraph.graph import GraphAssembler, merge_edges
from compgraph.settings import CatalogSettings


@pytest.fixture()
def assembler(snapshot, settings):
    return GraphAssembler(snapshot, settings)


def _edge_set(graph):
    return {(e.source_id, e.target_id, e.type) for e in graph.edges}


class TestAssemble:
    def test_whole_catalog_default_types(self, assembler):
        graph = assembler.assemble()
        assert len(graph.nodes) == 8
        assert _edge_set(graph) == {
            (3, 2, RelationType.REQUIRES),
            (4, 3, RelationType.ALTERNATIVE),
            (5, 1, RelationType.CONTAINS),
        }

    def test_statistics(self, assembler):
        stats = assembler.assemble().statistics
        assert stats.nodes == 8
        assert stats.edges == 3
        assert stats.entities_considered == 8
        assert stats.relationship_types == ["requires", "suggests", "contains", "alternative"]
        assert stats.truncated is False
        # {button, modal} {icon, accordion, tabs} {message} {carousel} {card}
        assert stats.connected_components == 5
        assert stats.isolated_nodes == 3

    def test_identifiers_restrict_nodes_and_edges(self, assembler):
        graph = assembler.assemble(["Accordion", "icon", "tabs"])
        assert sorted(n.id for n in graph.nodes) == [2, 3, 4]
        assert _edge_set(graph) == {
            (3, 2, RelationType.REQUIRES),
            (4, 3, RelationType.ALTERNATIVE),
        }

    def test_explicit_types(self, assembler):
        graph = assembler.assemble(relationship_types=["uses", "conflicts"])
        assert _edge_set(graph) == {
            (3, 1, RelationType.USES),
            (7, 4, RelationType.CONFLICTS),
        }

    def test_unresolved_identifiers_dropped(self, assembler):
        graph = assembler.assemble(["accordion", "nonexistent-widget", "icon"])
        assert len(graph.nodes) == 2

    def test_duplicate_identifiers_collapse(self, assembler):
        graph = assembler.assemble(["accordion", "3", "ACCORDION"])
        assert [n.id for n in graph.nodes] == [3]

    def test_nothing_resolves(self, assembler):
        with pytest.raises(NotFound):
            assembler.assemble(["nonexistent-widget"])

    def test_unknown_type(self, assembler):
        with pytest.raises(InvalidArgument) as exc_info:
            assembler.assemble(relationship_types=["requires", "bogus"])
        assert exc_info.value.context["invalid"] == ["bogus"]

    def test_empty_type_filter(self, assembler):
        with pytest.raises(InvalidArgument):
            assembler.assemble(relationship_types=[])

    def test_node_cap_truncates_all(self, snapshot):
        graph = GraphAssembler(snapshot, CatalogSettings(node_cap=3)).assemble()
        assert [n.id for n in graph.nodes] == [1, 2, 3]
        assert graph.statistics.truncated is True
        assert graph.statistics.entities_considered == 8

    def test_node_cap_truncates_explicit(self, snapshot):
        graph = GraphAssembler(snapshot, CatalogSettings(node_cap=2)).assemble(
            ["modal", "tabs", "icon"]
        )
        assert [n.id for n in graph.nodes] == [5, 4]
        assert graph.statistics.truncated is True

    def test_nodes_carry_tags(self, assembler):
        node = assembler.assemble(["button"]).nodes[0]
        assert node.category == "form"
        assert {"tag": "clickable", "type": "feature"} in node.tag_dicts()


class TestMergeEdges:
    def test_keeps_max_weight_per_key(self):
        nodes = [GraphNode(Entity(1, "a", "A")), GraphNode(Entity(2, "b", "B"))]
        edges = [
            RelationshipEdge(1, 2, RelationType.REQUIRES, 0.3),
            RelationshipEdge(1, 2, RelationType.REQUIRES, 0.8),
            RelationshipEdge(1, 2, RelationType.SUGGESTS, 0.3),
        ]
        g = merge_edges(nodes, edges)
        assert g.number_of_edges() == 2
        assert g.edges[1, 2, RelationType.REQUIRES]["weight"] == 0.8

    def test_drops_dangling(self):
        nodes = [GraphNode(Entity(1, "a", "A"))]
        g = merge_edges(nodes, [RelationshipEdge(1, 9, RelationType.REQUIRES, 0.3)])
        assert g.number_of_edges() == 0


class TestBuild:
    def test_default_cytoscape(self, assembler):
        result = assembler.build(["accordion", "icon"])
        assert result["format"] == "cytoscape"
        assert result["statistics"]["edges"] == 1
        elements = result["graph"]["elements"]
        assert len(elements["nodes"]) == 2
        assert elements["edges"][0]["data"]["type"] == "requires"

    def test_d3(self, assembler):
        result = assembler.build(["accordion", "icon"], output_format="d3")
        link = result["graph"]["links"][0]
        assert link == {"source": "3", "target": "2", "value": 0.8, "type": "requires"}

    def test_mermaid(self, assembler):
        result = assembler.build(["accordion", "icon"], output_format="mermaid")
        assert "accordion ==>|requires| icon" in result["graph"]["syntax"]

    def test_unknown_format(self, assembler):
        with pytest.raises(InvalidArgument) as exc_info:
            assembler.build(output_format="graphviz")
        assert "mermaid" in exc_info.value.context["allowed"]
