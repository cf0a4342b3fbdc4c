"""Tests for the entity resolver strategy cascade, suggestions and search."""

from __future__ import annotations

import pytest

from compgraph.core import Entity, InvalidArgument, NotFound
from compgraph.resolve import EntityResolver, normalize_name
from compgraph.settings import CatalogSettings


@pytest.fixture()
def resolver(snapshot, settings):
    return EntityResolver(snapshot, settings)


class TestNormalize:
    def test_strips_spaces_and_hyphens(self):
        assert normalize_name("File upload") == "fileupload"
        assert normalize_name("file-upload") == "fileupload"
        assert normalize_name("  Site - Header ") == "siteheader"


class TestResolveByName:
    @pytest.mark.parametrize("query", ["button", "Button", "BUTTON", " button "])
    def test_exact_any_case(self, resolver, query):
        result = resolver.resolve(query)
        assert result.found
        assert result.entity.canonical_name == "button"
        assert result.strategy == "exact"

    def test_plural(self, resolver):
        result = resolver.resolve("buttons")
        assert result.entity.canonical_name == "button"
        assert result.strategy == "plural"

    def test_singular_of_plural_name(self, resolver):
        result = resolver.resolve("tab")
        assert result.entity.canonical_name == "tabs"
        assert result.strategy == "plural"

    def test_prefix(self, resolver):
        result = resolver.resolve("acc")
        assert result.entity.canonical_name == "accordion"
        assert result.strategy == "prefix"

    def test_substring(self, resolver):
        result = resolver.resolve("ousel")
        assert result.entity.canonical_name == "carousel"
        assert result.strategy == "substring"

    def test_normalized(self, make_snapshot):
        snap = make_snapshot(Entity(1, "file-upload", "File upload"))
        result = EntityResolver(snap, CatalogSettings()).resolve("fileupload")
        assert result.entity.id == 1
        assert result.strategy == "normalized"

    def test_matches_display_title(self, make_snapshot):
        snap = make_snapshot(Entity(1, "site-header", "Site header harmonised"))
        result = EntityResolver(snap, CatalogSettings()).resolve("Site header harmonised")
        assert result.entity.id == 1
        assert result.strategy == "exact"


class TestResolveById:
    def test_int(self, resolver):
        result = resolver.resolve(3)
        assert result.entity.canonical_name == "accordion"
        assert result.strategy == "id"

    def test_numeric_string(self, resolver):
        assert resolver.resolve("5").entity.canonical_name == "modal"

    def test_unknown_id(self, resolver):
        result = resolver.resolve(999)
        assert not result.found
        assert result.strategy is None

    def test_bool_rejected(self, resolver):
        with pytest.raises(InvalidArgument):
            resolver.resolve(True)

    def test_blank_rejected(self, resolver):
        with pytest.raises(InvalidArgument):
            resolver.resolve("   ")


class TestSuggestions:
    def test_typo_only_suggests(self, resolver):
        result = resolver.resolve("buitton")
        assert not result.found
        assert result.suggestions
        assert result.suggestions[0].name == "button"
        assert result.suggestions[0].score == 60

    def test_require_raises_with_suggestions(self, resolver):
        with pytest.raises(NotFound) as exc_info:
            resolver.require("buitton")
        assert exc_info.value.kind == "not_found"
        assert exc_info.value.context["suggestions"] == ["button"]

    def test_nothing_close(self, resolver):
        result = resolver.resolve("zzzzzzzz")
        assert not result.found
        assert result.suggestions == []

    def test_suggestion_limit(self, make_snapshot):
        snap = make_snapshot(
            Entity(1, "header", "Header"),
            Entity(2, "heater", "Heater"),
            Entity(3, "hexder", "Hexder"),
            Entity(4, "headed", "Headed"),
        )
        resolver = EntityResolver(snap, CatalogSettings(suggestion_limit=2))
        assert len(resolver.resolve("heaxer").suggestions) == 2

    def test_to_dict_includes_suggestions_on_miss(self, resolver):
        d = resolver.resolve("buitton").to_dict()
        assert d["found"] is False
        assert d["entity"] is None
        assert d["suggestions"][0]["name"] == "button"

    def test_reports_entities_considered(self, resolver, snapshot):
        assert resolver.resolve("buitton").to_dict()["entities_considered"] == len(snapshot)
        assert resolver.resolve("accordion").entities_considered == 8
        assert resolver.resolve(3).entities_considered == 8


class TestAmbiguity:
    def test_duplicate_names_lowest_id_wins(self, make_snapshot):
        snap = make_snapshot(Entity(7, "button", "Button"), Entity(3, "button", "Button v2"))
        result = EntityResolver(snap, CatalogSettings()).resolve("button")
        assert result.entity.id == 3
        assert result.candidates == 2

    def test_shortest_name_wins(self, make_snapshot):
        snap = make_snapshot(
            Entity(1, "button-group", "Button group"),
            Entity(2, "button-link", "Button link"),
        )
        result = EntityResolver(snap, CatalogSettings()).resolve("butto")
        assert result.entity.canonical_name == "button-link"

    def test_alphabetical_before_id(self, make_snapshot):
        snap = make_snapshot(Entity(1, "tabz", "Tabz"), Entity(2, "taby", "Taby"))
        result = EntityResolver(snap, CatalogSettings()).resolve("tab")
        assert result.entity.canonical_name == "taby"


class TestSearch:
    def test_ranked(self, resolver):
        hits = resolver.search("mod")
        assert hits[0].entity.canonical_name == "modal"
        assert hits[0].score == 90

    def test_floor(self, resolver):
        assert all(h.score >= 40 for h in resolver.search("car"))

    def test_limit(self, resolver):
        assert len(resolver.search("a", limit=2)) == 2

    def test_order_by_score_then_name(self, resolver):
        hits = resolver.search("ca")
        names = [h.entity.canonical_name for h in hits]
        assert names[:2] == ["card", "carousel"]

    def test_empty_query(self, resolver):
        with pytest.raises(InvalidArgument):
            resolver.search("  ")

    def test_negative_limit_rejected(self, resolver):
        with pytest.raises(InvalidArgument, match="limit"):
            resolver.search("ca", limit=-1)
        with pytest.raises(InvalidArgument, match="limit"):
            resolver.suggest("buitton", limit=-1)
