"""Tests for query settings: defaults, YAML file and env overrides."""

from __future__ import annotations

import pytest
import yaml

from compgraph.core import InvalidArgument
from compgraph.settings import CatalogSettings, get_settings, reset_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in CatalogSettings().to_dict():
        monkeypatch.delenv(f"COMPGRAPH_{name.upper()}", raising=False)


class TestDefaults:
    def test_defaults(self):
        s = CatalogSettings()
        assert s.node_cap == 100
        assert s.default_depth == 2
        assert s.min_shared_tags == 2
        assert s.similarity_limit == 10
        assert s.complex_threshold == 3
        assert s.script_threshold == 5
        assert s.suggestion_limit == 3
        assert s.class_prefix == "ecl-"

    def test_to_dict(self):
        d = CatalogSettings().to_dict()
        assert d["node_cap"] == 100
        assert d["search_limit"] == 20


class TestYAMLLoading:
    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.dump({"node_cap": 25, "class_prefix": "ui-"}))
        s = CatalogSettings.load(path)
        assert s.node_cap == 25
        assert s.class_prefix == "ui-"
        assert s.default_depth == 2

    def test_missing_file_uses_defaults(self, tmp_path):
        assert CatalogSettings.load(tmp_path / "nope.yaml") == CatalogSettings()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert CatalogSettings.load(path) == CatalogSettings()

    def test_non_dict_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("just a string")
        assert CatalogSettings.load(path) == CatalogSettings()

    def test_bad_value_in_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.dump({"node_cap": "lots"}))
        with pytest.raises(InvalidArgument) as exc_info:
            CatalogSettings.load(path)
        assert exc_info.value.context["setting"] == "node_cap"


class TestEnvOverrides:
    def test_env_beats_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.dump({"node_cap": 25}))
        monkeypatch.setenv("COMPGRAPH_NODE_CAP", "7")
        assert CatalogSettings.load(path).node_cap == 7

    def test_string_setting(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COMPGRAPH_CLASS_PREFIX", "my-")
        assert CatalogSettings.load(tmp_path / "nope.yaml").class_prefix == "my-"

    def test_malformed_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COMPGRAPH_DEFAULT_DEPTH", "deep")
        with pytest.raises(InvalidArgument, match="default_depth"):
            CatalogSettings.load(tmp_path / "nope.yaml")

    def test_negative_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COMPGRAPH_NODE_CAP", "-1")
        with pytest.raises(InvalidArgument):
            CatalogSettings.load(tmp_path / "nope.yaml")


class TestSingleton:
    def test_get_settings_cached(self, tmp_path):
        first = get_settings(tmp_path / "nope.yaml")
        assert get_settings() is first

    def test_reset(self, tmp_path):
        first = get_settings(tmp_path / "nope.yaml")
        reset_settings()
        assert get_settings(tmp_path / "nope.yaml") is not first
