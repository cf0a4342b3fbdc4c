"""Centralized query settings: YAML config + env var overrides.

Priority: env var > YAML file > default.
Env vars use COMPGRAPH_{SETTING_NAME} convention (e.g. COMPGRAPH_NODE_CAP=50).
YAML file default: ~/.compgraph/settings.yaml
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from compgraph.core.errors import InvalidArgument

_DEFAULT_PATH = Path("~/.compgraph/settings.yaml").expanduser()


@dataclass
class CatalogSettings:
    # Graph assembly: max nodes when the caller asks for "all"
    node_cap: int = 100
    # Dependency traversal depth when none is given
    default_depth: int = 2
    # Similarity: shared-tag floor and result count
    min_shared_tags: int = 2
    similarity_limit: int = 10
    # Conflict volume heuristics (warn when strictly exceeded)
    complex_threshold: int = 3
    script_threshold: int = 5
    # Resolver: how many "did you mean" names to return
    suggestion_limit: int = 3
    search_limit: int = 20
    # Code samples reference components as <class_prefix><name>
    class_prefix: str = "ecl-"

    @classmethod
    def load(cls, path: Path | None = None) -> CatalogSettings:
        """Load settings from YAML file, then override with env vars."""
        file_path = path or _DEFAULT_PATH
        file_values: dict[str, object] = {}

        if file_path.exists():
            raw = yaml.safe_load(file_path.read_text()) or {}
            if isinstance(raw, dict):
                file_values = raw

        kwargs: dict[str, object] = {}
        for f in fields(cls):
            name = f.name
            env_key = f"COMPGRAPH_{name.upper()}"

            if env_key in os.environ:
                kwargs[name] = _coerce(name, os.environ[env_key], f.type, source=env_key)
            elif name in file_values:
                kwargs[name] = _coerce(name, file_values[name], f.type, source=str(file_path))
            # else: use dataclass default

        return cls(**kwargs)

    def to_dict(self) -> dict[str, object]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _coerce(name: str, value: object, type_name: object, source: str) -> object:
    if type_name in (int, "int"):
        try:
            number = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError) as err:
            raise InvalidArgument(
                f"{name}={value!r} is not a valid integer", setting=name, source=source
            ) from err
        if number < 0:
            raise InvalidArgument(
                f"{name} must not be negative", setting=name, source=source, value=number
            )
        return number
    return str(value)


# Singleton
_settings: CatalogSettings | None = None


def get_settings(path: Path | None = None) -> CatalogSettings:
    """Get the singleton CatalogSettings instance."""
    global _settings
    if _settings is None:
        _settings = CatalogSettings.load(path)
    return _settings


def reset_settings() -> None:
    """Reset for testing."""
    global _settings
    _settings = None
