"""CLI configuration via environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _path_env(var: str) -> Path | None:
    raw = os.environ.get(var)
    return Path(raw).expanduser() if raw else None


@dataclass
class CliConfig:
    """Configuration for the compgraph CLI.

    Reads from environment variables with COMPGRAPH_ prefix. A --catalog
    option on a command takes precedence over COMPGRAPH_CATALOG.
    """

    catalog_path: Path | None = field(default_factory=lambda: _path_env("COMPGRAPH_CATALOG"))
    settings_path: Path | None = field(default_factory=lambda: _path_env("COMPGRAPH_SETTINGS"))


def get_config() -> CliConfig:
    """Get CLI configuration from environment."""
    return CliConfig()
