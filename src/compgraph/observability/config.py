"""Logging configuration read from COMPGRAPH_LOG_* environment variables.

    COMPGRAPH_LOG_FORMATTER    structlog (default) | stdlib
    COMPGRAPH_LOG_DESTINATION  stderr (default) | jsonl
    COMPGRAPH_LOG_LEVEL        WARNING (default); query events log at INFO/DEBUG
    COMPGRAPH_LOG_FORMAT       json (default) | console
    COMPGRAPH_LOG_PATH         JSONL file for the jsonl destination
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

_PREFIX = "COMPGRAPH_LOG_"


def _env(suffix: str, default: str | None = None):
    return field(default_factory=lambda: os.environ.get(_PREFIX + suffix, default))


@dataclass
class ObservabilityConfig:
    log_formatter: str = _env("FORMATTER", "structlog")
    log_destination: str = _env("DESTINATION", "stderr")
    log_level: str = _env("LEVEL", "WARNING")
    log_format: str = _env("FORMAT", "json")
    jsonl_path: str | None = _env("PATH")
