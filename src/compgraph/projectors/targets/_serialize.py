"""Shared text serialization for query results (CLI and service layer)."""

from __future__ import annotations

import json
from typing import Any

import yaml


def dump_json(payload: Any, indent: int = 2) -> str:
    return json.dumps(payload, indent=indent, ensure_ascii=False, default=str)


def dump_yaml(payload: Any) -> str:
    return yaml.safe_dump(
        payload,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
