"""Load an InMemoryCatalog from a YAML fixture document.

Format::

    components:
      - id: 1
        name: accordion
        title: Accordion
        complexity: moderate
        requires_script: true
        tags:
          - navigation                   # feature tag
          - {tag: layout, type: category}
        guidance:
          - Requires icon for the toggle.
        samples:
          - '<div class="ecl-accordion">...</div>'
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from compgraph.core.catalog import InMemoryCatalog
from compgraph.core.errors import InvalidArgument, UpstreamReadFailure
from compgraph.core.models import Complexity, Entity, TagAssignment, TagType


def _tag(entity_id: int, raw: Any) -> TagAssignment:
    if isinstance(raw, dict):
        return TagAssignment(entity_id, str(raw["tag"]), TagType(raw.get("type", "feature")))
    return TagAssignment(entity_id, str(raw))


def catalog_from_dict(data: dict[str, Any]) -> InMemoryCatalog:
    """Build a catalog from an already-parsed fixture mapping."""
    catalog = InMemoryCatalog()
    for index, item in enumerate(data.get("components") or [], start=1):
        try:
            entity_id = int(item.get("id", index))
            name = str(item["name"])
            entity = Entity(
                id=entity_id,
                canonical_name=name,
                display_title=str(item.get("title", name)),
                complexity=Complexity(item.get("complexity", "moderate")),
                requires_script=bool(item.get("requires_script", False)),
            )
            tags = [_tag(entity_id, t) for t in item.get("tags") or []]
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidArgument(f"Malformed component entry: {exc}", index=index) from exc

        catalog.add_entity(entity)
        for tag in tags:
            catalog.add_tag(tag)
        for content in item.get("guidance") or []:
            catalog.add_guidance(entity_id, str(content))
        for content in item.get("samples") or []:
            catalog.add_sample(entity_id, str(content))
    return catalog


def load_yaml_catalog(path: str | Path) -> InMemoryCatalog:
    """Read a YAML fixture file into an InMemoryCatalog."""
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise UpstreamReadFailure(f"Cannot read catalog file: {exc}", path=str(path)) from exc
    if not isinstance(data, dict):
        raise InvalidArgument("Catalog file must contain a mapping", path=str(path))
    return catalog_from_dict(data)
