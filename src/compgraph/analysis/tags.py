"""Tag discovery: components by tag, and the tag vocabulary itself."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from compgraph.core.catalog import CatalogSnapshot
from compgraph.core.errors import InvalidArgument
from compgraph.core.models import Entity, TagType
from compgraph.observability import get_logger, timed

MATCH_MODES = ("any", "all")


def _parse_tag_type(tag_type: str | TagType | None) -> TagType | None:
    if tag_type is None:
        return None
    try:
        return TagType(str(tag_type).lower())
    except ValueError:
        raise InvalidArgument(
            f"Unknown tag type {tag_type!r}",
            tag_type=str(tag_type),
            allowed=[t.value for t in TagType],
        ) from None


@dataclass
class TaggedEntity:
    entity: Entity
    category: str | None
    matched_tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.entity.to_dict(),
            "category": self.category,
            "matched_tags": self.matched_tags,
        }


@dataclass
class TagSearchResult:
    tags: list[str]
    tag_type: TagType | None
    match_mode: str
    components: list[TaggedEntity] = field(default_factory=list)
    tags_in_results: dict[str, list[str]] = field(default_factory=dict)
    entities_considered: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": {
                "tags": self.tags,
                "tag_type": self.tag_type.value if self.tag_type else None,
                "match_mode": self.match_mode,
            },
            "components": [c.to_dict() for c in self.components],
            "count": len(self.components),
            "tags_in_results": self.tags_in_results,
            "entities_considered": self.entities_considered,
        }


def find_by_tag(
    snapshot: CatalogSnapshot,
    tags: str | Sequence[str],
    tag_type: str | TagType | None = None,
    match_mode: str = "any",
) -> TagSearchResult:
    """Components carrying any (or all) of the given tags.

    Raises:
        InvalidArgument: no tags given, or unknown match_mode / tag_type.
    """
    sw = timed()
    wanted = [tags] if isinstance(tags, str) else list(tags)
    wanted = [t.strip() for t in wanted if t and t.strip()]
    if not wanted:
        raise InvalidArgument("At least one tag is required")
    if match_mode not in MATCH_MODES:
        raise InvalidArgument(
            f"Unknown match mode {match_mode!r}",
            match_mode=match_mode,
            allowed=list(MATCH_MODES),
        )
    kind = _parse_tag_type(tag_type)
    wanted_set = set(wanted)

    components: list[TaggedEntity] = []
    for entity in snapshot:
        assigned = snapshot.tags_for(entity.id)
        matched = sorted(
            {a.tag for a in assigned if a.tag in wanted_set and (kind is None or a.tag_type == kind)}
        )
        if not matched:
            continue
        if match_mode == "all" and len(matched) < len(wanted_set):
            continue
        category = next((a.tag for a in assigned if a.tag_type == TagType.CATEGORY), None)
        components.append(TaggedEntity(entity=entity, category=category, matched_tags=matched))
    components.sort(key=lambda c: (c.entity.canonical_name, c.entity.id))

    by_type: dict[str, set[str]] = {}
    for c in components:
        for a in snapshot.tags_for(c.entity.id):
            by_type.setdefault(a.tag_type.value, set()).add(a.tag)

    get_logger(__name__).info(
        "tags.searched",
        tags=len(wanted_set),
        match_mode=match_mode,
        matches=len(components),
        latency_ms=sw.elapsed_ms(),
    )
    return TagSearchResult(
        tags=wanted,
        tag_type=kind,
        match_mode=match_mode,
        components=components,
        tags_in_results={k: sorted(v) for k, v in sorted(by_type.items())},
        entities_considered=len(snapshot),
    )


def available_tags(
    snapshot: CatalogSnapshot, tag_type: str | TagType | None = None
) -> dict[str, Any]:
    """Every tag grouped by type, with how many components carry it."""
    kind = _parse_tag_type(tag_type)
    counts: dict[tuple[str, str], set[int]] = {}
    for a in snapshot.all_tags():
        if kind is not None and a.tag_type != kind:
            continue
        counts.setdefault((a.tag_type.value, a.tag), set()).add(a.entity_id)

    grouped: dict[str, list[dict[str, Any]]] = {}
    for (group, tag), ids in sorted(counts.items()):
        grouped.setdefault(group, []).append({"tag": tag, "component_count": len(ids)})
    return {"tags": grouped, "total_tags": len(counts)}
