"""Tag-based similarity between catalog components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from compgraph.core.catalog import CatalogSnapshot
from compgraph.core.errors import InvalidArgument
from compgraph.core.models import Entity
from compgraph.observability import get_logger, timed
from compgraph.resolve import EntityResolver
from compgraph.settings import CatalogSettings, get_settings


@dataclass
class SimilarEntity:
    entity: Entity
    shared_tags: list[str]
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.entity.id,
            "name": self.entity.canonical_name,
            "title": self.entity.display_title,
            "shared_tags": len(self.shared_tags),
            "shared_tag_names": self.shared_tags,
            "similarity_score": self.score,
        }


@dataclass
class SimilarityResult:
    component: Entity
    tags: list[str]
    similar: list[SimilarEntity] = field(default_factory=list)
    entities_considered: int = 0

    @property
    def no_tags(self) -> bool:
        return not self.tags

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "component": {
                "id": self.component.id,
                "name": self.component.canonical_name,
                "title": self.component.display_title,
                "tags": self.tags,
                "tag_count": len(self.tags),
            },
            "similar_components": [s.to_dict() for s in self.similar],
            "count": len(self.similar),
            "entities_considered": self.entities_considered,
        }
        if self.no_tags:
            d["no_tags"] = True
            d["message"] = "No tags found for component"
        return d


def similarity_score(shared: int, total: int) -> float:
    """Shared tags as a percentage of the source's tags, one decimal."""
    return round(shared / total * 100, 1)


def find_similar(
    snapshot: CatalogSnapshot,
    identifier: str | int,
    min_shared_tags: int | None = None,
    limit: int | None = None,
    settings: CatalogSettings | None = None,
) -> SimilarityResult:
    """Components sharing at least min_shared_tags tags with identifier.

    The source itself is never in the result. A source with no tags
    returns an empty result flagged no_tags.

    Raises NotFound if the identifier does not resolve.
    """
    sw = timed()
    settings = settings or get_settings()
    min_shared = settings.min_shared_tags if min_shared_tags is None else min_shared_tags
    limit = settings.similarity_limit if limit is None else limit
    if limit < 0:
        raise InvalidArgument("limit must not be negative", limit=limit)

    component = EntityResolver(snapshot, settings).require(identifier)
    source_tags = sorted(set(snapshot.tag_names(component.id)))
    result = SimilarityResult(
        component=component,
        tags=source_tags,
        entities_considered=len(snapshot),
    )

    if source_tags:
        wanted = set(source_tags)
        scored: list[SimilarEntity] = []
        for other in snapshot:
            if other.id == component.id:
                continue
            shared = sorted(wanted.intersection(snapshot.tag_names(other.id)))
            if len(shared) < max(min_shared, 1):
                continue
            scored.append(
                SimilarEntity(
                    entity=other,
                    shared_tags=shared,
                    score=similarity_score(len(shared), len(source_tags)),
                )
            )
        scored.sort(key=lambda s: (-len(s.shared_tags), -s.score, s.entity.canonical_name, s.entity.id))
        result.similar = scored[:limit]

    get_logger(__name__).info(
        "similarity.computed",
        component_id=component.id,
        source_tags=len(source_tags),
        matches=len(result.similar),
        latency_ms=sw.elapsed_ms(),
    )
    return result
