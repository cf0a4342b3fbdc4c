"""Implicit relationship mining from guidance text and code samples.

These are deterministic, substring-level heuristics, not a parser.
A name mentioned by accident becomes a (low-weight) edge; a relationship
described without a trigger phrase is missed. Both are accepted; the
weight is how downstream consumers tell strong signals from weak ones.

Rules, per source entity:
1. Guidance text mentioning another entity's canonical name → one edge,
   typed by the first trigger family present in the text.
2. Code samples containing <class_prefix><name> → a `uses` edge, only
   if no edge to that target exists yet.
3. First edge to a target fixes its type. Later mentions of the same
   type keep the higher weight; other types are dropped.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable

from compgraph.core.catalog import CatalogSnapshot
from compgraph.core.models import Entity, Provenance, RelationshipEdge, RelationType
from compgraph.observability import get_logger
from compgraph.settings import CatalogSettings, get_settings

# ---------------------------------------------------------------------------
# Text → RelationType classification
# ---------------------------------------------------------------------------

# Checked in order; the first family with a phrase in the text wins.
_TYPE_TRIGGERS: tuple[tuple[RelationType, tuple[str, ...]], ...] = (
    (RelationType.REQUIRES, ("requires", "must use")),
    (RelationType.SUGGESTS, ("recommended", "suggested", "works well with")),
    (RelationType.CONTAINS, ("contains", "includes")),
    (RelationType.ALTERNATIVE, ("alternative", "instead of")),
    (RelationType.CONFLICTS, ("conflicts with", "incompatible with")),
)

# ---------------------------------------------------------------------------
# Text → edge weight
# ---------------------------------------------------------------------------

BASE_WEIGHT = 0.3
CODE_USAGE_WEIGHT = 0.5

# "<phrase><name>" boosts, summed and capped at 1.0
_WEIGHT_BOOSTS: tuple[tuple[str, float], ...] = (
    # Strong
    ("requires ", 0.5),
    ("must use ", 0.5),
    ("depends on ", 0.4),
    # Medium
    ("recommended with ", 0.3),
    ("works well with ", 0.3),
    # Weak
    ("can use ", 0.2),
    ("optional ", 0.1),
)


def classify_relation(text: str) -> RelationType:
    """Pick the relationship type signalled by trigger phrases in text.

    Text is expected lowercased. No trigger → RELATED.
    """
    for relation, phrases in _TYPE_TRIGGERS:
        if any(p in text for p in phrases):
            return relation
    return RelationType.RELATED


def edge_weight(text: str, name: str) -> float:
    """Confidence in [0, 1] that text describes a real link to name."""
    weight = BASE_WEIGHT
    for phrase, boost in _WEIGHT_BOOSTS:
        if phrase + name in text:
            weight += boost
    return round(min(weight, 1.0), 2)


def usage_marker(name: str, class_prefix: str) -> str:
    """The class name a code sample uses to embed a component."""
    return f"{class_prefix}{name.lower()}"


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------


class RelationshipExtractor:
    """Derives RelationshipEdges from one snapshot's free text."""

    def __init__(
        self, snapshot: CatalogSnapshot, settings: CatalogSettings | None = None
    ) -> None:
        self._snapshot = snapshot
        self._settings = settings or get_settings()

    def extract(
        self,
        source: Entity,
        candidates: Iterable[Entity] | None = None,
        types: Collection[RelationType] | None = None,
    ) -> list[RelationshipEdge]:
        """Edges from source to other entities.

        Args:
            source: The entity whose texts are mined.
            candidates: Possible targets. None = the whole snapshot.
            types: Keep only these types. Filtering happens after the
                first-writer rule, so a dropped type still blocks a
                weaker edge for the same target.
        """
        targets = [
            e
            for e in (self._snapshot if candidates is None else candidates)
            if e.id != source.id and e.canonical_name
        ]
        by_target: dict[int, RelationshipEdge] = {}

        for text in self._snapshot.texts_for(source.id, Provenance.GUIDANCE):
            content = text.content.lower()
            relation = classify_relation(content)
            for target in targets:
                name = target.canonical_name.lower()
                if name not in content:
                    continue
                weight = edge_weight(content, name)
                existing = by_target.get(target.id)
                if existing is None:
                    by_target[target.id] = RelationshipEdge(
                        source_id=source.id,
                        target_id=target.id,
                        type=relation,
                        weight=weight,
                    )
                elif existing.type == relation and weight > existing.weight:
                    existing.weight = weight

        for sample in self._snapshot.texts_for(source.id, Provenance.SAMPLE):
            code = sample.content.lower()
            for target in targets:
                if target.id in by_target:
                    continue
                if usage_marker(target.canonical_name, self._settings.class_prefix) in code:
                    by_target[target.id] = RelationshipEdge(
                        source_id=source.id,
                        target_id=target.id,
                        type=RelationType.USES,
                        weight=CODE_USAGE_WEIGHT,
                    )

        edges = list(by_target.values())
        if types is not None:
            allowed = set(types)
            edges = [e for e in edges if e.type in allowed]

        get_logger(__name__).debug(
            "relationships.extracted",
            source_id=source.id,
            candidates=len(targets),
            edges=len(edges),
        )
        return edges

    def extract_all(
        self,
        sources: Iterable[Entity],
        candidates: Collection[Entity] | None = None,
        types: Collection[RelationType] | None = None,
    ) -> list[RelationshipEdge]:
        """Run extract() for every source against the same candidate set."""
        pool = list(self._snapshot if candidates is None else candidates)
        edges: list[RelationshipEdge] = []
        for source in sources:
            edges.extend(self.extract(source, pool, types))
        return edges
