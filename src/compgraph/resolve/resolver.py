"""Entity resolution: free text or numeric id → canonical catalog entity.

Strategy cascade (first strategy with a candidate wins):
    1. exact       - case-insensitive equality on canonical name or title
    2. normalized  - same, after stripping whitespace and hyphens
    3. plural      - query + "s", or query minus a trailing "s"
    4. prefix      - name starts with the (normalized) query
    5. substring   - name contains the (normalized) query

Several candidates from one strategy are narrowed deterministically:
shortest canonical name, then alphabetical, then lowest id. Storage is
known to hold duplicate names; that is tolerated, not an error.

When nothing matches, fuzzy scores (see fuzzy.py) produce up to N
"did you mean" suggestions. A suggestion is never a resolution.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from compgraph.core.catalog import CatalogSnapshot
from compgraph.core.errors import InvalidArgument, NotFound
from compgraph.core.models import Entity
from compgraph.observability import get_logger, timed
from compgraph.settings import CatalogSettings, get_settings

from .fuzzy import ACCEPT_FLOOR, SUGGEST_FLOOR, fuzzy_score

_ID_PATTERN = re.compile(r"^\d+$")
_SEPARATORS = re.compile(r"[\s-]+")


def normalize_name(value: str) -> str:
    """Lowercase and drop whitespace and hyphens ("File upload" → "fileupload")."""
    return _SEPARATORS.sub("", value.lower())


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise InvalidArgument("limit must not be negative", limit=limit)


def _tie_break(entity: Entity) -> tuple[int, str, str, int]:
    return (len(entity.canonical_name), entity.canonical_name.lower(), entity.canonical_name, entity.id)


@dataclass
class Suggestion:
    entity_id: int
    name: str
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.entity_id, "name": self.name, "score": self.score}


@dataclass
class Resolution:
    """Outcome of resolving one identifier."""

    query: str
    entity: Entity | None = None
    strategy: str | None = None
    candidates: int = 0
    suggestions: list[Suggestion] = field(default_factory=list)
    entities_considered: int = 0

    @property
    def found(self) -> bool:
        return self.entity is not None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "query": self.query,
            "found": self.found,
            "entity": self.entity.to_dict() if self.entity else None,
            "strategy": self.strategy,
            "candidates": self.candidates,
            "entities_considered": self.entities_considered,
        }
        if not self.found:
            d["suggestions"] = [s.to_dict() for s in self.suggestions]
        return d


@dataclass
class SearchHit:
    entity: Entity
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {**self.entity.to_dict(), "score": self.score}


class EntityResolver:
    """Resolves identifiers against one catalog snapshot."""

    def __init__(
        self, snapshot: CatalogSnapshot, settings: CatalogSettings | None = None
    ) -> None:
        self._snapshot = snapshot
        self._settings = settings or get_settings()

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self, identifier: str | int) -> Resolution:
        """Resolve one identifier. Never raises for a miss; see require()."""
        sw = timed()
        if isinstance(identifier, bool):
            raise InvalidArgument("Identifier must be a string or integer", identifier=identifier)

        if isinstance(identifier, int) or _ID_PATTERN.match(str(identifier).strip()):
            query = str(identifier).strip()
            entity = self._snapshot.get(int(query))
            result = Resolution(
                query=query,
                entity=entity,
                strategy="id" if entity else None,
                candidates=1 if entity else 0,
            )
        else:
            query = str(identifier).strip()
            if not query:
                raise InvalidArgument("Identifier must not be empty")
            result = self._resolve_name(query)
        result.entities_considered = len(self._snapshot)

        get_logger(__name__).debug(
            "resolve.completed",
            query=result.query,
            found=result.found,
            strategy=result.strategy,
            candidates=result.candidates,
            suggestions=len(result.suggestions),
            latency_ms=sw.elapsed_ms(),
        )
        return result

    def require(self, identifier: str | int) -> Entity:
        """Resolve or raise NotFound carrying the near-miss suggestions."""
        result = self.resolve(identifier)
        if result.entity is None:
            raise NotFound(
                f"Component {result.query!r} not found",
                query=result.query,
                suggestions=[s.name for s in result.suggestions],
            )
        return result.entity

    def resolve_many(self, identifiers: Iterable[str | int]) -> list[Resolution]:
        return [self.resolve(i) for i in identifiers]

    def _resolve_name(self, query: str) -> Resolution:
        q = query.lower()
        nq = normalize_name(query)
        variants = {q + "s"}
        if q.endswith("s") and len(q) > 1:
            variants.add(q[:-1])
        normalized_variants = {normalize_name(v) for v in variants}

        strategies: list[tuple[str, Callable[[str, str], bool]]] = [
            ("exact", lambda name, norm: name == q),
            ("normalized", lambda name, norm: bool(nq) and norm == nq),
            ("plural", lambda name, norm: name in variants or norm in normalized_variants),
            ("prefix", lambda name, norm: bool(nq) and norm.startswith(nq)),
            ("substring", lambda name, norm: bool(nq) and nq in norm),
        ]

        for strategy, matches in strategies:
            candidates = [e for e in self._snapshot if self._matches(e, matches)]
            if candidates:
                best = min(candidates, key=_tie_break)
                return Resolution(
                    query=query,
                    entity=best,
                    strategy=strategy,
                    candidates=len(candidates),
                )

        return Resolution(query=query, suggestions=self.suggest(query))

    @staticmethod
    def _matches(entity: Entity, predicate: Callable[[str, str], bool]) -> bool:
        for name in (entity.canonical_name, entity.display_title):
            if name and predicate(name.lower(), normalize_name(name)):
                return True
        return False

    # -------------------------------------------------------------------------
    # Fuzzy scoring
    # -------------------------------------------------------------------------

    def score(self, query: str, entity: Entity) -> int:
        """Best fuzzy score over canonical name and display title."""
        return max(
            fuzzy_score(query, entity.canonical_name),
            fuzzy_score(query, entity.display_title) if entity.display_title else 0,
        )

    def suggest(self, query: str, limit: int | None = None) -> list[Suggestion]:
        """Near-miss names for a query that resolved to nothing."""
        limit = self._settings.suggestion_limit if limit is None else limit
        _check_limit(limit)
        scored = [
            Suggestion(entity_id=e.id, name=e.canonical_name, score=self.score(query, e))
            for e in self._snapshot
        ]
        scored = [s for s in scored if s.score >= SUGGEST_FLOOR]
        scored.sort(key=lambda s: (-s.score, s.name, s.entity_id))

        seen: set[str] = set()
        suggestions: list[Suggestion] = []
        for s in scored:
            if s.name in seen:
                continue
            seen.add(s.name)
            suggestions.append(s)
            if len(suggestions) >= limit:
                break
        return suggestions

    def search(self, query: str, limit: int | None = None) -> list[SearchHit]:
        """Ranked fuzzy search over all entities (score >= ACCEPT_FLOOR)."""
        query = query.strip()
        if not query:
            raise InvalidArgument("Search query must not be empty")
        limit = self._settings.search_limit if limit is None else limit
        _check_limit(limit)
        hits = [SearchHit(entity=e, score=self.score(query, e)) for e in self._snapshot]
        hits = [h for h in hits if h.score >= ACCEPT_FLOOR]
        hits.sort(key=lambda h: (-h.score, h.entity.canonical_name, h.entity.id))
        return hits[:limit]
