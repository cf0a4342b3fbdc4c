"""Catalog sources and the per-query read-only snapshot.

CatalogSource is the protocol storage adapters implement. Code against it.
CatalogSnapshot is what every query component receives: one immutable view
of entities, tags and free text, taken at query start and discarded after.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from .errors import NotFound
from .models import Entity, FreeText, Provenance, TagAssignment


@runtime_checkable
class CatalogSource(Protocol):
    """Synchronous read access to the component catalog."""

    def entities(self) -> list[Entity]: ...

    def get_entity(self, entity_id: int) -> Entity | None: ...

    def tags(self, entity_id: int | None = None) -> list[TagAssignment]: ...

    def texts(self, entity_id: int | None = None) -> list[FreeText]: ...


class InMemoryCatalog:
    """CatalogSource backed by Python lists.

    Designed for tests and for embedding the core without a database.
    Duplicate canonical names are accepted, as storage may contain them.
    """

    def __init__(
        self,
        entities: Iterable[Entity] = (),
        tags: Iterable[TagAssignment] = (),
        texts: Iterable[FreeText] = (),
    ) -> None:
        self._entities: dict[int, Entity] = {}
        self._tags: list[TagAssignment] = []
        self._texts: list[FreeText] = []
        for entity in entities:
            self.add_entity(entity)
        for tag in tags:
            self.add_tag(tag)
        for text in texts:
            self.add_text(text)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def add_entity(self, entity: Entity) -> None:
        self._entities[entity.id] = entity

    def add_tag(self, tag: TagAssignment) -> None:
        # (entity, tag) is unique; a repeat replaces the earlier row
        self._tags = [
            t for t in self._tags if not (t.entity_id == tag.entity_id and t.tag == tag.tag)
        ]
        self._tags.append(tag)

    def add_text(self, text: FreeText) -> None:
        self._texts.append(text)

    def add_guidance(self, entity_id: int, content: str) -> None:
        self.add_text(FreeText(entity_id, Provenance.GUIDANCE, content))

    def add_sample(self, entity_id: int, content: str) -> None:
        self.add_text(FreeText(entity_id, Provenance.SAMPLE, content))

    # -------------------------------------------------------------------------
    # CatalogSource
    # -------------------------------------------------------------------------

    def entities(self) -> list[Entity]:
        return list(self._entities.values())

    def get_entity(self, entity_id: int) -> Entity | None:
        return self._entities.get(entity_id)

    def tags(self, entity_id: int | None = None) -> list[TagAssignment]:
        if entity_id is None:
            return list(self._tags)
        return [t for t in self._tags if t.entity_id == entity_id]

    def texts(self, entity_id: int | None = None) -> list[FreeText]:
        if entity_id is None:
            return list(self._texts)
        return [t for t in self._texts if t.entity_id == entity_id]


class CatalogSnapshot:
    """Immutable, indexed view of a catalog for one query.

    Built once with from_source(); every component reads through it and
    none of them writes. Safe to share across threads.
    """

    def __init__(
        self,
        entities: Iterable[Entity],
        tags: Iterable[TagAssignment] = (),
        texts: Iterable[FreeText] = (),
    ) -> None:
        ordered = sorted(entities, key=lambda e: e.id)
        self._entities: tuple[Entity, ...] = tuple(ordered)
        self._by_id = MappingProxyType({e.id: e for e in ordered})

        tags_by_entity: dict[int, list[TagAssignment]] = {}
        for tag in tags:
            tags_by_entity.setdefault(tag.entity_id, []).append(tag)
        self._tags = MappingProxyType({k: tuple(v) for k, v in tags_by_entity.items()})

        texts_by_entity: dict[int, list[FreeText]] = {}
        for text in texts:
            texts_by_entity.setdefault(text.entity_id, []).append(text)
        self._texts = MappingProxyType({k: tuple(v) for k, v in texts_by_entity.items()})

    @classmethod
    def from_source(cls, source: CatalogSource) -> CatalogSnapshot:
        """Read everything once from a source.

        Storage adapters raise UpstreamReadFailure here; it is propagated.
        """
        return cls(source.entities(), source.tags(), source.texts())

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._by_id

    @property
    def entities(self) -> tuple[Entity, ...]:
        return self._entities

    def get(self, entity_id: int) -> Entity | None:
        return self._by_id.get(entity_id)

    def require(self, entity_id: int) -> Entity:
        entity = self._by_id.get(entity_id)
        if entity is None:
            raise NotFound(f"No entity with id {entity_id}", entity_id=entity_id)
        return entity

    def tags_for(self, entity_id: int) -> tuple[TagAssignment, ...]:
        return self._tags.get(entity_id, ())

    def tag_names(self, entity_id: int) -> list[str]:
        return [t.tag for t in self.tags_for(entity_id)]

    def all_tags(self) -> Iterator[TagAssignment]:
        for entity in self._entities:
            yield from self.tags_for(entity.id)

    def texts_for(
        self, entity_id: int, provenance: Provenance | None = None
    ) -> tuple[FreeText, ...]:
        texts = self._texts.get(entity_id, ())
        if provenance is None:
            return texts
        return tuple(t for t in texts if t.provenance == provenance)
