"""SqliteCatalog: read-only CatalogSource over a SQLite database.

The database is opened with a `mode=ro` URI; this adapter never writes.
Driver errors surface as UpstreamReadFailure and are not retried.

Expected tables:
    entities(id, canonical_name, display_title, complexity, requires_script)
    entity_tags(entity_id, tag, tag_type)
    guidance(entity_id, content)
    code_samples(entity_id, content)
"""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from compgraph.core.errors import UpstreamReadFailure
from compgraph.core.models import (
    Complexity,
    Entity,
    FreeText,
    Provenance,
    TagAssignment,
    TagType,
)
from compgraph.observability import get_logger

CATALOG_SCHEMA = """\
CREATE TABLE IF NOT EXISTS entities (
    id              INTEGER PRIMARY KEY,
    canonical_name  TEXT NOT NULL,
    display_title   TEXT NOT NULL DEFAULT '',
    complexity      TEXT NOT NULL DEFAULT 'moderate',
    requires_script INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS entity_tags (
    entity_id INTEGER NOT NULL REFERENCES entities(id),
    tag       TEXT NOT NULL,
    tag_type  TEXT NOT NULL DEFAULT 'feature',
    PRIMARY KEY (entity_id, tag)
);

CREATE TABLE IF NOT EXISTS guidance (
    entity_id INTEGER NOT NULL REFERENCES entities(id),
    content   TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS code_samples (
    entity_id INTEGER NOT NULL REFERENCES entities(id),
    content   TEXT NOT NULL
);
"""

_TEXT_TABLES = (("guidance", Provenance.GUIDANCE), ("code_samples", Provenance.SAMPLE))


def _complexity(value: Any) -> Complexity:
    try:
        return Complexity(str(value).lower())
    except ValueError:
        return Complexity.MODERATE


def _tag_type(value: Any) -> TagType:
    try:
        return TagType(str(value).lower())
    except ValueError:
        return TagType.FEATURE


class SqliteCatalog:
    """CatalogSource reading the four catalog tables.

    One connection per instance, shared across threads behind a lock
    (check_same_thread=False).
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._lock = threading.Lock()
        if not self._db_path.exists():
            raise UpstreamReadFailure(
                f"Catalog database not found: {self._db_path}", path=str(self._db_path)
            )
        try:
            self._conn = sqlite3.connect(
                f"{self._db_path.resolve().as_uri()}?mode=ro",
                uri=True,
                check_same_thread=False,
            )
            self._conn.execute("PRAGMA busy_timeout = 3000")
        except sqlite3.Error as exc:
            raise UpstreamReadFailure(
                f"Cannot open catalog database: {exc}", path=str(self._db_path)
            ) from exc

    @property
    def path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> SqliteCatalog:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _query(self, sql: str, params: Sequence[Any] = ()) -> list[tuple[Any, ...]]:
        try:
            with self._lock:
                return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            get_logger(__name__).error(
                "catalog.read_failed", path=str(self._db_path), error=str(exc)
            )
            raise UpstreamReadFailure(
                f"Catalog read failed: {exc}", path=str(self._db_path)
            ) from exc

    # -------------------------------------------------------------------------
    # CatalogSource
    # -------------------------------------------------------------------------

    def entities(self) -> list[Entity]:
        rows = self._query(
            "SELECT id, canonical_name, display_title, complexity, requires_script "
            "FROM entities ORDER BY id"
        )
        return [self._entity(row) for row in rows]

    def get_entity(self, entity_id: int) -> Entity | None:
        rows = self._query(
            "SELECT id, canonical_name, display_title, complexity, requires_script "
            "FROM entities WHERE id = ?",
            (entity_id,),
        )
        return self._entity(rows[0]) if rows else None

    def tags(self, entity_id: int | None = None) -> list[TagAssignment]:
        sql = "SELECT entity_id, tag, tag_type FROM entity_tags"
        params: tuple[Any, ...] = ()
        if entity_id is not None:
            sql += " WHERE entity_id = ?"
            params = (entity_id,)
        rows = self._query(sql + " ORDER BY entity_id, tag", params)
        return [TagAssignment(int(e), str(t), _tag_type(k)) for e, t, k in rows]

    def texts(self, entity_id: int | None = None) -> list[FreeText]:
        texts: list[FreeText] = []
        for table, provenance in _TEXT_TABLES:
            sql = f"SELECT entity_id, content FROM {table}"
            params: tuple[Any, ...] = ()
            if entity_id is not None:
                sql += " WHERE entity_id = ?"
                params = (entity_id,)
            rows = self._query(sql + " ORDER BY rowid", params)
            texts.extend(FreeText(int(e), provenance, c or "") for e, c in rows)
        return texts

    @staticmethod
    def _entity(row: tuple[Any, ...]) -> Entity:
        entity_id, name, title, complexity, requires_script = row
        return Entity(
            id=int(entity_id),
            canonical_name=name or "",
            display_title=title or name or "",
            complexity=_complexity(complexity),
            requires_script=bool(requires_script),
        )
