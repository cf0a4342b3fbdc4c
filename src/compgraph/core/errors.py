"""Error kinds raised by the catalog core.

Every error carries a machine-readable kind, a message and a context dict,
so callers (CLI, service layer) can render a structured result instead of
a bare traceback.
"""

from __future__ import annotations

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog query errors."""

    kind = "catalog_error"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "context": self.context}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, context={self.context!r})"


class NotFound(CatalogError, LookupError):
    """An entity cannot be resolved, or a requested graph has no members."""

    kind = "not_found"


class InvalidArgument(CatalogError, ValueError):
    """Empty required list, malformed filter, unknown format, bad depth."""

    kind = "invalid_argument"


class UpstreamReadFailure(CatalogError):
    """The storage collaborator failed to read. Not retried here."""

    kind = "upstream_read_failure"
