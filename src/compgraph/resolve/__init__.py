"""Entity resolution: typo-tolerant lookup of catalog components."""

from compgraph.resolve.fuzzy import ACCEPT_FLOOR, SUGGEST_FLOOR, fuzzy_score, levenshtein
from compgraph.resolve.resolver import (
    EntityResolver,
    Resolution,
    SearchHit,
    Suggestion,
    normalize_name,
)

__all__ = [
    "ACCEPT_FLOOR",
    "SUGGEST_FLOOR",
    "EntityResolver",
    "Resolution",
    "SearchHit",
    "Suggestion",
    "fuzzy_score",
    "levenshtein",
    "normalize_name",
]
