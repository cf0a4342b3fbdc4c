"""Similarity, tag discovery and conflict analysis."""

from compgraph.analysis.conflicts import (
    CONFLICT_RULES,
    ConflictEntry,
    ConflictReport,
    ConflictRule,
    check_conflicts,
)
from compgraph.analysis.similarity import (
    SimilarEntity,
    SimilarityResult,
    find_similar,
    similarity_score,
)
from compgraph.analysis.tags import TagSearchResult, TaggedEntity, available_tags, find_by_tag

__all__ = [
    "CONFLICT_RULES",
    "ConflictEntry",
    "ConflictReport",
    "ConflictRule",
    "SimilarEntity",
    "SimilarityResult",
    "TagSearchResult",
    "TaggedEntity",
    "available_tags",
    "check_conflicts",
    "find_by_tag",
    "find_similar",
    "similarity_score",
]
