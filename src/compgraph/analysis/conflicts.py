"""Conflict checking for a set of components used together.

Three signals feed one report:
- a fixed table of known problem combinations (multisets of names)
- explicit `conflicts` relationships mined between the given components
- volume heuristics on complex and script-requiring components

Only `error` severity counts as a conflict; everything else is a warning.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from compgraph.core.catalog import CatalogSnapshot
from compgraph.core.errors import InvalidArgument
from compgraph.core.models import Complexity, Entity, RelationType
from compgraph.observability import get_logger, timed
from compgraph.relationships import RelationshipExtractor
from compgraph.resolve import EntityResolver
from compgraph.settings import CatalogSettings, get_settings


@dataclass(frozen=True)
class ConflictRule:
    components: tuple[str, ...]
    severity: str
    message: str
    fix: str

    def matches(self, present: Counter[str]) -> bool:
        needed = Counter(c.lower() for c in self.components)
        return all(present[name] >= n for name, n in needed.items())


CONFLICT_RULES: tuple[ConflictRule, ...] = (
    ConflictRule(
        components=("modal", "message"),
        severity="warning",
        message="Using modals and messages together may cause z-index conflicts",
        fix="Ensure modal z-index (1050) is higher than message z-index (1000)",
    ),
    ConflictRule(
        components=("accordion", "tabs"),
        severity="warning",
        message="Nesting accordions inside tabs can cause accessibility issues",
        fix="Keep interactive components at the same nesting level",
    ),
    ConflictRule(
        components=("file-upload", "file-upload"),
        severity="warning",
        message="Multiple file upload components may confuse users",
        fix="Consider using a single file upload with multiple file support",
    ),
    ConflictRule(
        components=("search-form", "site-header"),
        severity="info",
        message="Search form is often integrated into site header",
        fix="Use the search form variation designed for headers",
    ),
)


@dataclass
class ConflictEntry:
    components: list[str]
    severity: str
    message: str
    fix: str
    source: str = "rule"

    def to_dict(self) -> dict[str, Any]:
        return {
            "components": self.components,
            "severity": self.severity,
            "message": self.message,
            "fix": self.fix,
            "source": self.source,
        }


@dataclass
class ConflictReport:
    components_checked: list[str]
    conflicts: list[ConflictEntry] = field(default_factory=list)
    warnings: list[ConflictEntry] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    entities_considered: int = 0
    edges_considered: int = 0

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def add(self, entry: ConflictEntry) -> None:
        if entry.severity == "error":
            self.conflicts.append(entry)
        else:
            self.warnings.append(entry)

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_conflicts": self.has_conflicts,
            "conflicts": [c.to_dict() for c in self.conflicts],
            "warnings": [w.to_dict() for w in self.warnings],
            "components_checked": self.components_checked,
            "unresolved": self.unresolved,
            "total_conflicts": len(self.conflicts),
            "total_warnings": len(self.warnings),
            "entities_considered": self.entities_considered,
            "edges_considered": self.edges_considered,
        }


def check_conflicts(
    snapshot: CatalogSnapshot,
    identifiers: Sequence[str | int],
    settings: CatalogSettings | None = None,
    rules: Sequence[ConflictRule] = CONFLICT_RULES,
) -> ConflictReport:
    """Evaluate the rule table, explicit conflicts and volume heuristics.

    Identifiers that do not resolve are listed under `unresolved` and
    otherwise ignored. An empty list yields a clean report.
    """
    sw = timed()
    settings = settings or get_settings()
    resolver = EntityResolver(snapshot, settings)

    resolved: list[Entity] = []
    report = ConflictReport(components_checked=[], entities_considered=len(snapshot))
    for identifier in identifiers:
        try:
            result = resolver.resolve(identifier)
        except InvalidArgument:
            report.unresolved.append(str(identifier))
            continue
        if result.entity is None:
            report.unresolved.append(result.query)
            continue
        resolved.append(result.entity)
    report.components_checked = [e.canonical_name for e in resolved]

    present = Counter(e.canonical_name.lower() for e in resolved)
    for rule in rules:
        if rule.matches(present):
            report.add(
                ConflictEntry(
                    components=list(rule.components),
                    severity=rule.severity,
                    message=rule.message,
                    fix=rule.fix,
                )
            )

    unique = list({e.id: e for e in resolved}.values())
    if len(unique) > 1:
        edges = RelationshipExtractor(snapshot, settings).extract_all(
            unique, candidates=unique, types={RelationType.CONFLICTS}
        )
        report.edges_considered = len(edges)
        for edge in edges:
            source = snapshot.require(edge.source_id)
            target = snapshot.require(edge.target_id)
            report.add(
                ConflictEntry(
                    components=[source.canonical_name, target.canonical_name],
                    severity="error",
                    message=(
                        f"{source.display_title} is documented as conflicting "
                        f"with {target.display_title}"
                    ),
                    fix="Review component documentation for alternative approaches",
                    source="relationship",
                )
            )

    complex_count = sum(1 for e in resolved if e.complexity == Complexity.COMPLEX)
    if complex_count > settings.complex_threshold:
        report.add(
            ConflictEntry(
                components=[e.canonical_name for e in resolved if e.complexity == Complexity.COMPLEX],
                severity="warning",
                message=f"{complex_count} complex components on one page may hurt usability",
                fix="Split the page or replace some components with simpler ones",
                source="volume",
            )
        )
    script_count = sum(1 for e in resolved if e.requires_script)
    if script_count > settings.script_threshold:
        report.add(
            ConflictEntry(
                components=[e.canonical_name for e in resolved if e.requires_script],
                severity="warning",
                message=f"{script_count} script-driven components may slow page initialization",
                fix="Defer initialization of components below the fold",
                source="volume",
            )
        )

    get_logger(__name__).info(
        "conflicts.checked",
        components=len(resolved),
        unresolved=len(report.unresolved),
        conflicts=len(report.conflicts),
        warnings=len(report.warnings),
        latency_ms=sw.elapsed_ms(),
    )
    return report
