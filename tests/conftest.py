"""Shared fixtures: a small component catalog with known relationships.

Relationships mined from the fixture (source -> target):
    accordion -> icon      requires     (guidance "Requires icon ...")
    accordion -> button    uses         (sample class ecl-button)
    tabs      -> accordion alternative  (guidance "... instead of ...")
    modal     -> button    contains     (guidance "Modal contains a button ...")
    carousel  -> tabs      conflicts    (guidance "Incompatible with tabs ...")
"""

from __future__ import annotations

import pytest

from compgraph import projectors
from compgraph.core import (
    CatalogSnapshot,
    Complexity,
    Entity,
    InMemoryCatalog,
    TagAssignment,
    TagType,
)
from compgraph.settings import CatalogSettings, reset_settings

CATEGORY = TagType.CATEGORY
FEATURE = TagType.FEATURE
INTERACTION = TagType.INTERACTION


def make_catalog() -> InMemoryCatalog:
    catalog = InMemoryCatalog(
        entities=[
            Entity(1, "button", "Button", Complexity.SIMPLE),
            Entity(2, "icon", "Icon", Complexity.SIMPLE),
            Entity(3, "accordion", "Accordion", Complexity.MODERATE, requires_script=True),
            Entity(4, "tabs", "Tabs", Complexity.MODERATE, requires_script=True),
            Entity(5, "modal", "Modal", Complexity.COMPLEX, requires_script=True),
            Entity(6, "message", "Message", Complexity.MODERATE),
            Entity(7, "carousel", "Carousel", Complexity.COMPLEX, requires_script=True),
            Entity(8, "card", "Card", Complexity.SIMPLE),
        ],
        tags=[
            TagAssignment(1, "form", CATEGORY),
            TagAssignment(1, "clickable", FEATURE),
            TagAssignment(1, "click", INTERACTION),
            TagAssignment(2, "media", CATEGORY),
            TagAssignment(2, "decorative", FEATURE),
            TagAssignment(3, "navigation", CATEGORY),
            TagAssignment(3, "collapsible", FEATURE),
            TagAssignment(3, "expandable", FEATURE),
            TagAssignment(3, "click", INTERACTION),
            TagAssignment(4, "navigation", CATEGORY),
            TagAssignment(4, "collapsible", FEATURE),
            TagAssignment(4, "expandable", FEATURE),
            TagAssignment(4, "keyboard", INTERACTION),
            TagAssignment(5, "overlay", CATEGORY),
            TagAssignment(5, "dialog", FEATURE),
            TagAssignment(6, "feedback", CATEGORY),
            TagAssignment(6, "notification", FEATURE),
            TagAssignment(7, "media", CATEGORY),
            TagAssignment(7, "click", INTERACTION),
        ],
    )
    catalog.add_guidance(3, "Requires icon for the toggle indicator.")
    catalog.add_sample(3, '<div class="ecl-accordion"><button class="ecl-button">Open</button></div>')
    catalog.add_guidance(4, "Use accordion instead of tabs on small screens.")
    catalog.add_guidance(5, "Modal contains a button to close it.")
    catalog.add_guidance(7, "Incompatible with tabs in the same region.")
    return catalog


@pytest.fixture(autouse=True)
def _reset_state():
    """Reset settings singleton and projector registry between tests."""
    reset_settings()
    projectors.reset()
    yield
    reset_settings()
    projectors.reset()


@pytest.fixture()
def catalog() -> InMemoryCatalog:
    return make_catalog()


@pytest.fixture()
def snapshot(catalog) -> CatalogSnapshot:
    return CatalogSnapshot.from_source(catalog)


@pytest.fixture()
def settings() -> CatalogSettings:
    return CatalogSettings()


def snapshot_of(*entities: Entity, guidance=(), samples=(), tags=()) -> CatalogSnapshot:
    """Build a snapshot inline: guidance/samples are (entity_id, text) pairs."""
    catalog = InMemoryCatalog(entities=entities, tags=tags)
    for entity_id, text in guidance:
        catalog.add_guidance(entity_id, text)
    for entity_id, text in samples:
        catalog.add_sample(entity_id, text)
    return CatalogSnapshot.from_source(catalog)


@pytest.fixture()
def make_snapshot():
    return snapshot_of
