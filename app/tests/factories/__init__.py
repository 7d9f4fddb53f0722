"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    FailingPreferenceStore,
    make_catalog_source,
    make_catalog_sources,
    make_engine_state,
    make_translation_catalog,
)

__all__ = [
    "FailingPreferenceStore",
    "make_catalog_source",
    "make_catalog_sources",
    "make_engine_state",
    "make_translation_catalog",
]
