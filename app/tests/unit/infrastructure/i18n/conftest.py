"""Feature-level fixtures for i18n system tests.

Provides catalogs, preference stores, and engine builders for locale
detection and translation scenarios.
"""

import pytest
import yaml

from infrastructure.i18n import (
    CatalogLoader,
    InMemoryPreferenceStore,
    LocaleDetector,
    TranslationEngine,
)
from tests.factories.i18n import FailingPreferenceStore, make_catalog_sources


@pytest.fixture
def en_messages():
    """Complete default-locale catalog."""
    return {
        "nav": {
            "about": "About",
            "contact": "Contact",
        },
        "hero": {
            "title": "Full Stack Developer",
            "years": 5,
        },
        "about": {
            "heading": "About",
            "highlight": "Me",
        },
        "blank": "   ",
    }


@pytest.fixture
def es_messages():
    """Partial Spanish catalog."""
    return {
        "nav": {
            "about": "Acerca de",
        },
        "hero": {
            "title": "Desarrollador Full Stack",
        },
        "about": {
            "heading": "",
            "highlight": "Mí",
        },
    }


@pytest.fixture
def catalog_data(en_messages, es_messages):
    """Raw catalogs keyed by locale code."""
    return {"en": en_messages, "es": es_messages}


@pytest.fixture
def catalog_loader(catalog_data):
    """CatalogLoader over in-memory sources with caching enabled."""
    return CatalogLoader(make_catalog_sources(catalog_data), default_locale="en")


@pytest.fixture
def memory_store():
    """Empty in-memory preference store."""
    return InMemoryPreferenceStore()


@pytest.fixture
def failing_store():
    """Preference store failing on read, write and clear."""
    return FailingPreferenceStore()


@pytest.fixture
def make_engine(catalog_data):
    """Build TranslationEngine instances around in-memory collaborators."""

    def _make(
        catalogs=None,
        sources=None,
        store=None,
        environment_signal=None,
        default_locale="en",
        supported_locales=None,
        use_cache=True,
    ):
        if sources is None:
            sources = make_catalog_sources(
                catalog_data if catalogs is None else catalogs
            )
        loader = CatalogLoader(sources, default_locale=default_locale, use_cache=use_cache)
        detector = LocaleDetector(
            supported_locales or (list(sources) or [default_locale]),
            default_locale,
        )
        return TranslationEngine(
            loader=loader,
            store=store if store is not None else InMemoryPreferenceStore(),
            detector=detector,
            environment_signal=environment_signal,
        )

    return _make


@pytest.fixture
def temp_translations_dir(tmp_path, en_messages, es_messages):
    """Create temporary directory with sample YAML translation files.

    Returns a directory structure like:
    - ui.en.yml
    - ui.es.yml
    - footer.en.yml
    """
    with open(tmp_path / "ui.en.yml", "w", encoding="utf-8") as f:
        yaml.dump(en_messages, f, allow_unicode=True)

    with open(tmp_path / "ui.es.yml", "w", encoding="utf-8") as f:
        yaml.dump(es_messages, f, allow_unicode=True)

    footer_en = {
        "footer": {"copyright": "All rights reserved"},
        "nav": {"projects": "Projects"},
    }
    with open(tmp_path / "footer.en.yml", "w", encoding="utf-8") as f:
        yaml.dump(footer_en, f)

    return tmp_path
