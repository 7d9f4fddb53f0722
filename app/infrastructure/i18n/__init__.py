"""i18n system - translation resolution engine.

Resolves dotted content keys to localized strings for a small, fixed set
of locales, degrading to the default locale and finally to the raw key.

Main components:
- models: locale code checks, TranslationKey, TranslationCatalog, EngineState, EngineStatus
- store: PreferenceStore implementations for the persisted locale
- resolvers: LocaleDetector and environment locale reading
- loader: YAMLTranslationLoader and the fail-soft CatalogLoader
- translator: resolve_key fallback chain
- engine: TranslationEngine state machine and public API
"""

from infrastructure.i18n.engine import TranslationEngine
from infrastructure.i18n.exceptions import (
    CatalogLoadFailure,
    CatalogShapeInvalid,
    InvalidLocaleFormat,
    LocaleNotSupported,
    StorageReadFailure,
    StorageWriteFailure,
    TranslationError,
)
from infrastructure.i18n.factory import create_catalog_loader, create_engine
from infrastructure.i18n.loader import CatalogLoader, YAMLTranslationLoader
from infrastructure.i18n.models import (
    CatalogLoadResult,
    EngineState,
    EngineStatus,
    TranslationCatalog,
    TranslationKey,
)
from infrastructure.i18n.resolvers import (
    LocaleDetector,
    detect_initial_locale,
    read_environment_locale,
)
from infrastructure.i18n.store import (
    InMemoryPreferenceStore,
    JSONFilePreferenceStore,
    PreferenceStore,
)
from infrastructure.i18n.translator import resolve_key

__all__ = [
    "TranslationKey",
    "TranslationCatalog",
    "CatalogLoadResult",
    "EngineState",
    "EngineStatus",
    "TranslationError",
    "InvalidLocaleFormat",
    "LocaleNotSupported",
    "CatalogLoadFailure",
    "CatalogShapeInvalid",
    "StorageReadFailure",
    "StorageWriteFailure",
    "PreferenceStore",
    "InMemoryPreferenceStore",
    "JSONFilePreferenceStore",
    "LocaleDetector",
    "detect_initial_locale",
    "read_environment_locale",
    "CatalogLoader",
    "YAMLTranslationLoader",
    "resolve_key",
    "TranslationEngine",
    "create_catalog_loader",
    "create_engine",
]
