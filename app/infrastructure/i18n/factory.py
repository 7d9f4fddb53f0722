"""Factory functions for creating i18n components.

Wires settings, YAML catalogs, the preference file, and the environment
locale signal into a ready-to-start ``TranslationEngine``.
"""

from typing import Dict, Optional

from infrastructure.configuration import I18nSettings, settings
from infrastructure.i18n.engine import TranslationEngine
from infrastructure.i18n.loader import CatalogLoader, CatalogSource, YAMLTranslationLoader
from infrastructure.i18n.resolvers import (
    EnvironmentSignal,
    LocaleDetector,
    read_environment_locale,
)
from infrastructure.i18n.store import JSONFilePreferenceStore, PreferenceStore
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def create_catalog_loader(i18n_settings: Optional[I18nSettings] = None) -> CatalogLoader:
    """Create a CatalogLoader over the configured YAML translations directory.

    A missing translations directory is logged and produces an empty
    registry, so an engine built on it starts in the DEGRADED state
    instead of failing.
    """
    config = i18n_settings or settings.i18n

    sources: Dict[str, CatalogSource] = {}
    try:
        yaml_loader = YAMLTranslationLoader(config.translations_dir)
    except ValueError as e:
        logger.error(
            "translations_dir_missing",
            translations_dir=str(config.translations_dir),
            error=str(e),
        )
    else:
        available = set(yaml_loader.available_locales())
        missing = [code for code in config.supported_locales if code not in available]
        if missing:
            logger.warning(
                "catalog_files_missing",
                locales=missing,
                translations_dir=str(config.translations_dir),
            )
        sources = yaml_loader.sources(config.supported_locales)

    return CatalogLoader(
        sources,
        default_locale=config.default_locale,
        use_cache=config.cache_catalogs,
    )


def create_engine(
    i18n_settings: Optional[I18nSettings] = None,
    store: Optional[PreferenceStore] = None,
    environment_signal: EnvironmentSignal = None,
) -> TranslationEngine:
    """Create and configure a TranslationEngine instance.

    The engine is returned unstarted; call ``await engine.start()``.

    Args:
        i18n_settings: Settings section to use (default: settings.i18n).
        store: Preference store (default: JSON file from settings).
        environment_signal: Locale tag or callable (default: read from the
            configured environment variables at start time).

    Returns:
        TranslationEngine: Configured engine instance

    Usage:
        engine = create_engine()
        await engine.start()
        engine.translate("nav.about")
    """
    config = i18n_settings or settings.i18n

    if store is None:
        store = JSONFilePreferenceStore(config.preference_file, key=config.preference_key)

    if environment_signal is None:
        env_vars = tuple(config.locale_env_vars)

        def environment_signal() -> Optional[str]:
            return read_environment_locale(env_vars)

    engine = TranslationEngine(
        loader=create_catalog_loader(config),
        store=store,
        detector=LocaleDetector(config.supported_locales, config.default_locale),
        environment_signal=environment_signal,
    )
    logger.info(
        "translation_engine_created",
        default_locale=config.default_locale,
        supported_locales=list(config.supported_locales),
    )
    return engine
