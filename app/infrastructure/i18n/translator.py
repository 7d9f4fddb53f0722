"""Key resolution against the active and default catalogs.

Fallback chain: active catalog -> default catalog -> the key itself.
Resolution is synchronous and total: it never raises.
"""

from typing import Any

from infrastructure.i18n.models import TranslationCatalog, TranslationKey
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def coerce_key(key: Any) -> str:
    """Return key as a string, logging when it was not a non-empty string."""
    if isinstance(key, str) and key:
        return key
    logger.warning("invalid_translation_key", key=repr(key))
    return str(key)


def resolve_key(
    key: Any,
    active_catalog: TranslationCatalog,
    default_catalog: TranslationCatalog,
    active_is_default: bool,
) -> str:
    """Resolve a dotted key to a display string.

    Args:
        key: Dotted key such as "hero.title". Non-strings and the empty
            string are coerced with ``str()`` and looked up as-is.
        active_catalog: Catalog of the active locale.
        default_catalog: Catalog of the default locale.
        active_is_default: Whether the active locale is the default one.
            The default catalog is only consulted when it is not.

    Returns:
        The first non-blank string found along the fallback chain, or the
        (coerced) key when every source misses.
    """
    key_string = coerce_key(key)
    translation_key = TranslationKey.from_string(key_string)

    message = active_catalog.get_message(translation_key)
    if message is not None:
        return message

    if not active_is_default:
        message = default_catalog.get_message(translation_key)
        if message is not None:
            logger.info(
                "used_fallback_translation",
                key=key_string,
                requested_locale=active_catalog.locale,
                fallback_locale=default_catalog.locale,
            )
            return message

    logger.warning(
        "translation_not_found",
        key=key_string,
        locale=active_catalog.locale,
    )
    return key_string
