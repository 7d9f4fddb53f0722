"""Translation models for the i18n engine.

Defines locale codes, dotted translation keys, catalogs, and the engine
state value that is swapped atomically on every commit.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

LOCALE_CODE_PATTERN = re.compile(r"^[a-z]{2}$")


def is_valid_locale_format(code: Any) -> bool:
    """Return True if code is a two-letter lowercase string."""
    return isinstance(code, str) and bool(LOCALE_CODE_PATTERN.match(code))


def is_supported_locale(code: Any, supported_locales: Iterable[str]) -> bool:
    """Return True if code passes the format check and is in the supported set."""
    return is_valid_locale_format(code) and code in supported_locales


class EngineStatus(str, Enum):
    """Lifecycle states of the translation engine."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    SWITCHING_LOCALE = "switching_locale"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class TranslationKey:
    """A dotted translation key split into ordered segments.

    Keys are hierarchical (e.g., "hero.title", "nav.items.about").

    Attributes:
        segments: Key path segments in traversal order.
    """

    segments: Tuple[str, ...]

    def __str__(self) -> str:
        return ".".join(self.segments)

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Create TranslationKey from a dot-separated string.

        Empty segments are kept so that malformed keys such as "a..b"
        simply miss during lookup.
        """
        return cls(segments=tuple(key_string.split(".")))


@dataclass
class TranslationCatalog:
    """Container for the translation tree of a single locale.

    Attributes:
        locale: The locale code this catalog is for.
        messages: Nested mapping of key segments to strings or sub-trees.
        loaded_at: Timestamp (ISO 8601) when the catalog was loaded.
    """

    locale: str
    messages: Dict[str, Any] = field(default_factory=dict)
    loaded_at: Optional[str] = None

    @classmethod
    def from_mapping(cls, locale: str, data: Mapping[str, Any]) -> "TranslationCatalog":
        """Build a catalog from raw loaded data, stamping the load time."""
        return cls(
            locale=locale,
            messages=dict(data),
            loaded_at=datetime.now(timezone.utc).isoformat(),
        )

    @classmethod
    def empty(cls, locale: str) -> "TranslationCatalog":
        """Create an empty catalog for a locale."""
        return cls(locale=locale)

    @property
    def is_empty(self) -> bool:
        return not self.messages

    def get_message(self, key: TranslationKey) -> Optional[str]:
        """Retrieve a usable translation by key.

        Traversal stops at the first missing segment or non-mapping node.
        Non-string leaves and blank strings count as missing.

        Args:
            key: TranslationKey to look up.

        Returns:
            The translated string verbatim, or None if not found.
        """
        node: Any = self.messages
        for segment in key.segments:
            if not isinstance(node, Mapping) or segment not in node:
                return None
            node = node[segment]

        if isinstance(node, str) and node.strip():
            return node
        return None


@dataclass(frozen=True)
class CatalogLoadResult:
    """Outcome of a fail-soft catalog load.

    Attributes:
        catalog: The catalog produced (possibly empty).
        degraded: True when even the default catalog could not be obtained.
    """

    catalog: TranslationCatalog
    degraded: bool = False


@dataclass(frozen=True)
class EngineState:
    """Snapshot of the engine, replaced as a whole on every transition.

    Attributes:
        active_locale: Locale code currently served.
        active_catalog: Catalog matching active_locale.
        default_catalog: Terminal fallback catalog.
        status: Lifecycle status.
    """

    active_locale: str
    active_catalog: TranslationCatalog
    default_catalog: TranslationCatalog
    status: EngineStatus = EngineStatus.UNINITIALIZED

    @classmethod
    def uninitialized(cls, default_locale: str) -> "EngineState":
        empty = TranslationCatalog.empty(default_locale)
        return cls(
            active_locale=default_locale,
            active_catalog=empty,
            default_catalog=empty,
            status=EngineStatus.UNINITIALIZED,
        )
