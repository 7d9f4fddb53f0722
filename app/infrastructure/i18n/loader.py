"""Catalog loading: YAML-backed sources and the fail-soft catalog loader.

Catalog sources are registered per locale at construction time. The
``CatalogLoader`` wraps that registry and never raises: unsupported or
broken locales fall back to the default catalog, and a broken default
catalog yields an empty, degraded result.
"""

import asyncio
import inspect
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Union

import yaml

from infrastructure.i18n.exceptions import (
    CatalogLoadFailure,
    CatalogShapeInvalid,
    InvalidLocaleFormat,
    LocaleNotSupported,
    TranslationError,
)
from infrastructure.i18n.models import (
    CatalogLoadResult,
    TranslationCatalog,
    is_valid_locale_format,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()

CatalogSource = Callable[[], Union[Awaitable[Any], Any]]


def deep_merge(target: Dict[str, Any], data: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge data into target in place, recursing into nested mappings.

    Later values override earlier ones except where both sides are mappings.
    """
    for key, value in data.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            deep_merge(existing, value)
        elif isinstance(value, Mapping):
            target[key] = deep_merge({}, value)
        else:
            target[key] = value
    return target


class YAMLTranslationLoader:
    """Reads catalog trees from YAML files.

    Expects files named ``<locale>.yml`` or ``<domain>.<locale>.yml`` in
    the translations directory. All files of a locale are merged into one
    tree, in file name order.

    Attributes:
        translations_dir: Path to directory containing YAML files.
    """

    def __init__(self, translations_dir: Path):
        self.translations_dir = Path(translations_dir)

        if not self.translations_dir.exists():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )

        logger.info(
            "initialized_yaml_loader",
            translations_dir=str(self.translations_dir),
        )

    def _files_for(self, locale: str) -> List[Path]:
        files = set(self.translations_dir.glob(f"*.{locale}.yml"))
        files.update(self.translations_dir.glob(f"{locale}.yml"))
        return sorted(files)

    def load(self, locale: str) -> Any:
        """Load the raw catalog tree for a locale.

        Args:
            locale: Locale code to load.

        Returns:
            The merged tree. When a single file is present its parsed value
            is returned as-is, so a malformed document surfaces to the caller.
            With several files, non-mapping documents are skipped.

        Raises:
            FileNotFoundError: If no YAML files exist for locale.
            ValueError: If YAML parsing fails.
            CatalogShapeInvalid: If several files exist and none is a mapping.
        """
        yaml_files = self._files_for(locale)
        if not yaml_files:
            raise FileNotFoundError(
                f"No translation files found for locale {locale} in {self.translations_dir}"
            )

        documents = []
        for yaml_file in yaml_files:
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    documents.append(yaml.safe_load(f))
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
                raise ValueError(f"Failed to parse {yaml_file}: {e}") from e

        if len(documents) == 1:
            return documents[0]

        merged: Dict[str, Any] = {}
        skipped = []
        for yaml_file, data in zip(yaml_files, documents):
            if not isinstance(data, Mapping):
                logger.warning(
                    "invalid_yaml_format", file=str(yaml_file), expected="dict"
                )
                skipped.append(type(data).__name__)
                continue
            deep_merge(merged, data)

        if len(skipped) == len(documents):
            raise CatalogShapeInvalid(locale, ", ".join(sorted(set(skipped))))
        return merged

    def available_locales(self) -> List[str]:
        """List locale codes that have at least one YAML file."""
        found = set()
        for yaml_file in self.translations_dir.glob("*.yml"):
            # "ui.es.yml" -> "es", "es.yml" -> "es"
            locale = yaml_file.stem.split(".")[-1]
            if is_valid_locale_format(locale):
                found.add(locale)
        return sorted(found)

    def source(self, locale: str) -> CatalogSource:
        """Return an async catalog source reading locale's files off-loop."""

        async def _load() -> Any:
            return await asyncio.to_thread(self.load, locale)

        return _load

    def sources(self, locales: Iterable[str]) -> Dict[str, CatalogSource]:
        """Build a catalog source registry for the given locales."""
        return {locale: self.source(locale) for locale in locales}


class CatalogLoader:
    """Fail-soft loader over an explicit ``locale -> source`` registry.

    Attributes:
        sources: Registry of catalog sources keyed by locale code.
        default_locale: Locale whose catalog is the terminal fallback.
        use_cache: Whether successful loads are kept per locale.
        cache: Loaded catalogs keyed by locale code.
    """

    def __init__(
        self,
        sources: Mapping[str, CatalogSource],
        default_locale: str,
        use_cache: bool = True,
    ):
        self.sources = dict(sources)
        self.default_locale = default_locale
        self.use_cache = use_cache
        self.cache: Dict[str, TranslationCatalog] = {}

    @property
    def supported_locales(self) -> List[str]:
        return list(self.sources.keys())

    async def load(self, code: Any) -> CatalogLoadResult:
        """Load the catalog for a locale code, falling back as needed.

        Args:
            code: Requested locale code (untrusted).

        Returns:
            CatalogLoadResult. Its catalog's ``locale`` names the locale
            actually served, which is the default locale after a fallback.
        """
        if code != self.default_locale:
            try:
                return CatalogLoadResult(catalog=await self._fetch(code))
            except TranslationError as e:
                logger.warning(
                    "catalog_fallback_to_default",
                    locale=repr(code),
                    fallback_locale=self.default_locale,
                    error=str(e),
                )

        try:
            return CatalogLoadResult(catalog=await self._fetch(self.default_locale))
        except TranslationError as e:
            logger.error(
                "default_catalog_unavailable",
                locale=self.default_locale,
                error=str(e),
            )
            return CatalogLoadResult(
                catalog=TranslationCatalog.empty(self.default_locale),
                degraded=True,
            )

    async def _fetch(self, code: Any) -> TranslationCatalog:
        if not is_valid_locale_format(code):
            raise InvalidLocaleFormat(code)

        if self.use_cache and code in self.cache:
            logger.debug("loaded_from_cache", locale=code)
            return self.cache[code]

        source: Optional[CatalogSource] = self.sources.get(code)
        if source is None:
            raise LocaleNotSupported(code)

        try:
            data = source()
            if inspect.isawaitable(data):
                data = await data
        except TranslationError:
            raise
        except Exception as e:  # pylint: disable=broad-except
            raise CatalogLoadFailure(code, str(e)) from e

        if not isinstance(data, Mapping):
            raise CatalogShapeInvalid(code, type(data).__name__)

        catalog = TranslationCatalog.from_mapping(code, data)
        logger.info(
            "loaded_translations",
            locale=code,
            namespace_count=len(catalog.messages),
        )

        if self.use_cache:
            self.cache[code] = catalog
        return catalog

    def clear_cache(self) -> None:
        """Clear all cached catalogs."""
        self.cache.clear()
        logger.info("cleared_translation_cache")
