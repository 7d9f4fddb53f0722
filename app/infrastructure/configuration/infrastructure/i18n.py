"""Translation engine infrastructure settings."""

import re
from pathlib import Path
from typing import List

from pydantic import Field, field_validator, model_validator

from infrastructure.configuration.base import InfrastructureSettings

_LOCALE_CODE_PATTERN = re.compile(r"^[a-z]{2}$")


def _default_translations_dir() -> Path:
    # Catalogs ship as package data of infrastructure.i18n
    return Path(__file__).resolve().parents[2] / "i18n" / "locales"


def _default_preference_file() -> Path:
    return Path.home() / ".config" / "locale-engine" / "preferences.json"


class I18nSettings(InfrastructureSettings):
    """Locale detection, catalog and preference configuration.

    Environment Variables:
        I18N_DEFAULT_LOCALE: Locale whose catalog is complete (default: en)
        I18N_SUPPORTED_LOCALES: JSON list of served locales (default: ["en", "es"])
        I18N_TRANSLATIONS_DIR: Directory holding <domain>.<locale>.yml files
        I18N_PREFERENCE_FILE: JSON file storing the persisted locale choice
        I18N_PREFERENCE_KEY: Entry name inside the preference file (default: ui.language)
        I18N_LOCALE_ENV_VARS: JSON list of environment variables consulted,
            in order, for the environment locale signal
        I18N_CACHE_CATALOGS: Keep loaded catalogs in memory (default: True)

    Example:
        ```python
        from infrastructure.configuration import settings

        default_locale = settings.i18n.default_locale
        supported = settings.i18n.supported_locales
        ```
    """

    default_locale: str = Field(
        default="en",
        alias="I18N_DEFAULT_LOCALE",
        description="Locale used as the terminal catalog fallback",
    )
    supported_locales: List[str] = Field(
        default_factory=lambda: ["en", "es"],
        alias="I18N_SUPPORTED_LOCALES",
        description="Closed set of locales the engine serves",
    )
    translations_dir: Path = Field(
        default_factory=_default_translations_dir,
        alias="I18N_TRANSLATIONS_DIR",
        description="Directory containing YAML catalogs",
    )
    preference_file: Path = Field(
        default_factory=_default_preference_file,
        alias="I18N_PREFERENCE_FILE",
        description="JSON file backing the preference store",
    )
    preference_key: str = Field(
        default="ui.language",
        alias="I18N_PREFERENCE_KEY",
        description="Key of the persisted locale entry",
    )
    locale_env_vars: List[str] = Field(
        default_factory=lambda: ["LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE"],
        alias="I18N_LOCALE_ENV_VARS",
        description="Environment variables read for the locale signal",
    )
    cache_catalogs: bool = Field(
        default=True,
        alias="I18N_CACHE_CATALOGS",
        description="Cache successfully loaded catalogs per locale",
    )

    @field_validator("supported_locales", mode="after")
    @classmethod
    def validate_supported_locales(cls, v: List[str]) -> List[str]:
        """Ensure every supported locale is a two-letter lowercase code."""
        invalid = [code for code in v if not _LOCALE_CODE_PATTERN.match(code)]
        if invalid:
            raise ValueError(f"Invalid locale codes in supported locales: {invalid}")
        return v

    @model_validator(mode="after")
    def validate_default_locale(self) -> "I18nSettings":
        """Ensure the default locale is valid and served."""
        if not _LOCALE_CODE_PATTERN.match(self.default_locale):
            raise ValueError(f"Invalid default locale: {self.default_locale}")
        if self.default_locale not in self.supported_locales:
            raise ValueError(
                f"Default locale {self.default_locale} is not in supported locales"
            )
        return self
