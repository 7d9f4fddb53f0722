"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation engine settings class (for testing)

Example:
    ```python
    from infrastructure.configuration import settings

    translations_dir = settings.i18n.translations_dir
    ```
"""

from infrastructure.configuration.infrastructure import I18nSettings
from infrastructure.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "settings"]
