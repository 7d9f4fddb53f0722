"""Translation engine configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.infrastructure import I18nSettings


class Settings(BaseSettings):
    """Application configuration settings - main aggregator.

    Aggregates the domain-specific settings into a single configuration object.

    Environment Variables:
        PREFIX: Environment prefix; empty means production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from infrastructure.configuration import settings

        if settings.i18n.cache_catalogs:
            ...

        if settings.is_production:
            ...
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    # Infrastructure settings
    i18n: I18nSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "i18n": I18nSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
