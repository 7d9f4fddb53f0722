"""Custom exceptions for the translation engine.

These are raised inside the engine's components and recovered before they
reach a public API call, where they are logged instead.
"""


class TranslationError(Exception):
    """Base exception for all translation engine errors.

    Example:
        try:
            await source()
        except TranslationError as e:
            logger.warning("translation_error", error=str(e))
    """

    pass


class InvalidLocaleFormat(TranslationError):
    """Raised when a locale code is not two lowercase letters."""

    def __init__(self, code: object):
        self.code = code
        super().__init__(f"Invalid locale code: {code!r}")


class LocaleNotSupported(TranslationError):
    """Raised when a well-formed locale code has no registered catalog."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unsupported locale: {code}")


class CatalogLoadFailure(TranslationError):
    """Raised when reading or parsing a catalog fails."""

    def __init__(self, locale: str, reason: str):
        self.locale = locale
        self.reason = reason
        super().__init__(f"Failed to load catalog for {locale}: {reason}")


class CatalogShapeInvalid(CatalogLoadFailure):
    """Raised when a loaded catalog is not a mapping."""

    def __init__(self, locale: str, actual_type: str):
        self.actual_type = actual_type
        super().__init__(locale, f"expected mapping, got {actual_type}")


class StorageReadFailure(TranslationError):
    """Raised when the preference backend cannot be read."""

    pass


class StorageWriteFailure(TranslationError):
    """Raised when the preference backend cannot be written."""

    pass
