"""Locale detection for choosing the initial locale of a session.

Resolution order, first match wins:
1. Persisted preference (if well-formed and supported)
2. Environment locale signal (first two characters)
3. Default locale
"""

import os
from typing import Callable, Iterable, Mapping, Optional, Sequence, Union

from infrastructure.i18n.models import is_supported_locale
from infrastructure.logging import get_module_logger

logger = get_module_logger()

EnvironmentSignal = Union[str, Callable[[], Optional[str]], None]

DEFAULT_LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE")


def read_environment_locale(
    env_vars: Sequence[str] = DEFAULT_LOCALE_ENV_VARS,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Read the locale signal from the process environment.

    Returns the first non-empty value among env_vars, normalised from POSIX
    form ("es_MX.UTF-8") to a BCP-47-like tag ("es-MX"). The "C" and
    "POSIX" locales carry no language and are skipped.
    """
    source = os.environ if environ is None else environ
    for name in env_vars:
        raw = (source.get(name) or "").strip()
        if not raw:
            continue
        # LANGUAGE may hold a colon-separated priority list
        raw = raw.split(":", 1)[0]
        raw = raw.split(".", 1)[0].split("@", 1)[0].replace("_", "-")
        if raw.upper() in ("C", "POSIX") or not raw:
            continue
        return raw
    return None


def _read_signal(environment_signal: EnvironmentSignal) -> Optional[str]:
    try:
        value = environment_signal() if callable(environment_signal) else environment_signal
    except Exception as e:  # pylint: disable=broad-except
        logger.warning("environment_locale_read_failed", error=str(e))
        return None
    if not isinstance(value, str):
        return None
    return value


def detect_initial_locale(
    stored_preference: Optional[str],
    environment_signal: EnvironmentSignal,
    supported_locales: Iterable[str],
    default_locale: str,
) -> str:
    """Derive the initial locale for a session.

    Args:
        stored_preference: Persisted locale code, if any (untrusted).
        environment_signal: Locale tag such as "es-ES", or a zero-argument
            callable producing one. Failures while reading it are ignored.
        supported_locales: Closed set of served locale codes.
        default_locale: Locale used when nothing else matches.

    Returns:
        A supported locale code.
    """
    supported = frozenset(supported_locales)

    if stored_preference is not None and is_supported_locale(stored_preference, supported):
        logger.debug("locale_detected", locale=stored_preference, source="preference")
        return stored_preference

    signal = _read_signal(environment_signal)
    if signal:
        prefix = signal[:2].lower()
        if prefix in supported:
            logger.debug("locale_detected", locale=prefix, source="environment")
            return prefix

    logger.debug("locale_detected", locale=default_locale, source="default")
    return default_locale


class LocaleDetector:
    """Detects the initial locale against a fixed supported set.

    Attributes:
        supported_locales: Closed set of served locale codes.
        default_locale: Fallback locale when no source matches.
    """

    def __init__(self, supported_locales: Iterable[str], default_locale: str):
        self.supported_locales = frozenset(supported_locales)
        self.default_locale = default_locale

    def is_supported(self, code: object) -> bool:
        return is_supported_locale(code, self.supported_locales)

    def detect_initial(
        self,
        stored_preference: Optional[str],
        environment_signal: EnvironmentSignal,
    ) -> str:
        return detect_initial_locale(
            stored_preference,
            environment_signal,
            self.supported_locales,
            self.default_locale,
        )
