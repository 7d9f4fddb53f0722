"""Translation engine: the state machine consumers talk to.

The engine holds one immutable ``EngineState`` and replaces it with a single
assignment on every transition, so a synchronous ``translate`` call always
sees a matching ``(active_locale, active_catalog)`` pair.

Concurrent ``change_locale`` calls are not serialized. Each one commits when
its own load finishes, so the load that completes last decides the final
locale regardless of call order. The status stays ``SWITCHING_LOCALE`` until
every in-flight switch has finished.
"""

import dataclasses
from typing import Any, Callable, List

from infrastructure.i18n.loader import CatalogLoader
from infrastructure.i18n.models import (
    EngineState,
    EngineStatus,
    TranslationCatalog,
    is_valid_locale_format,
)
from infrastructure.i18n.resolvers import EnvironmentSignal, LocaleDetector
from infrastructure.i18n.store import PreferenceStore
from infrastructure.i18n.translator import coerce_key, resolve_key
from infrastructure.logging import get_module_logger

logger = get_module_logger()

LocaleCallback = Callable[[str], None]


class TranslationEngine:
    """Resolves keys for the active locale and manages locale changes.

    Every public method is total: failures are logged and a usable value is
    returned, never an exception.

    Usage:
        engine = TranslationEngine(loader, store, detector, read_environment_locale)
        await engine.start()

        engine.translate("hero.title")
        await engine.change_locale("es")

    Attributes:
        loader: Fail-soft catalog loader.
        store: Preference store for the chosen locale.
        detector: Initial locale detector.
        environment_signal: Locale tag or zero-argument callable producing one.
        default_locale: Locale of the terminal fallback catalog.
    """

    def __init__(
        self,
        loader: CatalogLoader,
        store: PreferenceStore,
        detector: LocaleDetector,
        environment_signal: EnvironmentSignal = None,
    ):
        self.loader = loader
        self.store = store
        self.detector = detector
        self.environment_signal = environment_signal
        self.default_locale = loader.default_locale
        self._state = EngineState.uninitialized(self.default_locale)
        self._callbacks: List[LocaleCallback] = []
        self._switches_in_flight = 0

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def status(self) -> EngineStatus:
        return self._state.status

    @property
    def active_locale(self) -> str:
        if self._state.status == EngineStatus.UNINITIALIZED:
            logger.warning("engine_not_initialized", operation="active_locale")
        return self._state.active_locale

    def get_active_locale(self) -> str:
        return self.active_locale

    @property
    def is_ready(self) -> bool:
        return self._state.status in (EngineStatus.READY, EngineStatus.SWITCHING_LOCALE)

    def _set_status(self, status: EngineStatus) -> None:
        self._state = dataclasses.replace(self._state, status=status)

    def _settled_status(self) -> EngineStatus:
        if self._switches_in_flight:
            return EngineStatus.SWITCHING_LOCALE
        if self._state.active_catalog.is_empty and self._state.default_catalog.is_empty:
            return EngineStatus.DEGRADED
        return EngineStatus.READY

    async def start(self) -> EngineStatus:
        """Load the default catalog, detect the initial locale, and commit.

        Returns:
            The resulting status, READY or DEGRADED.
        """
        if self._state.status != EngineStatus.UNINITIALIZED:
            logger.debug("engine_already_started", status=self._state.status.value)
            return self._state.status

        self._set_status(EngineStatus.LOADING)
        try:
            default_result = await self.loader.load(self.default_locale)
            if default_result.degraded:
                self._degrade()
                return self._state.status
            default_catalog = default_result.catalog

            stored = await self.store.read()
            if stored is not None and not self.detector.is_supported(stored):
                logger.warning("invalid_stored_preference", value=stored)
                await self.store.clear()
                stored = None

            initial_locale = self.detector.detect_initial(stored, self.environment_signal)
            active_catalog = default_catalog
            if initial_locale != self.default_locale:
                result = await self.loader.load(initial_locale)
                if result.catalog.is_empty:
                    logger.warning(
                        "initial_locale_unavailable",
                        locale=initial_locale,
                        fallback_locale=self.default_locale,
                    )
                    initial_locale = self.default_locale
                else:
                    initial_locale = result.catalog.locale
                    active_catalog = result.catalog

            self._state = EngineState(
                active_locale=initial_locale,
                active_catalog=active_catalog,
                default_catalog=default_catalog,
                status=EngineStatus.READY,
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.error("engine_start_failed", error=str(e))
            self._degrade()
            return self._state.status

        logger.info("engine_ready", locale=self._state.active_locale)
        self._notify(self._state.active_locale)
        return self._state.status

    def _degrade(self) -> None:
        empty = TranslationCatalog.empty(self.default_locale)
        self._state = EngineState(
            active_locale=self.default_locale,
            active_catalog=empty,
            default_catalog=empty,
            status=EngineStatus.DEGRADED,
        )
        logger.error("engine_degraded", locale=self.default_locale)

    async def change_locale(self, code: Any) -> None:
        """Switch the active locale.

        Invalid codes are rejected without a transition. If the loader can
        only produce an empty catalog, the current locale is kept. On
        success the new locale is persisted (best-effort) and subscribers
        are notified.

        Args:
            code: Requested locale code.
        """
        if self._state.status in (EngineStatus.UNINITIALIZED, EngineStatus.LOADING):
            logger.warning(
                "engine_not_initialized",
                operation="change_locale",
                locale=repr(code),
            )
            return

        if not is_valid_locale_format(code):
            logger.warning("invalid_locale_change", locale=repr(code))
            return

        self._switches_in_flight += 1
        self._set_status(EngineStatus.SWITCHING_LOCALE)
        try:
            result = await self.loader.load(code)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("locale_change_failed", locale=code, error=str(e))
            result = None
        finally:
            self._switches_in_flight -= 1

        if result is None:
            self._set_status(self._settled_status())
            return

        if result.catalog.is_empty:
            logger.error(
                "locale_change_aborted",
                locale=code,
                current_locale=self._state.active_locale,
            )
            self._set_status(self._settled_status())
            return

        committed_locale = result.catalog.locale
        if committed_locale != code:
            logger.warning(
                "locale_change_substituted",
                requested_locale=code,
                locale=committed_locale,
            )

        self._state = EngineState(
            active_locale=committed_locale,
            active_catalog=result.catalog,
            default_catalog=self._state.default_catalog,
            status=(
                EngineStatus.SWITCHING_LOCALE
                if self._switches_in_flight
                else EngineStatus.READY
            ),
        )
        logger.info("locale_changed", locale=committed_locale)

        if not await self.store.write(committed_locale):
            logger.warning("preference_not_persisted", locale=committed_locale)

        self._notify(committed_locale)

    def translate(self, key: Any) -> str:
        """Resolve a dotted key for the active locale.

        Never raises and never suspends. Returns the key itself when no
        catalog has a usable string for it.
        """
        state = self._state
        if state.status == EngineStatus.UNINITIALIZED:
            logger.warning("engine_not_initialized", operation="translate")
            return coerce_key(key)

        return resolve_key(
            key,
            state.active_catalog,
            state.default_catalog,
            active_is_default=state.active_locale == self.default_locale,
        )

    t = translate

    def subscribe(self, callback: LocaleCallback) -> None:
        """Register a callback receiving the locale after each commit."""
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unsubscribe(self, callback: LocaleCallback) -> None:
        self._callbacks = [cb for cb in self._callbacks if cb != callback]

    def _notify(self, locale: str) -> None:
        for callback in list(self._callbacks):
            try:
                callback(locale)
            except Exception as e:  # pylint: disable=broad-except
                logger.error("locale_callback_failed", locale=locale, error=str(e))
