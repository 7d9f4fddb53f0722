"""Preference persistence for the selected locale.

The store is advisory: reads never raise and write failures are reported
through the return value so the caller's locale change always proceeds.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from infrastructure.i18n.exceptions import StorageReadFailure, StorageWriteFailure
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class PreferenceStore(ABC):
    """Fail-soft storage of one persisted locale code.

    Subclasses implement the ``_read``/``_write``/``_clear`` primitives and
    may raise freely; the public coroutines recover every failure.
    """

    @abstractmethod
    async def _read(self) -> Optional[str]:
        """Return the raw stored value, or None when absent."""

    @abstractmethod
    async def _write(self, code: str) -> None:
        """Persist code, replacing any previous value."""

    @abstractmethod
    async def _clear(self) -> None:
        """Remove the stored value."""

    async def read(self) -> Optional[str]:
        """Read the stored locale code.

        Returns:
            The stored value as a string, or None when absent or unreadable.
            The value is not validated here.
        """
        try:
            value = await self._read()
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("preference_read_failed", error=str(e))
            return None
        if value is None:
            return None
        return str(value)

    async def write(self, code: str) -> bool:
        """Persist a locale code.

        Returns:
            True if written, False if the backend failed.
        """
        try:
            await self._write(code)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("preference_write_failed", locale=code, error=str(e))
            return False
        logger.debug("preference_written", locale=code)
        return True

    async def clear(self) -> None:
        """Best-effort removal of the stored value."""
        try:
            await self._clear()
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("preference_clear_failed", error=str(e))


class InMemoryPreferenceStore(PreferenceStore):
    """Preference store kept in process memory.

    Useful for tests and sessions that should not persist a choice.
    """

    def __init__(self, initial: Optional[str] = None):
        self.value: Optional[str] = initial

    async def _read(self) -> Optional[str]:
        return self.value

    async def _write(self, code: str) -> None:
        self.value = code

    async def _clear(self) -> None:
        self.value = None


class JSONFilePreferenceStore(PreferenceStore):
    """Preference store backed by a JSON object file.

    The file holds a flat object; the locale lives under ``key``. Other
    entries in the file are preserved on write and clear. File I/O runs
    in a worker thread so the event loop is never blocked.

    Attributes:
        path: Location of the JSON file.
        key: Entry name holding the locale code.
    """

    def __init__(self, path: Path, key: str = "ui.language"):
        self.path = Path(path)
        self.key = key

    def _load_entries(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageReadFailure(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageReadFailure(f"Preference file {self.path} is not an object")
        return data

    def _save_entries(self, entries: Dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(entries, f)
        except OSError as e:
            raise StorageWriteFailure(f"Cannot write {self.path}: {e}") from e

    def _read_sync(self) -> Optional[str]:
        value = self._load_entries().get(self.key)
        return None if value is None else str(value)

    def _write_sync(self, code: str) -> None:
        try:
            entries = self._load_entries()
        except StorageReadFailure:
            # A corrupt file is replaced rather than blocking the write
            entries = {}
        entries[self.key] = code
        self._save_entries(entries)

    def _clear_sync(self) -> None:
        entries = self._load_entries()
        if self.key in entries:
            del entries[self.key]
            self._save_entries(entries)

    async def _read(self) -> Optional[str]:
        return await asyncio.to_thread(self._read_sync)

    async def _write(self, code: str) -> None:
        await asyncio.to_thread(self._write_sync, code)

    async def _clear(self) -> None:
        await asyncio.to_thread(self._clear_sync)
