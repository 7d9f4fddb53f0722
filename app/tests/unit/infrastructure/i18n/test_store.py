"""Tests for infrastructure.i18n.store module."""

import json

import pytest

from infrastructure.i18n import InMemoryPreferenceStore, JSONFilePreferenceStore
from tests.factories.i18n import FailingPreferenceStore


class TestInMemoryPreferenceStore:
    """Tests for InMemoryPreferenceStore."""

    @pytest.mark.asyncio
    async def test_read_absent(self):
        assert await InMemoryPreferenceStore().read() is None

    @pytest.mark.asyncio
    async def test_write_then_read(self):
        store = InMemoryPreferenceStore()
        assert await store.write("es") is True
        assert await store.read() == "es"

    @pytest.mark.asyncio
    async def test_clear(self):
        store = InMemoryPreferenceStore(initial="es")
        await store.clear()
        assert await store.read() is None

    @pytest.mark.asyncio
    async def test_read_does_not_validate(self):
        """Validation is the engine's job; the store returns raw values."""
        store = InMemoryPreferenceStore(initial="xx-invalid")
        assert await store.read() == "xx-invalid"


class TestFailingBackends:
    """Backend failures never escape the public coroutines."""

    @pytest.mark.asyncio
    async def test_read_failure_is_absent(self, failing_store):
        assert await failing_store.read() is None

    @pytest.mark.asyncio
    async def test_write_failure_returns_false(self, failing_store):
        assert await failing_store.write("es") is False
        assert failing_store.write_attempts == ["es"]

    @pytest.mark.asyncio
    async def test_clear_failure_is_ignored(self, failing_store):
        await failing_store.clear()
        assert failing_store.clear_attempts == 1

    @pytest.mark.asyncio
    async def test_non_string_value_is_stringified(self):
        store = FailingPreferenceStore(fail_read=False, initial=42)
        assert await store.read() == "42"


class TestJSONFilePreferenceStore:
    """Tests for JSONFilePreferenceStore."""

    @pytest.fixture
    def preference_file(self, tmp_path):
        return tmp_path / "config" / "preferences.json"

    @pytest.mark.asyncio
    async def test_read_missing_file(self, preference_file):
        store = JSONFilePreferenceStore(preference_file)
        assert await store.read() is None

    @pytest.mark.asyncio
    async def test_write_creates_file(self, preference_file):
        store = JSONFilePreferenceStore(preference_file)
        assert await store.write("es") is True
        assert json.loads(preference_file.read_text(encoding="utf-8")) == {
            "ui.language": "es"
        }
        assert await store.read() == "es"

    @pytest.mark.asyncio
    async def test_custom_key(self, preference_file):
        store = JSONFilePreferenceStore(preference_file, key="portfolio-language")
        await store.write("en")
        data = json.loads(preference_file.read_text(encoding="utf-8"))
        assert data == {"portfolio-language": "en"}

    @pytest.mark.asyncio
    async def test_write_preserves_other_entries(self, preference_file):
        preference_file.parent.mkdir(parents=True)
        preference_file.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")

        store = JSONFilePreferenceStore(preference_file)
        await store.write("es")

        data = json.loads(preference_file.read_text(encoding="utf-8"))
        assert data == {"theme": "dark", "ui.language": "es"}

    @pytest.mark.asyncio
    async def test_read_corrupt_file_is_absent(self, preference_file):
        preference_file.parent.mkdir(parents=True)
        preference_file.write_text("{not json", encoding="utf-8")

        store = JSONFilePreferenceStore(preference_file)
        assert await store.read() is None

    @pytest.mark.asyncio
    async def test_read_non_object_file_is_absent(self, preference_file):
        preference_file.parent.mkdir(parents=True)
        preference_file.write_text(json.dumps(["es"]), encoding="utf-8")

        store = JSONFilePreferenceStore(preference_file)
        assert await store.read() is None

    @pytest.mark.asyncio
    async def test_write_replaces_corrupt_file(self, preference_file):
        preference_file.parent.mkdir(parents=True)
        preference_file.write_text("{not json", encoding="utf-8")

        store = JSONFilePreferenceStore(preference_file)
        assert await store.write("es") is True
        assert await store.read() == "es"

    @pytest.mark.asyncio
    async def test_write_failure_returns_false(self, tmp_path):
        # A directory cannot be opened as a file
        store = JSONFilePreferenceStore(tmp_path)
        assert await store.write("es") is False

    @pytest.mark.asyncio
    async def test_clear_removes_only_locale_entry(self, preference_file):
        preference_file.parent.mkdir(parents=True)
        preference_file.write_text(
            json.dumps({"theme": "dark", "ui.language": "es"}), encoding="utf-8"
        )

        store = JSONFilePreferenceStore(preference_file)
        await store.clear()

        assert json.loads(preference_file.read_text(encoding="utf-8")) == {
            "theme": "dark"
        }
        assert await store.read() is None

    @pytest.mark.asyncio
    async def test_clear_missing_file(self, preference_file):
        store = JSONFilePreferenceStore(preference_file)
        await store.clear()
        assert not preference_file.exists()
