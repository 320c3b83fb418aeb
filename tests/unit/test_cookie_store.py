import pytest

from mealime_pipeline.application.services.cookie_store import CookieStore
from mealime_pipeline.domain.entities.cookie import Cookie
from mealime_pipeline.domain.errors import StorageCorrupt
from mealime_pipeline.infrastructure.adapters.storage.memory_store import InMemoryCookieStorage
from tests.unit._fakes_mealime import AUTH_COOKIE, FailingStorage, FakeProbe, stored_jar


def test_load_without_record_gives_empty_store():
    store = CookieStore.load(InMemoryCookieStorage(), FakeProbe())
    assert len(store.jar) == 0


def test_load_restores_saved_cookies():
    storage = InMemoryCookieStorage(stored_jar(AUTH_COOKIE))
    store = CookieStore.load(storage, FakeProbe())
    assert store.get("mealime.com", "/", "auth_token") == AUTH_COOKIE


def test_load_corrupt_record_raises():
    with pytest.raises(StorageCorrupt):
        CookieStore.load(InMemoryCookieStorage("{broken"), FakeProbe())


def test_save_writes_merged_cookies():
    storage = InMemoryCookieStorage()
    store = CookieStore.load(storage, FakeProbe())
    store.merge([AUTH_COOKIE])
    store.save()
    assert CookieStore.load(storage, FakeProbe()).get("mealime.com", "/", "auth_token") == AUTH_COOKIE


def test_save_failure_is_swallowed():
    storage = FailingStorage()
    store = CookieStore.load(storage, FakeProbe())
    store.merge([AUTH_COOKIE])
    store.save()
    assert storage.writes == 1


def test_without_persistent_storage_nothing_is_read_or_written():
    storage = InMemoryCookieStorage(stored_jar(AUTH_COOKIE))
    store = CookieStore.load(storage, FakeProbe(persistent=False))
    assert len(store.jar) == 0
    store.merge([Cookie("mealime.com", "/", "x", "1")])
    store.save()
    store.reset()
    assert storage.reads == 0
    assert storage.writes == 0
    assert storage.payload is not None


def test_reset_discards_durable_record_and_memory():
    storage = InMemoryCookieStorage(stored_jar(AUTH_COOKIE))
    store = CookieStore.load(storage, FakeProbe())
    store.reset()
    assert storage.payload is None
    assert store.get("mealime.com", "/", "auth_token") is None


def test_reset_survives_failing_delete():
    store = CookieStore(FailingStorage(), FakeProbe())
    store.merge([AUTH_COOKIE])
    store.reset()
    assert len(store.jar) == 0
