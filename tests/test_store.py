import pytest

from ydjs_env.errors import StoreSetError
from ydjs_env.store import EnvironStore, MemoryStore, default_store


@pytest.mark.parametrize("store_factory", [MemoryStore, lambda: EnvironStore({})])
def test_last_write_wins(store_factory):
    store = store_factory()
    store.set("A", "1")
    store.set("A", "2")
    assert store.get("A") == "2"
    assert store.get("B") is None


@pytest.mark.parametrize("store_factory", [MemoryStore, lambda: EnvironStore({})])
@pytest.mark.parametrize("name, value", [("", "x"), ("A=B", "x"), ("A\0", "x"), ("A", "x\0y")])
def test_rejects_what_the_os_rejects(store_factory, name, value):
    with pytest.raises(StoreSetError):
        store_factory().set(name, value)


def test_environ_store_writes_process_environment(monkeypatch):
    monkeypatch.delenv("YDJS_ENV_TEST_VALUE", raising=False)
    store = EnvironStore()
    monkeypatch.setenv("YDJS_ENV_TEST_VALUE", "before")
    store.set("YDJS_ENV_TEST_VALUE", "after")
    assert store.get("YDJS_ENV_TEST_VALUE") == "after"
    assert "YDJS_ENV_TEST_VALUE" in store


def test_default_store_is_shared():
    assert default_store() is default_store()
