import json

import pytest
import redis

from starship_shop.database.file_storage import FileStorage
from starship_shop.database.redis_real import RedisStorage
from starship_shop.database.storage import InMemoryStorage
from starship_shop.error_handler import StorageError
from starship_shop.shop.credits import CREDITS_STORAGE_KEY, RewardCreditsStore


class DummyRedis:
    def __init__(self, fail=False):
        self.data = {}
        self.fail = fail

    def get(self, key):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return self.data.get(key)

    def set(self, key, value):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)

    def ping(self):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return True


def test_in_memory_storage_roundtrip():
    storage = InMemoryStorage()
    assert storage.get_item("k") is None
    storage.set_item("k", "1")
    assert storage.get_item("k") == "1"
    storage.remove_item("k")
    assert storage.get_item("k") is None


def test_file_storage_missing_file_is_empty(tmp_path):
    storage = FileStorage(tmp_path / "nested" / "credits.json")
    assert storage.get_item(CREDITS_STORAGE_KEY) is None
    assert storage.ping() is True


def test_file_storage_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "credits.json"
    FileStorage(path).set_item(CREDITS_STORAGE_KEY, "500")

    assert FileStorage(path).get_item(CREDITS_STORAGE_KEY) == "500"
    assert json.loads(path.read_text(encoding="utf-8")) == {CREDITS_STORAGE_KEY: "500"}
    assert not path.with_suffix(".json.tmp").exists()


def test_file_storage_keeps_other_keys(tmp_path):
    storage = FileStorage(tmp_path / "store.json")
    storage.set_item("a", "1")
    storage.set_item("b", "2")
    storage.remove_item("a")
    assert storage.get_item("a") is None
    assert storage.get_item("b") == "2"


def test_file_storage_corrupt_file_raises_storage_error(tmp_path):
    path = tmp_path / "credits.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        FileStorage(path).get_item(CREDITS_STORAGE_KEY)
    assert FileStorage(path).ping() is False


@pytest.mark.asyncio
async def test_undecodable_file_is_captured_on_load(tmp_path):
    path = tmp_path / "credits.json"
    path.write_bytes(b"\xff\xfe{bad")
    with pytest.raises(StorageError):
        FileStorage(path).get_item(CREDITS_STORAGE_KEY)

    store = RewardCreditsStore(FileStorage(path))
    assert await store.load() == 0
    assert store.error["kind"] == "storage"
    assert store.loaded is True


@pytest.mark.asyncio
async def test_credits_survive_restart_with_file_storage(tmp_path):
    path = tmp_path / "credits.json"
    first = RewardCreditsStore(FileStorage(path))
    await first.load()
    first.add_credits(1_050_000)
    await first.save(first.balance)

    second = RewardCreditsStore(FileStorage(path))
    assert await second.load() == 1_050_000


def test_redis_storage_prefixes_keys():
    client = DummyRedis()
    storage = RedisStorage(client=client)
    storage.set_item(CREDITS_STORAGE_KEY, "42")
    assert client.data == {f"starship_shop:{CREDITS_STORAGE_KEY}": "42"}
    assert storage.get_item(CREDITS_STORAGE_KEY) == "42"
    storage.remove_item(CREDITS_STORAGE_KEY)
    assert storage.get_item(CREDITS_STORAGE_KEY) is None


def test_redis_storage_decodes_bytes():
    client = DummyRedis()
    client.data["starship_shop:k"] = b"7"
    assert RedisStorage(client=client).get_item("k") == "7"


def test_redis_storage_errors_become_storage_errors():
    storage = RedisStorage(client=DummyRedis(fail=True))
    with pytest.raises(StorageError):
        storage.get_item("k")
    with pytest.raises(StorageError):
        storage.set_item("k", "1")
    assert storage.ping() is False


def test_redis_storage_requires_url_or_client():
    with pytest.raises(ValueError):
        RedisStorage()
