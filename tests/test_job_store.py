import json
import unittest
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import httpx
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.config import settings
from app.services.job_store import (
    InMemoryJobStore,
    KVRestJobStore,
    RedisJobStore,
    build_job_store,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _record(job_id: str = "job_1_abc", **fields: Any) -> Dict[str, Any]:
    base = {"id": job_id, "status": "pending", "createdAt": "2025-03-02T10:00:00.000Z"}
    base.update(fields)
    return base


class InMemoryJobStoreTest(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.clock = FakeClock()
        self.store = InMemoryJobStore(ttl_seconds=60, clock=self.clock)

    async def test_round_trip_preserves_shape(self):
        record = _record(data={"nested": [1, 2, {"k": None}]}, number_documents=5)
        await self.store.set("job_1_abc", record)
        self.assertEqual(await self.store.get("job_1_abc"), record)

    async def test_get_returns_a_copy(self):
        await self.store.set("job_1_abc", _record())
        fetched = await self.store.get("job_1_abc")
        fetched["status"] = "completed"
        self.assertEqual((await self.store.get("job_1_abc"))["status"], "pending")

    async def test_unknown_id_returns_none(self):
        self.assertIsNone(await self.store.get("job_404_missing"))

    async def test_record_expires_after_ttl(self):
        await self.store.set("job_1_abc", _record())
        self.clock.now = 59.0
        self.assertIsNotNone(await self.store.get("job_1_abc"))
        self.clock.now = 60.0
        self.assertIsNone(await self.store.get("job_1_abc"))

    async def test_overwrite_restarts_ttl(self):
        await self.store.set("job_1_abc", _record())
        self.clock.now = 50.0
        await self.store.set("job_1_abc", _record(status="processing"))
        self.clock.now = 100.0
        self.assertEqual((await self.store.get("job_1_abc"))["status"], "processing")

    async def test_purge_and_enumeration(self):
        await self.store.set("job_1_old", _record("job_1_old"))
        self.clock.now = 30.0
        await self.store.set("job_2_new", _record("job_2_new"))
        self.clock.now = 70.0
        self.assertEqual(await self.store.keys(), ["job_2_new"])
        self.assertEqual(await self.store.size(), 1)
        self.assertEqual(await self.store.purge_expired(), 1)
        self.assertEqual(await self.store.purge_expired(), 0)

    def test_rejects_non_positive_ttl(self):
        with self.assertRaises(ValueError):
            InMemoryJobStore(ttl_seconds=0)


async def _async_iter(items: List[str]):
    for item in items:
        yield item


class RedisJobStoreTest(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.client = MagicMock()
        self.client.setex = AsyncMock()
        self.client.get = AsyncMock()
        self.client.ping = AsyncMock(return_value=True)
        self.client.aclose = AsyncMock()
        self.store = RedisJobStore("redis://unused", 86400, prefix="job:", client=self.client)

    async def test_set_uses_setex_with_ttl(self):
        record = _record()
        await self.store.set("job_1_abc", record)
        key, ttl, payload = self.client.setex.await_args.args
        self.assertEqual(key, "job:job_1_abc")
        self.assertEqual(ttl, 86400)
        self.assertEqual(json.loads(payload), record)

    async def test_get_decodes_json(self):
        self.client.get.return_value = json.dumps(_record(status="processing"))
        self.assertEqual((await self.store.get("job_1_abc"))["status"], "processing")
        self.client.get.assert_awaited_with("job:job_1_abc")

    async def test_missing_key_returns_none(self):
        self.client.get.return_value = None
        self.assertIsNone(await self.store.get("job_1_abc"))

    async def test_backend_errors_are_swallowed(self):
        self.client.get.side_effect = RedisConnectionError("down")
        self.client.setex.side_effect = RedisConnectionError("down")
        self.client.ping.side_effect = RedisConnectionError("down")
        self.assertIsNone(await self.store.get("job_1_abc"))
        await self.store.set("job_1_abc", _record())
        self.assertFalse(await self.store.ping())

    async def test_keys_scan_the_prefix(self):
        self.client.scan_iter = MagicMock(return_value=_async_iter(["job:job_1_a", "job:job_2_b"]))
        self.assertEqual(await self.store.keys(), ["job_1_a", "job_2_b"])
        self.client.scan_iter.assert_called_with(match="job:*")

    async def test_close(self):
        await self.store.close()
        self.client.aclose.assert_awaited_once()


class FakeKVService:
    """Minimal REST command endpoint: POST ["CMD", ...] -> {"result": ...}."""

    def __init__(self, token: str) -> None:
        self.token = token
        self.data: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}
        self.fail_with: int | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, text="unavailable")
        if request.headers.get("authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"error": "Unauthorized"})
        command = json.loads(request.content)
        name = command[0].upper()
        if name == "SETEX":
            _, key, ttl, value = command
            self.data[key] = value
            self.ttls[key] = ttl
            return httpx.Response(200, json={"result": "OK"})
        if name == "GET":
            return httpx.Response(200, json={"result": self.data.get(command[1])})
        if name == "PING":
            return httpx.Response(200, json={"result": "PONG"})
        return httpx.Response(400, json={"error": f"ERR unknown command '{name}'"})


class KVRestJobStoreTest(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.service = FakeKVService(token="secret")
        self.http = httpx.AsyncClient(transport=httpx.MockTransport(self.service))
        self.store = KVRestJobStore("https://kv.example/", "secret", 86400, client=self.http)

    async def asyncTearDown(self) -> None:
        await self.http.aclose()

    async def test_round_trip(self):
        record = _record(result={"reply": [{"File_url": "https://x/report.pdf"}]})
        await self.store.set("job_1_abc", record)
        self.assertEqual(self.service.ttls["job:job_1_abc"], 86400)
        self.assertEqual(await self.store.get("job_1_abc"), record)
        self.assertIsNone(await self.store.get("job_2_other"))

    async def test_enumeration_is_a_stub(self):
        await self.store.set("job_1_abc", _record())
        self.assertEqual(await self.store.keys(), [])
        self.assertEqual(await self.store.size(), 0)

    async def test_unavailable_service_reads_as_missing(self):
        await self.store.set("job_1_abc", _record())
        self.service.fail_with = 503
        self.assertIsNone(await self.store.get("job_1_abc"))
        await self.store.set("job_2_def", _record("job_2_def"))
        self.assertNotIn("job:job_2_def", self.service.data)
        self.assertFalse(await self.store.ping())

    async def test_bad_token_reads_as_missing(self):
        store = KVRestJobStore("https://kv.example", "wrong", 60, client=self.http)
        self.assertIsNone(await store.get("job_1_abc"))
        self.assertFalse(await store.ping())

    async def test_ping(self):
        self.assertTrue(await self.store.ping())


class BuildJobStoreTest(unittest.IsolatedAsyncioTestCase):
    def _settings(self, **update: Any):
        base = {"job_store": "auto", "redis_url": None, "kv_rest_api_url": None, "kv_rest_api_token": None}
        base.update(update)
        return settings.model_copy(update=base)

    async def test_defaults_to_memory(self):
        store = build_job_store(self._settings())
        self.assertIsInstance(store, InMemoryJobStore)
        self.assertEqual(store.ttl_seconds, settings.job_ttl_seconds)

    async def test_redis_url_selects_redis(self):
        store = build_job_store(self._settings(redis_url="redis://localhost:6379/0"))
        self.assertIsInstance(store, RedisJobStore)
        await store.close()

    async def test_kv_credentials_win_over_redis(self):
        store = build_job_store(
            self._settings(
                redis_url="redis://localhost:6379/0",
                kv_rest_api_url="https://kv.example",
                kv_rest_api_token="token",
            )
        )
        self.assertIsInstance(store, KVRestJobStore)
        await store.close()


if __name__ == "__main__":
    unittest.main()
