import unittest
from unittest.mock import patch

from app.core.config import Settings, load_settings, settings


class SettingsTest(unittest.TestCase):
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            loaded = load_settings()
        self.assertEqual(loaded.job_ttl_seconds, 86400)
        self.assertEqual(loaded.job_key_prefix, "job:")
        self.assertEqual(loaded.cors_origins, ["*"])
        self.assertEqual(loaded.resolve_store_backend(), "memory")

    def test_environment_overrides_and_upstash_names(self):
        env = {
            "UPSTASH_REDIS_REST_URL": "https://kv.example",
            "UPSTASH_REDIS_REST_TOKEN": "token",
            "CORS_ORIGINS": "http://a.test, http://b.test",
            "API_BASE_URL": "https://api.example/",
            "JOB_TTL_SECONDS": "120",
        }
        with patch.dict("os.environ", env, clear=True):
            loaded = load_settings()
        self.assertEqual(loaded.kv_rest_api_url, "https://kv.example")
        self.assertEqual(loaded.cors_origins, ["http://a.test", "http://b.test"])
        self.assertEqual(loaded.api_base_url, "https://api.example")
        self.assertEqual(loaded.job_ttl_seconds, 120)
        self.assertEqual(loaded.resolve_store_backend(), "kv")

    def test_explicit_backend_requires_credentials(self):
        cfg = settings.model_copy(update={"job_store": "redis", "redis_url": None})
        with self.assertRaises(RuntimeError):
            cfg.resolve_store_backend()
        cfg = settings.model_copy(update={"job_store": "kv", "kv_rest_api_url": None})
        with self.assertRaises(RuntimeError):
            cfg.resolve_store_backend()

    def test_explicit_memory_ignores_credentials(self):
        cfg = settings.model_copy(update={"job_store": "memory", "redis_url": "redis://localhost"})
        self.assertEqual(cfg.resolve_store_backend(), "memory")

    def test_blank_optional_values_become_none(self):
        cfg = Settings.model_validate(
            {
                "JOB_STORE": "AUTO",
                "REDIS_URL": "  ",
                "JOB_TTL_SECONDS": "10",
                "JOB_KEY_PREFIX": "job:",
                "CLEANUP_INTERVAL_S": "5",
                "WEBHOOK_TIMEOUT_S": "1",
                "CORS_ORIGINS": "*",
                "API_BASE_URL": "http://localhost:3001",
                "POLL_INTERVAL_S": "0",
                "POLL_MAX_ATTEMPTS": "1",
            }
        )
        self.assertIsNone(cfg.redis_url)
        self.assertEqual(cfg.job_store, "auto")


if __name__ == "__main__":
    unittest.main()
