from __future__ import annotations

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parent.parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from domain import ChatStrategy
from env_loader import load_local_env
from settings import Settings


class SettingsTest(unittest.TestCase):
    def test_defaults_start_without_api_key(self) -> None:
        settings = Settings.model_validate({})
        self.assertFalse(settings.remote_configured)
        self.assertEqual(settings.openrouter_base_url, "https://openrouter.ai/api/v1")
        self.assertEqual(settings.chat_temperature, 0.7)
        self.assertEqual(settings.chat_max_tokens, 1000)
        self.assertEqual(settings.chat_strategy, ChatStrategy.REMOTE)
        self.assertGreater(settings.chat_timeout_seconds, 0)
        self.assertIsNone(settings.fallback_seed)

    def test_reads_environment_strings(self) -> None:
        env = {
            "OPENROUTER_API_KEY": " sk-live ",
            "CHAT_STRATEGY": " Scripted ",
            "CHAT_TIMEOUT_SECONDS": "15",
            "FALLBACK_SEED": "42",
            "PORT": "8080",
            "CORS_ALLOW_ORIGINS": "http://localhost:3000, https://hire.example.com,",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.openrouter_api_key, "sk-live")
        self.assertTrue(settings.remote_configured)
        self.assertIs(settings.chat_strategy, ChatStrategy.SCRIPTED)
        self.assertEqual(settings.chat_timeout_seconds, 15.0)
        self.assertEqual(settings.fallback_seed, 42)
        self.assertEqual(settings.port, 8080)
        self.assertEqual(
            settings.allowed_origins,
            ["http://localhost:3000", "https://hire.example.com"],
        )

    def test_blank_values_count_as_absent(self) -> None:
        settings = Settings.model_validate({"OPENROUTER_API_KEY": "", "FALLBACK_SEED": " "})
        self.assertFalse(settings.remote_configured)
        self.assertIsNone(settings.fallback_seed)

    def test_rejects_unknown_strategy_and_bad_timeout(self) -> None:
        with self.assertRaises(ValidationError):
            Settings.model_validate({"CHAT_STRATEGY": "telepathy"})
        with self.assertRaises(ValidationError):
            Settings.model_validate({"CHAT_TIMEOUT_SECONDS": "0"})


class LoadLocalEnvTest(unittest.TestCase):
    def test_loads_file_without_overriding_process_env(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            env_file = Path(tmp) / ".env"
            env_file.write_text(
                "# gateway\n"
                "OPENROUTER_API_KEY='sk-from-file'\n"
                "export APP_TITLE=\"Hiring Platform Dev\"\n"
                "not a pair\n"
                "PORT=4000\n"
            )
            with mock.patch.dict(os.environ, {"PORT": "5000"}, clear=True):
                load_local_env(env_file)
                self.assertEqual(os.environ["OPENROUTER_API_KEY"], "sk-from-file")
                self.assertEqual(os.environ["APP_TITLE"], "Hiring Platform Dev")
                self.assertEqual(os.environ["PORT"], "5000")

    def test_missing_file_is_a_no_op(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            load_local_env(Path("/nonexistent/.env"))
            self.assertEqual(dict(os.environ), {})


if __name__ == "__main__":
    unittest.main()
