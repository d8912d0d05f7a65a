import json
import os
import shutil
import unittest
from pathlib import Path
from unittest.mock import patch
from uuid import uuid4

from heartless_chat.app_config import (
    API_KEY_ENV_VAR,
    RuntimeEnv,
    load_json_config,
    parse_app_config,
    resolve_runtime_env,
)
from heartless_chat.chat_config import DEFAULT_ENDPOINT, DEFAULT_GREETING, DEFAULT_MODEL

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class ParseAppConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        app = parse_app_config({})

        self.assertEqual(DEFAULT_ENDPOINT, app.endpoint)
        self.assertEqual(DEFAULT_MODEL, app.model)
        self.assertEqual("Heart Less Chatbot", app.title)
        self.assertEqual(60.0, app.request_timeout_seconds)
        self.assertEqual(2.0, app.copy_acknowledgment_seconds)
        self.assertEqual(DEFAULT_GREETING, app.greeting)
        self.assertEqual("WARNING", app.console_log_level)
        self.assertEqual("chat.log", app.log_file)
        self.assertEqual("INFO", app.file_log_level)

    def test_overrides(self) -> None:
        app = parse_app_config(
            {
                "Endpoint": " https://proxy.internal/v1/chat/completions ",
                "Model": "openai/gpt-4o-mini",
                "Referer": "https://chat.example",
                "Title": "Team Chat",
                "RequestTimeoutSeconds": "15",
                "CopyAcknowledgmentSeconds": 0.5,
                "Greeting": "Hi!",
                "LogLevel": "DEBUG",
                "ConsoleLogLevel": "ERROR",
                "LogFile": "logs/team-chat.log",
            }
        )

        self.assertEqual("https://proxy.internal/v1/chat/completions", app.endpoint)
        self.assertEqual("openai/gpt-4o-mini", app.model)
        self.assertEqual("https://chat.example", app.referer)
        self.assertEqual(15.0, app.request_timeout_seconds)
        self.assertEqual(0.5, app.copy_acknowledgment_seconds)
        self.assertEqual("Hi!", app.greeting)
        self.assertEqual("DEBUG", app.file_log_level)
        self.assertEqual("ERROR", app.console_log_level)
        self.assertEqual("logs/team-chat.log", app.log_file)

    def test_null_or_blank_log_settings_disable_sinks(self) -> None:
        app = parse_app_config({"ConsoleLogLevel": None, "LogFile": "  "})

        self.assertIsNone(app.console_log_level)
        self.assertIsNone(app.log_file)

    def test_non_positive_timeout_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            parse_app_config({"RequestTimeoutSeconds": 0})

    def test_non_numeric_delay_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            parse_app_config({"CopyAcknowledgmentSeconds": "soon"})

    def test_to_chat_config_takes_key_from_env(self) -> None:
        app = parse_app_config({"Model": "m"})
        chat = app.to_chat_config(RuntimeEnv(api_key="sk-env", api_key_env_var=API_KEY_ENV_VAR))

        self.assertEqual("sk-env", chat.api_key)
        self.assertEqual("m", chat.model)
        self.assertEqual(app.copy_acknowledgment_seconds, chat.copy_acknowledgment_seconds)


class RuntimeEnvTests(unittest.TestCase):
    def test_reads_api_key(self) -> None:
        with patch.dict(os.environ, {API_KEY_ENV_VAR: " sk-or-123 "}):
            env = resolve_runtime_env()
        self.assertEqual("sk-or-123", env.api_key)
        self.assertEqual("OPENROUTER_API_KEY", env.api_key_env_var)

    def test_missing_api_key_is_empty(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            env = resolve_runtime_env()
        self.assertEqual("", env.api_key)


class LoadJsonConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp_dir = PROJECT_ROOT / ".test-artifacts" / f"config-{uuid4().hex}"
        self._tmp_dir.mkdir(parents=True, exist_ok=True)

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp_dir, ignore_errors=True)

    def test_missing_file_gives_empty_config(self) -> None:
        with patch("heartless_chat.app_config.Path.cwd", return_value=self._tmp_dir):
            self.assertEqual({}, load_json_config())

    def test_reads_config_json_from_cwd(self) -> None:
        (self._tmp_dir / "config.json").write_text(json.dumps({"Model": "x/y"}))
        with patch("heartless_chat.app_config.Path.cwd", return_value=self._tmp_dir):
            self.assertEqual({"Model": "x/y"}, load_json_config())


if __name__ == "__main__":
    unittest.main()
