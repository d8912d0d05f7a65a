import asyncio
import unittest

from heartless_chat.app_config import API_KEY_ENV_VAR, RuntimeEnv, parse_app_config
from heartless_chat.bootstrap import bootstrap_runtime
from heartless_chat.providers.openrouter_provider import OpenRouterProvider


class _FakeProvider:
    def __init__(self) -> None:
        self.closed = False

    async def complete(self, messages: list[dict]) -> str:
        return "ok"

    async def aclose(self) -> None:
        self.closed = True


class _FakeClipboard:
    async def write_text(self, content: str) -> None:
        return


class BootstrapRuntimeTests(unittest.TestCase):
    def _env(self) -> RuntimeEnv:
        return RuntimeEnv(api_key="sk-test", api_key_env_var=API_KEY_ENV_VAR)

    def test_wires_controller_with_configured_greeting(self) -> None:
        provider = _FakeProvider()
        app = parse_app_config({"Greeting": "Welcome!", "ConsoleLogLevel": None, "LogFile": None})

        runtime = bootstrap_runtime(
            app,
            self._env(),
            provider=provider,
            clipboard=_FakeClipboard(),
            show_spinner=False,
        )

        self.assertEqual([], runtime.log_descriptions)
        self.assertEqual("Welcome!", runtime.controller.messages[0].content)
        self.assertIs(provider, runtime.provider)

        asyncio.run(runtime.close())
        self.assertTrue(provider.closed)

    def test_builds_http_provider_by_default(self) -> None:
        app = parse_app_config({"ConsoleLogLevel": None, "LogFile": None})

        runtime = bootstrap_runtime(app, self._env(), clipboard=_FakeClipboard(), show_spinner=False)

        self.assertIsInstance(runtime.provider, OpenRouterProvider)
        asyncio.run(runtime.close())


if __name__ == "__main__":
    unittest.main()
