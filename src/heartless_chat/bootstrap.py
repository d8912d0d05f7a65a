from __future__ import annotations

from dataclasses import dataclass

from heartless_chat.app_config import AppConfig, RuntimeEnv
from heartless_chat.clipboard import Clipboard, PyperclipClipboard
from heartless_chat.conversation import ConversationController
from heartless_chat.logging_config import setup_logging
from heartless_chat.provider import CompletionProvider, create_provider
from heartless_chat.shell import ChatShell
from heartless_chat.terminal_view import TerminalView


@dataclass
class AppRuntime:
    controller: ConversationController
    provider: CompletionProvider
    view: TerminalView
    shell: ChatShell
    log_descriptions: list[str]

    async def close(self) -> None:
        await self.controller.close()
        self.view.close()
        await self.provider.aclose()


def bootstrap_runtime(
    app: AppConfig,
    env: RuntimeEnv,
    *,
    provider: CompletionProvider | None = None,
    clipboard: Clipboard | None = None,
    show_spinner: bool = True,
) -> AppRuntime:
    log_descriptions = setup_logging(
        console_level=app.console_log_level,
        log_file=app.log_file,
        file_level=app.file_log_level,
    )

    chat_config = app.to_chat_config(env)
    if provider is None:
        provider = create_provider(chat_config)

    controller = ConversationController(
        provider,
        clipboard or PyperclipClipboard(),
        greeting=chat_config.greeting,
        copy_acknowledgment_seconds=chat_config.copy_acknowledgment_seconds,
    )
    view = TerminalView(controller, show_spinner=show_spinner)

    return AppRuntime(
        controller=controller,
        provider=provider,
        view=view,
        shell=ChatShell(controller, view),
        log_descriptions=log_descriptions,
    )
