from __future__ import annotations

from typing import Awaitable, Callable

from loguru import logger

from heartless_chat.commands.router import CommandRouter
from heartless_chat.content_parser import code_segments
from heartless_chat.conversation import ConversationController
from heartless_chat.terminal_view import TerminalView

PROMPT = "you> "
CONTINUATION_PROMPT = "... "
_BLOCK_FENCE = '"""'


async def read_message(read_line: Callable[[str], Awaitable[str]]) -> str:
    """Read one chat message, which may span several lines.

    A line ending in a backslash continues on the next line. A line starting
    with triple quotes opens a block that runs until a line ending in triple
    quotes, so pasted text keeps its line breaks. The markers are dropped.
    """
    line = await read_line(PROMPT)

    if line.lstrip().startswith(_BLOCK_FENCE):
        first = line.lstrip()[len(_BLOCK_FENCE):]
        if first.rstrip().endswith(_BLOCK_FENCE):
            return first.rstrip()[:-len(_BLOCK_FENCE)]
        lines = [first] if first.strip() else []
        while True:
            line = await read_line(CONTINUATION_PROMPT)
            if line.rstrip().endswith(_BLOCK_FENCE):
                last = line.rstrip()[:-len(_BLOCK_FENCE)]
                if last.strip():
                    lines.append(last)
                return "\n".join(lines)
            lines.append(line)

    parts: list[str] = []
    while line.rstrip().endswith("\\"):
        parts.append(line.rstrip()[:-1])
        line = await read_line(CONTINUATION_PROMPT)
    parts.append(line)
    return "\n".join(parts)


class ChatShell:
    """Routes prompt input to slash commands or to the conversation."""

    def __init__(self, controller: ConversationController, view: TerminalView):
        self._controller = controller
        self._view = view
        self._command_router = CommandRouter(
            on_help=self._on_help,
            on_copy=self._handle_copy_command,
            on_unknown=self._on_unknown_command,
        )

    async def handle_input(self, user_input: str) -> None:
        if await self._command_router.try_handle(user_input):
            return

        self._controller.update_draft(user_input)
        task = self._controller.submit_draft()
        if task is not None:
            await task

    async def _on_help(self) -> None:
        self._view.print_info(
            "Commands: /copy [n] copies code block n (default 1) of the latest reply, "
            "/help shows this message, exit or quit ends the session. "
            "End a line with \\ to continue it, or wrap a multi-line message in \"\"\" ... \"\"\"."
        )

    async def _handle_copy_command(self, command: str) -> None:
        parts = command.split()
        if len(parts) > 2:
            self._view.print_info("Usage: /copy [n]")
            return

        number = 1
        if len(parts) == 2:
            try:
                number = int(parts[1])
            except ValueError:
                self._view.print_info("Usage: /copy [n]")
                return

        message = self._controller.last_assistant_message()
        blocks = code_segments(message.content) if message is not None else []
        if not blocks:
            self._view.print_info("The latest reply has no code blocks to copy.")
            return
        if number < 1 or number > len(blocks):
            self._view.print_info(f"Code block {number} not found (latest reply has {len(blocks)}).")
            return

        copied = await self._controller.acknowledge_copy(blocks[number - 1].content)
        if not copied:
            logger.debug(f"Copy of code block {number} did not complete")

    def _on_unknown_command(self, command: str) -> None:
        self._view.print_info(f"Unknown command: {command}. Type /help for commands.")
