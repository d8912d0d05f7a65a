from __future__ import annotations

import sys
import threading
from typing import TextIO

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from heartless_chat.content_parser import Segment, code_segments, language_color, parse
from heartless_chat.conversation import ConversationController, ConversationEvent
from heartless_chat.message import Message, Role

_SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"


class Spinner:
    """Thread-based spinner that renders on the current line using \\r."""

    def __init__(self, prefix: str = "", label: str = " Thinking...", stream: TextIO | None = None):
        self._prefix = prefix
        self._label = label
        self._stream = stream or sys.stdout
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._frame_width = 1 + len(label)

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._stop.is_set():
            return
        self._stop.set()
        if self._thread:
            self._thread.join()
        clear = self._prefix + " " * self._frame_width
        self._stream.write("\r" + clear + "\r")
        self._stream.flush()

    def _run(self) -> None:
        i = 0
        try:
            while not self._stop.is_set():
                frame = _SPINNER_FRAMES[i % len(_SPINNER_FRAMES)] + self._label
                self._stream.write("\r" + self._prefix + frame)
                self._stream.flush()
                self._stop.wait(0.08)
                i += 1
        except (UnicodeEncodeError, OSError):
            pass  # Terminal can't draw the frames; run without a spinner


class TerminalView:
    """Renders controller state to the terminal as it changes."""

    LINE_PREFIX = "assistant> "

    def __init__(
        self,
        controller: ConversationController,
        *,
        console: Console | None = None,
        show_spinner: bool = True,
    ):
        self._controller = controller
        self._console = console or Console(highlight=False)
        self._show_spinner = show_spinner
        self._spinner: Spinner | None = None
        self._rendered_count = 0
        self._unsubscribe = controller.subscribe(self._on_event)

    @property
    def console(self) -> Console:
        return self._console

    def render_pending_messages(self) -> None:
        messages = self._controller.messages
        for message in messages[self._rendered_count:]:
            # The user's own turns are already on screen at the prompt.
            if message.role == Role.ASSISTANT:
                self.render_message(message)
        self._rendered_count = len(messages)

    def render_message(self, message: Message) -> None:
        self._console.print(Text(self.LINE_PREFIX, style="bold blue"), end="")
        code_number = 0
        for segment in parse(message.content):
            if segment.is_code:
                code_number += 1
                self._console.print()
                self._console.print(self.code_panel(segment, code_number))
            else:
                text = segment.content.strip("\n")
                if text:
                    self._console.print(Text(text))
        if code_number == 0 and not message.content.strip("\n"):
            self._console.print()
        self._console.print(
            Text(message.timestamp.astimezone().strftime("%H:%M"), style="dim")
        )

    def code_panel(self, segment: Segment, number: int) -> Panel:
        title = Text.assemble(
            ("● ", language_color(segment.display_language)),
            (segment.display_language.capitalize(), "bold"),
        )
        subtitle = Text(f"/copy {number}", style="dim")
        return Panel(
            Syntax(segment.content, segment.display_language, theme="monokai", word_wrap=True),
            title=title,
            title_align="left",
            subtitle=subtitle,
            subtitle_align="right",
        )

    def copied_notice(self) -> str:
        """Name the block(s) of the latest reply whose code is on the clipboard."""
        message = self._controller.last_assistant_message()
        blocks = code_segments(message.content) if message is not None else []
        numbers = [n for n, block in enumerate(blocks, start=1) if self._controller.is_acknowledged(block.content)]
        if not numbers:
            return "✓ Copied!"
        language = blocks[numbers[0] - 1].display_language
        if len(numbers) == 1:
            return f"✓ Copied code block {numbers[0]} ({language})"
        return f"✓ Copied code blocks {', '.join(str(n) for n in numbers)} ({language})"

    def print_info(self, text: str) -> None:
        self._console.print(Text(text, style="dim"))

    def close(self) -> None:
        self._unsubscribe()
        self._stop_spinner()

    def _on_event(self, event: str) -> None:
        if event == ConversationEvent.MESSAGES:
            self._stop_spinner()
            self.render_pending_messages()
        elif event == ConversationEvent.PENDING:
            if self._controller.pending_request:
                self._start_spinner()
            else:
                self._stop_spinner()
        elif event == ConversationEvent.COPY:
            if self._controller.copy_acknowledgment is not None:
                self._console.print(Text(self.copied_notice(), style="green"))

    def _start_spinner(self) -> None:
        if not self._show_spinner or self._spinner is not None:
            return
        self._spinner = Spinner(prefix=self.LINE_PREFIX, stream=self._console.file)
        self._spinner.start()

    def _stop_spinner(self) -> None:
        if self._spinner is None:
            return
        self._spinner.stop()
        self._spinner = None
