from __future__ import annotations

import asyncio
from collections.abc import Callable

from loguru import logger

from heartless_chat.chat_config import DEFAULT_GREETING
from heartless_chat.clipboard import Clipboard
from heartless_chat.message import Message, MessageIdFactory, Role
from heartless_chat.provider import (
    CompletionError,
    CompletionHTTPError,
    CompletionPayloadError,
    CompletionProvider,
    CompletionTransportError,
)

APOLOGY_MESSAGE = "Sorry, I encountered an error while processing your request. Please try again."


class ConversationEvent:
    MESSAGES = "messages"
    PENDING = "pending"
    DRAFT = "draft"
    COPY = "copy"


ConversationListener = Callable[[str], None]


class ConversationController:
    """Owns the message log and the transient request/copy state of one session.

    All mutation happens on the event loop thread. The only suspension points
    are the completion request and the clipboard write.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        clipboard: Clipboard,
        *,
        greeting: str = DEFAULT_GREETING,
        copy_acknowledgment_seconds: float = 2.0,
    ):
        self._provider = provider
        self._clipboard = clipboard
        self._copy_acknowledgment_seconds = copy_acknowledgment_seconds
        self._ids = MessageIdFactory()
        self._messages: list[Message] = []
        self._pending_request = False
        self._draft_input = ""
        self._copy_acknowledgment: str | None = None
        self._copy_expiry: asyncio.TimerHandle | None = None
        self._inflight: asyncio.Task | None = None
        self._listeners: list[ConversationListener] = []

        self._append(Role.ASSISTANT, greeting)

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def pending_request(self) -> bool:
        return self._pending_request

    @property
    def draft_input(self) -> str:
        return self._draft_input

    @property
    def copy_acknowledgment(self) -> str | None:
        return self._copy_acknowledgment

    def is_acknowledged(self, code_content: str) -> bool:
        # Keyed by content: identical blocks are acknowledged together.
        return self._copy_acknowledgment is not None and self._copy_acknowledgment == code_content

    def last_assistant_message(self) -> Message | None:
        for message in reversed(self._messages):
            if message.role == Role.ASSISTANT:
                return message
        return None

    def subscribe(self, listener: ConversationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update_draft(self, text: str) -> None:
        self._draft_input = text
        self._notify(ConversationEvent.DRAFT)

    def submit_draft(self) -> asyncio.Task | None:
        return self.submit(self._draft_input)

    def submit(self, text: str) -> asyncio.Task | None:
        """Append a user turn and start the completion request.

        Returns the task that settles the turn, or None when the submission is
        empty or a request is already pending (both are silent no-ops).
        """
        if not text.strip():
            logger.debug("Ignoring empty submission")
            return None
        if self._pending_request:
            logger.debug("Ignoring submission while a request is pending")
            return None

        loop = asyncio.get_running_loop()

        self._append(Role.USER, text)
        history = [m.to_wire() for m in self._messages]
        self._draft_input = ""
        self._notify(ConversationEvent.DRAFT)
        self._set_pending(True)

        self._inflight = loop.create_task(self._complete(history))
        return self._inflight

    async def acknowledge_copy(self, code_content: str) -> bool:
        try:
            await self._clipboard.write_text(code_content)
        except Exception as ex:
            logger.warning(f"Failed to copy: {ex}")
            return False

        if self._copy_expiry is not None:
            self._copy_expiry.cancel()
        self._copy_acknowledgment = code_content
        self._copy_expiry = asyncio.get_running_loop().call_later(
            self._copy_acknowledgment_seconds,
            self._expire_copy_acknowledgment,
        )
        self._notify(ConversationEvent.COPY)
        return True

    async def close(self) -> None:
        if self._copy_expiry is not None:
            self._copy_expiry.cancel()
            self._copy_expiry = None
        if self._inflight is not None and not self._inflight.done():
            await self._inflight

    async def _complete(self, history: list[dict]) -> None:
        try:
            reply = await self._request_reply(history)
            self._append(Role.ASSISTANT, reply)
        finally:
            self._inflight = None
            self._set_pending(False)

    async def _request_reply(self, history: list[dict]) -> str:
        try:
            return await self._provider.complete(history)
        except CompletionHTTPError as ex:
            logger.error(f"Error sending message: HTTP status {ex.status_code}")
        except CompletionTransportError as ex:
            logger.error(f"Error sending message: {ex}")
        except CompletionPayloadError as ex:
            logger.error(f"Error reading reply: {ex}")
        except CompletionError as ex:
            logger.error(f"Error sending message: {ex}")
        except Exception as ex:
            logger.exception(f"Unexpected error from completion provider: {ex}")
        return APOLOGY_MESSAGE

    def _expire_copy_acknowledgment(self) -> None:
        self._copy_expiry = None
        self._copy_acknowledgment = None
        self._notify(ConversationEvent.COPY)

    def _append(self, role: str, content: str) -> Message:
        message = Message(id=self._ids.next_id(), role=role, content=content)
        self._messages.append(message)
        self._notify(ConversationEvent.MESSAGES)
        return message

    def _set_pending(self, value: bool) -> None:
        if self._pending_request == value:
            return
        self._pending_request = value
        self._notify(ConversationEvent.PENDING)

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as ex:
                logger.warning(f"Conversation listener failed on '{event}': {ex}")
