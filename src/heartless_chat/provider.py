from typing import Protocol, runtime_checkable

from heartless_chat.chat_config import ChatConfig


class CompletionError(Exception):
    """Base class for failures that turn a reply into the apology message."""


class CompletionTransportError(CompletionError):
    pass


class CompletionHTTPError(CompletionError):
    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"HTTP error! status: {status_code}")
        self.status_code = status_code
        self.body = body


class CompletionPayloadError(CompletionError):
    pass


@runtime_checkable
class CompletionProvider(Protocol):
    async def complete(self, messages: list[dict]) -> str:
        """Send the whole conversation and return the assistant reply text.

        Raises CompletionError subclasses for transport, status and
        undecodable-body failures. A decodable body without reply text yields
        a placeholder string instead of raising.
        """
        ...

    async def aclose(self) -> None:
        ...


def create_provider(config: ChatConfig) -> CompletionProvider:
    """Factory: create the completion provider for the configured endpoint."""
    from heartless_chat.providers.openrouter_provider import OpenRouterProvider
    return OpenRouterProvider(
        api_key=config.api_key,
        endpoint=config.endpoint,
        model=config.model,
        referer=config.referer,
        title=config.title,
        timeout_seconds=config.request_timeout_seconds,
    )
