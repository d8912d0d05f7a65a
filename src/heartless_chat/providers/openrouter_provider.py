import json

import httpx
from loguru import logger

from heartless_chat.provider import (
    CompletionHTTPError,
    CompletionPayloadError,
    CompletionTransportError,
)

NO_RESPONSE_PLACEHOLDER = "Sorry, I couldn't generate a response."


def _extract_reply(data: object) -> str | None:
    """Return choices[0].message.content, or None when any level is missing."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str) or not content:
        return None
    return content


class OpenRouterProvider:
    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str,
        model: str,
        referer: str,
        title: str,
        timeout_seconds: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._endpoint = endpoint
        self._model = model
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "HTTP-Referer": referer,
            "X-Title": title,
            "Content-Type": "application/json",
        }

    def build_payload(self, messages: list[dict]) -> dict:
        return {
            "model": self._model,
            "messages": [{"role": m["role"], "content": m["content"]} for m in messages],
        }

    async def complete(self, messages: list[dict]) -> str:
        payload = self.build_payload(messages)
        logger.debug(f"API request: model={self._model}, messages={len(messages)}")

        try:
            response = await self._client.post(self._endpoint, headers=self._headers, json=payload)
        except httpx.TimeoutException as ex:
            raise CompletionTransportError(f"Request timed out: {ex}") from ex
        except httpx.HTTPError as ex:
            raise CompletionTransportError(f"Request failed: {ex}") from ex

        if not response.is_success:
            raise CompletionHTTPError(response.status_code, response.text)

        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as ex:
            raise CompletionPayloadError(f"Response body is not JSON: {ex}") from ex

        reply = _extract_reply(data)
        if reply is None:
            logger.warning("API response had no choices[0].message.content; using placeholder")
            return NO_RESPONSE_PLACEHOLDER

        logger.debug(f"API response: {len(reply)} chars")
        return reply

    async def aclose(self) -> None:
        await self._client.aclose()
