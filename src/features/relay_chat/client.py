# src/features/relay_chat/client.py
from typing import Any, Callable, Dict

import httpx

from src.shared.config import config, logger
from src.shared.constants import CHAT_COMPLETIONS_PATH


class OpenAIClient:
    """Sends chat-completion requests to OpenAI. One attempt, no retries."""

    def __init__(self, http_client: httpx.AsyncClient, api_key_provider: Callable[[], str]):
        self._client = http_client
        self._api_key_provider = api_key_provider

    def _build_request(self, request_data: Dict[str, Any]) -> httpx.Request:
        headers = {
            "Content-Type": "application/json",
            # No trailing space when the key is unset
            "Authorization": f"Bearer {self._api_key_provider()}".strip(),
        }
        return self._client.build_request(
            "POST",
            f"{config['openai']['base_url']}{CHAT_COMPLETIONS_PATH}",
            json=request_data,
            headers=headers,
        )

    async def send_non_stream(self, request_data: Dict[str, Any]) -> httpx.Response:
        """Sends a request and reads the whole response body."""
        logger.info("Sending non-stream request for model '%s'.", request_data.get("model"))
        return await self._client.send(self._build_request(request_data))

    async def open_stream(self, request_data: Dict[str, Any]) -> httpx.Response:
        """
        Sends a request and returns as soon as the response headers arrive.
        The caller owns the returned response and must close it.
        """
        logger.info("Opening stream for model '%s'.", request_data.get("model"))
        return await self._client.send(self._build_request(request_data), stream=True)
