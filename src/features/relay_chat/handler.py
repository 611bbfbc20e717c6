# src/features/relay_chat/handler.py
import asyncio
import json
from typing import Any, AsyncGenerator, Dict

import httpx
from fastapi import Depends, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse

from src.shared.config import logger
from src.shared.constants import (
    CORS_ALLOW_ORIGIN,
    METHOD_NOT_ALLOWED_ERROR,
    PREFLIGHT_HEADERS,
    SSE_HEADERS,
)
from src.shared.dependencies import get_openai_client

from .client import OpenAIClient
from .command import RelayChatCommand
from .decoder import StreamDecoder


def format_sse_error(error_text: str) -> str:
    """Wraps an upstream error body in a single SSE data event."""
    payload = json.dumps({"error": error_text}, ensure_ascii=False, separators=(",", ":"))
    return f"data: {payload}\n\n"


class RelayChatHandler:
    def __init__(self, openai_client: OpenAIClient = Depends(get_openai_client)):
        self._client = openai_client

    async def handle(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=PREFLIGHT_HEADERS)

        if request.method != "POST":
            return JSONResponse(status_code=405, content={"error": METHOD_NOT_ALLOWED_ERROR})

        try:
            command = RelayChatCommand.from_body(await request.json())
            request_data = command.to_request_data()

            if command.stream:
                return await self._relay_stream(request_data)
            return await self._relay_non_stream(request_data)
        except Exception as e:
            logger.error("Proxy error: %s", e)
            return JSONResponse(
                status_code=500,
                content={"error": str(e)},
                headers=CORS_ALLOW_ORIGIN,
            )

    async def _relay_non_stream(self, request_data: Dict[str, Any]) -> JSONResponse:
        # Upstream status is not inspected here; error payloads go back with 200
        response = await self._client.send_non_stream(request_data)
        completion = response.json()
        return JSONResponse(status_code=200, content=completion, headers=CORS_ALLOW_ORIGIN)

    async def _relay_stream(self, request_data: Dict[str, Any]) -> StreamingResponse:
        upstream = await self._client.open_stream(request_data)

        if not upstream.is_success:
            try:
                await upstream.aread()
            finally:
                await upstream.aclose()
            error_text = upstream.text
            logger.error("OpenAI error (%s): %s", upstream.status_code, error_text)
            return StreamingResponse(
                iter([format_sse_error(error_text)]),
                headers=SSE_HEADERS,
            )

        logger.info("Stream started with upstream status %s.", upstream.status_code)
        return StreamingResponse(self.relay_chunks(upstream), headers=SSE_HEADERS)

    async def relay_chunks(self, upstream: httpx.Response) -> AsyncGenerator[str, None]:
        """Yields the upstream body as text, chunk by chunk, then closes the upstream."""
        decoder = StreamDecoder()
        try:
            async for chunk in upstream.aiter_bytes():
                text = decoder.decode(chunk)
                if text:
                    yield text
            remainder = decoder.flush()
            if remainder:
                yield remainder
            logger.info("Stream completed.")
        except (asyncio.CancelledError, GeneratorExit):
            logger.warning("Client disconnected mid-stream, closing upstream.")
            raise
        except Exception as err:
            logger.error("Stream error: %s", err)
        finally:
            await upstream.aclose()
