from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from .handler import RelayChatHandler

router = APIRouter()

# Methods the router enumerates; anything else is rejected at routing level
RELAY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=RELAY_METHODS, response_model=None)
async def relay_chat(
    request: Request,
    handler: RelayChatHandler = Depends(RelayChatHandler)
) -> Response:
    """Relays a chat completion to OpenAI. Only POST and OPTIONS are served."""
    return await handler.handle(request)
