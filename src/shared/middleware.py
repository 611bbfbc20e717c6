import time
import uuid
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from src.shared.config import logger
from src.shared.constants import METHOD_NOT_ALLOWED_ERROR


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Injects a unique request ID into every incoming request for tracing.
    """
    async def dispatch(
        self, request: Request, call_next
    ) -> Response:
        request.state.request_id = request.headers.get('X-Request-ID', str(uuid.uuid4()))
        response = await call_next(request)
        response.headers["X-Request-ID"] = request.state.request_id
        return response


async def add_process_time_header(
    request: Request, call_next
) -> Response:
    """
    Adds a custom X-Process-Time header and logs request completion details.
    For streamed responses the duration covers the time to first byte only.
    """
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    logger.info(
        "Request completed",
        extra={
            "req_id": getattr(request.state, 'request_id', 'N/A'),
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_sec": round(process_time, 4)
        }
    )
    return response


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Renders routing-level HTTP errors with the relay's {"error": ...} body.
    """
    detail = METHOD_NOT_ALLOWED_ERROR if exc.status_code == 405 else exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )
