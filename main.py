#!/usr/bin/env python3
"""
OpenAI Chat Relay
Relays chat-completion requests to the OpenAI API, buffered or streamed, with permissive CORS.
"""

import os
from contextlib import asynccontextmanager

import httpx
import uvicorn

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.shared.config import config, logger
from src.shared.middleware import (
    RequestIDMiddleware,
    add_process_time_header,
    http_exception_handler,
)
from src.features.relay_chat.endpoints import router as relay_chat_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan resources."""
    client_kwargs = {"timeout": config["openai"]["timeout"]}
    if config["requestProxy"]["enabled"] and config["requestProxy"]["url"]:
        client_kwargs["proxy"] = config["requestProxy"]["url"]
        logger.info("Using proxy for httpx client: %s", config["requestProxy"]["url"])
    app.state.http_client = httpx.AsyncClient(**client_kwargs)

    logger.info("Application startup complete")
    yield
    await app.state.http_client.aclose()
    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    app_ = FastAPI(
        title="OpenAI Chat Relay",
        description="Relays chat-completion requests to the OpenAI API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app_.include_router(relay_chat_router)
    app_.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app_.middleware("http")(add_process_time_header)
    app_.add_middleware(RequestIDMiddleware)
    return app_


app = create_app()

if __name__ == "__main__":
    api_key_env = config["openai"]["api_key_env"]
    if not os.environ.get(api_key_env):
        logger.warning("%s is not set. Upstream requests will be rejected until it is.", api_key_env)

    host = config["server"]["host"]
    port = config["server"]["port"]

    logger.warning("Starting OpenAI Chat Relay on %s:%s", host, port)
    logger.warning("Upstream: %s", config["openai"]["base_url"])

    log_config = uvicorn.config.LOGGING_CONFIG
    http_log_level = config["server"].get("http_log_level", "INFO").upper()
    log_config["loggers"]["uvicorn.access"]["level"] = http_log_level

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_config=log_config,
        timeout_graceful_shutdown=30,
        server_header=False
    )
