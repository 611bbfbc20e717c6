#!/usr/bin/env python3
"""
Dependency provider functions for the application.
"""

import os
from typing import Callable

import httpx
from fastapi import Depends, Request

from src.shared.config import config, logger
from src.features.relay_chat.client import OpenAIClient


def read_api_key() -> str:
    """Reads the OpenAI API key from the environment at call time."""
    env_name = config["openai"]["api_key_env"]
    api_key = os.environ.get(env_name, "")
    if not api_key:
        logger.warning("Environment variable %s is not set; upstream will reject the request.", env_name)
    return api_key


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Returns the shared httpx.AsyncClient instance."""
    return request.app.state.http_client


def get_api_key_provider() -> Callable[[], str]:
    """Returns the callable used to look up the upstream credential."""
    return read_api_key


def get_openai_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    api_key_provider: Callable[[], str] = Depends(get_api_key_provider),
) -> OpenAIClient:
    """Returns an OpenAIClient bound to the shared HTTP client."""
    return OpenAIClient(http_client=http_client, api_key_provider=api_key_provider)
