#!/usr/bin/env python3
"""
Smoke test script for the OpenAI Chat Relay.
Runs against a live relay using the host/port from config.yml.
"""

import asyncio
import json
from typing import Dict, Any

import httpx
import yaml

MODEL = "gpt-5-mini"
MESSAGES = [{"role": "user", "content": "Say hello in one short sentence."}]


def load_config() -> Dict[str, Any]:
    """Load configuration from config.yml"""
    try:
        with open("config.yml", encoding="utf-8") as file:
            return yaml.safe_load(file) or {}
    except FileNotFoundError:
        return {}


async def test_feature(feature_name: str, test_func: callable):
    """Run a feature test with formatted output"""
    print(f"\n=== Testing {feature_name} ===")
    try:
        await test_func()
        print(f"✅ {feature_name} test passed")
    except Exception as e:
        print(f"❌ {feature_name} test failed: {str(e)}")
        raise


async def test_preflight(client: httpx.AsyncClient, url: str):
    """Preflight must succeed without touching OpenAI"""
    resp = await client.options(url)
    assert resp.status_code == 200, f"Expected 200, got {resp.status_code}"
    assert resp.headers.get("access-control-allow-origin") == "*"
    print(f"Allowed methods: {resp.headers.get('access-control-allow-methods')}")


async def test_method_not_allowed(client: httpx.AsyncClient, url: str):
    resp = await client.get(url)
    assert resp.status_code == 405, f"Expected 405, got {resp.status_code}"
    assert resp.json() == {"error": "Method not allowed"}


async def test_relay_chat(client: httpx.AsyncClient, url: str):
    """Buffered relay"""
    resp = await client.post(url, json={"model": MODEL, "messages": MESSAGES})
    resp.raise_for_status()
    data = resp.json()
    if "error" in data:
        raise AssertionError(f"OpenAI returned an error: {data['error']}")
    print(data["choices"][0]["message"]["content"])


async def test_relay_chat_stream(client: httpx.AsyncClient, url: str):
    """Streamed relay"""
    request_data = {"model": MODEL, "messages": MESSAGES, "stream": True}
    async with client.stream("POST", url, json=request_data) as resp:
        resp.raise_for_status()
        assert resp.headers["content-type"].startswith("text/event-stream")
        async for line in resp.aiter_lines():
            line = line.strip()
            if not line.startswith("data: "):
                continue
            content = line[6:]
            if content == "[DONE]":
                continue
            data = json.loads(content)
            if "error" in data:
                raise AssertionError(f"OpenAI returned an error: {data['error']}")
            print(".", end="", flush=True)
    print("\nStream completed")


async def run_tests():
    """Run all feature tests"""
    server_config = load_config().get("server") or {}

    host = server_config.get("host", "0.0.0.0")
    host = "127.0.0.1" if host == "0.0.0.0" else host
    port = server_config.get("port", 5555)
    url = f"http://{host}:{port}/v1/chat/completions"

    async with httpx.AsyncClient(timeout=120.0) as client:
        await test_feature("Preflight", lambda: test_preflight(client, url))
        await test_feature("Method Gate", lambda: test_method_not_allowed(client, url))
        await test_feature("Relay Chat", lambda: test_relay_chat(client, url))
        await test_feature("Relay Chat Stream", lambda: test_relay_chat_stream(client, url))

if __name__ == "__main__":
    print("Running OpenAI Chat Relay smoke tests")
    asyncio.run(run_tests())
