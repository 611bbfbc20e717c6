"""
Constants shared across the relay.
"""

OPENAI_BASE_URL = "https://api.openai.com/v1"
CHAT_COMPLETIONS_PATH = "/chat/completions"

# Reasoning models need a large completion budget
DEFAULT_MODEL = "gpt-5-mini"
DEFAULT_TEMPERATURE = 1
DEFAULT_MAX_COMPLETION_TOKENS = 16000

METHOD_NOT_ALLOWED_ERROR = "Method not allowed"

CORS_ALLOW_ORIGIN = {"Access-Control-Allow-Origin": "*"}

PREFLIGHT_HEADERS = {
    **CORS_ALLOW_ORIGIN,
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

SSE_HEADERS = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    **CORS_ALLOW_ORIGIN,
}
