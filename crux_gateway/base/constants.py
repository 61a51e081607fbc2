"""Shared string constants for the gateway client.

Kept in one place so error messages and protocol literals stay stable for
log analytics and tests.
"""

# Literal SSE payload marking normal stream termination.
DONE_SENTINEL = "[DONE]"

CHAT_COMPLETIONS_PATH = "/chat/completions"
MODELS_PATH = "/models"

MISSING_API_KEY_ERROR = "missing API key (set OPENROUTER_API_KEY or pass api_key)"

# Attribution headers understood by OpenRouter.
HEADER_REFERER = "HTTP-Referer"
HEADER_TITLE = "X-Title"
HEADER_RETRY_AFTER = "Retry-After"
