"""crux_gateway package

Typed async client for an OpenAI-compatible LLM gateway (OpenRouter).

Purpose:
    Provide a small, stable API for sending chat completions, consuming
    streamed completions as typed deltas and retrying transient failures.

Public API (re-exported):
    - Version: ``__version__``
    - Executor: :class:`OpenRouterClient`
    - Requests: :class:`ChatRequest`, :class:`Message`, :class:`ToolDefinition`
    - Streaming: :class:`ChunkStream`, :class:`StreamState`,
      :class:`StreamController`, :func:`merge_chunk`
    - Retry: :class:`RetryConfig`, :class:`RetryResult`, :func:`with_retry`
    - Errors: :class:`ProviderError` and its variants, :class:`ErrorCode`
"""

from .base import (
    ApiError,
    AuthError,
    CancellationToken,
    CancelledError,
    ChatCompletion,
    ChatRequest,
    ChunkStream,
    DeltaChunk,
    ErrorCode,
    HttpError,
    Message,
    ModelInfo,
    NetworkError,
    NO_RETRY,
    ParseError,
    ProviderError,
    RateLimitError,
    RequestTimeoutError,
    RetryConfig,
    RetryResult,
    StreamController,
    StreamState,
    ToolCall,
    ToolDefinition,
    merge_chunk,
    with_retry,
)
from .base.logging import configure_logger, get_logger
from .openrouter import OpenRouterClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "OpenRouterClient",
    "ChatRequest",
    "Message",
    "ToolDefinition",
    "ToolCall",
    "ChatCompletion",
    "DeltaChunk",
    "ModelInfo",
    "ChunkStream",
    "StreamState",
    "StreamController",
    "CancellationToken",
    "merge_chunk",
    "RetryConfig",
    "RetryResult",
    "NO_RETRY",
    "with_retry",
    "ErrorCode",
    "ProviderError",
    "ApiError",
    "AuthError",
    "CancelledError",
    "HttpError",
    "NetworkError",
    "ParseError",
    "RateLimitError",
    "RequestTimeoutError",
    "configure_logger",
    "get_logger",
]
