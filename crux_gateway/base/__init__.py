"""
Gateway Base Package

Exports the transport-agnostic layers the executor is built from:

- Errors: the ``ProviderError`` taxonomy and exception classification
- Models / DTOs: request dataclasses and pydantic wire shapes
- Streaming: SSE framing, chunk decoding, delta accumulation, controller
- Resilience: retry policy with exponential backoff and jitter
- Timeouts and cancellation primitives
"""

from .errors import (
    ApiError,
    AuthError,
    ErrorCode,
    HttpError,
    NetworkError,
    ParseError,
    ProviderError,
    RateLimitError,
    RequestTimeoutError,
)
from .models import ChatRequest, FunctionCall, KnownModel, Message, Role, ToolCall, ToolDefinition
from .dto import ChatCompletion, DeltaChunk, ModelInfo, Usage
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken, CancelledError
from .resilience import NO_RETRY, RetryConfig, RetryResult, retry, with_retry
from .streaming import (
    ChunkStream,
    StreamController,
    StreamState,
    ToolCallAccumulator,
    completed_tool_calls,
    fold_chunks,
    merge_chunk,
)

__all__ = [
    # Errors
    "ErrorCode",
    "ProviderError",
    "ApiError",
    "AuthError",
    "HttpError",
    "NetworkError",
    "ParseError",
    "RateLimitError",
    "RequestTimeoutError",
    # Models
    "Role",
    "Message",
    "ToolDefinition",
    "ChatRequest",
    "KnownModel",
    "FunctionCall",
    "ToolCall",
    "ChatCompletion",
    "DeltaChunk",
    "ModelInfo",
    "Usage",
    # Timeouts / cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Resilience
    "RetryConfig",
    "RetryResult",
    "NO_RETRY",
    "retry",
    "with_retry",
    # Streaming
    "ChunkStream",
    "StreamController",
    "StreamState",
    "ToolCallAccumulator",
    "completed_tool_calls",
    "fold_chunks",
    "merge_chunk",
]
