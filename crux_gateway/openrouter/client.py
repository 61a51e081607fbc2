"""OpenRouter gateway client (OpenAI-compatible chat completions over HTTP).

Summary:
- Single-shot chat via ``httpx.AsyncClient`` returning a decoded
  ``ChatCompletion``.
- Streaming chat returning a ``ChunkStream`` over the SSE response.
- Retry-wrapped siblings built only by passing the base operations through
  ``with_retry``; no status-code logic is duplicated.

Errors:
- Every failure is a typed ``ProviderError`` (see ``base.errors``); the
  retry-wrapped variants report it inside ``RetryResult`` instead.

Observability:
- Structured ``chat.*`` / ``stream.*`` events through ``normalized_log_event``.

This module orchestrates I/O only; decoding, accumulation and the retry
policy live in the shared base layers.
"""

from __future__ import annotations

from typing import Any, List, Optional

import httpx
from pydantic import BaseModel, Field

from ..base.constants import CHAT_COMPLETIONS_PATH, MODELS_PATH
from ..base.dto.chat_completion import ChatCompletion
from ..base.dto.model_info import ModelInfo
from ..base.http import create_async_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatRequest
from ..base.resilience.retry import DEFAULT_RETRY_CONFIG, RetryConfig, RetryResult, with_retry
from ..base.streaming import ChunkStream, StreamState
from ..base.timeouts import TimeoutConfig, get_timeout_config
from ..config import get_client_config
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL, OPENROUTER_DEFAULT_MODEL

from .chat_helpers import OpenRouterChatMixin
from .helpers import OpenRouterCommonMixin
from .stream_helpers import OpenRouterStreamingMixin


class _ModelListing(BaseModel):
    data: List[ModelInfo] = Field(default_factory=list)


class OpenRouterClient(
    OpenRouterCommonMixin,
    OpenRouterChatMixin,
    OpenRouterStreamingMixin,
):
    """Async client for the OpenRouter chat completions API.

    Parameters:
        api_key: Explicit API key; resolved from configuration when omitted.
        model: Default model slug for requests that do not name one.
        base_url: API root (defaults to ``https://openrouter.ai/api/v1``).
        app_name: Sent as ``X-Title`` for gateway-side attribution.
        app_url: Sent as ``HTTP-Referer`` for gateway-side attribution.
        retry_config: Policy used by the ``*_with_retry`` methods.
        timeouts: Transport and stream-idle timeouts.
        transport: Custom ``httpx`` transport (tests use ``MockTransport``).

    Side effects:
        - Reads merged configuration via ``get_client_config()``.
        - Owns an ``httpx.AsyncClient``; close it with ``aclose()`` or use
          the client as an async context manager.
    """

    provider_name = "openrouter"
    _chat_path = CHAT_COMPLETIONS_PATH

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        app_name: Optional[str] = None,
        app_url: Optional[str] = None,
        retry_config: Optional[RetryConfig] = None,
        timeouts: Optional[TimeoutConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        cfg = get_client_config(
            {
                "api_key": api_key,
                "model": str(model) if model else None,
                "base_url": base_url,
                "app_name": app_name,
                "app_url": app_url,
            }
        )
        self._api_key: Optional[str] = cfg.get("api_key")
        self._model: str = cfg.get("model") or OPENROUTER_DEFAULT_MODEL
        self._base_url: str = cfg.get("base_url") or OPENROUTER_DEFAULT_BASE_URL
        self._app_name: Optional[str] = cfg.get("app_name")
        self._app_url: Optional[str] = cfg.get("app_url")
        self._retry_config = retry_config or DEFAULT_RETRY_CONFIG
        self._timeouts = timeouts or get_timeout_config()
        self._logger = get_logger("openrouter")
        self._client = create_async_client(self._base_url, timeouts=self._timeouts, transport=transport)

    def default_model(self) -> str:
        return self._model

    # ---- Single-shot ----
    async def chat(self, request: ChatRequest) -> ChatCompletion:
        """Perform a non-streaming chat completion.

        Raises:
            AuthError: missing key or HTTP 401.
            RateLimitError: HTTP 429 (``retry_after`` from ``Retry-After``).
            ApiError: error envelope on another status.
            HttpError: 5xx without an error envelope.
            ParseError: undecodable body.
            NetworkError / RequestTimeoutError: transport failures.
        """
        model = self._resolve_model(request)
        ctx = self._context(model, stream=False)
        self._require_api_key(model)
        self._log_start("chat.start", ctx, request)
        return await self._execute_chat(self._build_payload(request, stream=False), model, ctx)

    async def chat_with_retry(
        self, request: ChatRequest, config: Optional[RetryConfig] = None
    ) -> RetryResult[ChatCompletion]:
        """``chat`` under the retry policy; failures are returned, not raised."""
        model = self._resolve_model(request)
        return await with_retry(
            config or self._retry_config,
            lambda: self.chat(request),
            ctx=self._context(model, stream=False).bind(operation="chat_with_retry"),
        )

    # ---- Streaming ----
    async def stream_chat(self, request: ChatRequest) -> ChunkStream:
        """Open a streaming chat completion.

        Returns:
            An open ``ChunkStream``; close it (``async with``) when done.

        Raises:
            The same errors as :meth:`chat`, raised before any chunk is read.
        """
        model = self._resolve_model(request)
        ctx = self._context(model, stream=True)
        self._require_api_key(model)
        self._log_start("stream.start", ctx, request)
        return await self._open_stream(self._build_payload(request, stream=True), model, ctx)

    async def stream_chat_with_retry(
        self, request: ChatRequest, config: Optional[RetryConfig] = None
    ) -> RetryResult[ChunkStream]:
        """``stream_chat`` under the retry policy (covers opening the stream)."""
        model = self._resolve_model(request)
        return await with_retry(
            config or self._retry_config,
            lambda: self.stream_chat(request),
            ctx=self._context(model, stream=True).bind(operation="stream_chat_with_retry"),
        )

    async def stream_to_state(self, request: ChatRequest) -> StreamState:
        """Stream a completion and return the fully merged state."""
        async with await self.stream_chat(request) as stream:
            return await stream.collect_state()

    # ---- Models ----
    async def list_models(self) -> List[ModelInfo]:
        """Return the models published by the gateway (``GET /models``)."""
        self._require_api_key(None)
        listing = await self._exchange("GET", MODELS_PATH, _ModelListing)
        return listing.data

    # ---- Lifecycle ----
    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "OpenRouterClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _context(self, model: str, *, stream: bool) -> LogContext:
        return LogContext(provider=self.provider_name, model=model, stream=stream)

    def _log_start(self, event: str, ctx: LogContext, request: ChatRequest) -> None:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="start",
            attempt=None,
            emitted=None,
            tokens=None,
            messages=len(request.messages),
            has_tools=bool(request.tools),
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )


__all__ = ["OpenRouterClient"]
