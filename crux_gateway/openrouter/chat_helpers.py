"""Chat helpers for the OpenRouter executor.

Encapsulates the single-shot HTTP exchange: transport error mapping,
status interpretation and body decoding, so the client module stays
focused on orchestration.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from ..base.dto.chat_completion import ChatCompletion
from ..base.errors import to_provider_error
from ..base.logging import LogContext, normalized_log_event
from .response_helpers import decode_body, error_from_response

M = TypeVar("M", bound=BaseModel)


class OpenRouterChatMixin:
    """Mixin providing request execution and response decoding."""

    async def _send(
        self,
        method: str,
        path: str,
        *,
        payload: Optional[Dict[str, Any]],
        model: Optional[str],
    ) -> httpx.Response:
        """Send one request; transport failures become typed errors."""
        try:
            return await self._client.request(method, path, json=payload, headers=self._build_headers())
        except httpx.TransportError as e:
            raise to_provider_error(e, provider=self.provider_name, model=model) from e

    async def _exchange(
        self,
        method: str,
        path: str,
        model_cls: Type[M],
        *,
        payload: Optional[Dict[str, Any]] = None,
        model: Optional[str] = None,
    ) -> M:
        """Perform a request and decode a 200 body into ``model_cls``."""
        resp = await self._send(method, path, payload=payload, model=model)
        if resp.status_code != 200:
            raise error_from_response(resp.status_code, resp.text, resp.headers, model=model)
        return decode_body(model_cls, resp.text, model=model)

    async def _execute_chat(self, payload: Dict[str, Any], model: str, ctx: LogContext) -> ChatCompletion:
        """POST the chat payload and return the decoded completion."""
        t0 = time.perf_counter()
        try:
            completion = await self._exchange("POST", self._chat_path, ChatCompletion, payload=payload, model=model)
        except Exception as e:
            self._log_failure("chat.error", ctx, e)
            raise
        latency_ms = (time.perf_counter() - t0) * 1000.0
        ctx.response_id = completion.id
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=True,
            tokens=completion.usage,
            latency_ms=round(latency_ms, 2),
            finish_reason=completion.finish_reason,
            tool_calls=len(completion.tool_calls) or None,
        )
        return completion

    def _log_failure(self, event: str, ctx: LogContext, error: Exception) -> None:
        code = getattr(error, "code", None)
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="finalize",
            attempt=None,
            emitted=False,
            tokens=None,
            error=str(error),
            error_code=code.value if code is not None else error.__class__.__name__,
        )


__all__ = ["OpenRouterChatMixin"]
