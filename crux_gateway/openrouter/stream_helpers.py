"""Streaming helpers for the OpenRouter executor.

Opens the ``text/event-stream`` response and hands it to the shared
``ChunkStream`` decoder. Status handling matches the single-shot path; a
non-200 body is drained completely and the response closed before the error
is decoded so the connection goes back to the pool.
"""

from __future__ import annotations

from typing import Any, Dict

import httpx

from ..base.errors import to_provider_error
from ..base.logging import LogContext, normalized_log_event
from ..base.streaming import ChunkStream, aiter_sse_events
from .response_helpers import error_from_response


class OpenRouterStreamingMixin:
    """Mixin opening streaming chat completions."""

    async def _open_stream(self, payload: Dict[str, Any], model: str, ctx: LogContext) -> ChunkStream:
        """Open the SSE response and wrap it in a ``ChunkStream``.

        Raises:
            ProviderError: transport failure or non-200 status.
        """
        request = self._client.build_request(
            "POST",
            self._chat_path,
            json=payload,
            headers={**self._build_headers(), "Accept": "text/event-stream"},
        )
        try:
            resp = await self._client.send(request, stream=True)
        except httpx.TransportError as e:
            err = to_provider_error(e, provider=self.provider_name, model=model)
            self._log_failure("stream.error", ctx, err)
            raise err from e

        if resp.status_code != 200:
            try:
                body = (await resp.aread()).decode("utf-8", errors="replace")
            except httpx.TransportError as e:
                err = to_provider_error(e, provider=self.provider_name, model=model)
                self._log_failure("stream.error", ctx, err)
                raise err from e
            finally:
                await resp.aclose()
            err = error_from_response(resp.status_code, body, resp.headers, model=model)
            self._log_failure("stream.error", ctx, err)
            raise err

        normalized_log_event(
            self._logger,
            "stream.open",
            ctx,
            phase="start",
            attempt=None,
            emitted=None,
            tokens=None,
        )
        return ChunkStream(
            aiter_sse_events(resp.aiter_lines()),
            idle_timeout=self._timeouts.stream_idle_timeout_seconds,
            on_close=resp.aclose,
            logger=self._logger,
            ctx=ctx,
        )


__all__ = ["OpenRouterStreamingMixin"]
