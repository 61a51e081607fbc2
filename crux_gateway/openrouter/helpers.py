"""Common helpers for the OpenRouter executor.

Purpose:
    Payload and header builders shared by the single-shot and streaming
    paths.

Notes:
    These helpers assume the consumer provides ``_api_key``, ``_model``,
    ``_app_name`` and ``_app_url`` attributes.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.constants import HEADER_REFERER, HEADER_TITLE, MISSING_API_KEY_ERROR
from ..base.errors import AuthError
from ..base.models import ChatRequest


class OpenRouterCommonMixin:
    """Mixin offering shared payload/header builders for OpenRouter."""

    def _require_api_key(self, model: Optional[str]) -> str:
        """Return the API key or raise ``AuthError`` before any I/O."""
        api_key: Optional[str] = getattr(self, "_api_key", None)
        if not api_key:
            raise AuthError(MISSING_API_KEY_ERROR, model=model)
        return api_key

    def _resolve_model(self, request: ChatRequest) -> str:
        return str(request.model or self._model)

    def _build_payload(self, request: ChatRequest, *, stream: bool) -> Dict[str, Any]:
        """Assemble the JSON body for ``/chat/completions``."""
        return request.to_payload(self._model, stream=stream)

    def _build_headers(self) -> Dict[str, str]:
        """Build authorization and attribution headers.

        Returns:
            Mapping with ``Authorization`` when a key is configured, plus
            ``HTTP-Referer``/``X-Title`` when the app is identified.
        """
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        api_key: Optional[str] = getattr(self, "_api_key", None)
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        if getattr(self, "_app_url", None):
            headers[HEADER_REFERER] = self._app_url
        if getattr(self, "_app_name", None):
            headers[HEADER_TITLE] = self._app_name
        return headers


__all__ = ["OpenRouterCommonMixin"]
