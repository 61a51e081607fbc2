"""DTO for one entry of the gateway ``/models`` listing."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ModelInfo(BaseModel):
    """Model metadata as published by the gateway.

    Attributes:
        id: Model slug used in requests (e.g. ``"openai/gpt-4o"``).
        name: Human-readable display name.
        context_length: Maximum context window in tokens when advertised.
        pricing: Raw pricing mapping (prompt/completion price strings).
    """

    id: str
    name: Optional[str] = None
    context_length: Optional[int] = None
    pricing: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["ModelInfo"]
