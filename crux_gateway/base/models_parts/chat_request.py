"""
ChatRequest DTO for chat completion calls.

The request carries the conversation, sampling parameters and tool-calling
options. ``to_payload`` emits only the fields that were set so gateway-side
defaults stay in effect; ``extra`` is merged verbatim for routing options
and anything else this class does not model.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .message import Message
from .tool_definition import ToolDefinition


@dataclass
class ChatRequest:
    """Chat completion request.

    Attributes:
        messages: Ordered conversation history.
        model: Model slug; the client default is used when ``None``.
        temperature: Sampling temperature.
        top_p: Nucleus sampling mass.
        max_tokens: Completion token cap.
        stop: Stop sequence(s).
        seed: Sampling seed for reproducibility where supported.
        tools: Tool definitions (typed or already in wire form).
        tool_choice: ``"auto"``, ``"none"``, ``"required"`` or a function selector.
        response_format: Response format object (e.g. ``{"type": "json_object"}``).
        extra: Passthrough fields merged into the payload last.
    """

    messages: List[Message]
    model: Optional[str] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    stop: Optional[Union[str, List[str]]] = None
    seed: Optional[int] = None
    tools: Optional[List[Union[ToolDefinition, Dict[str, Any]]]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    response_format: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self, default_model: str, *, stream: bool = False) -> Dict[str, Any]:
        """Build the JSON body for ``/chat/completions``."""
        payload: Dict[str, Any] = {
            "model": self.model or default_model,
            "messages": [m.to_dict() for m in self.messages],
            "stream": stream,
        }
        optional = {
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
            "stop": self.stop,
            "seed": self.seed,
            "tool_choice": self.tool_choice,
            "response_format": self.response_format,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})
        if self.tools:
            payload["tools"] = [t.to_dict() if isinstance(t, ToolDefinition) else t for t in self.tools]
        payload.update(self.extra)
        return payload


__all__ = [
    "ChatRequest",
]
