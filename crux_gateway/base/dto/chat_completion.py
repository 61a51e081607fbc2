"""Wire DTOs for a non-streaming chat completion response.

Shape::

    {id, model, choices: [{index, message: {role, content, tool_calls?},
     finish_reason}], usage?}

Decoding failures surface as ``pydantic.ValidationError`` which the executor
turns into ``ParseError``.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .tool_call import ToolCall


class Usage(BaseModel):
    """Token accounting reported by the gateway."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ResponseMessage(BaseModel):
    role: str = "assistant"
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class CompletionChoice(BaseModel):
    index: int = 0
    message: ResponseMessage = Field(default_factory=ResponseMessage)
    finish_reason: Optional[str] = None


class ChatCompletion(BaseModel):
    """Decoded ``/chat/completions`` response body."""

    id: str
    model: Optional[str] = None
    choices: List[CompletionChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None

    @property
    def text(self) -> Optional[str]:
        """Content of the first choice, if any."""
        return self.choices[0].message.content if self.choices else None

    @property
    def tool_calls(self) -> List[ToolCall]:
        """Tool calls of the first choice (empty when none were requested)."""
        if not self.choices:
            return []
        return list(self.choices[0].message.tool_calls or [])

    @property
    def finish_reason(self) -> Optional[str]:
        return self.choices[0].finish_reason if self.choices else None


__all__ = ["Usage", "ResponseMessage", "CompletionChoice", "ChatCompletion"]
