"""Wire DTOs for one streamed chat-completion update.

Each SSE ``data:`` payload decodes into a :class:`DeltaChunk`. All fields
except the chunk ``id`` are optional because gateways omit whatever did not
change in that update. Unknown keys are ignored.

Notes
-----
- ``choices`` may be empty (usage-only or malformed upstream chunks).
  Consumers treat that as a no-op chunk.
- ``ToolCallDelta.index`` is the position in the eventual tool-call array,
  not an identifier. ``FunctionCallDelta.arguments`` is a fragment to append.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .chat_completion import Usage


class FunctionCallDelta(BaseModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCallDelta(BaseModel):
    index: int = Field(ge=0)
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionCallDelta] = None


class DeltaContent(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCallDelta]] = None


class DeltaChoice(BaseModel):
    index: int = 0
    delta: DeltaContent = Field(default_factory=DeltaContent)
    finish_reason: Optional[str] = None


class DeltaChunk(BaseModel):
    """One decoded SSE event payload."""

    id: str
    model: Optional[str] = None
    choices: List[DeltaChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None

    def first_choice(self) -> Optional[DeltaChoice]:
        """Return ``choices[0]`` or ``None`` for a choice-less chunk."""
        return self.choices[0] if self.choices else None


__all__ = [
    "FunctionCallDelta",
    "ToolCallDelta",
    "DeltaContent",
    "DeltaChoice",
    "DeltaChunk",
]
