"""
Message DTO used to build chat requests.

Defines the `Message` dataclass and the `Role` literal. Assistant messages
may carry the tool calls the model requested; ``tool`` messages answer one
of them through ``tool_call_id``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

from ..dto.tool_call import ToolCall

# Message roles accepted by the gateway.
Role = Literal["system", "user", "assistant", "tool"]


@dataclass
class Message:
    """A chat message in OpenAI-compatible form.

    Attributes:
        role: Author role.
        content: Text content; ``None`` for assistant turns that only call tools.
        name: Optional participant name.
        tool_call_id: Id of the tool call answered by a ``tool`` message.
        tool_calls: Tool calls requested in an ``assistant`` message.
    """

    role: Role
    content: Optional[str] = None
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: Optional[str] = None, tool_calls: Optional[List[ToolCall]] = None) -> "Message":
        return cls(role="assistant", content=content, tool_calls=tool_calls or None)

    @classmethod
    def tool(cls, tool_call_id: str, content: str) -> "Message":
        return cls(role="tool", content=content, tool_call_id=tool_call_id)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire form, omitting unset optional keys."""
        data: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name is not None:
            data["name"] = self.name
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            data["tool_calls"] = [tc.model_dump() for tc in self.tool_calls]
        return data


__all__ = [
    "Message",
    "Role",
]
