"""
Request-side domain models public surface.

Re-exports the implementations under ``crux_gateway.base.models_parts`` plus
the tool-call DTOs shared with responses.
"""

from .models_parts.message import Message, Role
from .models_parts.tool_definition import ToolDefinition
from .models_parts.chat_request import ChatRequest
from .models_parts.model_ids import KnownModel
from .dto.tool_call import FunctionCall, ToolCall

__all__ = [
    "Message",
    "Role",
    "ToolDefinition",
    "ChatRequest",
    "KnownModel",
    "FunctionCall",
    "ToolCall",
]
