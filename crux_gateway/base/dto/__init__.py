"""Pydantic wire DTOs for gateway responses and streamed deltas."""

from .tool_call import DEFAULT_TOOL_TYPE, FunctionCall, ToolCall
from .chat_completion import ChatCompletion, CompletionChoice, ResponseMessage, Usage
from .delta import DeltaChoice, DeltaChunk, DeltaContent, FunctionCallDelta, ToolCallDelta
from .model_info import ModelInfo

__all__ = [
    "DEFAULT_TOOL_TYPE",
    "FunctionCall",
    "ToolCall",
    "ChatCompletion",
    "CompletionChoice",
    "ResponseMessage",
    "Usage",
    "DeltaChoice",
    "DeltaChunk",
    "DeltaContent",
    "FunctionCallDelta",
    "ToolCallDelta",
    "ModelInfo",
]
