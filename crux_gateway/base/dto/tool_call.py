"""DTOs describing a complete function-style tool call.

A ``ToolCall`` is what the model asks the caller to execute: an id to echo
back in the ``tool`` message, the call type and the function name with its
JSON arguments string. Non-streaming responses decode straight into it;
streaming responses produce it from accumulated fragments.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from pydantic import BaseModel

DEFAULT_TOOL_TYPE = "function"


class FunctionCall(BaseModel):
    """Function name plus its arguments as the raw JSON string."""

    name: str
    arguments: str = ""

    def parsed_arguments(self) -> Dict[str, Any]:
        """Decode ``arguments``; an empty string decodes to ``{}``.

        Raises:
            json.JSONDecodeError: when the model produced invalid JSON.
        """
        if not self.arguments.strip():
            return {}
        return json.loads(self.arguments)


class ToolCall(BaseModel):
    """A tool invocation requested by the model."""

    id: str
    type: str = DEFAULT_TOOL_TYPE
    function: FunctionCall


__all__ = ["DEFAULT_TOOL_TYPE", "FunctionCall", "ToolCall"]
