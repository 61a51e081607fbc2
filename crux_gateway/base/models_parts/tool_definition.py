"""
Tool (function) definition advertised to the model in a chat request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..dto.tool_call import DEFAULT_TOOL_TYPE


@dataclass
class ToolDefinition:
    """Function tool the model may call.

    Attributes:
        name: Function name the model will reference.
        description: Natural language description shown to the model.
        parameters: JSON Schema of the arguments object.
    """

    name: str
    description: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_dict(self) -> Dict[str, Any]:
        function: Dict[str, Any] = {"name": self.name, "parameters": self.parameters}
        if self.description:
            function["description"] = self.description
        return {"type": DEFAULT_TOOL_TYPE, "function": function}


__all__ = ["ToolDefinition"]
