"""
Tool-calling DTOs.

``ToolDefinition`` advertises a callable function (name, description, JSON
Schema parameters) to the model. ``ToolCall`` is the model's request to invoke
one; its ``arguments`` stay an opaque JSON string until the tool parses them.
``ToolCallDelta`` is the partial form carried by streaming chunks, where a
call's id, name and argument text arrive in fragments keyed by ``index``.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from .wire_model import WireModel


class FunctionDefinition(WireModel):
    name: str
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    strict: Optional[bool] = None


class ToolDefinition(WireModel):
    type: str = "function"
    function: FunctionDefinition

    @property
    def name(self) -> str:
        return self.function.name


class FunctionCall(WireModel):
    name: str
    arguments: str = ""

    def parsed_arguments(self) -> Any:
        """Decode ``arguments`` as JSON; an empty string yields ``{}``.

        Raises:
            ValueError: when the argument text is not valid JSON.
        """
        return json.loads(self.arguments) if self.arguments.strip() else {}


class ToolCall(WireModel):
    id: str
    type: str = "function"
    function: FunctionCall

    @property
    def name(self) -> str:
        return self.function.name


class FunctionCallDelta(WireModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCallDelta(WireModel):
    index: int = 0
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionCallDelta] = None


__all__ = [
    "FunctionDefinition",
    "ToolDefinition",
    "FunctionCall",
    "ToolCall",
    "FunctionCallDelta",
    "ToolCallDelta",
]
