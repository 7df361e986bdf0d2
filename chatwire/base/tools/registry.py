"""In-process tool registry.

This module maps tool names to handlers plus the definition advertised to the
model, and executes :class:`ToolCall` objects against them.

Contract:
    - ``register(name, handler, schema)`` adds or replaces a tool.
    - Handlers receive one argument: the decoded JSON arguments as a ``dict``,
      or an instance of ``input_model`` when one was registered.
    - Handlers may be plain functions or coroutine functions.
    - Results: strings pass through unchanged, pydantic models are dumped to
      JSON, anything else is JSON-encoded.
    - Every failure during ``execute`` (unknown tool, bad arguments, handler
      exception, cancellation) surfaces as :class:`ToolExecutionError`.
"""

from __future__ import annotations

import inspect
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from ..cancellation import CancellationToken, CancelledError
from ..errors_parts.error_code import ErrorCode
from ..errors_parts.error_types import ToolExecutionError
from ..logging import LogContext, get_logger, normalized_log_event
from ..models_parts.tool_types import ToolCall, ToolDefinition
from .definition_builder import (
    build_function_definition,
    build_input_model,
    create_function,
    model_parameters_schema,
)


ToolHandler = Callable[[Any], Any]


@dataclass
class RegisteredTool:
    """A handler together with the definition advertised for it."""

    name: str
    handler: ToolHandler
    definition: ToolDefinition
    input_model: Optional[Type[BaseModel]] = None


def serialize_result(result: Any) -> str:
    """Render a handler result as tool message content."""
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        return result.model_dump_json(by_alias=True)
    return json.dumps(result, ensure_ascii=False, default=str)


class ToolRegistry:
    """Registry of callable tools keyed by name."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._tools: Dict[str, RegisteredTool] = {}
        self._logger = logger or get_logger("chatwire.tools")

    def register(
        self,
        name: str,
        handler: ToolHandler,
        schema: Optional[Dict[str, Any]] = None,
        description: Optional[str] = None,
        *,
        input_model: Optional[Type[BaseModel]] = None,
        strict: Optional[bool] = None,
    ) -> RegisteredTool:
        """Register ``handler`` under ``name``, replacing any previous tool.

        Args:
            name: Tool name the model will call.
            handler: Callable receiving the parsed arguments.
            schema: JSON Schema of the arguments. Defaults to the JSON schema
                of ``input_model``, or an empty object schema.
            description: Human-readable description sent to the model.
            input_model: Optional pydantic model validating the arguments.
            strict: Optional ``strict`` flag for structured-output tools.
        """
        if not name:
            raise ValueError("tool name must be non-empty")
        if schema is None and input_model is not None:
            schema = model_parameters_schema(input_model)
        tool = RegisteredTool(
            name=name,
            handler=handler,
            definition=create_function(name, description, schema, strict=strict),
            input_model=input_model,
        )
        self._tools[name] = tool
        return tool

    def tool(
        self,
        name: Optional[str] = None,
        *,
        description: Optional[str] = None,
        strict: Optional[bool] = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator registering a function whose parameters are the tool arguments.

        The signature becomes a pydantic input model: it supplies the schema
        and validates (and coerces) each call's arguments, which are then
        passed as keyword arguments with nested models intact. The decorated
        function is returned unchanged.
        """

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            input_model = build_input_model(fn)
            definition = build_function_definition(
                fn, name=name, description=description, strict=strict, input_model=input_model
            )

            def handler(arguments: BaseModel) -> Any:
                return fn(**{field: getattr(arguments, field) for field in type(arguments).model_fields})

            self._tools[definition.name] = RegisteredTool(
                name=definition.name,
                handler=handler,
                definition=definition,
                input_model=input_model,
            )
            return fn

        return decorator

    def unregister(self, name: str) -> bool:
        """Remove ``name``; returns whether it was registered."""
        return self._tools.pop(name, None) is not None

    def clear(self) -> None:
        self._tools.clear()

    def names(self) -> List[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def resolve(self, name: str) -> ToolHandler:
        """Return the handler registered under ``name``.

        Raises:
            ToolExecutionError: the tool is not registered (code ``not_found``).
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolExecutionError(
                f"tool '{name}' not registered",
                code=ErrorCode.NOT_FOUND,
                tool_name=name,
            )
        return tool.handler

    def schemas(self) -> List[ToolDefinition]:
        """Definitions of all registered tools, in registration order (copies)."""
        return [tool.definition.model_copy(deep=True) for tool in self._tools.values()]

    def _arguments(self, tool: RegisteredTool, call: ToolCall) -> Any:
        try:
            arguments = call.function.parsed_arguments()
        except ValueError as exc:
            raise ToolExecutionError(
                f"tool '{tool.name}' received invalid JSON arguments",
                code=ErrorCode.VALIDATION,
                tool_name=tool.name,
                raw_body=call.function.arguments,
                cause=exc,
            ) from exc
        if tool.input_model is not None:
            try:
                return tool.input_model.model_validate(arguments)
            except ValidationError as exc:
                raise ToolExecutionError(
                    f"tool '{tool.name}' arguments failed validation",
                    code=ErrorCode.VALIDATION,
                    tool_name=tool.name,
                    raw_body=call.function.arguments,
                    cause=exc,
                ) from exc
        if not isinstance(arguments, dict):
            raise ToolExecutionError(
                f"tool '{tool.name}' arguments must be a JSON object",
                code=ErrorCode.VALIDATION,
                tool_name=tool.name,
                raw_body=call.function.arguments,
            )
        return arguments

    async def execute(self, call: ToolCall, *, cancel: Optional[CancellationToken] = None) -> str:
        """Run the handler for ``call`` and return the tool message content.

        Raises:
            ToolExecutionError: for any failure, carrying the tool name and the
                original exception as ``cause``.
        """
        name = call.function.name
        ctx = LogContext(extra={"tool": name, "tool_call_id": call.id})
        self.resolve(name)
        tool = self._tools[name]
        arguments = self._arguments(tool, call)
        try:
            if cancel is not None:
                cancel.raise_if_cancelled()
            result = tool.handler(arguments)
            if inspect.isawaitable(result):
                result = await (cancel.guard(result) if cancel is not None else result)
            content = serialize_result(result)
        except ToolExecutionError:
            raise
        except CancelledError as exc:
            raise ToolExecutionError(
                f"tool '{name}' cancelled",
                code=ErrorCode.CANCELLED,
                tool_name=name,
                cause=exc,
            ) from exc
        except Exception as exc:
            normalized_log_event(
                self._logger,
                "tool.execute",
                ctx,
                phase="finalize",
                error_code=ErrorCode.INTERNAL.value,
                emitted=False,
                error=f"{type(exc).__name__}: {exc}",
            )
            raise ToolExecutionError(
                f"tool '{name}' failed: {type(exc).__name__}: {exc}",
                tool_name=name,
                cause=exc,
            ) from exc
        normalized_log_event(self._logger, "tool.execute", ctx, phase="finalize", emitted=True)
        return content


__all__ = ["ToolRegistry", "RegisteredTool", "ToolHandler", "serialize_result"]
