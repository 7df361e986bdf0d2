"""Tool calling: definitions, the registry and the multi-round orchestrator."""

from .definition_builder import (
    build_function_definition,
    build_input_model,
    create_function,
    create_simple_function,
    model_parameters_schema,
    schema_for_annotation,
)
from .registry import RegisteredTool, ToolHandler, ToolRegistry, serialize_result
from .orchestrator import DEFAULT_MAX_ROUNDS, ChatCompleter, ToolCallOrchestrator

__all__ = [
    "build_function_definition",
    "build_input_model",
    "create_function",
    "create_simple_function",
    "model_parameters_schema",
    "schema_for_annotation",
    "RegisteredTool",
    "ToolHandler",
    "ToolRegistry",
    "serialize_result",
    "DEFAULT_MAX_ROUNDS",
    "ChatCompleter",
    "ToolCallOrchestrator",
]
