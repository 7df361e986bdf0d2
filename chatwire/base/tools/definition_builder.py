"""Tool definition construction helpers.

Purpose
-------
Build :class:`ToolDefinition` objects either from explicit pieces (name,
description, JSON Schema) or by introspecting a Python callable.

Signature introspection
-----------------------
``build_input_model`` turns a callable's signature into a pydantic model via
``create_model``: each parameter becomes a field with its annotation and
default, and a Google-style ``Args:`` docstring section supplies field
descriptions. The model both validates (and coerces) the arguments the model
sends and provides the advertised JSON Schema through ``model_json_schema()``,
so nested models are emitted once under the root ``$defs``. Pydantic's
generated ``title`` keys are dropped from advertised schemas.

Unannotated parameters accept any value; ``Optional[X]`` parameters without a
default get ``None`` as default and are not required.
"""

from __future__ import annotations

import inspect
import re
import types
import typing
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, create_model

from ..models_parts.tool_types import FunctionDefinition, ToolDefinition

_ARG_LINE = re.compile(r"^\s+(\*{0,2}\w+)\s*(?:\([^)]*\))?\s*:\s*(.+)$")

# Schema keywords whose values are data, not subschemas.
_DATA_KEYWORDS = frozenset({"default", "const", "enum", "examples"})


def create_function(
    name: str,
    description: Optional[str] = None,
    parameters: Optional[Dict[str, Any]] = None,
    *,
    strict: Optional[bool] = None,
) -> ToolDefinition:
    """Wrap explicit pieces into a ``function`` tool definition."""
    return ToolDefinition(
        function=FunctionDefinition(
            name=name,
            description=description,
            parameters=parameters if parameters is not None else {"type": "object", "properties": {}},
            strict=strict,
        )
    )


def create_simple_function(
    name: str,
    description: Optional[str],
    params: Iterable[Tuple[str, str, bool]],
) -> ToolDefinition:
    """Definition whose parameters are all strings.

    Args:
        name: Tool name.
        description: Tool description.
        params: ``(param_name, param_description, required)`` triples.
    """
    properties: Dict[str, Any] = {}
    required: List[str] = []
    for param_name, param_description, is_required in params:
        properties[param_name] = {"type": "string", "description": param_description}
        if is_required:
            required.append(param_name)
    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return create_function(name, description, schema)


def _strip_titles(node: Any, *, in_properties: bool = False) -> Any:
    if isinstance(node, list):
        return [_strip_titles(item) for item in node]
    if not isinstance(node, dict):
        return node
    out: Dict[str, Any] = {}
    for key, value in node.items():
        if in_properties:
            out[key] = _strip_titles(value)
        elif key == "title" and isinstance(value, str):
            continue
        elif key in _DATA_KEYWORDS:
            out[key] = value
        else:
            out[key] = _strip_titles(value, in_properties=key in ("properties", "$defs"))
    return out


def model_parameters_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    """JSON Schema of ``model`` as advertised to the model (titles dropped)."""
    schema = _strip_titles(model.model_json_schema())
    schema.setdefault("properties", {})
    return schema


def schema_for_annotation(annotation: Any) -> Dict[str, Any]:
    """JSON Schema fragment for a single Python annotation."""
    if annotation is inspect.Parameter.empty:
        return {}
    return _strip_titles(TypeAdapter(annotation).json_schema())


def _is_optional(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return type(None) in typing.get_args(annotation)
    return False


def _docstring_parts(fn: Callable[..., Any]) -> Tuple[Optional[str], Dict[str, str]]:
    doc = inspect.getdoc(fn)
    if not doc:
        return None, {}
    summary = doc.split("\n\n", 1)[0].strip() or None
    arg_docs: Dict[str, str] = {}
    in_args = False
    for line in doc.splitlines():
        stripped = line.strip()
        if stripped in ("Args:", "Arguments:", "Parameters:"):
            in_args = True
            continue
        if in_args:
            if stripped and not line.startswith((" ", "\t")):
                break
            match = _ARG_LINE.match(line)
            if match:
                arg_docs[match.group(1).lstrip("*")] = match.group(2).strip()
    return summary, arg_docs


def _model_name(fn_name: str) -> str:
    return "".join(part.capitalize() for part in fn_name.split("_") if part) + "Arguments"


def build_input_model(fn: Callable[..., Any], *, model_name: Optional[str] = None) -> Type[BaseModel]:
    """Pydantic model whose fields are the parameters of ``fn``.

    ``*args``/``**kwargs`` and a leading ``self``/``cls`` are ignored.
    """
    signature = inspect.signature(fn)
    try:
        hints = typing.get_type_hints(fn, include_extras=True)
    except (NameError, TypeError):
        hints = {}
    _, arg_docs = _docstring_parts(fn)
    fields: Dict[str, Any] = {}
    for param in signature.parameters.values():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        if param.name in ("self", "cls"):
            continue
        annotation = hints.get(param.name, param.annotation)
        if annotation is inspect.Parameter.empty or isinstance(annotation, str):
            annotation = Any
        default = param.default
        if default is inspect.Parameter.empty:
            default = None if _is_optional(annotation) else ...
        fields[param.name] = (annotation, Field(default, description=arg_docs.get(param.name)))
    return create_model(
        model_name or _model_name(fn.__name__),
        __config__=ConfigDict(protected_namespaces=()),
        **fields,
    )


def build_function_definition(
    fn: Callable[..., Any],
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    strict: Optional[bool] = None,
    input_model: Optional[Type[BaseModel]] = None,
) -> ToolDefinition:
    """Introspect ``fn`` into a tool definition.

    ``input_model`` reuses a model already built by :func:`build_input_model`.
    """
    summary, _ = _docstring_parts(fn)
    model = input_model or build_input_model(fn)
    return create_function(
        name or fn.__name__,
        description or summary,
        model_parameters_schema(model),
        strict=strict,
    )


__all__ = [
    "create_function",
    "create_simple_function",
    "schema_for_annotation",
    "model_parameters_schema",
    "build_input_model",
    "build_function_definition",
]
