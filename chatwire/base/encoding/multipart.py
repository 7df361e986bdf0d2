"""
Multipart/form-data field flattening.

``encode_multipart`` walks a request model depth-first and produces an ordered
list of ``(name, value)`` text fields. Declared fields come first in
declaration order, followed by the model's extension entries, which follow the
same rules at the same name scope.

Rules per value:

========================  ==============================================
value                     fields produced
========================  ==============================================
``None``                  ``name=""`` (present, never omitted)
``str``                   ``name=<value>`` verbatim
``bool``                  ``name=true`` / ``name=false``
``int`` / ``float``       ``name=<decimal text>``
``Enum``                  its ``value``, formatted as above
list/tuple of scalars     ``name[]=<item>`` once per item, in order
nested model / mapping    recurse with ``name.`` as prefix
anything else             :class:`EncodingError`
========================  ==============================================

Lists containing lists, mappings or models are not representable and raise
:class:`EncodingError`. Fields declared with ``Field(exclude=True)`` (file
payloads) are skipped; the caller attaches them as file parts.
"""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import BaseModel

from ..errors_parts.error_types import EncodingError

MultipartField = Tuple[str, str]


def format_scalar(value: Any) -> str:
    """Render a scalar as form text (``True`` -> ``"true"``)."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (bool, int, float, Decimal, Enum))


def encode_multipart(model: BaseModel, prefix: str = "") -> List[MultipartField]:
    """Flatten ``model`` into ordered multipart text fields.

    Args:
        model: Request model to flatten.
        prefix: Name prefix applied to every field (used for nesting).

    Raises:
        EncodingError: naming the offending field path for unsupported shapes
            or extension keys that collide with declared fields.
    """
    fields: List[MultipartField] = []
    _add_model(fields, model, prefix)
    return fields


def _add_model(out: List[MultipartField], model: BaseModel, prefix: str) -> None:
    declared = set()
    for name, info in type(model).model_fields.items():
        wire = info.alias or name
        declared.add(wire)
        if info.exclude:
            continue
        _add_value(out, f"{prefix}{wire}", getattr(model, name))
    extra = model.model_extra or {}
    for key, value in extra.items():
        if key in declared:
            raise EncodingError(f"extension key '{prefix}{key}' collides with a declared field")
        _add_value(out, f"{prefix}{key}", value)


def _add_value(out: List[MultipartField], name: str, value: Any) -> None:
    if value is None:
        out.append((name, ""))
    elif _is_scalar(value):
        out.append((name, format_scalar(value)))
    elif isinstance(value, str):
        out.append((name, value))
    elif isinstance(value, BaseModel):
        _add_model(out, value, f"{name}.")
    elif isinstance(value, Mapping):
        for key, item in value.items():
            _add_value(out, f"{name}.{key}", item)
    elif isinstance(value, (list, tuple)):
        _add_sequence(out, name, value)
    else:
        raise EncodingError(f"unsupported multipart value at '{name}': {type(value).__name__}")


def _add_sequence(out: List[MultipartField], name: str, items: Union[list, tuple]) -> None:
    item_name = f"{name}[]"
    for index, item in enumerate(items):
        if item is None:
            out.append((item_name, ""))
        elif _is_scalar(item):
            out.append((item_name, format_scalar(item)))
        elif isinstance(item, str):
            out.append((item_name, item))
        elif isinstance(item, (list, tuple, Mapping, BaseModel)):
            raise EncodingError(
                f"unsupported multipart value at '{name}[{index}]': arrays may only contain scalars, "
                f"got {type(item).__name__}"
            )
        else:
            raise EncodingError(f"unsupported multipart value at '{name}[{index}]': {type(item).__name__}")


def to_form_data(fields: List[MultipartField]) -> Dict[str, Union[str, List[str]]]:
    """Group ordered fields into the ``data`` mapping accepted by httpx.

    Repeated names become lists so httpx emits one part per value, in order.
    """
    grouped: Dict[str, List[str]] = {}
    for name, value in fields:
        grouped.setdefault(name, []).append(value)
    return {name: values[0] if len(values) == 1 and not name.endswith("[]") else values for name, values in grouped.items()}


__all__ = ["MultipartField", "encode_multipart", "format_scalar", "to_form_data"]
