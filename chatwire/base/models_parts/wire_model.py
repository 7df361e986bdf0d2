"""
Base class for every JSON object exchanged with the service.

``WireModel`` is a pydantic model configured with ``extra="allow"``: JSON keys
the model does not declare are kept in ``model_extra`` (the *extension map*)
on parse and written back as top-level siblings of the declared fields on
serialization. This lets callers send provider-specific parameters and read
fields newer than this library without losing them.

Serialization rules:
    - Declared fields use their wire alias (``by_alias=True`` at call sites).
    - Declared fields whose value is ``None`` are omitted.
    - Extension entries are emitted as-is, ``None`` included.
    - An extension key equal to a declared wire name is rejected with
      :class:`EncodingError`, both when set through ``set_extension`` and when
      a payload is built by the encoders (see ``check_extension_keys``).
"""
from __future__ import annotations

from typing import Any, Dict, FrozenSet, Mapping

from pydantic import BaseModel, ConfigDict, model_serializer

from ..errors_parts.error_types import EncodingError


class WireModel(BaseModel):
    """Pydantic base for wire DTOs carrying an extension map."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, protected_namespaces=())

    @classmethod
    def wire_names(cls) -> FrozenSet[str]:
        """Declared field names as they appear on the wire (alias or name)."""
        return frozenset(info.alias or name for name, info in cls.model_fields.items())

    @property
    def extensions(self) -> Dict[str, Any]:
        """Live view of the extension map (undeclared fields)."""
        if self.__pydantic_extra__ is None:
            self.__pydantic_extra__ = {}
        return self.__pydantic_extra__

    def set_extension(self, key: str, value: Any) -> None:
        """Add or replace an extension entry, rejecting declared wire names."""
        if key in self.wire_names() or key in type(self).model_fields:
            raise EncodingError(
                f"extension key '{key}' collides with a declared field of {type(self).__name__}"
            )
        self.extensions[key] = value

    def with_extensions(self, values: Mapping[str, Any]) -> "WireModel":
        """Set several extension entries and return ``self`` for chaining."""
        for key, value in values.items():
            self.set_extension(key, value)
        return self

    @model_serializer(mode="wrap")
    def serialize_wire(self, handler: Any) -> Any:
        data = handler(self)
        if not isinstance(data, dict):
            return data
        extra = self.__pydantic_extra__ or {}
        for name, info in type(self).model_fields.items():
            for key in {name, info.alias or name}:
                if key in data and data[key] is None and key not in extra:
                    del data[key]
        return data


def check_extension_keys(model: BaseModel, path: str = "") -> None:
    """Recursively verify no extension key shadows a declared wire name.

    Raises:
        EncodingError: naming the dotted path of the offending key.
    """
    if isinstance(model, WireModel):
        extra = model.__pydantic_extra__ or {}
        clash = sorted(set(extra) & model.wire_names())
        if clash:
            raise EncodingError(
                f"extension key '{path}{clash[0]}' collides with a declared field of {type(model).__name__}"
            )
    for name, info in type(model).model_fields.items():
        if info.exclude:
            continue
        _check_value(getattr(model, name), f"{path}{info.alias or name}.")


def _check_value(value: Any, path: str) -> None:
    if isinstance(value, BaseModel):
        check_extension_keys(value, path)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _check_value(item, f"{path[:-1]}[{index}].")
    elif isinstance(value, Mapping):
        for key, item in value.items():
            _check_value(item, f"{path}{key}.")


__all__ = ["WireModel", "check_extension_keys"]
