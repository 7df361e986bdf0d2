"""
JSON request body encoding.

Declared fields are written under their wire names, ``None`` optionals are
omitted, and extension-map entries of every (nested) model are merged as
siblings of that model's declared fields. Extension keys that shadow a
declared wire name are rejected before anything is sent.
"""
from __future__ import annotations

import json
from typing import Any, Dict

from pydantic import BaseModel

from ..models_parts.wire_model import check_extension_keys


def to_json_payload(model: BaseModel) -> Dict[str, Any]:
    """Return the JSON-ready ``dict`` body for ``model``.

    Raises:
        EncodingError: an extension key collides with a declared field.
    """
    check_extension_keys(model)
    return model.model_dump(mode="json", by_alias=True)


def encode_json(model: BaseModel) -> bytes:
    """Serialize ``model`` to UTF-8 JSON bytes."""
    return json.dumps(to_json_payload(model), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


__all__ = ["to_json_payload", "encode_json"]
