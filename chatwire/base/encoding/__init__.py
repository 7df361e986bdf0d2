"""Request body encoders: JSON bodies, multipart text fields and file parts."""

from .json_body import encode_json, to_json_payload
from .multipart import MultipartField, encode_multipart, format_scalar, to_form_data
from .files import DEFAULT_CONTENT_TYPE, FilePart, file_part, guess_content_type

__all__ = [
    "encode_json",
    "to_json_payload",
    "MultipartField",
    "encode_multipart",
    "format_scalar",
    "to_form_data",
    "DEFAULT_CONTENT_TYPE",
    "FilePart",
    "file_part",
    "guess_content_type",
]
