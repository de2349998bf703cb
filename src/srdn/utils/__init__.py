# src/srdn/utils/__init__.py

from .utils_files import load_jsonc
from .utils_schema import ValidationSummary, check_schema_conformance, type_label
from .utils_text import plural, remove_path_in_error_message
from .utils_types import (
    cast_hint,
    is_typeddict_like,
    safe_isinstance,
    schema_from_typeddict,
)


__all__ = [  # noqa: RUF022
    # utils_files
    "load_jsonc",
    # utils_schema
    "ValidationSummary",
    "check_schema_conformance",
    "type_label",
    # utils_text
    "plural",
    "remove_path_in_error_message",
    # utils_types
    "cast_hint",
    "is_typeddict_like",
    "safe_isinstance",
    "schema_from_typeddict",
]
