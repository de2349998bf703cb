# src/srdn/utils/utils_types.py
"""Runtime checks for the typing constructs used by the config schema."""

from types import UnionType
from typing import (
    Any,
    Literal,
    TypeVar,
    Union,
    cast,
    get_args,
    get_origin,
    get_type_hints,
)

from typing_extensions import NotRequired


T = TypeVar("T")


def cast_hint(typ: type[T], value: Any) -> T:  # noqa: ARG001
    """cast() spelled with a real type object; no runtime check."""
    return cast("T", value)


def schema_from_typeddict(td: type[Any]) -> dict[str, Any]:
    return get_type_hints(td, include_extras=True)


def is_typeddict_like(expected_type: Any) -> bool:
    return isinstance(expected_type, type) and all(
        hasattr(expected_type, attr) for attr in ("__annotations__", "__total__")
    )


def _matches_container(value: Any, origin: Any, args: tuple[Any, ...]) -> bool:
    if not isinstance(value, origin):
        return False
    if origin is list and args:
        return all(safe_isinstance(item, args[0]) for item in value)
    if origin is dict and len(args) == 2:  # noqa: PLR2004
        key_t, val_t = args
        return all(
            safe_isinstance(k, key_t) and safe_isinstance(v, val_t)
            for k, v in cast("dict[Any, Any]", value).items()
        )
    return True


def safe_isinstance(value: Any, expected_type: Any) -> bool:  # noqa: PLR0911
    """isinstance() that understands the annotations found in config types.

    Covers Any, Union and `X | Y`, Literal, NotRequired, TypedDicts (any
    dict passes) and parameterised list/dict. JSON booleans never count
    as ints.
    """
    if expected_type is Any:
        return True

    origin = get_origin(expected_type)
    args = get_args(expected_type)

    if origin is NotRequired:
        return safe_isinstance(value, args[0]) if args else True
    if origin is Literal:
        return value in args
    if origin in {Union, UnionType}:
        return any(safe_isinstance(value, option) for option in args)
    if is_typeddict_like(expected_type):
        return isinstance(value, dict)
    if origin is not None:
        return _matches_container(value, origin, args)

    if expected_type is int and isinstance(value, bool):
        return False
    try:
        return isinstance(value, expected_type)
    except TypeError:
        return False
