# src/srdn/utils/utils_schema.py
"""Validate parsed JSON objects against TypedDict schemas.

Type mismatches are always errors. Unknown keys are strict warnings
(fatal) in strict mode and plain warnings otherwise; close matches get a
"did you mean" hint.
"""

from dataclasses import dataclass, field
from difflib import get_close_matches
from fnmatch import fnmatchcase
from typing import Any, cast, get_args, get_origin

from typing_extensions import NotRequired

from .utils_text import plural
from .utils_types import is_typeddict_like, safe_isinstance, schema_from_typeddict


HINT_CUTOFF: float = 0.75
TOP_LEVEL_CONTEXT = "in top-level configuration"


@dataclass
class ValidationSummary:
    valid: bool = True
    errors: list[str] = field(default_factory=list)
    strict_warnings: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    strict: bool = True

    def collect(self, msg: str, *, is_error: bool = False) -> None:
        """Errors are always fatal; warnings escalate in strict mode."""
        if is_error:
            self.errors.append(msg)
        elif self.strict:
            self.strict_warnings.append(msg)
        else:
            self.warnings.append(msg)


def type_label(expected_type: Any) -> str:
    """Readable name for a schema type, e.g. 'list[str]' or 'bool | object'."""
    origin = get_origin(expected_type)
    args = get_args(expected_type)
    if origin is NotRequired and args:
        return type_label(args[0])
    if origin is list:
        return f"list[{type_label(args[0])}]" if args else "list"
    if origin is not None and origin is not dict and args:
        return " | ".join(
            "object" if is_typeddict_like(arg) else type_label(arg) for arg in args
        )
    if is_typeddict_like(expected_type):
        return "object"
    return getattr(expected_type, "__name__", repr(expected_type))


def _unwrap(expected_type: Any) -> Any:
    args = get_args(expected_type)
    if get_origin(expected_type) is NotRequired and args:
        return args[0]
    return expected_type


def _object_member(expected_type: Any) -> type[Any] | None:
    """The TypedDict inside a `bool | SomeTypedDict` style union."""
    for arg in get_args(expected_type):
        if is_typeddict_like(arg):
            return cast("type[Any]", arg)
    return None


def _nested_context(context: str, key: str) -> str:
    if context == TOP_LEVEL_CONTEXT:
        return f"in `{key}`"
    return f"{context.removesuffix('`')}.{key}`"


@dataclass
class _SchemaWalk:
    summary: ValidationSummary
    examples: dict[str, str]

    def example(self, path: str) -> str:
        found = self.examples.get(path)
        if found is None:
            for pattern, text in self.examples.items():
                if "*" in pattern and fnmatchcase(path, pattern):
                    found = text
                    break
        return f" (e.g. {found})" if found else ""

    def mismatch(
        self, context: str, key: str, value: Any, label: str, path: str
    ) -> bool:
        self.summary.collect(
            f"{context}: key `{key}` expected {label}{self.example(path)},"
            f" got {type(value).__name__}",
            is_error=True,
        )
        return False

    def check_value(
        self, context: str, key: str, value: Any, expected: Any, path: str
    ) -> bool:
        expected = _unwrap(expected)

        if get_origin(expected) is list:
            if not isinstance(value, list):
                return self.mismatch(context, key, value, type_label(expected), path)
            subtype = (get_args(expected) or (Any,))[0]
            ok = True
            for i, item in enumerate(cast("list[Any]", value)):
                ok &= self.check_value(
                    context, f"{key}[{i}]", item, subtype, f"{path}[{i}]"
                )
            return ok

        member = expected if is_typeddict_like(expected) else None
        if member is None and isinstance(value, dict):
            member = _object_member(expected)
        if member is not None:
            return self.check_object(_nested_context(context, key), value, member, path)

        if safe_isinstance(value, expected):
            return True
        return self.mismatch(context, key, value, type_label(expected), path)

    def check_object(
        self, context: str, value: Any, schema_type: type[Any], path: str
    ) -> bool:
        if not isinstance(value, dict):
            self.summary.collect(
                f"{context}: expected an object with named keys,"
                f" got {type(value).__name__}",
                is_error=True,
            )
            return False

        schema = schema_from_typeddict(schema_type)
        obj = cast("dict[str, Any]", value)
        ok = True
        for key, expected in schema.items():
            if key in obj:
                ok &= self.check_value(context, key, obj[key], expected, f"{path}.{key}")

        unknown = [k for k in obj if k not in schema]
        if unknown:
            self.summary.collect(_unknown_keys_message(context, unknown, schema))
            ok = ok and not self.summary.strict
        return ok


def _unknown_keys_message(
    context: str, unknown: list[str], schema: dict[str, Any]
) -> str:
    joined = ", ".join(f"`{k}`" for k in unknown)
    msg = f"Unknown key{plural(unknown)} {joined} {context}."
    hints = []
    for key in unknown:
        close = get_close_matches(key, schema.keys(), n=1, cutoff=HINT_CUTOFF)
        if close:
            hints.append(f"'{key}' → '{close[0]}'")
    if hints:
        msg += "\nHint: did you mean " + ", ".join(hints) + "?"
    return msg


def check_schema_conformance(
    cfg: dict[str, Any],
    schema: type[Any],
    *,
    summary: ValidationSummary,  # modified in place
    context: str = TOP_LEVEL_CONTEXT,
    base_path: str = "root",
    field_examples: dict[str, str] | None = None,
) -> bool:
    """Validate a root-level object against a TypedDict schema.

    `field_examples` maps field paths (`root.srdn.minify`, `*` wildcards
    allowed) to an example value shown in type-mismatch messages.
    """
    walk = _SchemaWalk(summary, field_examples or {})
    return walk.check_object(context, cfg, schema, base_path)
