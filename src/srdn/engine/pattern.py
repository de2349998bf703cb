# src/srdn/engine/pattern.py
"""Naming templates for CSS modules scoped identifiers.

A pattern mixes literal text with placeholders:

    [name]   file name without extension (and without `.module`)
    [local]  the original identifier
    [hash]   short hash of the file path

e.g. "[name]__[local]" or "[hash]_[local]" (the default).
"""

import re
from dataclasses import dataclass

from srdn.constants import DEFAULT_MODULE_PATTERN

from .errors import PatternParseError


PLACEHOLDERS = ("name", "local", "hash")

_LITERAL_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_NON_IDENT_RE = re.compile(r"[^A-Za-z0-9_-]")


@dataclass(frozen=True)
class Segment:
    kind: str  # "literal" or one of PLACEHOLDERS
    value: str = ""


@dataclass(frozen=True)
class Pattern:
    segments: tuple[Segment, ...]

    @classmethod
    def parse(cls, template: str) -> "Pattern":
        segments: list[Segment] = []
        i = 0
        while i < len(template):
            if template[i] == "[":
                end = template.find("]", i + 1)
                if end == -1:
                    xmsg = f"unclosed '[' at position {i}"
                    raise PatternParseError(xmsg)
                placeholder = template[i + 1 : end]
                if placeholder not in PLACEHOLDERS:
                    xmsg = (
                        f"unknown placeholder [{placeholder}]"
                        f" (expected one of: {', '.join(PLACEHOLDERS)})"
                    )
                    raise PatternParseError(xmsg)
                segments.append(Segment(placeholder))
                i = end + 1
                continue

            end = template.find("[", i)
            if end == -1:
                end = len(template)
            literal = template[i:end]
            if not _LITERAL_RE.match(literal):
                xmsg = f"invalid characters in {literal!r}"
                raise PatternParseError(xmsg)
            segments.append(Segment("literal", literal))
            i = end

        if not segments:
            xmsg = "pattern is empty"
            raise PatternParseError(xmsg)
        return cls(tuple(segments))

    @classmethod
    def default(cls) -> "Pattern":
        return cls.parse(DEFAULT_MODULE_PATTERN)

    def write(self, *, hash_: str, name: str, local: str) -> str:
        parts: list[str] = []
        for segment in self.segments:
            if segment.kind == "literal":
                parts.append(segment.value)
            elif segment.kind == "hash":
                parts.append(hash_)
            elif segment.kind == "name":
                parts.append(_NON_IDENT_RE.sub("_", name))
            else:
                parts.append(local)
        result = "".join(parts)
        # identifiers cannot start with a digit
        if result[:1].isdigit():
            result = "_" + result
        return result
