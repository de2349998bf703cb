# src/srdn/engine/css_modules.py
"""Local scoping of identifiers for CSS modules files.

Class and id selectors, `@keyframes` names (and the `animation` values that
reference them) and, optionally, dashed idents are renamed through the
module's naming pattern. `:global(...)` leaves its argument untouched;
`:local(...)` scopes it explicitly.
"""

import base64
import hashlib
from pathlib import Path, PurePath
from typing import Any

from tinycss2.ast import FunctionBlock, HashToken, IdentToken

from srdn.constants import MODULE_FILE_MARKER

from .model import AtRule, Declaration, Item, StyleRule, Tokens
from .options import ModuleConfig


HASH_LENGTH = 6

KEYFRAMES_RULES = {"keyframes", "-webkit-keyframes", "-moz-keyframes", "-o-keyframes"}
ANIMATION_PROPERTIES = {
    "animation",
    "animation-name",
    "-webkit-animation",
    "-webkit-animation-name",
    "-moz-animation",
    "-moz-animation-name",
}


def hash_for_path(filename: str, project_root: Path | None = None) -> str:
    """Short stable hash of a file path, usable as an identifier prefix."""
    path = PurePath(filename)
    if project_root is not None:
        try:
            path = Path(filename).resolve().relative_to(project_root.resolve())
        except ValueError:
            pass  # outside the project: hash the path as given
    digest = hashlib.sha256(path.as_posix().encode("utf-8")).digest()
    short = base64.urlsafe_b64encode(digest).decode("ascii")[:HASH_LENGTH]
    if short[:1].isdigit():
        short = "_" + short
    return short


def module_name(filename: str) -> str:
    """File name without its `.module.css` (or `.css`) suffix."""
    name = PurePath(filename).name
    if name.endswith(MODULE_FILE_MARKER):
        return name[: -len(MODULE_FILE_MARKER)]
    return PurePath(name).stem


def _strip_whitespace(tokens: Tokens) -> Tokens:
    start, end = 0, len(tokens)
    while start < end and tokens[start].type in {"whitespace", "comment"}:
        start += 1
    while end > start and tokens[end - 1].type in {"whitespace", "comment"}:
        end -= 1
    return tokens[start:end]


class ModuleScoper:
    """Rewrites a rule tree in place and records the exports it produced."""

    def __init__(self, config: ModuleConfig, *, hash_: str, name: str) -> None:
        self.config = config
        self.hash = hash_
        self.name = module_name(name)
        self.exports: dict[str, str] = {}
        self._keyframes: set[str] = set()

    def generated(self, local: str) -> str:
        return self.config.pattern.write(hash_=self.hash, name=self.name, local=local)

    def _rename(self, local: str) -> str:
        scoped = self.generated(local)
        self.exports.setdefault(local, scoped)
        return scoped

    def _rename_dashed(self, ident: str) -> str:
        scoped = "--" + self.generated(ident[2:])
        self.exports.setdefault(ident, scoped)
        return scoped

    def scope_rules(self, rules: list[Item]) -> None:
        self._keyframes = set()
        self._collect_keyframes(rules)
        self._scope_items(rules)

    # --- keyframes ---------------------------------------------------------

    def _collect_keyframes(self, items: list[Item]) -> None:
        for item in items:
            if isinstance(item, AtRule):
                if item.name in KEYFRAMES_RULES:
                    for tok in _strip_whitespace(item.prelude):
                        if tok.type == "ident":
                            self._keyframes.add(tok.value)
                elif item.body is not None:
                    self._collect_keyframes(item.body)
            elif isinstance(item, StyleRule):
                self._collect_keyframes(item.body)

    # --- tree walk ---------------------------------------------------------

    def _scope_items(self, items: list[Item]) -> None:
        for item in items:
            if isinstance(item, StyleRule):
                item.selector = self._scope_selector(item.selector, local=True)
                self._scope_items(item.body)
            elif isinstance(item, Declaration):
                self._scope_declaration(item)
            elif item.name in KEYFRAMES_RULES:
                item.prelude = [
                    self._ident_like(tok, self._rename(tok.value))
                    if tok.type == "ident"
                    else tok
                    for tok in item.prelude
                ]
                # keyframe selectors (from/to/percentages) are not scoped
                for frame in item.body or []:
                    if isinstance(frame, StyleRule):
                        for decl in frame.body:
                            if isinstance(decl, Declaration):
                                self._scope_declaration(decl)
            else:
                if item.name == "property" and self.config.dashed_idents:
                    item.prelude = self._scope_value(item.prelude, property_rule=True)
                if item.body is not None:
                    self._scope_items(item.body)

    def _scope_declaration(self, decl: Declaration) -> None:
        if self.config.dashed_idents and decl.name.startswith("--"):
            decl.name = self._rename_dashed(decl.name)
        if decl.name.lower() in ANIMATION_PROPERTIES:
            decl.value = [
                self._ident_like(tok, self._rename(tok.value))
                if tok.type == "ident" and tok.value in self._keyframes
                else tok
                for tok in decl.value
            ]
        if self.config.dashed_idents:
            decl.value = self._scope_value(decl.value)

    def _scope_value(self, tokens: Tokens, *, property_rule: bool = False) -> Tokens:
        """Rename dashed idents inside var() references (recursively)."""
        out: Tokens = []
        for tok in tokens:
            if property_rule and tok.type == "ident" and tok.value.startswith("--"):
                out.append(self._ident_like(tok, self._rename_dashed(tok.value)))
            elif tok.type == "function":
                arguments = list(tok.arguments)
                if tok.lower_name == "var":
                    arguments = self._scope_var_arguments(arguments)
                else:
                    arguments = self._scope_value(arguments)
                out.append(
                    FunctionBlock(tok.source_line, tok.source_column, tok.name, arguments)
                )
            else:
                out.append(tok)
        return out

    def _scope_var_arguments(self, arguments: Tokens) -> Tokens:
        renamed = False
        out: Tokens = []
        for tok in arguments:
            if not renamed and tok.type == "ident" and tok.value.startswith("--"):
                out.append(self._ident_like(tok, self._rename_dashed(tok.value)))
                renamed = True
            elif tok.type == "function":
                out.extend(self._scope_value([tok]))
            else:
                out.append(tok)
        return out

    # --- selectors ---------------------------------------------------------

    def _scope_selector(self, tokens: Tokens, *, local: bool) -> Tokens:
        out: Tokens = []
        i = 0
        while i < len(tokens):
            tok = tokens[i]
            nxt = tokens[i + 1] if i + 1 < len(tokens) else None

            if tok.type == "literal" and tok.value == "." and _is_ident(nxt):
                out.append(tok)
                value = self._rename(nxt.value) if local else nxt.value
                out.append(self._ident_like(nxt, value))
                i += 2
                continue

            if (
                tok.type == "literal"
                and tok.value == ":"
                and nxt is not None
                and nxt.type == "function"
                and nxt.lower_name in {"global", "local"}
            ):
                inner = _strip_whitespace(list(nxt.arguments))
                out.extend(
                    self._scope_selector(inner, local=nxt.lower_name == "local")
                )
                i += 2
                continue

            if tok.type == "hash" and tok.is_identifier and local:
                out.append(
                    HashToken(
                        tok.source_line,
                        tok.source_column,
                        self._rename(tok.value),
                        True,
                    )
                )
            elif tok.type == "function":
                # :not(), :is(), :where(), :has() hold selectors
                out.append(
                    FunctionBlock(
                        tok.source_line,
                        tok.source_column,
                        tok.name,
                        self._scope_selector(list(tok.arguments), local=local),
                    )
                )
            else:
                out.append(tok)
            i += 1
        return out

    @staticmethod
    def _ident_like(tok: Any, value: str) -> IdentToken:
        return IdentToken(tok.source_line, tok.source_column, value)


def _is_ident(tok: Any) -> bool:
    return tok is not None and tok.type == "ident"
