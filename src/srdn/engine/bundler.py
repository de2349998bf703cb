# src/srdn/engine/bundler.py
"""Inline `@import` rules into a single stylesheet."""

import os
from pathlib import Path
from typing import Any

from tinycss2.ast import ParenthesesBlock

from srdn.logs import get_app_logger

from .errors import BundleError
from .model import AtRule, Item, Tokens, is_import_rule
from .options import ParserOptions
from .stylesheet import StyleSheet


EXTERNAL_PREFIXES = ("http://", "https://", "//")


class FileProvider:
    """Reads stylesheet sources from disk.

    Sources are UTF-8; a leading byte order mark is dropped.
    """

    def read(self, path: Path) -> str:
        return path.read_text(encoding="utf-8-sig")


def _strip(tokens: Tokens) -> Tokens:
    start, end = 0, len(tokens)
    while start < end and tokens[start].type in {"whitespace", "comment"}:
        start += 1
    while end > start and tokens[end - 1].type in {"whitespace", "comment"}:
        end -= 1
    return list(tokens[start:end])


def import_url(prelude: Tokens) -> tuple[str | None, Tokens]:
    """Split an @import prelude into its URL and the remaining conditions."""
    tokens = _strip(prelude)
    if not tokens:
        return None, []
    first, rest = tokens[0], tokens[1:]
    if first.type in {"string", "url"}:
        return first.value, _strip(rest)
    if first.type == "function" and first.lower_name == "url":
        args = _strip(list(first.arguments))
        if len(args) == 1 and args[0].type == "string":
            return args[0].value, _strip(rest)
    return None, []


class ImportConditions:
    """The `layer`, `supports()` and media parts of an @import."""

    def __init__(self, tokens: Tokens) -> None:
        self.layer: Tokens | None = None
        self.supports: Tokens | None = None
        rest = list(tokens)

        if rest and rest[0].type == "ident" and rest[0].lower_value == "layer":
            self.layer = []
            rest = _strip(rest[1:])
        elif rest and rest[0].type == "function" and rest[0].lower_name == "layer":
            self.layer = _strip(list(rest[0].arguments))
            rest = _strip(rest[1:])

        if rest and rest[0].type == "function" and rest[0].lower_name == "supports":
            fn = rest[0]
            self.supports = [
                ParenthesesBlock(
                    fn.source_line, fn.source_column, _strip(list(fn.arguments))
                )
            ]
            rest = _strip(rest[1:])

        self.media: Tokens = rest

    def wrap(self, rules: list[Item]) -> list[Item]:
        # layer innermost, media outermost
        if self.layer is not None:
            rules = [AtRule("layer", self.layer, rules)]
        if self.supports is not None:
            rules = [AtRule("supports", self.supports, rules)]
        if self.media:
            rules = [AtRule("media", self.media, rules)]
        return rules


def _location(rule: AtRule) -> tuple[int | None, int | None]:
    for tok in rule.prelude:
        line = getattr(tok, "source_line", None)
        if line is not None:
            return line, getattr(tok, "source_column", None)
    return None, None


class Bundler:
    """Resolves the leading @import run of a stylesheet, recursively.

    Every file is included at most once, at the place it is first imported.
    Remote imports (http, https, protocol-relative) are kept as @import
    rules and hoisted to the top of the output.
    """

    def __init__(
        self,
        provider: Any = None,
        options: ParserOptions | None = None,
    ) -> None:
        self.provider = provider if provider is not None else FileProvider()
        self.options = options if options is not None else ParserOptions()
        self._seen: set[Path] = set()
        self._external: list[Item] = []
        self._exports: dict[str, str] = {}

    def bundle(self, entry: Path) -> StyleSheet:
        self._seen = set()
        self._external = []
        self._exports = {}

        rules = self._load(entry)
        return StyleSheet(
            str(entry),
            [*self._external, *rules],
            exports=dict(self._exports),
            options=self.options,
        )

    def _read(self, path: Path, importer: str | None, rule: AtRule | None) -> str:
        try:
            return self.provider.read(path)
        except (OSError, UnicodeDecodeError) as e:
            line, column = _location(rule) if rule is not None else (None, None)
            reason = getattr(e, "strerror", None) or e
            xmsg = f"cannot read imported file {path}: {reason}"
            raise BundleError(
                xmsg, filename=importer or str(path), line=line, column=column
            ) from e

    def _load(
        self,
        path: Path,
        importer: str | None = None,
        rule: AtRule | None = None,
    ) -> list[Item]:
        logger = get_app_logger()
        key = Path(os.path.abspath(path))
        if key in self._seen:
            logger.trace(f"[bundle] {path} already included")
            return []
        self._seen.add(key)

        code = self._read(path, importer, rule)
        sheet = StyleSheet.parse(str(path), code, self.options)
        for local, scoped in sheet.exports.items():
            self._exports.setdefault(local, scoped)

        # output is always UTF-8
        rules = [
            r
            for r in sheet.rules
            if not (isinstance(r, AtRule) and r.name == "charset")
        ]
        out: list[Item] = []
        index = 0
        while index < len(rules) and is_import_rule(rules[index]):
            import_rule = rules[index]
            index += 1
            assert isinstance(import_rule, AtRule)  # noqa: S101

            url, conditions = import_url(import_rule.prelude)
            if url is None:
                line, column = _location(import_rule)
                xmsg = "malformed @import rule"
                raise BundleError(xmsg, filename=str(path), line=line, column=column)
            if url.startswith(EXTERNAL_PREFIXES):
                logger.trace(f"[bundle] keeping remote import {url}")
                self._external.append(import_rule)
                continue

            target = Path(os.path.normpath(path.parent / url))
            logger.trace(f"[bundle] {path} imports {target}")
            inlined = self._load(target, str(path), import_rule)
            out.extend(ImportConditions(conditions).wrap(inlined) if inlined else [])

        out.extend(rules[index:])
        return out
