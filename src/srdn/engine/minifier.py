# src/srdn/engine/minifier.py


from typing import Any

from tinycss2.ast import ParenthesesBlock

from srdn.logs import get_app_logger
from srdn.targets import Browsers

from .model import AtRule, Declaration, Item, StyleRule, Tokens


# block at-rules that mean something even with nothing inside
KEEP_EMPTY_AT_RULES = {"layer", "font-feature-values"}


def _strip(tokens: Tokens) -> Tokens:
    visible = [t for t in tokens if t.type != "comment"]
    start, end = 0, len(visible)
    while start < end and visible[start].type == "whitespace":
        start += 1
    while end > start and visible[end - 1].type == "whitespace":
        end -= 1
    return visible[start:end]


def _collect_custom_media(items: list[Item]) -> dict[str, Tokens]:
    """Top-level `@custom-media --name <query>;` definitions."""
    defined: dict[str, Tokens] = {}
    for item in items:
        if isinstance(item, AtRule) and item.name == "custom-media":
            prelude = _strip(item.prelude)
            if prelude and prelude[0].type == "ident":
                defined[prelude[0].value] = _strip(prelude[1:])
    return defined


def _custom_media_name(tok: Any, defined: dict[str, Tokens]) -> str | None:
    if tok.type != "() block":
        return None
    inner = _strip(tok.content)
    if len(inner) == 1 and inner[0].type == "ident" and inner[0].value in defined:
        return inner[0].value
    return None


def _substitute_media(prelude: Tokens, defined: dict[str, Tokens]) -> Tokens:
    stripped = _strip(prelude)
    # `@media (--name)` takes the whole query verbatim
    if len(stripped) == 1:
        name = _custom_media_name(stripped[0], defined)
        if name is not None:
            return list(defined[name])

    out: Tokens = []
    for tok in prelude:
        name = _custom_media_name(tok, defined)
        if name is not None:
            out.extend(_wrap_query(tok, defined[name]))
            continue
        out.append(tok)
    return out


def _wrap_query(original: Any, query: Tokens) -> Tokens:
    # a single parenthesised condition can be inlined as-is
    if len(query) == 1 and query[0].type == "() block":
        return list(query)
    return [ParenthesesBlock(original.source_line, original.source_column, query)]


def _minify_items(
    items: list[Item],
    custom_media: dict[str, Tokens],
) -> list[Item]:
    kept: list[Item] = []
    for item in items:
        if isinstance(item, Declaration):
            kept.append(item)
            continue

        if isinstance(item, StyleRule):
            item.body = _minify_items(item.body, custom_media)
            if not item.body:
                continue
            kept.append(item)
            continue

        if item.name == "custom-media" and custom_media:
            continue
        if item.name == "media" and custom_media:
            item.prelude = _substitute_media(item.prelude, custom_media)
        if item.body is not None:
            item.body = _minify_items(item.body, custom_media)
            if not item.body and item.name not in KEEP_EMPTY_AT_RULES:
                continue
        kept.append(item)
    return kept


def minify_rules(
    rules: list[Item],
    *,
    custom_media: bool = False,
    targets: Browsers | None = None,
) -> list[Item]:
    """Drop empty rules; inline `@custom-media` when enabled.

    `targets` is accepted for future down-leveling; no prefixing or
    lowering is done here.
    """
    logger = get_app_logger()
    defined = _collect_custom_media(rules) if custom_media else {}
    result = _minify_items(rules, defined)
    logger.trace(
        f"[minify] {len(rules)} → {len(result)} top-level rule(s), targets={targets}"
    )
    return result
