# src/srdn/engine/printer.py
"""Serialize a rule tree back to CSS text.

Pretty mode puts every rule and declaration on its own line, indented two
spaces per level; printing, re-parsing and printing again yields the same
text. Minify mode drops every optional whitespace character and the final
semicolon of each block.
"""

from typing import Any

from tinycss2.serializer import serialize_identifier

from .model import AtRule, Declaration, Item, StyleRule, Tokens


INDENT = "  "

# whitespace next to these tokens can always go when minifying
_TIGHT_BEFORE = {",", ">", ";", "{", "}"}
_TIGHT_AFTER = _TIGHT_BEFORE | {":"}

_BLOCK_DELIMITERS = {
    "() block": ("(", ")"),
    "[] block": ("[", "]"),
    "{} block": ("{", "}"),
}


def _literal(tok: Any) -> str | None:
    return tok.value if tok is not None and tok.type == "literal" else None


def serialize_tokens(tokens: Tokens, *, minify: bool = False) -> str:
    """Serialize component values, collapsing whitespace runs to one space."""
    visible = [tok for tok in tokens if tok.type != "comment"]
    parts: list[str] = []
    previous: Any = None

    for i, tok in enumerate(visible):
        if tok.type == "whitespace":
            nxt = visible[i + 1] if i + 1 < len(visible) else None
            if previous is None or nxt is None or nxt.type == "whitespace":
                continue
            if minify and (
                _literal(previous) in _TIGHT_AFTER or _literal(nxt) in _TIGHT_BEFORE
            ):
                continue
            parts.append(" ")
            continue

        if tok.type == "function":
            inner = serialize_tokens(tok.arguments, minify=minify)
            parts.append(f"{serialize_identifier(tok.name)}({inner})")
        elif tok.type in _BLOCK_DELIMITERS:
            opening, closing = _BLOCK_DELIMITERS[tok.type]
            inner = serialize_tokens(tok.content, minify=minify)
            parts.append(f"{opening}{inner}{closing}")
        else:
            parts.append(tok.serialize())
        previous = tok

    return "".join(parts)


def _declaration(decl: Declaration, *, minify: bool) -> str:
    name = serialize_identifier(decl.name)
    value = serialize_tokens(decl.value, minify=minify)
    if minify:
        important = "!important" if decl.important else ""
        return f"{name}:{value}{important}"
    important = " !important" if decl.important else ""
    return f"{name}: {value}{important}"


def _at_rule_head(rule: AtRule, *, minify: bool) -> str:
    prelude = serialize_tokens(rule.prelude, minify=minify)
    return f"@{rule.name} {prelude}" if prelude else f"@{rule.name}"


# --- pretty ------------------------------------------------------------------


def _pretty_lines(items: list[Item], depth: int) -> list[str]:
    indent = INDENT * depth
    lines: list[str] = []
    for item in items:
        if isinstance(item, Declaration):
            lines.append(f"{indent}{_declaration(item, minify=False)};")
            continue

        if isinstance(item, StyleRule):
            head = serialize_tokens(item.selector)
            body: list[Item] | None = item.body
        else:
            head = _at_rule_head(item, minify=False)
            body = item.body

        if body is None:
            lines.append(f"{indent}{head};")
            continue
        lines.append(f"{indent}{head} {{")
        lines.extend(_pretty_lines(body, depth + 1))
        lines.append(f"{indent}}}")
    return lines


def _print_pretty(rules: list[Item]) -> str:
    blocks = ["\n".join(_pretty_lines([rule], 0)) for rule in rules]
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


# --- minified ----------------------------------------------------------------


def _minified(items: list[Item], *, top_level: bool) -> str:
    out: list[str] = []
    for i, item in enumerate(items):
        last = i == len(items) - 1
        # the final semicolon of a block is optional
        semicolon = "" if last and not top_level else ";"

        if isinstance(item, Declaration):
            out.append(_declaration(item, minify=True) + semicolon)
        elif isinstance(item, StyleRule):
            selector = serialize_tokens(item.selector, minify=True)
            out.append(f"{selector}{{{_minified(item.body, top_level=False)}}}")
        elif item.body is None:
            out.append(_at_rule_head(item, minify=True) + semicolon)
        else:
            head = _at_rule_head(item, minify=True)
            out.append(f"{head}{{{_minified(item.body, top_level=False)}}}")
    return "".join(out)


def print_rules(rules: list[Item], *, minify: bool = False) -> str:
    if minify:
        return _minified(rules, top_level=True)
    return _print_pretty(rules)
