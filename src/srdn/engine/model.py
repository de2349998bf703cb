# src/srdn/engine/model.py
"""Rule tree produced by the parser.

Selectors, preludes and values stay as tinycss2 component values; only
the block structure (rules, nested rules, declarations) is modelled.
"""

from dataclasses import dataclass, field
from typing import Any


Tokens = list[Any]  # tinycss2 component values


@dataclass
class Declaration:
    name: str
    value: Tokens
    important: bool = False


@dataclass
class StyleRule:
    selector: Tokens
    body: list["Item"] = field(default_factory=list)


@dataclass
class AtRule:
    name: str  # lower-cased, without "@"
    prelude: Tokens
    body: list["Item"] | None = None  # None for statements like @import

    @property
    def is_block(self) -> bool:
        return self.body is not None


Item = Declaration | StyleRule | AtRule


def is_import_rule(rule: Item) -> bool:
    return isinstance(rule, AtRule) and rule.name == "import"
