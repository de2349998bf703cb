# src/srdn/engine/stylesheet.py


from dataclasses import dataclass, field
from typing import Any, NoReturn

import tinycss2

from srdn.logs import get_app_logger

from .css_modules import ModuleScoper, hash_for_path
from .errors import ParseError
from .minifier import minify_rules
from .model import AtRule, Declaration, Item, StyleRule, is_import_rule
from .options import MinifyOptions, ParserOptions, PrinterOptions
from .printer import print_rules


@dataclass
class ToCssResult:
    code: str
    # local name → scoped name, empty unless CSS modules are enabled
    exports: dict[str, str] = field(default_factory=dict)


def _raise_parse_error(node: Any, filename: str) -> NoReturn:
    raise ParseError(
        node.message,
        filename=filename,
        line=node.source_line,
        column=node.source_column,
    )


def _convert_node(node: Any, filename: str, options: ParserOptions) -> Item | None:
    if node.type == "error":
        _raise_parse_error(node, filename)
    if node.type == "declaration":
        return Declaration(node.name, list(node.value), important=node.important)
    if node.type == "qualified-rule":
        return StyleRule(
            list(node.prelude),
            _parse_body(node.content, filename, options, in_style_rule=True),
        )
    if node.type == "at-rule":
        body = None
        if node.content is not None:
            body = _parse_body(node.content, filename, options, in_style_rule=False)
        return AtRule(node.lower_at_keyword, list(node.prelude), body)
    # whitespace and comments
    return None


def _parse_body(
    tokens: list[Any],
    filename: str,
    options: ParserOptions,
    *,
    in_style_rule: bool,
) -> list[Item]:
    nodes = tinycss2.parse_blocks_contents(
        tokens, skip_comments=True, skip_whitespace=True
    )
    items: list[Item] = []
    for node in nodes:
        item = _convert_node(node, filename, options)
        if item is None:
            continue
        if in_style_rule and isinstance(item, StyleRule) and not options.nesting:
            raise ParseError(
                "nested style rules require nesting to be enabled",
                filename=filename,
                line=node.source_line,
                column=node.source_column,
            )
        items.append(item)
    return items


class StyleSheet:
    """A parsed stylesheet: its top-level rules and CSS modules exports."""

    def __init__(
        self,
        filename: str,
        rules: list[Item],
        *,
        exports: dict[str, str] | None = None,
        options: ParserOptions | None = None,
    ) -> None:
        self.filename = filename
        self.rules = rules
        self.exports = exports if exports is not None else {}
        self.options = options if options is not None else ParserOptions()

    def __repr__(self) -> str:
        return f"StyleSheet({self.filename!r}, {len(self.rules)} rules)"

    @classmethod
    def parse(
        cls,
        filename: str,
        code: str,
        options: ParserOptions | None = None,
    ) -> "StyleSheet":
        """Parse `code`; raises ParseError on the first syntax error."""
        logger = get_app_logger()
        if options is None:
            options = ParserOptions()

        nodes = tinycss2.parse_stylesheet(
            code, skip_comments=True, skip_whitespace=True
        )
        rules: list[Item] = []
        for node in nodes:
            item = _convert_node(node, filename, options)
            if item is not None:
                rules.append(item)

        exports: dict[str, str] = {}
        if options.css_modules is not None:
            scoper = ModuleScoper(
                options.css_modules,
                hash_=hash_for_path(filename, options.project_root),
                name=filename,
            )
            scoper.scope_rules(rules)
            exports = scoper.exports

        logger.trace(f"[parse] {filename}: {len(rules)} top-level rule(s)")
        return cls(filename, rules, exports=exports, options=options)

    @property
    def imports(self) -> list[AtRule]:
        """The leading run of @import rules."""
        leading: list[AtRule] = []
        for rule in self.rules:
            if not is_import_rule(rule):
                break
            leading.append(rule)  # type: ignore[arg-type]
        return leading

    def minify(self, options: MinifyOptions | None = None) -> None:
        """Drop empty rules and resolve custom media queries, in place."""
        if options is None:
            options = MinifyOptions()
        self.rules = minify_rules(
            self.rules,
            custom_media=self.options.custom_media,
            targets=options.targets,
        )

    def to_css(self, options: PrinterOptions | None = None) -> ToCssResult:
        if options is None:
            options = PrinterOptions()
        code = print_rules(self.rules, minify=options.minify)
        return ToCssResult(code=code, exports=dict(self.exports))
