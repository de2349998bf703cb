# src/srdn/engine/__init__.py

"""Stylesheet engine: parse, scope, bundle, minify and print CSS.

A small adapter over tinycss2. Rules are modelled as plain dataclasses,
while selectors and values stay as tinycss2 component values.
"""

from .bundler import Bundler, FileProvider
from .css_modules import ModuleScoper, hash_for_path
from .errors import BundleError, EngineError, ParseError, PatternParseError
from .model import AtRule, Declaration, Item, StyleRule
from .options import MinifyOptions, ModuleConfig, ParserOptions, PrinterOptions
from .pattern import Pattern
from .printer import print_rules, serialize_tokens
from .stylesheet import StyleSheet, ToCssResult


__all__ = [  # noqa: RUF022
    # bundler
    "Bundler",
    "FileProvider",
    # css_modules
    "ModuleScoper",
    "hash_for_path",
    # errors
    "BundleError",
    "EngineError",
    "ParseError",
    "PatternParseError",
    # model
    "AtRule",
    "Declaration",
    "Item",
    "StyleRule",
    # options
    "MinifyOptions",
    "ModuleConfig",
    "ParserOptions",
    "PrinterOptions",
    # pattern
    "Pattern",
    # printer
    "print_rules",
    "serialize_tokens",
    # stylesheet
    "StyleSheet",
    "ToCssResult",
]
