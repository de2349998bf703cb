# tests/5_core/test_bundler.py

from pathlib import Path

import pytest

import srdn.engine as mod_engine
import srdn.engine.bundler as mod_bundler
from tests.utils import MemoryProvider


def _bundle(
    files: dict[str, str],
    entry: str = "src/main.css",
    options: mod_engine.ParserOptions | None = None,
) -> tuple[mod_engine.StyleSheet, MemoryProvider]:
    provider = MemoryProvider(files)
    sheet = mod_engine.Bundler(provider, options).bundle(Path(entry))
    return sheet, provider


def test_imports_are_inlined_once_in_order() -> None:
    # --- setup ---
    files = {
        "src/main.css": (
            '@import "./base.css";\n'
            "@import url(theme.css) screen;\n"
            '@import url("https://fonts.example/x.css");\n'
            ".main { color: red }"
        ),
        "src/base.css": '@import "reset.css";\nbody { margin: 0 }',
        "src/reset.css": "* { box-sizing: border-box }",
        "src/theme.css": '@import "./base.css";\n.theme { color: blue }',
    }

    # --- execute ---
    sheet, provider = _bundle(files)
    code = sheet.to_css().code

    # --- verify ---
    assert code == (
        '@import url("https://fonts.example/x.css");\n'
        "\n"
        "* {\n  box-sizing: border-box;\n}\n"
        "\n"
        "body {\n  margin: 0;\n}\n"
        "\n"
        "@media screen {\n  .theme {\n    color: blue;\n  }\n}\n"
        "\n"
        ".main {\n  color: red;\n}\n"
    )
    # base.css is imported twice but read once
    assert provider.reads.count("src/base.css") == 1


def test_import_conditions_nest_layer_supports_media() -> None:
    # --- setup ---
    files = {
        "src/main.css": (
            '@import "grid.css" layer(base) supports(display: grid) '
            "screen and (min-width: 500px);"
        ),
        "src/grid.css": ".g { display: grid }",
    }

    # --- execute ---
    sheet, _ = _bundle(files)
    code = sheet.to_css(mod_engine.PrinterOptions(minify=True)).code

    # --- verify ---
    assert code == (
        "@media screen and (min-width:500px){"
        "@supports (display:grid){"
        "@layer base{.g{display:grid}}}}"
    )


def test_anonymous_layer_import() -> None:
    # --- setup ---
    files = {
        "src/main.css": '@import "a.css" layer;',
        "src/a.css": ".a { color: red }",
    }

    # --- execute ---
    sheet, _ = _bundle(files)

    # --- verify ---
    assert sheet.to_css(mod_engine.PrinterOptions(minify=True)).code == (
        "@layer{.a{color:red}}"
    )


def test_import_cycle_terminates() -> None:
    # --- setup ---
    files = {
        "src/main.css": '@import "a.css";\n.main { color: red }',
        "src/a.css": '@import "main.css";\n.a { color: blue }',
    }

    # --- execute ---
    sheet, provider = _bundle(files)

    # --- verify ---
    assert sheet.to_css(mod_engine.PrinterOptions(minify=True)).code == (
        ".a{color:blue}.main{color:red}"
    )
    assert provider.reads == ["src/main.css", "src/a.css"]


def test_charset_rules_are_dropped() -> None:
    # --- setup ---
    files = {
        "src/main.css": '@charset "utf-8";\n@import "a.css";\n.m { color: red }',
        "src/a.css": '@charset "utf-8";\n.a { color: blue }',
    }

    # --- execute ---
    sheet, _ = _bundle(files)

    # --- verify ---
    code = sheet.to_css().code
    assert "@charset" not in code
    assert ".a {" in code


def test_missing_import_is_bundle_error() -> None:
    # --- setup ---
    files = {"src/main.css": '@import "missing.css";\n.x { color: red }'}

    # --- execute ---
    with pytest.raises(mod_engine.BundleError) as excinfo:
        _bundle(files)

    # --- verify ---
    err = excinfo.value
    assert err.filename == "src/main.css"
    assert err.line == 1
    assert "src/missing.css" in str(err)


def test_undecodable_import_is_bundle_error(tmp_path: Path) -> None:
    # --- setup ---
    entry = tmp_path / "main.css"
    entry.write_text('@import "bad.css";\n.x { color: red }', encoding="utf-8")
    (tmp_path / "bad.css").write_bytes(b".y { content: '\xff\xfe' }")

    # --- execute ---
    with pytest.raises(mod_engine.BundleError) as excinfo:
        mod_engine.Bundler().bundle(entry)

    # --- verify ---
    err = excinfo.value
    assert err.filename == str(entry)
    assert err.line == 1
    assert "bad.css" in str(err)
    assert isinstance(err.__cause__, UnicodeDecodeError)


def test_file_provider_drops_byte_order_mark(tmp_path: Path) -> None:
    # --- setup ---
    path = tmp_path / "bom.css"
    path.write_bytes("\ufeff.a { color: red }".encode())

    # --- execute and verify ---
    assert mod_bundler.FileProvider().read(path) == ".a { color: red }"


def test_malformed_import_is_bundle_error() -> None:
    # --- setup ---
    files = {"src/main.css": "@import 42;\n.x { color: red }"}

    # --- execute and verify ---
    with pytest.raises(mod_engine.BundleError, match="malformed @import"):
        _bundle(files)


def test_parse_error_in_imported_file() -> None:
    # --- setup ---
    files = {
        "src/main.css": '@import "broken.css";',
        "src/broken.css": ".a { color: red }\n.b",
    }

    # --- execute ---
    with pytest.raises(mod_engine.ParseError) as excinfo:
        _bundle(files)

    # --- verify ---
    assert excinfo.value.filename == "src/broken.css"


def test_module_exports_are_merged() -> None:
    # --- setup ---
    files = {
        "src/main.module.css": '@import "./b.module.css";\n.a { color: red }',
        "src/b.module.css": ".b { color: blue }",
    }
    config = mod_engine.ModuleConfig(pattern=mod_engine.Pattern.parse("[name]_[local]"))
    options = mod_engine.ParserOptions(css_modules=config)

    # --- execute ---
    sheet, _ = _bundle(files, "src/main.module.css", options)

    # --- verify ---
    assert sheet.to_css().exports == {"a": "main_a", "b": "b_b"}


def test_import_url_forms() -> None:
    # --- setup ---
    cases = {
        '@import "a.css";': "a.css",
        "@import 'a.css' print;": "a.css",
        "@import url(a.css);": "a.css",
        '@import url("a.css") screen;': "a.css",
    }

    for source, expected in cases.items():
        # --- execute ---
        sheet = mod_engine.StyleSheet.parse("main.css", source)
        url, _ = mod_bundler.import_url(sheet.imports[0].prelude)

        # --- verify ---
        assert url == expected, source
