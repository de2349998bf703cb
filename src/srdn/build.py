# src/srdn/build.py


import argparse
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import ProjectSettings
from .constants import CSS_EXTENSION, DEFAULT_SOURCE_GLOB, MODULE_FILE_MARKER
from .css_modules import resolve_css_modules
from .engine import (
    AtRule,
    Bundler,
    EngineError,
    Item,
    MinifyOptions,
    ParserOptions,
    PrinterOptions,
    StyleSheet,
)
from .engine.model import is_import_rule
from .errors import FileIOError
from .logs import get_app_logger
from .targets import Browsers, BrowserslistResolver, browserslist_to_targets


# --------------------------------------------------------------------------- #
# types
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class BuildTask:
    input_path: Path
    output_path: Path
    needs_bundling: bool = False

    @property
    def is_module_file(self) -> bool:
        return MODULE_FILE_MARKER in self.input_path.name


@dataclass
class BuildResult:
    input_path: Path
    output_path: Path | None = None
    exports: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BuildRequest:
    """What the `build` command was asked to do.

    Single-file mode needs both `file` and `output_file`; directory mode
    needs both `source_dir` and `output_dir`. Either, both or neither may
    be complete.
    """

    file: Path | None = None
    output_file: Path | None = None
    source_dir: Path | None = None
    output_dir: Path | None = None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "BuildRequest":
        def as_path(value: str | None) -> Path | None:
            return Path(value) if value else None

        return cls(
            file=as_path(getattr(args, "file", None)),
            output_file=as_path(getattr(args, "output_file", None)),
            source_dir=as_path(getattr(args, "dir", None)),
            output_dir=as_path(getattr(args, "output_dir", None)),
        )

    @property
    def single_file(self) -> bool:
        return self.file is not None and self.output_file is not None

    @property
    def directory(self) -> bool:
        return self.source_dir is not None and self.output_dir is not None


class CssEngine:
    """Default stylesheet engine (tinycss2-backed `srdn.engine`)."""

    def parse(self, filename: str, code: str, options: ParserOptions) -> StyleSheet:
        return StyleSheet.parse(filename, code, options)

    def bundle(self, entry: Path, options: ParserOptions) -> StyleSheet:
        return Bundler(options=options).bundle(entry)


# --------------------------------------------------------------------------- #
# helpers
# --------------------------------------------------------------------------- #


def has_leading_imports(rules: Sequence[Item]) -> bool:
    """True if the stylesheet opens with one or more @import rules.

    Only the leading run counts; scanning stops at the first other rule.
    A leading `@charset` is skipped.
    """
    found = False
    for rule in rules:
        if isinstance(rule, AtRule) and rule.name == "charset" and not found:
            continue
        if not is_import_rule(rule):
            break
        found = True
    return found


def compute_output_path(input_path: Path, output_target: Path) -> Path:
    """Where the compiled stylesheet for `input_path` is written.

    A target ending in `.css` is the output file itself. Anything else is a
    directory, and the input path is re-created beneath it. Absolute inputs
    are taken relative to the working directory when possible, otherwise
    only their file name is kept.
    """
    if str(output_target).endswith(CSS_EXTENSION):
        return output_target

    relative = input_path
    if input_path.is_absolute():
        try:
            relative = input_path.relative_to(Path.cwd())
        except ValueError:
            relative = Path(input_path.name)
    return output_target / relative


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        xmsg = f"Could not read {path}: {getattr(e, 'strerror', None) or e}"
        raise FileIOError(xmsg) from e


def _write_output(path: Path, code: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(code.encode("utf-8"))
    except OSError as e:
        xmsg = f"Could not write {path}: {e.strerror or e}"
        raise FileIOError(xmsg) from e


# --------------------------------------------------------------------------- #
# builds
# --------------------------------------------------------------------------- #


def build_css(  # noqa: PLR0913
    input_path: Path,
    output_target: Path,
    settings: ProjectSettings,
    *,
    targets: Browsers | None,
    engine: CssEngine | None = None,
    project_root: Path | None = None,
) -> BuildResult:
    """Compile one stylesheet and write it out.

    Read, parse and write failures are reported in the returned
    BuildResult rather than raised.
    """
    logger = get_app_logger()
    if engine is None:
        engine = CssEngine()
    if project_root is None and settings.config_path is not None:
        project_root = settings.config_path.parent

    css_modules = resolve_css_modules(settings, input_path)
    options = ParserOptions(
        nesting=True,
        custom_media=True,
        css_modules=css_modules,
        project_root=project_root,
    )

    try:
        code = _read_source(input_path)
        sheet = engine.parse(str(input_path), code, options)

        task = BuildTask(
            input_path=input_path,
            output_path=compute_output_path(input_path, output_target),
            needs_bundling=has_leading_imports(sheet.rules),
        )
        if task.needs_bundling:
            logger.debug("Bundling imports of %s", input_path)
            sheet = engine.bundle(input_path, options)

        sheet.minify(MinifyOptions(targets=targets))
        result = sheet.to_css(PrinterOptions(minify=settings.minify, targets=targets))

        _write_output(task.output_path, result.code)
    except (FileIOError, EngineError) as e:
        logger.error_if_not_debug("Failed to build %s: %s", input_path, e)
        return BuildResult(input_path=input_path, error=str(e))

    logger.debug("Wrote %s → %s", input_path, task.output_path)
    return BuildResult(
        input_path=input_path,
        output_path=task.output_path,
        exports=result.exports if task.is_module_file else {},
    )


def build_many(  # noqa: PLR0913
    source_dir: Path,
    output_dir: Path,
    settings: ProjectSettings,
    *,
    targets: Browsers | None,
    engine: CssEngine | None = None,
    project_root: Path | None = None,
) -> list[BuildResult]:
    """Build every `<source_dir>/**/*.css`; one result per match, in glob order."""
    logger = get_app_logger()
    matches = sorted(p for p in source_dir.glob(DEFAULT_SOURCE_GLOB) if p.is_file())
    logger.trace(f"[build_many] {len(matches)} stylesheet(s) under {source_dir}")

    results: list[BuildResult] = []
    for path in matches:
        logger.info("%s", path)
        results.append(
            build_css(
                path,
                output_dir,
                settings,
                targets=targets,
                engine=engine,
                project_root=project_root,
            )
        )
    return results


def run_build(
    request: BuildRequest,
    settings: ProjectSettings,
    *,
    resolver: BrowserslistResolver | None = None,
    engine: CssEngine | None = None,
) -> list[BuildResult]:
    """Run single-file and/or directory mode, single-file first.

    Browser targets are compiled once, up front; failing to compile them
    aborts before any stylesheet is touched. They are not compiled at all
    when neither mode is complete.
    """
    logger = get_app_logger()
    if not request.single_file and (request.file or request.output_file):
        logger.warning("Single-file mode needs both --file and --output-file")
    if not request.directory and (request.source_dir or request.output_dir):
        logger.warning("Directory mode needs both --dir and --output-dir")

    results: list[BuildResult] = []
    if not (request.single_file or request.directory):
        return results

    targets = browserslist_to_targets(settings.browserslist, resolver=resolver)

    if request.single_file:
        assert request.file is not None  # noqa: S101
        assert request.output_file is not None  # noqa: S101
        results.append(
            build_css(
                request.file,
                request.output_file,
                settings,
                targets=targets,
                engine=engine,
            )
        )

    if request.directory:
        assert request.source_dir is not None  # noqa: S101
        assert request.output_dir is not None  # noqa: S101
        results.extend(
            build_many(
                request.source_dir,
                request.output_dir,
                settings,
                targets=targets,
                engine=engine,
            )
        )

    failed = [r for r in results if not r.ok]
    logger.debug(
        "Built %d stylesheet(s), %d failed", len(results) - len(failed), len(failed)
    )
    return results
