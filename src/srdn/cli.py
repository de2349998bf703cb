# src/srdn/cli.py

import argparse
import json
import platform
import sys
from difflib import get_close_matches
from pathlib import Path
from typing import Any

from .actions import get_metadata
from .build import BuildRequest, BuildResult, run_build
from .config import ProjectSettings, load_settings
from .errors import SrdnError
from .logs import LEVEL_ORDER, get_app_logger, safe_log
from .meta import PROGRAM_CONFIG, PROGRAM_DISPLAY, PROGRAM_SCRIPT


UNRECOGNIZED = "unrecognized arguments:"

# (flags, level, help) for the shorthand verbosity switches
VERBOSITY_FLAGS: list[tuple[tuple[str, ...], str, str]] = [
    (("-q", "--quiet"), "warning", "Only show warnings and errors."),
    (("-v", "--verbose"), "debug", "Show build details (--log-level debug)."),
    (("-d", "--debug"), "debug", "Same as --verbose."),
]


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


def option_hints(message: str, known: list[str]) -> list[str]:
    """'did you mean' lines for misspelled options in an argparse error."""
    if UNRECOGNIZED not in message:
        return []
    bad = message.split(UNRECOGNIZED, 1)[1].split()
    hints = []
    for arg in bad:
        if not arg.startswith("-"):
            continue
        close = get_close_matches(arg, known, n=1, cutoff=0.6)
        if close:
            hints.append(f"Hint: did you mean {close[0]}?")
    return hints


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        known = [opt for action in self._actions for opt in action.option_strings]
        self.print_usage(sys.stderr)
        lines = [f"{self.prog}: error: {message}", *option_hints(message, known)]
        self.exit(2, "\n".join(lines) + "\n")


def _add_build_parser(subparsers: "argparse._SubParsersAction[Any]") -> None:
    build = subparsers.add_parser(
        "build",
        help="Build your stylesheets.",
        description=(
            "Compile a single stylesheet (--file/--output-file), "
            "a directory of stylesheets (--dir/--output-dir), or both."
        ),
    )
    build.add_argument(
        "-f", "--file", metavar="FILE", help="Path to a single stylesheet."
    )
    build.add_argument(
        "-o",
        "--output-file",
        metavar="PATH",
        help=(
            "Destination for --file. A path ending in '.css' is the output file, "
            "anything else is a directory the input path is recreated under."
        ),
    )
    build.add_argument(
        "-s",
        "--dir",
        metavar="DIR",
        help="Source directory; every **/*.css file beneath it is built.",
    )
    build.add_argument(
        "-d",
        "--output-dir",
        metavar="DIR",
        help="Destination directory for --dir.",
    )


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        description="Build browser-ready CSS from your source stylesheets.",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help=f"Path to the project manifest (default: nearest {PROGRAM_CONFIG}).",
    )

    # --- Color ---
    color = parser.add_mutually_exclusive_group()
    color.add_argument(
        "--no-color",
        dest="use_color",
        action="store_const",
        const=False,
        help="Disable ANSI color output.",
    )
    color.add_argument(
        "--color",
        dest="use_color",
        action="store_const",
        const=True,
        help="Force-enable ANSI color output (overrides auto-detect).",
    )
    color.set_defaults(use_color=None)

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    for flags, level, text in VERBOSITY_FLAGS:
        log_level.add_argument(
            *flags, action="store_const", const=level, dest="log_level", help=text
        )
    log_level.add_argument(
        "--log-level",
        choices=LEVEL_ORDER,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    _add_build_parser(subparsers)
    return parser


# --------------------------------------------------------------------------- #
# Main entry helpers
# --------------------------------------------------------------------------- #


def _initialize_logger(args: argparse.Namespace) -> None:
    """Initialize logger with CLI args, env vars, and defaults."""
    logger = get_app_logger()
    log_level = logger.determine_log_level(args=args)
    logger.setLevel(log_level)
    use_color = getattr(args, "use_color", None)
    logger.enable_color = (
        use_color if use_color is not None else logger.determine_color_enabled()
    )
    logger.trace("[BOOT] log-level initialized: %s", logger.level_name)

    logger.debug(
        "Runtime: Python %s (%s)\n    %s",
        platform.python_version(),
        platform.python_implementation(),
        sys.version.replace("\n", " "),
    )


def _load_settings(args: argparse.Namespace) -> ProjectSettings:
    logger = get_app_logger()
    cwd = Path.cwd().resolve()

    settings = load_settings(args, cwd)
    if settings is None:
        logger.info("No %s found, using default settings.", PROGRAM_CONFIG)
        return ProjectSettings()

    logger.info("🔧 Using config: %s", settings.config_path)
    return settings


def _report(results: list[BuildResult]) -> int:
    """Print each export map; return the exit code."""
    logger = get_app_logger()
    failed = 0
    for result in results:
        if result.ok:
            print(json.dumps(result.exports, indent=2))  # noqa: T201
        else:
            failed += 1

    if failed:
        logger.error("%d of %d stylesheet(s) failed to build.", failed, len(results))
        return 1
    if results:
        logger.info("✅ Built %d stylesheet(s).", len(results))
    return 0


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = get_app_logger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        _initialize_logger(args)

        # --- Version flag ---
        if getattr(args, "version", None):
            meta = get_metadata()
            logger.info("%s %s (%s)", PROGRAM_DISPLAY, meta.version, meta.commit)
            return 0

        if args.command is None:
            parser.print_help()
            return 0

        settings = _load_settings(args)
        results = run_build(BuildRequest.from_args(args), settings)
        return _report(results)

    except (SrdnError, ValueError, RuntimeError, OSError) as e:
        # controlled termination
        silent = getattr(e, "silent", False)
        if not silent:
            try:
                logger.error_if_not_debug(str(e))
            except Exception:  # noqa: BLE001
                safe_log(f"[FATAL] Logging failed while reporting: {e}")
        return getattr(e, "code", 1)

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.critical_if_not_debug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safe_log(f"[FATAL] Logging failed while reporting: {e}")

        return getattr(e, "code", 1)
