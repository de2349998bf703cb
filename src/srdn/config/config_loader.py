# src/srdn/config/config_loader.py


import argparse
import os
from pathlib import Path
from typing import Any, Protocol

from srdn.errors import ConfigError
from srdn.logs import get_app_logger
from srdn.meta import PROGRAM_CONFIG, VCS_MARKER
from srdn.utils import (
    ValidationSummary,
    cast_hint,
    load_jsonc,
    plural,
    remove_path_in_error_message,
)

from .config_resolve import resolve_settings
from .config_types import PackageConfig, ProjectSettings
from .config_validate import validate_config


class DirectoryLister(Protocol):
    """Lists the direct entry names of a directory (non-recursive)."""

    def list_entries(self, directory: Path) -> list[str]: ...


class FilesystemLister:
    """DirectoryLister backed by the real filesystem."""

    def list_entries(self, directory: Path) -> list[str]:
        with os.scandir(directory) as it:
            return [entry.name for entry in it]


def find_settings(
    cwd: Path,
    *,
    lister: DirectoryLister | None = None,
) -> Path | None:
    """Walk from cwd toward the filesystem root looking for the manifest.

    The closest manifest wins. A directory holding the VCS marker (but no
    manifest) ends the search: configuration above a repository boundary
    does not belong to this project.
    """
    logger = get_app_logger()
    if lister is None:
        lister = FilesystemLister()

    for directory in (cwd, *cwd.parents):
        try:
            entries = set(lister.list_entries(directory))
        except OSError as e:
            logger.trace(f"[find_settings] Skipping unreadable {directory}: {e}")
            continue

        if PROGRAM_CONFIG in entries:
            found = directory / PROGRAM_CONFIG
            logger.trace(f"[find_settings] Found {found}")
            return found
        if VCS_MARKER in entries:
            logger.trace(f"[find_settings] Stopped at repository root {directory}")
            return None

    return None


def find_config(
    args: argparse.Namespace,
    cwd: Path,
    *,
    lister: DirectoryLister | None = None,
) -> Path | None:
    """Locate the manifest.

    Search order:
      1. Explicit path from CLI (--config)
      2. find_settings() from the current working directory
    """
    logger = get_app_logger()

    if getattr(args, "config", None):
        config = Path(args.config).expanduser().resolve()
        logger.trace(f"[find_config] Checking explicit path: {config}")
        if not config.exists():
            xmsg = f"Specified config file not found: {config}"
            raise ConfigError(xmsg)
        if config.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {config}"
            raise ConfigError(xmsg)
        return config

    found = find_settings(cwd, lister=lister)
    if found is None:
        logger.debug("No %s found in %s or parents", PROGRAM_CONFIG, cwd)
    return found


def load_config(config_path: Path) -> dict[str, Any]:
    """Load the raw manifest object.

    A manifest with no JSON value in it (empty or only comments) is an error.
    """
    logger = get_app_logger()
    logger.trace(f"[load_config] Loading from {config_path}")

    try:
        raw = load_jsonc(config_path)
    except (OSError, ValueError) as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        xmsg = (
            f"Error while loading configuration file '{config_path.name}': {clean_msg}"
        )
        raise ConfigError(xmsg) from e

    if raw is None:
        xmsg = f"Configuration file {config_path.name} is empty (expected an object)"
        raise ConfigError(xmsg)
    if not isinstance(raw, dict):
        xmsg = (
            f"Invalid top-level value in {config_path.name}: "
            f"{type(raw).__name__} (expected object)"
        )
        raise ConfigError(xmsg)
    return raw


def _validation_summary(
    summary: ValidationSummary,
    config_path: Path,
) -> None:
    """Pretty-print a validation summary using the standard log() interface."""
    logger = get_app_logger()
    mode = "strict mode" if summary.strict else "lenient mode"

    counts: list[str] = []
    if summary.errors:
        counts.append(f"{len(summary.errors)} error{plural(summary.errors)}")
    if summary.strict_warnings:
        counts.append(
            f"{len(summary.strict_warnings)} strict warning"
            f"{plural(summary.strict_warnings)}",
        )
    if summary.warnings:
        counts.append(
            f"{len(summary.warnings)} normal warning{plural(summary.warnings)}",
        )
    counts_msg = f"\nFound {', '.join(counts)}." if counts else ""

    if not summary.valid:
        logger.error(
            "Failed to validate configuration file %s (%s).%s",
            config_path.name,
            mode,
            counts_msg,
        )
    elif counts:
        logger.warning(
            "Validated configuration file %s (%s) with warnings.%s",
            config_path.name,
            mode,
            counts_msg,
        )
    else:
        logger.debug("Validated %s (%s) successfully.", config_path.name, mode)

    if summary.errors:
        msg_summary = "\n  • ".join(summary.errors)
        logger.error("\nErrors:\n  • %s", msg_summary)
    if summary.strict_warnings:
        msg_summary = "\n  • ".join(summary.strict_warnings)
        logger.error("\nStrict warnings (treated as errors):\n  • %s", msg_summary)
    if summary.warnings:
        msg_summary = "\n  • ".join(summary.warnings)
        logger.warning("\nWarnings (non-fatal):\n  • %s", msg_summary)


def load_and_validate_config(config_path: Path) -> ProjectSettings:
    """Load, validate and resolve one manifest file."""
    raw_config = load_config(config_path)
    validation_result = validate_config(raw_config)
    _validation_summary(validation_result, config_path)
    if not validation_result.valid:
        xmsg = f"Configuration file {config_path.name} contains validation errors."
        exception = ConfigError(xmsg)
        exception.silent = True  # type: ignore[attr-defined]
        exception.data = validation_result  # type: ignore[attr-defined]
        raise exception

    return resolve_settings(cast_hint(PackageConfig, raw_config), config_path)


def load_settings(
    args: argparse.Namespace | None = None,
    cwd: Path | None = None,
    *,
    lister: DirectoryLister | None = None,
) -> ProjectSettings | None:
    """Find, load, validate, and resolve the project's settings.

    Returns None when no manifest applies to cwd.
    """
    if args is None:
        args = argparse.Namespace()
    if cwd is None:
        cwd = Path.cwd().resolve()

    config_path = find_config(args, cwd, lister=lister)
    if config_path is None:
        return None
    return load_and_validate_config(config_path)
