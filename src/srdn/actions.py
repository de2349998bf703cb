# src/srdn/actions.py

import re
import subprocess
from contextlib import suppress
from importlib.metadata import PackageNotFoundError, version as dist_version
from pathlib import Path

from .logs import get_app_logger
from .meta import PROGRAM_PACKAGE, Metadata


def get_metadata() -> Metadata:
    """Return (version, commit) for this tool.

    - Installed distribution → its version
    - Source checkout → pyproject.toml
    - Commit from git, when run inside a checkout
    """
    logger = get_app_logger()
    logger.trace(f"get_metadata ran from: {Path(__file__).resolve()}")

    version = "unknown"
    commit = "unknown"

    with suppress(PackageNotFoundError):
        version = dist_version(PROGRAM_PACKAGE)

    root = Path(__file__).resolve().parents[2]
    pyproject = root / "pyproject.toml"
    if version == "unknown" and pyproject.exists():
        logger.trace(f"trying to read metadata from {pyproject}")
        text = pyproject.read_text(encoding="utf-8")
        match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
        if match:
            version = match.group(1)

    with suppress(OSError, subprocess.CalledProcessError):
        logger.trace("trying to get commit from git")
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
        commit = result.stdout.strip()

    logger.trace(f"got package version {version} with commit {commit}")
    return Metadata(version, commit)
