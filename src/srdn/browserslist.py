# src/srdn/browserslist.py
"""Resolve browserslist queries with the `browserslist` command (Node.js).

The executable is looked up, in order:
  1. the path in $SRDN_BROWSERSLIST
  2. node_modules/.bin/browserslist under the working directory
  3. `browserslist` on PATH
  4. `npx --yes browserslist`
"""

import os
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from .constants import DEFAULT_BROWSERSLIST_TIMEOUT, DEFAULT_ENV_BROWSERSLIST
from .logs import get_app_logger
from .meta import PROGRAM_ENV


BROWSERSLIST_ENV_VAR = f"{PROGRAM_ENV}_{DEFAULT_ENV_BROWSERSLIST}"
LOCAL_BIN = Path("node_modules") / ".bin" / "browserslist"


class BrowserslistError(RuntimeError):
    """The browserslist command was missing, failed, or timed out."""


def find_browserslist_command(cwd: Path | None = None) -> list[str] | None:
    """Return the command prefix used to run browserslist, if any."""
    logger = get_app_logger()
    if cwd is None:
        cwd = Path.cwd()

    custom_path = os.getenv(BROWSERSLIST_ENV_VAR)
    if custom_path:
        path = Path(custom_path)
        if path.exists() and path.is_file():
            return [str(path.resolve())]
        logger.warning(
            "%s points to %s, which does not exist; searching elsewhere",
            BROWSERSLIST_ENV_VAR,
            custom_path,
        )

    local = cwd / LOCAL_BIN
    if local.is_file():
        return [str(local)]

    found = shutil.which("browserslist")
    if found:
        return [found]

    npx = shutil.which("npx")
    if npx:
        return [npx, "--yes", "browserslist"]
    return None


def parse_browserslist_output(text: str) -> list[tuple[str, str]]:
    """Parse `<family> <version>` lines; anything else is skipped."""
    entries: list[tuple[str, str]] = []
    for line in text.splitlines():
        parts = line.split()
        if len(parts) == 2:  # noqa: PLR2004
            entries.append((parts[0], parts[1]))
    return entries


class NodeBrowserslistResolver:
    """BrowserslistResolver backed by the Node.js browserslist CLI."""

    def __init__(
        self,
        *,
        cwd: Path | None = None,
        timeout: float = DEFAULT_BROWSERSLIST_TIMEOUT,
    ) -> None:
        self.cwd = cwd
        self.timeout = timeout

    def resolve(self, queries: Sequence[str]) -> list[tuple[str, str]]:
        logger = get_app_logger()
        cwd = self.cwd if self.cwd is not None else Path.cwd()

        command = find_browserslist_command(cwd)
        if command is None:
            xmsg = (
                "browserslist executable not found"
                f" (install it with npm, or set {BROWSERSLIST_ENV_VAR})"
            )
            raise BrowserslistError(xmsg)

        query = ", ".join(queries)
        logger.debug("Running %s %r", " ".join(command), query)
        try:
            result = subprocess.run(  # noqa: S603
                [*command, query],
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            xmsg = f"browserslist timed out after {self.timeout:g}s"
            raise BrowserslistError(xmsg) from e
        except OSError as e:
            xmsg = f"could not run browserslist: {e}"
            raise BrowserslistError(xmsg) from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout).strip()
            xmsg = f"browserslist exited with code {result.returncode}: {detail}"
            raise BrowserslistError(xmsg)

        entries = parse_browserslist_output(result.stdout)
        logger.trace(f"[browserslist] {len(entries)} browser version(s)")
        return entries
