# src/srdn/meta.py
"""Program identity shared by the CLI, the logger and config discovery."""

from dataclasses import dataclass


# --- program identity ---
PROGRAM_PACKAGE: str = "srdn"
PROGRAM_SCRIPT: str = "srdn"
PROGRAM_DISPLAY: str = "srdn"
PROGRAM_ENV: str = "SRDN"

# --- project discovery ---
# Manifest read by the settings resolver, and the marker that bounds the walk.
PROGRAM_CONFIG: str = "package.json"
VCS_MARKER: str = ".git"


@dataclass(frozen=True)
class Metadata:
    version: str
    commit: str

    def __str__(self) -> str:
        return f"{self.version} ({self.commit})"
