# src/srdn/constants.py
"""Central constants used across the project."""

# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
DEFAULT_ENV_BROWSERSLIST: str = "BROWSERSLIST"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_BROWSERSLIST_TIMEOUT: float = 30.0  # seconds

# --- config defaults ---
DEFAULT_STRICT_CONFIG: bool = True
DEFAULT_SOURCE: str = ""
DEFAULT_MINIFY: bool = False
DEFAULT_DASHED_IDENTS: bool = True

# --- stylesheet conventions ---
CSS_EXTENSION: str = ".css"
MODULE_FILE_MARKER: str = ".module.css"
DEFAULT_SOURCE_GLOB: str = "**/*.css"
DEFAULT_MODULE_PATTERN: str = "[hash]_[local]"
