# src/srdn/errors.py
"""Error taxonomy.

Configuration and target errors are fatal to the whole invocation.
FileIOError (and the engine's ParseError / BundleError) only fail the
stylesheet being processed.
"""


class SrdnError(Exception):
    """Base class for errors raised by srdn itself."""


class ConfigError(SrdnError, ValueError):
    """Manifest present but malformed."""


class TargetResolutionError(SrdnError, RuntimeError):
    """Browser-usage data could not be resolved for the configured queries."""


class FileIOError(SrdnError, OSError):
    """Reading, writing or creating directories for a single stylesheet failed."""
