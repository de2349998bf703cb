# src/srdn/engine/options.py


from dataclasses import dataclass, field
from pathlib import Path

from srdn.constants import DEFAULT_DASHED_IDENTS
from srdn.targets import Browsers

from .pattern import Pattern


@dataclass(frozen=True)
class ModuleConfig:
    """CSS modules scoping options for one stylesheet."""

    pattern: Pattern = field(default_factory=Pattern.default)
    dashed_idents: bool = DEFAULT_DASHED_IDENTS


@dataclass(frozen=True)
class ParserOptions:
    nesting: bool = False
    custom_media: bool = False
    css_modules: ModuleConfig | None = None
    # scoped-name hashes are computed from paths relative to this directory
    project_root: Path | None = None


@dataclass(frozen=True)
class MinifyOptions:
    targets: Browsers | None = None


@dataclass(frozen=True)
class PrinterOptions:
    minify: bool = False
    targets: Browsers | None = None
