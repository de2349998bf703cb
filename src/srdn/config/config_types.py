# src/srdn/config/config_types.py


from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict


# --- Raw manifest shapes (as written in package.json) ------------------------
# Key names follow the manifest's camelCase; unknown keys are rejected.


class CssModulesConfig(TypedDict, total=False):
    pattern: str  # naming template, e.g. "[name]__[local]"
    dashedIdents: bool  # default: True


class SrdnConfig(TypedDict, total=False):
    cssModules: bool | CssModulesConfig
    minify: bool


class ExportsConfig(TypedDict, total=False):
    default: str
    require: str


class PackageConfig(TypedDict, total=False):
    browserslist: list[str]
    source: str
    main: str
    srdn: SrdnConfig
    exports: ExportsConfig


# --- Resolved settings -------------------------------------------------------


@dataclass(frozen=True)
class CssModulesDisabled:
    pass


@dataclass(frozen=True)
class CssModulesEnabledDefault:
    pass


@dataclass(frozen=True)
class CssModulesEnabledExplicit:
    pattern: str | None = None
    dashed_idents: bool = True


CssModulesOption = CssModulesDisabled | CssModulesEnabledDefault | CssModulesEnabledExplicit


@dataclass(frozen=True)
class ExportsSettings:
    default: str | None = None
    require: str | None = None


@dataclass(frozen=True)
class ProjectSettings:
    """Resolved configuration for one build invocation. Never mutated."""

    browserslist: tuple[str, ...] | None = None
    source: str = ""
    main: str | None = None
    css_modules: CssModulesOption = CssModulesDisabled()
    minify: bool = False
    exports: ExportsSettings | None = None

    # provenance
    config_path: Path | None = None
