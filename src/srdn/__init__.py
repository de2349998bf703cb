# src/srdn/__init__.py

"""srdn: build browser-ready CSS from your source stylesheets.

Full developer API
==================
This package re-exports the public symbols of its submodules for
programmatic use. Anything prefixed with "_" is internal.

Highlights:
    - main()                    → CLI entrypoint
    - load_settings()           → Find and resolve the project manifest
    - browserslist_to_targets() → Compile browser queries into targets
    - build_css() / build_many() / run_build() → Build stylesheets
    - get_metadata()            → Retrieve version / commit info
"""

from .actions import get_metadata
from .browserslist import BrowserslistError, NodeBrowserslistResolver
from .build import (
    BuildRequest,
    BuildResult,
    BuildTask,
    CssEngine,
    build_css,
    build_many,
    compute_output_path,
    has_leading_imports,
    run_build,
)
from .cli import main
from .config import (
    CssModulesDisabled,
    CssModulesEnabledDefault,
    CssModulesEnabledExplicit,
    CssModulesOption,
    DirectoryLister,
    ExportsSettings,
    ProjectSettings,
    find_settings,
    load_settings,
    validate_config,
)
from .css_modules import is_module_file, resolve_css_modules
from .errors import ConfigError, FileIOError, SrdnError, TargetResolutionError
from .logs import get_app_logger
from .meta import (
    PROGRAM_CONFIG,
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
)
from .targets import (
    Browsers,
    BrowserslistResolver,
    browserslist_to_targets,
    parse_version,
)


__all__ = [  # noqa: RUF022
    # actions
    "get_metadata",
    # browserslist
    "BrowserslistError",
    "NodeBrowserslistResolver",
    # build
    "BuildRequest",
    "BuildResult",
    "BuildTask",
    "CssEngine",
    "build_css",
    "build_many",
    "compute_output_path",
    "has_leading_imports",
    "run_build",
    # cli
    "main",
    # config
    "CssModulesDisabled",
    "CssModulesEnabledDefault",
    "CssModulesEnabledExplicit",
    "CssModulesOption",
    "DirectoryLister",
    "ExportsSettings",
    "ProjectSettings",
    "find_settings",
    "load_settings",
    "validate_config",
    # css_modules
    "is_module_file",
    "resolve_css_modules",
    # errors
    "ConfigError",
    "FileIOError",
    "SrdnError",
    "TargetResolutionError",
    # logs
    "get_app_logger",
    # meta
    "Metadata",
    "PROGRAM_CONFIG",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    # targets
    "Browsers",
    "BrowserslistResolver",
    "browserslist_to_targets",
    "parse_version",
]
