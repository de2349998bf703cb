# src/srdn/config/__init__.py

"""Configuration handling for srdn.

Discovers the project manifest, validates it and resolves it into
immutable ProjectSettings.
"""

from .config_loader import (
    DirectoryLister,
    FilesystemLister,
    find_config,
    find_settings,
    load_and_validate_config,
    load_config,
    load_settings,
)
from .config_resolve import resolve_css_modules_option, resolve_settings
from .config_types import (
    CssModulesConfig,
    CssModulesDisabled,
    CssModulesEnabledDefault,
    CssModulesEnabledExplicit,
    CssModulesOption,
    ExportsConfig,
    ExportsSettings,
    PackageConfig,
    ProjectSettings,
    SrdnConfig,
)
from .config_validate import validate_config


__all__ = [  # noqa: RUF022
    # config_loader
    "DirectoryLister",
    "FilesystemLister",
    "find_config",
    "find_settings",
    "load_and_validate_config",
    "load_config",
    "load_settings",
    # config_resolve
    "resolve_css_modules_option",
    "resolve_settings",
    # config_types
    "CssModulesConfig",
    "CssModulesDisabled",
    "CssModulesEnabledDefault",
    "CssModulesEnabledExplicit",
    "CssModulesOption",
    "ExportsConfig",
    "ExportsSettings",
    "PackageConfig",
    "ProjectSettings",
    "SrdnConfig",
    # config_validate
    "validate_config",
]
