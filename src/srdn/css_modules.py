# src/srdn/css_modules.py


from pathlib import Path

from .config import (
    CssModulesDisabled,
    CssModulesEnabledDefault,
    CssModulesEnabledExplicit,
    ProjectSettings,
)
from .constants import MODULE_FILE_MARKER
from .engine import ModuleConfig, Pattern, PatternParseError
from .errors import ConfigError


def is_module_file(path: Path) -> bool:
    return MODULE_FILE_MARKER in path.name


def resolve_css_modules(
    settings: ProjectSettings,
    source_path: Path,
) -> ModuleConfig | None:
    """Scoping options for one stylesheet, or None when it is not scoped.

    Only `*.module.css` files are ever scoped, whatever the manifest says.
    """
    if not is_module_file(source_path):
        return None

    option = settings.css_modules
    if isinstance(option, CssModulesDisabled):
        return None
    if isinstance(option, CssModulesEnabledDefault):
        return ModuleConfig()

    assert isinstance(option, CssModulesEnabledExplicit)  # noqa: S101
    if option.pattern is None:
        return ModuleConfig(dashed_idents=option.dashed_idents)
    try:
        pattern = Pattern.parse(option.pattern)
    except PatternParseError as e:
        xmsg = f"Invalid CSS modules pattern {option.pattern!r}: {e}"
        raise ConfigError(xmsg) from e
    return ModuleConfig(pattern=pattern, dashed_idents=option.dashed_idents)
