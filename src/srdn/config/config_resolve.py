# src/srdn/config/config_resolve.py


from pathlib import Path

from srdn.constants import DEFAULT_DASHED_IDENTS, DEFAULT_MINIFY, DEFAULT_SOURCE
from srdn.engine import Pattern, PatternParseError
from srdn.errors import ConfigError
from srdn.logs import get_app_logger

from .config_types import (
    CssModulesConfig,
    CssModulesDisabled,
    CssModulesEnabledDefault,
    CssModulesEnabledExplicit,
    CssModulesOption,
    ExportsSettings,
    PackageConfig,
    ProjectSettings,
)


def resolve_css_modules_option(
    raw: bool | CssModulesConfig | None,
) -> CssModulesOption:
    """Turn the raw `srdn.cssModules` value into its tagged variant.

    An explicit pattern is parsed here so a malformed template fails the
    invocation before any stylesheet is processed.
    """
    if raw is None or raw is False:
        return CssModulesDisabled()
    if raw is True:
        return CssModulesEnabledDefault()

    pattern = raw.get("pattern")
    if pattern is not None:
        try:
            Pattern.parse(pattern)
        except PatternParseError as e:
            xmsg = f"Invalid srdn.cssModules.pattern {pattern!r}: {e}"
            raise ConfigError(xmsg) from e

    return CssModulesEnabledExplicit(
        pattern=pattern,
        dashed_idents=raw.get("dashedIdents", DEFAULT_DASHED_IDENTS),
    )


def resolve_settings(
    cfg: PackageConfig,
    config_path: Path | None = None,
) -> ProjectSettings:
    """Build the immutable ProjectSettings from a validated manifest."""
    logger = get_app_logger()
    srdn_cfg = cfg.get("srdn", {})

    browserslist = cfg.get("browserslist")
    raw_exports = cfg.get("exports")

    settings = ProjectSettings(
        browserslist=tuple(browserslist) if browserslist is not None else None,
        source=cfg.get("source", DEFAULT_SOURCE),
        main=cfg.get("main"),
        css_modules=resolve_css_modules_option(srdn_cfg.get("cssModules")),
        minify=srdn_cfg.get("minify", DEFAULT_MINIFY),
        exports=(
            ExportsSettings(
                default=raw_exports.get("default"),
                require=raw_exports.get("require"),
            )
            if raw_exports is not None
            else None
        ),
        config_path=config_path,
    )
    logger.trace(f"[resolve_settings] {settings}")
    return settings
