# src/srdn/config/config_validate.py


from typing import Any

from srdn.constants import DEFAULT_STRICT_CONFIG
from srdn.logs import get_app_logger
from srdn.utils import ValidationSummary, check_schema_conformance

from .config_types import PackageConfig


# Field-specific type examples for better error messages
# Wildcard patterns (with *) are supported for matching multiple fields
FIELD_EXAMPLES: dict[str, str] = {
    "root.browserslist": '["chrome 90", "firefox 80"]',
    "root.browserslist*": '"last 2 versions"',
    "root.source": '"src"',
    "root.main": '"dist/index.css"',
    "root.srdn.cssModules": 'true or {"pattern": "[name]__[local]"}',
    "root.srdn.cssModules.pattern": '"[hash]_[local]"',
    "root.srdn.cssModules.dashedIdents": "false",
    "root.srdn.minify": "true",
    "root.exports.*": '"./dist/index.css"',
}


def validate_config(
    parsed_cfg: dict[str, Any],
    *,
    strict: bool | None = None,
) -> ValidationSummary:
    """Validate a manifest object against the PackageConfig schema.

    strict=True  →  unknown keys are fatal (the default)
    strict=False →  unknown keys are reported as warnings only

    Type mismatches are always errors.
    """
    logger = get_app_logger()
    strict_config = DEFAULT_STRICT_CONFIG if strict is None else strict
    logger.trace(f"[validate_config] Starting validation (strict={strict_config})")

    summary = ValidationSummary(strict=strict_config)

    ok = check_schema_conformance(
        parsed_cfg,
        PackageConfig,
        summary=summary,
        field_examples=FIELD_EXAMPLES,
    )
    if not ok and not (summary.errors or summary.strict_warnings):
        summary.collect("Top-level configuration invalid.", is_error=True)

    summary.valid = not summary.errors and not summary.strict_warnings
    return summary
