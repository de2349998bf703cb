# src/srdn/targets.py
"""Compile browserslist queries into per-browser minimum versions.

Versions are packed into one integer per browser family:

    (major & 0xFF) << 16 | (minor & 0xFF) << 8 | (patch & 0xFF)

Each component keeps only its low 8 bits, so a component above 255 wraps
(e.g. "256" encodes like "0"). Real browser versions stay well within
range except for some Chrome-based majors; a debug line is logged whenever
a component is truncated.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, fields, replace
from typing import Protocol

from .errors import TargetResolutionError
from .logs import get_app_logger


VERSION_COMPONENT_MASK = 0xFF


@dataclass(frozen=True)
class Browsers:
    """Minimum supported version per browser family (None = not targeted)."""

    android: int | None = None
    chrome: int | None = None
    edge: int | None = None
    firefox: int | None = None
    ie: int | None = None
    ios_saf: int | None = None
    opera: int | None = None
    safari: int | None = None
    samsung: int | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


# browserslist family names → Browsers field
BROWSER_ALIASES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("android",), "android"),
    (("chrome", "and_chr"), "chrome"),
    (("edge",), "edge"),
    (("firefox", "and_ff"), "firefox"),
    (("ie",), "ie"),
    (("ios_saf",), "ios_saf"),
    (("opera", "op_mob"), "opera"),
    (("safari",), "safari"),
    (("samsung",), "samsung"),
)


class BrowserslistResolver(Protocol):
    """Expands queries into (family, version) pairs."""

    def resolve(self, queries: Sequence[str]) -> list[tuple[str, str]]: ...


def canonical_family(name: str) -> str | None:
    for aliases, field_name in BROWSER_ALIASES:
        if name in aliases:
            return field_name
    return None


def parse_version(version: str) -> int | None:
    """Pack "major.minor.patch" (suffix after '-' ignored) into one int.

    Returns None when there is no numeric major component.
    """
    logger = get_app_logger()
    base = version.split("-", 1)[0]
    parts = base.split(".")

    if not parts[0].isdigit():
        return None
    # a missing or non-numeric minor/patch counts as 0
    components = [
        int(part) if part.isdigit() else 0
        for part in (parts[:3] + ["0", "0"])[:3]
    ]

    if any(c > VERSION_COMPONENT_MASK for c in components):
        logger.debug(
            "Version %r has a component above %d; it will wrap",
            version,
            VERSION_COMPONENT_MASK,
        )

    major, minor, patch = (c & VERSION_COMPONENT_MASK for c in components)
    return major << 16 | minor << 8 | patch


def _default_resolver() -> BrowserslistResolver:
    from .browserslist import NodeBrowserslistResolver  # noqa: PLC0415

    return NodeBrowserslistResolver()


def compile_targets(entries: Iterable[tuple[str, str]]) -> Browsers | None:
    """Fold resolved (family, version) pairs into minimum versions."""
    logger = get_app_logger()
    minimums: dict[str, int] = {}
    for family, version in entries:
        field_name = canonical_family(family)
        if field_name is None:
            logger.trace(f"[targets] ignoring unsupported browser {family!r}")
            continue
        encoded = parse_version(version)
        if encoded is None:
            logger.trace(f"[targets] ignoring unparsable version {family} {version!r}")
            continue
        current = minimums.get(field_name)
        if current is None or encoded < current:
            minimums[field_name] = encoded

    if not minimums:
        return None
    return replace(Browsers(), **minimums)


def browserslist_to_targets(
    queries: Sequence[str] | None,
    *,
    resolver: BrowserslistResolver | None = None,
) -> Browsers | None:
    """Compile browserslist queries into Browsers, or None if nothing applies."""
    logger = get_app_logger()
    if not queries:
        return None
    if resolver is None:
        resolver = _default_resolver()

    try:
        entries = resolver.resolve(list(queries))
    except (OSError, RuntimeError, ValueError) as e:
        xmsg = f"Could not resolve browserslist queries {list(queries)}: {e}"
        raise TargetResolutionError(xmsg) from e

    targets = compile_targets(entries)
    logger.debug("Compiled %d browser(s) into targets: %s", len(entries), targets)
    return targets
