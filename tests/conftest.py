# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator

import pytest

import srdn.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL
from tests.utils.log_fixtures import (
    direct_logger,
    module_logger,
)


# These fixtures are intentionally re-exported so pytest can discover them.
__all__ = [
    "direct_logger",
    "module_logger",
]


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset the app logger to DEFAULT_TEST_LOG_LEVEL around each test.

    The app logger is a module-level singleton; CLI tests change its level.
    """
    logger = mod_logs.get_app_logger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)


@pytest.fixture(autouse=True)
def no_browserslist_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SRDN_BROWSERSLIST from leaking into tests."""
    monkeypatch.delenv("SRDN_BROWSERSLIST", raising=False)


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def _filter_debug_tests(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    # detect if the user is filtering for debug tests
    keywords = config.getoption("-k") or ""
    if "debug" in keywords.lower():
        return  # user explicitly requested them, don't skip

    for item in items:
        if "debug" in item.keywords:
            item.add_marker(
                pytest.mark.skip(reason="Skipped debug test (use -k debug to run)"),
            )


# ----------------------------------------------------------------------
# Hooks
# ----------------------------------------------------------------------


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Automatically skip debug tests unless asked for."""
    _filter_debug_tests(config, items)
