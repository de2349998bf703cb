# tests/0_independant/test_app_logger.py
"""Tests for srdn.logs.AppLogger."""

import argparse
import logging

import pytest

import srdn.logs as mod_logs


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables before each test."""
    for var in ("NO_COLOR", "FORCE_COLOR", "SRDN_LOG_LEVEL", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# color
# ---------------------------------------------------------------------------


def test_colorize_explicit_true_false() -> None:
    # --- execute and verify ---
    assert (
        mod_logs.colorize("x", mod_logs.CYAN, enabled=True)
        == f"{mod_logs.CYAN}x{mod_logs.RESET}"
    )
    assert mod_logs.colorize("x", mod_logs.CYAN, enabled=False) == "x"
    assert mod_logs.colorize("x", "", enabled=True) == "x"


def test_level_number_accepts_any_case() -> None:
    # --- execute and verify ---
    assert mod_logs.level_number("warning") == logging.WARNING
    assert mod_logs.level_number("Trace") == mod_logs.TRACE_LEVEL
    assert mod_logs.level_number("nope") is None


def test_no_color_disables(monkeypatch: pytest.MonkeyPatch) -> None:
    # --- patch, execute, and verify ---
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert mod_logs.AppLogger.determine_color_enabled() is False


@pytest.mark.parametrize("value", ["1", "true", "YES"])
def test_force_color_enables(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    # --- patch, execute, and verify ---
    monkeypatch.setenv("FORCE_COLOR", value)
    assert mod_logs.AppLogger.determine_color_enabled() is True


# ---------------------------------------------------------------------------
# levels
# ---------------------------------------------------------------------------


def test_determine_log_level_prefers_cli(
    direct_logger: mod_logs.AppLogger,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # --- setup ---
    monkeypatch.setenv("SRDN_LOG_LEVEL", "warning")
    args = argparse.Namespace(log_level="debug")

    # --- execute and verify ---
    assert direct_logger.determine_log_level(args=args) == "DEBUG"


def test_determine_log_level_env_order(
    direct_logger: mod_logs.AppLogger,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # --- setup ---
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("SRDN_LOG_LEVEL", "trace")

    # --- execute and verify ---
    assert direct_logger.determine_log_level() == "TRACE"


def test_determine_log_level_default(direct_logger: mod_logs.AppLogger) -> None:
    # --- execute and verify ---
    assert direct_logger.determine_log_level() == "INFO"


def test_custom_levels_registered() -> None:
    # --- execute and verify ---
    assert logging.getLevelName(mod_logs.TRACE_LEVEL) == "TRACE"
    assert logging.getLevelName(mod_logs.SILENT_LEVEL) == "SILENT"


def test_test_level_is_a_level_not_a_method(direct_logger: mod_logs.AppLogger) -> None:
    # --- execute ---
    direct_logger.setLevel("test")

    # --- verify ---
    assert direct_logger.level_name == "TEST"
    assert direct_logger.isEnabledFor(mod_logs.TRACE_LEVEL)
    assert not hasattr(mod_logs.AppLogger, "test")


def test_use_level_restores_previous(direct_logger: mod_logs.AppLogger) -> None:
    # --- setup ---
    direct_logger.setLevel("info")

    # --- execute ---
    with direct_logger.use_level("error"):
        inside = direct_logger.level_name

    # --- verify ---
    assert inside == "ERROR"
    assert direct_logger.level_name == "INFO"


# ---------------------------------------------------------------------------
# streams
# ---------------------------------------------------------------------------


def test_dual_stream_routing(
    direct_logger: mod_logs.AppLogger,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- execute ---
    direct_logger.info("hello out")
    direct_logger.warning("careful")
    direct_logger.error("broken")

    # --- verify ---
    captured = capsys.readouterr()
    assert "hello out" in captured.out
    assert "careful" not in captured.out
    assert f"{mod_logs.TAG_STYLES['WARNING'][1]} careful" in captured.err
    assert f"{mod_logs.TAG_STYLES['ERROR'][1]} broken" in captured.err


def test_trace_hidden_above_trace_level(
    direct_logger: mod_logs.AppLogger,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    direct_logger.setLevel("debug")

    # --- execute ---
    direct_logger.trace("noisy detail")
    direct_logger.debug("useful detail")

    # --- verify ---
    out = capsys.readouterr().out
    assert "noisy detail" not in out
    assert "[DEBUG] useful detail" in out


def test_error_report_hides_traceback(
    direct_logger: mod_logs.AppLogger,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    direct_logger.setLevel("info")

    # --- execute ---
    try:
        raise ValueError("boom")  # noqa: TRY301
    except ValueError:
        direct_logger.error_if_not_debug("failed: %s", "boom")

    # --- verify ---
    err = capsys.readouterr().err
    assert "failed: boom" in err
    assert "Traceback" not in err


def test_error_report_shows_traceback_when_verbose(
    direct_logger: mod_logs.AppLogger,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    direct_logger.setLevel("debug")

    # --- execute ---
    try:
        raise ValueError("boom")  # noqa: TRY301
    except ValueError:
        direct_logger.error_if_not_debug("failed")

    # --- verify ---
    assert "Traceback" in capsys.readouterr().err
