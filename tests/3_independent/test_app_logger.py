# tests/3_independent/test_app_logger.py
"""Tests for the app logger built in templar.logs."""

import logging
from argparse import Namespace
from pathlib import Path

import apathetic_logging
import pytest

import templar.config as mod_config
import templar.logs as mod_logs
import templar.meta as mod_meta


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("NO_COLOR", "FORCE_COLOR", "TEMPLAR_LOG_LEVEL", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# registration
# ---------------------------------------------------------------------------


def test_get_app_logger_is_singleton() -> None:
    # --- execute and verify ---
    logger = mod_logs.get_app_logger()
    assert logger is mod_logs.get_app_logger()
    assert isinstance(logger, mod_logs.AppLogger)
    assert logger is logging.getLogger(mod_meta.PROGRAM_PACKAGE)


def test_app_logger_owns_its_handler() -> None:
    # --- execute and verify ---
    assert mod_logs.get_app_logger().propagate is False


@pytest.mark.usefixtures("clean_env")
def test_log_level_precedence(
    monkeypatch: pytest.MonkeyPatch,
    direct_logger: mod_logs.AppLogger,
) -> None:
    # --- default ---
    assert direct_logger.determineLogLevel() == "INFO"

    # --- generic env ---
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert direct_logger.determineLogLevel() == "WARNING"

    # --- program env beats generic env ---
    monkeypatch.setenv("TEMPLAR_LOG_LEVEL", "debug")
    assert direct_logger.determineLogLevel() == "DEBUG"

    # --- CLI beats env ---
    args = Namespace(log_level="trace")
    assert direct_logger.determineLogLevel(args=args) == "TRACE"


@pytest.mark.usefixtures("clean_env")
def test_no_color_wins_over_force_color(monkeypatch: pytest.MonkeyPatch) -> None:
    # --- patch, execute, and verify ---
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert mod_logs.AppLogger.determineColorEnabled() is False


# ---------------------------------------------------------------------------
# output routing
# ---------------------------------------------------------------------------


def test_info_to_stdout_and_warnings_to_stderr(
    capsys: pytest.CaptureFixture[str],
    direct_logger: mod_logs.AppLogger,
) -> None:
    # --- execute ---
    direct_logger.info("to stdout")
    direct_logger.warning("to stderr")

    # --- verify ---
    captured = capsys.readouterr()
    assert "to stdout" in captured.out
    assert "to stdout" not in captured.err
    assert "to stderr" in captured.err
    assert apathetic_logging.TAG_STYLES["WARNING"][1] in captured.err


def test_trace_is_tagged_and_filtered(
    capsys: pytest.CaptureFixture[str],
    direct_logger: mod_logs.AppLogger,
) -> None:
    # --- setup ---
    direct_logger.setLevel("trace")

    # --- execute ---
    direct_logger.trace("visible trace")
    direct_logger.setLevel("debug")
    direct_logger.trace("hidden trace")

    # --- verify ---
    err = capsys.readouterr().err
    assert "[TRACE] visible trace" in err
    assert "hidden trace" not in err


def test_debug_tag_colored_when_enabled(
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    logger = mod_logs.AppLogger("test_logger_color", enable_color=True, propagate=False)
    logger.setLevel("debug")
    colors = apathetic_logging.ANSIColors

    # --- execute ---
    logger.debug("tinted")

    # --- verify ---
    err = capsys.readouterr().err
    assert f"{colors.CYAN}[DEBUG]{colors.RESET} tinted" in err


def test_handlers_reattached_after_clear(
    capsys: pytest.CaptureFixture[str],
    direct_logger: mod_logs.AppLogger,
) -> None:
    # --- setup ---
    direct_logger.info("first")
    direct_logger.handlers.clear()

    # --- execute ---
    direct_logger.info("second")

    # --- verify ---
    assert len(direct_logger.handlers) == 1
    out = capsys.readouterr().out
    assert "first" in out
    assert "second" in out


# ---------------------------------------------------------------------------
# isolated module logger
# ---------------------------------------------------------------------------


def test_module_logger_receives_config_messages(
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
    module_logger: mod_logs.AppLogger,
) -> None:
    # --- execute ---
    result = mod_config.find_config(
        Namespace(config=None), tmp_path, missing_level="warning"
    )

    # --- verify ---
    assert result is None
    assert mod_logs.get_app_logger() is module_logger
    assert "No config file found" in capsys.readouterr().err
