from __future__ import annotations

import io
import logging
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

import rustydeps.utils.logger as logger_module
from rustydeps.utils.logger import (
    ROOT_LOGGER_NAME,
    ColoredFormatter,
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)


@pytest.fixture
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the rustydeps logger before and after each test.

    Yields:
        None
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    logger_module._logging_configured = False

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False


@pytest.fixture
def captured_stream() -> io.StringIO:
    """Provide a StringIO stream for capturing log output."""
    return io.StringIO()


def _record(level: int = logging.INFO, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="rustydeps.test",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_no_color_when_disabled(self) -> None:
        """Test use_color=False formats plainly."""
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(_record()) == "INFO: hello"

    def test_colors_level_on_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the level name is wrapped in ANSI codes on a terminal."""
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        formatter = ColoredFormatter("%(levelname)s: %(message)s")

        with patch("rustydeps.utils.logger.sys.stderr", MagicMock(isatty=lambda: True)):
            output = formatter.format(_record(logging.ERROR))

        assert output == f"{ColoredFormatter.COLORS['ERROR']}ERROR{ColoredFormatter.RESET}: hello"

    def test_restores_levelname(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the record's level name is untouched after formatting."""
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        formatter = ColoredFormatter("%(levelname)s")
        record = _record(logging.WARNING)

        with patch("rustydeps.utils.logger.sys.stderr", MagicMock(isatty=lambda: True)):
            formatter.format(record)

        assert record.levelname == "WARNING"

    @pytest.mark.parametrize("env_var", ["NO_COLOR", "CI"])
    def test_env_disables_color(self, monkeypatch: pytest.MonkeyPatch, env_var: str) -> None:
        """Test NO_COLOR and CI suppress coloring even on a terminal."""
        monkeypatch.setenv(env_var, "1")
        formatter = ColoredFormatter("%(levelname)s")

        with patch("rustydeps.utils.logger.sys.stderr", MagicMock(isatty=lambda: True)):
            assert formatter.format(_record()) == "INFO"


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_writes_to_stream(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test messages at or above the level reach the stream."""
        setup_logging(level=logging.INFO, stream=captured_stream)

        get_logger("resolver").info("Resolving %d dependencies", 3)
        get_logger("resolver").debug("hidden")

        output = captured_stream.getvalue()
        assert "INFO: Resolving 3 dependencies" in output
        assert "hidden" not in output

    def test_verbose_format_includes_logger_name(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test the verbose format names the emitting logger."""
        setup_logging(level=logging.DEBUG, verbose=True, stream=captured_stream)

        get_logger("registry").debug("Fetching")

        assert "rustydeps.registry" in captured_stream.getvalue()

    def test_repeated_setup_replaces_handler(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test calling setup twice does not duplicate output."""
        setup_logging(stream=captured_stream)
        setup_logging(stream=captured_stream)

        get_logger().warning("once")

        assert captured_stream.getvalue().count("once") == 1
        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1

    def test_marks_configured(self, clean_logger_state: None, captured_stream: io.StringIO) -> None:
        """Test is_logging_configured reflects setup and disable."""
        assert is_logging_configured() is False

        setup_logging(stream=captured_stream)
        assert is_logging_configured() is True

        disable_logging()
        assert is_logging_configured() is False

    def test_does_not_propagate(self, clean_logger_state: None, captured_stream: io.StringIO) -> None:
        """Test records do not reach the global root logger."""
        setup_logging(stream=captured_stream)

        assert logging.getLogger(ROOT_LOGGER_NAME).propagate is False


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger()."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            (None, "rustydeps"),
            ("rustydeps", "rustydeps"),
            ("resolver", "rustydeps.resolver"),
            ("rustydeps.core.updater", "rustydeps.core.updater"),
            ("commands.check", "rustydeps.commands.check"),
        ],
    )
    def test_namespacing(self, clean_logger_state: None, name: str, expected: str) -> None:
        """Test loggers live under the rustydeps namespace."""
        assert get_logger(name).name == expected

    def test_disable_logging_silences_output(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Test disable_logging removes the stream handler."""
        setup_logging(stream=captured_stream)
        disable_logging()

        get_logger().error("silenced")

        assert captured_stream.getvalue() == ""
