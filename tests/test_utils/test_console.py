from __future__ import annotations

import json
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console
from rich.text import Text

from rustydeps.utils.console import (
    RUSTYDEPS_THEME,
    _get_console,
    _get_error_console,
    _should_use_color,
    print_error,
    print_json,
    print_renderable,
    print_success,
    print_warning,
    reconfigure_console,
)


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def reset_console() -> Generator[None, None, None]:
    """Reset console singletons before and after each test."""
    reconfigure_console()
    yield
    reconfigure_console()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables that affect color detection."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("CI", raising=False)


@pytest.mark.unit
class TestThemeConfiguration:
    """Tests for the rustydeps Rich theme."""

    @pytest.mark.parametrize("style_name", ["success", "error", "warning", "info", "dim"])
    def test_theme_has_style(self, style_name: str) -> None:
        """Test every style used by the helpers is defined."""
        assert style_name in RUSTYDEPS_THEME.styles


@pytest.mark.unit
class TestShouldUseColor:
    """Tests for _should_use_color()."""

    def test_no_color_env_disables_color(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test NO_COLOR wins over a terminal."""
        monkeypatch.setenv("NO_COLOR", "1")
        stream = MagicMock()
        stream.isatty.return_value = True

        assert _should_use_color(stream) is False

    def test_ci_disables_color(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test CI environments get plain output."""
        monkeypatch.setenv("CI", "true")
        stream = MagicMock()
        stream.isatty.return_value = True

        assert _should_use_color(stream) is False

    @pytest.mark.parametrize("isatty", [True, False])
    def test_follows_tty(self, clean_env: None, isatty: bool) -> None:
        """Test color follows whether the stream is a terminal."""
        stream = MagicMock()
        stream.isatty.return_value = isatty

        assert _should_use_color(stream) is isatty

    @pytest.mark.parametrize("error", [AttributeError, OSError])
    def test_isatty_failure_disables_color(self, clean_env: None, error: type) -> None:
        """Test a stream that cannot report a tty gets no color."""
        stream = MagicMock()
        stream.isatty.side_effect = error

        assert _should_use_color(stream) is False


@pytest.mark.unit
class TestConsoleSingletons:
    """Tests for console creation and reconfiguration."""

    def test_singleton_returns_same_instance(self) -> None:
        """Test repeated calls return the cached console."""
        assert _get_console() is _get_console()
        assert _get_error_console() is _get_error_console()

    def test_error_console_writes_to_stderr(self) -> None:
        """Test the error console is bound to stderr."""
        assert _get_error_console().stderr is True
        assert _get_console().stderr is False

    def test_reconfigure_clears_consoles(self) -> None:
        """Test reconfiguring creates fresh consoles."""
        first = _get_console()
        reconfigure_console()

        assert _get_console() is not first

    def test_reconfigure_respects_new_env(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test NO_COLOR set after creation applies once reconfigured."""
        _get_console()

        monkeypatch.setenv("NO_COLOR", "1")
        reconfigure_console()

        assert _get_console().no_color is True


@pytest.mark.unit
class TestStatusMessages:
    """Tests for print_success, print_error and print_warning."""

    def test_print_success(self) -> None:
        """Test success messages carry the OK prefix and success style."""
        with patch.object(Console, "print") as mock_print:
            print_success("Updated 2 dependencies")

        mock_print.assert_called_once_with(
            "[OK] Updated 2 dependencies", style="success", markup=False
        )

    def test_print_success_custom_prefix(self) -> None:
        """Test the prefix can be overridden."""
        with patch.object(Console, "print") as mock_print:
            print_success("Done", prefix="*")

        mock_print.assert_called_once_with("* Done", style="success", markup=False)

    def test_print_error(self) -> None:
        """Test error messages carry the ERROR prefix and error style."""
        with patch.object(Console, "print") as mock_print:
            print_error("Crate 'x' not found")

        mock_print.assert_called_once_with(
            "[ERROR] Crate 'x' not found", style="error", markup=False
        )

    def test_print_warning(self) -> None:
        """Test warning messages carry the WARNING prefix and warning style."""
        with patch.object(Console, "print") as mock_print:
            print_warning("No dependencies found")

        mock_print.assert_called_once_with(
            "[WARNING] No dependencies found", style="warning", markup=False
        )

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture) -> None:
        """Test bracketed text in messages is printed literally."""
        print_error("bad [dependencies] table")

        assert "[ERROR] bad [dependencies] table" in capsys.readouterr().err

    def test_errors_go_to_stderr(self, capsys: pytest.CaptureFixture) -> None:
        """Test errors and warnings never reach stdout."""
        print_error("boom")
        print_warning("careful")
        captured = capsys.readouterr()

        assert captured.out == ""
        assert "boom" in captured.err
        assert "careful" in captured.err


@pytest.mark.unit
class TestStructuredOutput:
    """Tests for print_renderable and print_json."""

    def test_print_renderable(self, capsys: pytest.CaptureFixture) -> None:
        """Test renderables are written to stdout as plain text."""
        print_renderable(Text("Name   Version   Latest"))

        assert "Name   Version   Latest" in capsys.readouterr().out

    def test_print_renderable_does_not_wrap(self) -> None:
        """Test long tables are soft-wrapped by the terminal, not Rich."""
        with patch.object(Console, "print") as mock_print:
            text = Text("x")
            print_renderable(text)

        mock_print.assert_called_once_with(text, soft_wrap=True)

    def test_print_json(self) -> None:
        """Test JSON data is handed to Rich's JSON printer."""
        data = [{"name": "serde", "latest": "2.0.0"}]

        with patch.object(Console, "print_json") as mock_print_json:
            print_json(data)

        mock_print_json.assert_called_once_with(data=data)

    def test_print_json_output(self, capsys: pytest.CaptureFixture) -> None:
        """Test JSON output is parseable."""
        print_json([{"name": "serde", "severity": None}])

        assert json.loads(capsys.readouterr().out) == [{"name": "serde", "severity": None}]
