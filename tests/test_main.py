"""
End-to-end tests for the command line entry point.
"""

import io
import sys
from unittest.mock import patch

import pytest

import main
from unicode_marks import ABOVE, BELOW, JOINER, OVERLAY

ALL_MARKS = set(ABOVE) | set(BELOW) | set(OVERLAY) | set(JOINER)


def strip_marks(text):
    return "".join(c for c in text if c not in ALL_MARKS)


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    # Keep colorama from re-wrapping the captured streams
    monkeypatch.setattr(main, "init", lambda **kwargs: None)
    return tmp_path


class TestTextModes:
    """Tests for --input args / stdin."""

    def test_arguments_to_stdout(self, capsys):
        """Test decorating positional arguments."""
        assert main.main(["-q", "-i", "args", "hello", "there"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert [strip_marks(line) for line in lines] == ["hello", "there"]

    def test_stdin_to_stdout(self, capsys, monkeypatch):
        """Test decorating standard input."""
        monkeypatch.setattr(sys, "stdin", io.StringIO("from stdin"))
        assert main.main(["-q", "-i", "stdin", "-a", "2", "-A", "100%"]) == 0
        out = capsys.readouterr().out
        assert strip_marks(out) == "from stdin\n"
        assert len(out) > len("from stdin\n")

    def test_zero_limit_leaves_text_alone(self, capsys):
        """Test that --max 0% prints the input unchanged."""
        assert main.main(["-q", "-m", "0%", "-i", "args", "plain"]) == 0
        assert capsys.readouterr().out == "plain\n"

    def test_input_is_reported_on_stderr(self, capsys):
        """Test that the original input is echoed to stderr unless quiet."""
        assert main.main(["-i", "args", "shown"]) == 0
        captured = capsys.readouterr()
        assert "Input:" in captured.err
        assert "Input:" not in captured.out

    def test_stdout_holds_only_the_result(self, capsys, monkeypatch):
        """Test that piping through stdout yields just the decorated text."""
        monkeypatch.setattr(sys, "stdin", io.StringIO("hi"))
        assert main.main(["-m", "0%", "-i", "stdin"]) == 0
        captured = capsys.readouterr()
        assert captured.out == "hi\n"
        assert "hi" in captured.err


class TestClipboardMode:
    """Tests for the clipboard watcher entry."""

    def test_once_rewrites_clipboard(self):
        """Test --once decorates the current clipboard."""
        with patch("clipboard_handler.clipboard") as mock_clipboard:
            mock_clipboard.paste.return_value = "copied text"
            assert main.main(["--once", "-q", "-A", "100%"]) == 0

        mock_clipboard.copy.assert_called_once()
        written = mock_clipboard.copy.call_args[0][0]
        assert strip_marks(written) == "copied text"
        assert len(written) > len("copied text")

    def test_clipboard_to_stdout(self, capsys):
        """Test reading the clipboard and printing the result."""
        with patch("clipboard_handler.clipboard") as mock_clipboard:
            mock_clipboard.paste.return_value = "abc"
            assert main.main(["-q", "-o", "stdout"]) == 0
        assert strip_marks(capsys.readouterr().out) == "abc\n"
        mock_clipboard.copy.assert_not_called()

    def test_empty_clipboard_to_stdout_prints_nothing(self, capsys):
        """Test that an empty clipboard produces no output."""
        with patch("clipboard_handler.clipboard") as mock_clipboard:
            mock_clipboard.paste.return_value = ""
            assert main.main(["-o", "stdout"]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_clipboard_failure_exits_non_zero(self, capsys):
        """Test that clipboard errors exit with status 1."""
        with patch("clipboard_handler.clipboard") as mock_clipboard:
            mock_clipboard.paste.side_effect = RuntimeError("no clipboard")
            assert main.main(["--once"]) == 1
        assert "Clipboard error" in capsys.readouterr().err

    def test_watch_stops_on_interrupt(self):
        """Test that Ctrl+C ends the watch loop cleanly."""
        with patch("clipboard_handler.clipboard") as mock_clipboard:
            mock_clipboard.paste.side_effect = ["one", KeyboardInterrupt()]
            assert main.main(["-q", "--interval", "0.01"]) == 0
        mock_clipboard.copy.assert_called_once()


class TestConfiguration:
    """Tests for configuration errors and saving."""

    def test_malformed_flag_exits_with_config_error(self, capsys):
        """Test that a malformed count exits with status 2."""
        assert main.main(["-a", "several", "-i", "args", "x"]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_save_config(self, workdir):
        """Test --save-config writes the effective settings."""
        assert main.main(["-q", "--save-config", "-b", "3", "-i", "args", "x"]) == 0
        saved = (workdir / "clipboard_zalgo_config.json").read_text(encoding="utf-8")
        assert '"below-count": "3"' in saved

    def test_quiet_from_settings_file_must_be_boolean(self, workdir, capsys):
        """Test that a non-boolean quiet setting is a configuration error."""
        (workdir / "clipboard_zalgo_config.json").write_text('{"quiet": "no"}', encoding="utf-8")
        assert main.main(["-i", "args", "x"]) == 2
        assert "quiet" in capsys.readouterr().err


class TestListCategories:
    """Tests for --list-categories."""

    def test_lists_every_category_with_its_size(self, capsys):
        """Test the category listing."""
        assert main.main(["--list-categories"]) == 0
        out = capsys.readouterr().out
        assert "ABOVE" in out and "56 marks" in out
        assert "BELOW" in out and "41 marks" in out
        assert "OVERLAY" in out and "5 marks" in out
        assert "JOINER" in out and "7 marks" in out

    def test_does_not_touch_the_clipboard(self):
        """Test that listing exits before any clipboard access."""
        with patch("clipboard_handler.clipboard") as mock_clipboard:
            assert main.main(["--list-categories"]) == 0
        mock_clipboard.paste.assert_not_called()
        mock_clipboard.copy.assert_not_called()
