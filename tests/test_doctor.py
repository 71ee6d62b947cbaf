"""Tests for the ``stream-levels doctor`` command (cli/doctor.py).

yt-dlp presence is controlled through ``sys.modules`` — no internet.

Coverage:
* Doctor runs and returns SUCCESS when everything is present.
* Individual check functions return correct tuples.
* Plain-text fallback when Rich is missing.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from stream_levels.cli import exit_codes


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from stream_levels.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status or "FAIL" in status


class TestYtdlpVersionCheck:
    def test_installed(self) -> None:
        from stream_levels.cli.doctor import _ytdlp_version_check

        label, value, status = _ytdlp_version_check()
        assert label == "yt-dlp"
        # yt-dlp is installed in our test env
        assert "OK" in status

    @patch.dict("sys.modules", {"yt_dlp": None, "yt_dlp.version": None})
    def test_not_installed(self) -> None:
        from stream_levels.cli.doctor import _ytdlp_version_check

        label, value, status = _ytdlp_version_check()
        assert label == "yt-dlp"
        assert value == "NOT INSTALLED"
        assert "FAIL" in status


class TestQuestionaryCheck:
    def test_installed(self) -> None:
        from stream_levels.cli.doctor import _questionary_check

        label, _value, status = _questionary_check()
        assert label == "questionary"
        assert "OK" in status

    @patch.dict("sys.modules", {"questionary": None})
    def test_missing_is_warning(self) -> None:
        from stream_levels.cli.doctor import _questionary_check

        _label, value, status = _questionary_check()
        assert value == "not installed"
        assert "WARN" in status


class TestAdaptersCheck:
    def test_lists_every_level_capable_tech(self) -> None:
        from stream_levels.cli.doctor import _adapters_check

        label, value, status = _adapters_check()
        assert label == "adapters"
        for tag in ("flash", "hls", "hlsjs", "manifest"):
            assert tag in value
        assert "OK" in status


class TestOsCheck:
    def test_returns_tuple(self) -> None:
        from stream_levels.cli.doctor import _os_check

        label, value, status = _os_check()
        assert label == "OS"
        assert isinstance(value, str)
        assert "OK" in status

    @patch("stream_levels.cli.doctor.platform.machine", return_value="arm64")
    @patch("stream_levels.cli.doctor.platform.release", return_value="23.4.0")
    @patch("stream_levels.cli.doctor.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
    ) -> None:
        from stream_levels.cli.doctor import _os_check

        _label, value, _status = _os_check()
        assert "macOS" in value
        assert "Darwin" not in value


class TestStreamLevelsVersionCheck:
    def test_returns_current_version(self) -> None:
        from stream_levels.cli.doctor import _stream_levels_version_check
        from stream_levels.version import __version__

        label, value, status = _stream_levels_version_check()
        assert label == "stream-levels"
        assert value == __version__
        assert "OK" in status


class TestStatusPlain:
    @pytest.mark.parametrize(
        ("markup", "plain"),
        [
            ("[green]OK[/green]", "OK"),
            ("[yellow]WARN[/yellow]", "WARN"),
            ("[red]FAIL (>=3.10 required)[/red]", "FAIL"),
            ("odd", "odd"),
        ],
    )
    def test_strips_markup(self, markup: str, plain: str) -> None:
        from stream_levels.cli.doctor import _status_plain

        assert _status_plain(markup) == plain


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    def test_all_pass_returns_success(self) -> None:
        from stream_levels.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.SUCCESS

    @patch.dict("sys.modules", {"questionary": None})
    def test_questionary_missing_still_succeeds(self) -> None:
        """questionary missing is a WARN, not a FAIL."""
        from stream_levels.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.SUCCESS

    @patch.dict("sys.modules", {"yt_dlp": None, "yt_dlp.version": None})
    def test_ytdlp_missing_fails(self) -> None:
        from stream_levels.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.GENERAL_ERROR

    @patch("stream_levels.cli.doctor.platform.machine", return_value="arm64")
    @patch("stream_levels.cli.doctor.platform.release", return_value="23.4.0")
    @patch("stream_levels.cli.doctor.platform.system", return_value="Darwin")
    @patch.dict("sys.modules", {"rich": None, "rich.console": None, "rich.table": None})
    def test_plain_output_without_rich(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from stream_levels.cli.doctor import run_doctor

        code = run_doctor()
        captured = capsys.readouterr()
        assert code == exit_codes.SUCCESS
        assert "stream-levels doctor" in captured.err
        assert "macOS" in captured.err
        assert "All checks passed." in captured.err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("stream_levels.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock) -> None:
        from stream_levels.cli.app import main

        code = main(["doctor"])
        assert code == exit_codes.SUCCESS
        mock_run.assert_called_once()

    @patch("stream_levels.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, mock_run: MagicMock) -> None:
        from stream_levels.cli.app import main

        code = main(["doctor"])
        assert code == exit_codes.GENERAL_ERROR
