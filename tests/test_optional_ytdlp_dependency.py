"""yt-dlp is only needed once a manifest is actually fetched.

With ``yt_dlp`` hidden from ``sys.modules``, the bootstrap commands
and every level path that does not extract (a ready-made tech, the
plugin, the control) must keep working; extraction must fail with a
typed :class:`EnvironmentError` that the CLI boundary renders.
"""

from __future__ import annotations

import sys

import pytest

import stream_levels.plugin  # noqa: F401  (registers the plugin)
from stream_levels.cli import app as app_module
from stream_levels.cli import exit_codes
from stream_levels.cli.app import main
from stream_levels.core.manifest_service import ManifestService
from stream_levels.core.models import MasterPlaylist, Variant
from stream_levels.exceptions import EnvironmentError
from stream_levels.host.player import Player
from stream_levels.infra.backends import build_tech
from stream_levels.infra.ytdlp_manifest import YtDlpManifestProvider

URL = "https://cdn.example.com/live/master.m3u8"


@pytest.fixture()
def without_ytdlp(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "yt_dlp", None)
    monkeypatch.setitem(sys.modules, "yt_dlp.utils", None)
    monkeypatch.setitem(sys.modules, "yt_dlp.version", None)


@pytest.mark.usefixtures("without_ytdlp")
class TestBootstrapWithoutYtdlp:
    @pytest.mark.parametrize("flag", ["--help", "--version"])
    def test_informational_flags(self, flag: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([flag])
        assert exc_info.value.code == 0

    def test_doctor_reports_failure(self) -> None:
        assert main(["doctor"]) == exit_codes.GENERAL_ERROR


@pytest.mark.usefixtures("without_ytdlp")
class TestLevelsWithoutYtdlp:
    def test_plugin_and_adapters_need_no_ytdlp(self) -> None:
        master = MasterPlaylist((Variant(uri="a.m3u8", bandwidth=1), Variant(uri="b.m3u8", bandwidth=2)))
        player = Player(build_tech("hls", master))
        plugin = player.plugin("levels")
        player.trigger("loadedmetadata")

        plugin.button.get_items()[2].handle_click()
        assert player.get_tech().select_playlist().uri == "b.m3u8"

    def test_provider_raises_environment_error(self) -> None:
        with pytest.raises(EnvironmentError, match="yt-dlp is not installed"):
            YtDlpManifestProvider().fetch_manifest(URL)

    def test_service_lets_environment_error_through(self) -> None:
        with pytest.raises(EnvironmentError, match="pip install yt-dlp"):
            ManifestService(YtDlpManifestProvider()).load(URL)

    def test_cli_boundary_renders_install_hint(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["stream-levels", URL, "--level", "-1"])

        with pytest.raises(SystemExit) as exc_info:
            app_module.cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        assert "yt-dlp is not installed" in capsys.readouterr().err
