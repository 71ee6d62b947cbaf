"""Tests for the forced-selection wrapper (core/selection.py)."""

from __future__ import annotations

from unittest.mock import MagicMock

from stream_levels.core.models import MasterPlaylist, SelectionState, Variant
from stream_levels.core.selection import (
    ForcedLevelSelector,
    install_forced_selection,
    master_variants,
    selection_state_of,
)
from stream_levels.host.techs import Hls, Html5


def _variants() -> tuple[Variant, ...]:
    return (
        Variant(uri="low.m3u8", bandwidth=400_000),
        Variant(uri="mid.m3u8", bandwidth=1_200_000),
        Variant(uri="high.m3u8", bandwidth=4_000_000),
    )


class TestForcedLevelSelector:
    def test_forced_index_returns_variant(self) -> None:
        original = MagicMock()
        selector = ForcedLevelSelector(original, SelectionState(forced_index=2), _variants)
        assert selector().uri == "high.m3u8"
        original.assert_not_called()

    def test_auto_calls_original(self) -> None:
        original = MagicMock(return_value="algorithm choice")
        selector = ForcedLevelSelector(original, SelectionState(), _variants)
        assert selector() == "algorithm choice"
        original.assert_called_once_with()

    def test_out_of_range_falls_back(self) -> None:
        original = MagicMock(return_value=None)
        selector = ForcedLevelSelector(original, SelectionState(forced_index=9), _variants)
        assert selector() is None
        original.assert_called_once_with()

    def test_reads_state_at_call_time(self) -> None:
        state = SelectionState()
        original = MagicMock(return_value="algorithm")
        selector = ForcedLevelSelector(original, state, _variants)
        assert selector() == "algorithm"
        state.forced_index = 0
        assert selector().uri == "low.m3u8"


class TestInstallForcedSelection:
    def test_replaces_select_playlist(self) -> None:
        tech = Hls(MasterPlaylist(_variants()))
        wrapper = install_forced_selection(tech)
        assert tech.select_playlist is wrapper

    def test_idempotent(self) -> None:
        tech = Hls(MasterPlaylist(_variants()))
        first = install_forced_selection(tech)
        second = install_forced_selection(tech)
        assert first is second
        assert not isinstance(first.original, ForcedLevelSelector)

    def test_wraps_the_bound_original(self) -> None:
        tech = Hls(MasterPlaylist(_variants()), bandwidth=1_500_000)
        wrapper = install_forced_selection(tech)
        assert wrapper.original() == _variants()[1]

    def test_shares_backend_state(self) -> None:
        tech = Hls(MasterPlaylist(_variants()))
        wrapper = install_forced_selection(tech)
        assert wrapper.state is tech.selection_state


class TestHelpers:
    def test_master_variants_without_loader(self) -> None:
        assert master_variants(Html5()) == ()

    def test_master_variants_without_master(self) -> None:
        assert master_variants(Hls()) == ()

    def test_selection_state_created_once(self) -> None:
        tech = Html5()
        state = selection_state_of(tech)
        assert selection_state_of(tech) is state
