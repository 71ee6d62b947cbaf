"""Tests for the host layer: events, components, menus and the player."""

from __future__ import annotations

from typing import Any

import pytest

from stream_levels.core.models import MasterPlaylist, Variant
from stream_levels.core.registry import adapter_for
from stream_levels.core.selection import ForcedLevelSelector
from stream_levels.exceptions import ConfigurationError
from stream_levels.host import player as player_module
from stream_levels.host.components import Component, ControlBar, MenuButton, MenuItem
from stream_levels.host.events import Event, EventTarget
from stream_levels.host.player import Player, register_plugin, registered_plugins
from stream_levels.host.techs import Hls, HlsJs, HlsJsEngine, Html5


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class TestEventTarget:
    def test_trigger_calls_listeners_in_order(self) -> None:
        target = EventTarget()
        calls: list[str] = []
        target.on("ping", lambda e: calls.append("a"))
        target.on("ping", lambda e: calls.append("b"))
        target.trigger("ping")
        assert calls == ["a", "b"]

    def test_event_carries_target_and_data(self) -> None:
        target = EventTarget()
        seen: list[Event] = []
        target.on("ping", seen.append)
        target.trigger("ping", value=3)
        assert seen[0].target is target
        assert seen[0].data == {"value": 3}

    def test_one_fires_once(self) -> None:
        target = EventTarget()
        calls: list[Event] = []
        target.one("ping", calls.append)
        target.trigger("ping")
        target.trigger("ping")
        assert len(calls) == 1

    def test_off_specific_listener(self) -> None:
        target = EventTarget()
        calls: list[Event] = []
        target.on("ping", calls.append)
        target.off("ping", calls.append)
        target.trigger("ping")
        assert calls == []

    def test_off_everything(self) -> None:
        target = EventTarget()
        target.on("a", lambda e: None)
        target.on("b", lambda e: None)
        target.off()
        assert target.listener_count() == 0


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

class TestComponent:
    def test_add_and_remove_child(self) -> None:
        parent, child = Component(None), Component(None)
        parent.add_child(child)
        assert child.parent is parent
        parent.remove_child(child)
        assert parent.children() == []
        assert child.parent is None

    def test_dispose_detaches_and_releases(self) -> None:
        bar, child = ControlBar(None), Component(None)
        bar.add_child(child)
        child.on("click", lambda e: None)
        child.dispose()
        assert child.is_disposed
        assert bar.children() == []
        assert child.listener_count() == 0

    def test_dispose_cascades(self) -> None:
        parent, child = Component(None), Component(None)
        parent.add_child(child)
        parent.dispose()
        assert child.is_disposed

    def test_dispose_is_idempotent(self) -> None:
        component = Component(None)
        disposals: list[Event] = []
        component.on("dispose", disposals.append)
        component.dispose()
        component.dispose()
        assert len(disposals) == 1


class TestMenuWidgets:
    def test_menu_item_options(self) -> None:
        item = MenuItem(None, {"label": "720p", "value": 2, "selected": True})
        assert item.label == "720p"
        assert item.value == 2
        assert item.selected

    def test_menu_item_click_event(self) -> None:
        item = MenuItem(None, {"label": "x"})
        clicks: list[Event] = []
        item.on("click", clicks.append)
        item.handle_click()
        assert clicks[0].target is item

    def test_empty_menu_button_hidden(self) -> None:
        button = MenuButton(None)
        assert button.hidden
        button.open()
        assert not button.is_open

    def test_open_close_toggle(self) -> None:
        class TwoItems(MenuButton):
            def create_items(self) -> list[MenuItem]:
                return [MenuItem(None, {"label": "a"}), MenuItem(None, {"label": "b"})]

        button = TwoItems(None)
        assert not button.hidden
        assert not button.is_open
        button.toggle()
        assert button.is_open
        button.close()
        assert not button.is_open

    def test_update_replaces_items(self) -> None:
        class Counting(MenuButton):
            built = 0

            def create_items(self) -> list[MenuItem]:
                Counting.built += 1
                return [MenuItem(None, {"label": str(Counting.built)})]

        button = Counting(None)
        old = button.get_items()[0]
        button.update()
        assert old.is_disposed
        assert len(button.children()) == 1


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

class TestPlayer:
    def test_levels_of_active_tech(self) -> None:
        engine = HlsJsEngine([{"bitrate": 2}, {"bitrate": 1}])
        player = Player(HlsJs(engine))
        assert [level.index for level in player.get_levels()] == [1, 0]
        player.set_level(0)
        assert engine.next_level == 0

    def test_no_tech_means_no_levels(self) -> None:
        player = Player()
        assert player.get_levels() == []
        player.set_level(3)

    def test_load_tech_switches_adapter(self) -> None:
        player = Player(Html5())
        assert player.get_levels() == []
        events: list[Event] = []
        player.on("loadstart", events.append)
        player.load_tech(Hls(MasterPlaylist((Variant(uri="a.m3u8", bandwidth=1),))))
        assert len(player.get_levels()) == 1
        assert len(events) == 1

    def test_level_queries_leave_backend_untouched(self) -> None:
        tech = Hls(MasterPlaylist((Variant(uri="a.m3u8", bandwidth=1), Variant(uri="b.m3u8", bandwidth=2))))
        player = Player(tech)
        before = dict(vars(tech))
        player.get_levels()
        player.get_levels()
        assert vars(tech) == before
        assert all(vars(tech)[key] is value for key, value in before.items())

    def test_override_ready_once_attached(self) -> None:
        tech = Hls(MasterPlaylist((Variant(uri="a.m3u8", bandwidth=1), Variant(uri="b.m3u8", bandwidth=2))))
        player = Player()
        player.load_tech(tech)
        assert isinstance(tech.select_playlist, ForcedLevelSelector)
        player.set_level(1)
        assert tech.select_playlist().uri == "b.m3u8"

    def test_adapter_resolved_once_per_tech(self, monkeypatch: pytest.MonkeyPatch) -> None:
        resolved: list[Any] = []

        def counting_adapter_for(tech: Any) -> Any:
            resolved.append(tech)
            return adapter_for(tech)

        monkeypatch.setattr(player_module, "adapter_for", counting_adapter_for)
        first = HlsJs(HlsJsEngine([{"bitrate": 1}]))
        player = Player(first)
        player.get_levels()
        player.get_levels()
        player.set_level(0)
        assert resolved == [first]

        second = HlsJs(HlsJsEngine([{"bitrate": 2}]))
        player.load_tech(second)
        player.get_levels()
        assert resolved == [first, second]

    def test_unknown_plugin(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown plugin"):
            Player().plugin("does-not-exist")

    def test_plugin_registration(self) -> None:
        seen: list[tuple[Any, Any]] = []

        def init(player: Player, options: Any) -> str:
            seen.append((player, options))
            return "instance"

        register_plugin("test-colour", init)
        player = Player()
        assert "test-colour" in registered_plugins()
        assert player.plugin("test-colour", colour="red") == "instance"
        assert seen == [(player, {"colour": "red"})]
        assert player.plugin_instance("test-colour") == "instance"

    def test_dispose_clears_control_bar(self) -> None:
        player = Player()
        child = player.control_bar.add_child(Component(player))
        player.dispose()
        assert child.is_disposed
