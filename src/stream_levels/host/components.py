"""Component tree and generic menu widgets.

A :class:`Component` owns its children and releases them, together with
its own listeners, on :meth:`Component.dispose`.  :class:`MenuButton`
and :class:`MenuItem` are the generic widgets specialised by plugins.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from stream_levels.host.events import EventTarget


class Component(EventTarget):
    """Base UI component.

    Parameters
    ----------
    player:
        The player this component belongs to.
    options:
        Free-form options, available through :meth:`options`.
    """

    class_name: ClassVar[str] = "vjs-component"

    def __init__(self, player: Any, options: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self._player = player
        self._options: dict[str, Any] = dict(options or {})
        self._children: list[Component] = []
        self.parent: Component | None = None
        self.hidden: bool = False
        self._disposed: bool = False

    def player(self) -> Any:
        return self._player

    def options(self) -> dict[str, Any]:
        return self._options

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    def add_child(self, child: Component) -> Component:
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self._children.append(child)
        return child

    def remove_child(self, child: Component) -> None:
        if child in self._children:
            self._children.remove(child)
            child.parent = None

    def children(self) -> list[Component]:
        return list(self._children)

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def show(self) -> None:
        self.hidden = False

    def hide(self) -> None:
        self.hidden = True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Dispose children, detach from the parent and drop all listeners.

        Idempotent.
        """
        if self._disposed:
            return
        self.trigger("dispose")
        for child in list(self._children):
            child.dispose()
        if self.parent is not None:
            self.parent.remove_child(self)
        self.off()
        self._disposed = True


class ControlBar(Component):
    class_name: ClassVar[str] = "vjs-control-bar"


class MenuItem(Component):
    """Selectable entry of a menu.

    Options: ``label`` (str), ``value`` (any), ``selected`` (bool).
    """

    class_name: ClassVar[str] = "vjs-menu-item"

    def __init__(self, player: Any, options: Mapping[str, Any] | None = None) -> None:
        super().__init__(player, options)
        self._selected: bool = bool(self._options.get("selected", False))

    @property
    def label(self) -> str:
        return str(self._options.get("label", ""))

    @property
    def value(self) -> Any:
        return self._options.get("value")

    @property
    def selected(self) -> bool:
        return self._selected

    @selected.setter
    def selected(self, flag: bool) -> None:
        self._selected = bool(flag)

    def handle_click(self) -> None:
        """Simulate a user click."""
        self.trigger("click")


class MenuButton(Component):
    """Button that opens a menu of :class:`MenuItem` entries.

    Subclasses provide :meth:`create_items`.  A button without items is
    hidden.  Collapsed by default; :meth:`open`, :meth:`close` and
    :meth:`toggle` switch between the two states.
    """

    class_name: ClassVar[str] = "vjs-menu-button"

    def __init__(self, player: Any, options: Mapping[str, Any] | None = None) -> None:
        super().__init__(player, options)
        self.items: list[MenuItem] = []
        self._open: bool = False
        self.update()

    def create_items(self) -> list[MenuItem]:
        return []

    def update(self) -> None:
        """Rebuild the menu from :meth:`create_items`."""
        for item in self.items:
            item.dispose()
        self.items = self.create_items()
        for item in self.items:
            self.add_child(item)
        if self.items:
            self.show()
        else:
            self.hide()
            self._open = False

    def get_items(self) -> list[MenuItem]:
        return list(self.items)

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        if self.items:
            self._open = True

    def close(self) -> None:
        self._open = False

    def toggle(self) -> None:
        if self._open:
            self.close()
        else:
            self.open()

    def dispose(self) -> None:
        super().dispose()
        self.items = []
        self._open = False
