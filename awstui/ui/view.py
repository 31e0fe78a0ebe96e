from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol

from awstui.models.keys import KeyAction

if TYPE_CHECKING:
    from textual.widget import Widget


class View(ABC):
    """A navigable screen.

    ``render`` reloads the view's data and may be called any number of times.
    The widget returned by ``widget`` is what gets mounted on the page stack.
    """

    service: str = ""

    @property
    def labels(self) -> list[str]:
        return []

    def key_actions(self) -> list[KeyAction]:
        return []

    @abstractmethod
    def render(self) -> None: ...

    @property
    @abstractmethod
    def widget(self) -> Widget: ...

    def focus(self) -> None:
        self.widget.focus()

    def on_escape(self) -> None:
        return None


class Navigator(Protocol):
    def push(self, view: View) -> None: ...

    def close(self) -> None: ...

    def show_error(self, message: str) -> None: ...

    def notify(self, message: str, *, severity: str = "information") -> None: ...
