from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from awstui.models.keys import KeyAction, unique_actions
from awstui.ui.view import View

logger = logging.getLogger(__name__)


class PageHost(Protocol):
    def add_page(self, name: str, view: View) -> None: ...

    def remove_page(self, name: str, view: View) -> None: ...

    def switch_to(self, name: str, view: View) -> None: ...

    def render_chrome(self, stack: ViewStack) -> None: ...


@dataclass(slots=True, frozen=True)
class Page:
    name: str
    view: View


def page_name(index: int, view: View) -> str:
    # the index keeps sibling views of one service apart
    return f"{index} | {view.service} | {' > '.join(view.labels)}"


class ViewStack:
    """Ordered pages with the service picker pinned at the bottom."""

    def __init__(self, host: PageHost, root: View) -> None:
        self._host = host
        self._pages: list[Page] = []
        self.push_and_switch(root)

    @property
    def depth(self) -> int:
        return len(self._pages)

    @property
    def pages(self) -> list[Page]:
        return list(self._pages)

    @property
    def root(self) -> View:
        return self._pages[0].view

    @property
    def active(self) -> View:
        return self._pages[-1].view

    @property
    def title(self) -> str:
        return f" {self.active.service} "

    def push_and_switch(self, view: View) -> None:
        view.render()
        page = Page(name=page_name(len(self._pages), view), view=view)
        self._pages.append(page)
        logger.debug("push %s", page.name)
        self._host.add_page(page.name, view)
        self._host.switch_to(page.name, view)
        self._host.render_chrome(self)

    def close(self) -> None:
        if len(self._pages) == 1:
            return
        page = self._pages.pop()
        logger.debug("close %s", page.name)
        self._host.remove_page(page.name, page.view)
        top = self._pages[-1]
        self._host.switch_to(top.name, top.view)
        self._host.render_chrome(self)

    def return_to_top(self) -> None:
        if len(self._pages) == 1:
            return
        while len(self._pages) > 1:
            page = self._pages.pop()
            self._host.remove_page(page.name, page.view)
        root = self._pages[0]
        logger.debug("return to %s", root.name)
        self._host.switch_to(root.name, root.view)
        self._host.render_chrome(self)

    def refresh(self) -> None:
        self.active.render()
        self._host.render_chrome(self)

    def global_key_actions(self) -> list[KeyAction]:
        return [
            KeyAction("ctrl+r", "Refresh", self.refresh),
            KeyAction("ctrl+t", "Top", self.return_to_top),
        ]

    def active_key_actions(self) -> list[KeyAction]:
        shared = self.global_key_actions()
        reserved = {action.key for action in shared}
        local = [action for action in self.active.key_actions() if action.key not in reserved]
        return unique_actions([*local, *shared])

    def handle_key(self, key: str, character: str | None = None) -> bool:
        """Run whatever the key is bound to; False means the key was not used."""
        if key == "escape":
            self.active.on_escape()
            self.close()
            return True
        if key == "ctrl+r":
            self.refresh()
            return True
        if key == "ctrl+t":
            self.return_to_top()
            return True
        if key == "enter":
            return False
        for action in self.active_key_actions():
            if action.matches(key, character):
                action.action()
                return True
        return False
