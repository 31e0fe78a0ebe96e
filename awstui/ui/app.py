from __future__ import annotations

import logging
from typing import Callable, override

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widget import Widget
from textual.widgets import Input, TextArea

from awstui.ui.chrome import FooterBand, HeaderBand, IdentitySource
from awstui.ui.modal import ErrorModal
from awstui.ui.stack import ViewStack
from awstui.ui.view import Navigator, View

logger = logging.getLogger(__name__)


class StackNavigator:
    """The handle views use to reach the page stack."""

    def __init__(self, app: AwsTuiApp) -> None:
        self._app = app

    def push(self, view: View) -> None:
        self._app.stack.push_and_switch(view)

    def close(self) -> None:
        self._app.stack.close()

    def show_error(self, message: str) -> None:
        logger.warning(message)
        self._app.push_screen(ErrorModal(message))

    def notify(self, message: str, *, severity: str = "information") -> None:
        self._app.notify(message, severity=severity)  # type: ignore[arg-type]


class AwsTuiApp(App[None]):
    CSS_PATH = "app.tcss"
    TITLE = "aws-tui"

    BINDINGS = [
        Binding("escape", "back", "Back", show=False, priority=True),
        Binding("ctrl+r", "reload", "Refresh", show=False, priority=True),
        Binding("ctrl+t", "top", "Top", show=False, priority=True),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        root: Callable[[Navigator], View],
        identity: IdentitySource,
        region: str,
    ) -> None:
        super().__init__()
        self._root_factory = root
        self.navigator = StackNavigator(self)
        self._stack: ViewStack | None = None
        self._page_widgets: list[Widget] = []
        self._header_band = HeaderBand(identity, region, id="header")
        self._page_box = Container(id="pages")
        self._footer_band = FooterBand(id="footer")

    @property
    def stack(self) -> ViewStack:
        if self._stack is None:
            raise RuntimeError("page stack is not ready")
        return self._stack

    @override
    def compose(self) -> ComposeResult:
        yield Container(self._header_band, self._page_box, self._footer_band, id="app-grid")

    def on_mount(self) -> None:
        self._stack = ViewStack(self, self._root_factory(self.navigator))

    def add_page(self, name: str, view: View) -> None:
        widget = view.widget
        widget.add_class("page")
        self._page_widgets.append(widget)
        self._page_box.mount(widget)

    def remove_page(self, name: str, view: View) -> None:
        widget = view.widget
        if widget in self._page_widgets:
            self._page_widgets.remove(widget)
        widget.remove()

    def switch_to(self, name: str, view: View) -> None:
        for widget in self._page_widgets:
            widget.display = widget is view.widget
        self._page_box.border_title = f" {view.service} "
        view.focus()

    def render_chrome(self, stack: ViewStack) -> None:
        self._header_band.show(stack.active_key_actions())
        self._footer_band.show(stack)

    def _overlay_open(self) -> bool:
        return len(self.screen_stack) > 1

    def action_back(self) -> None:
        if self._overlay_open():
            self.pop_screen()
            return
        self.stack.handle_key("escape")

    def action_reload(self) -> None:
        if not self._overlay_open():
            self.stack.refresh()

    def action_top(self) -> None:
        if not self._overlay_open():
            self.stack.return_to_top()

    def on_key(self, event: events.Key) -> None:
        if self._stack is None or self._overlay_open():
            return
        if isinstance(self.focused, (Input, TextArea)):
            return
        if self._stack.handle_key(event.key, event.character):
            event.stop()
            event.prevent_default()
