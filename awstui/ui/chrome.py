from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, override

from result import Ok, Result
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Static

from awstui.models.keys import KeyAction
from awstui.models.records import CallerIdentity
from awstui.services.chrome import footer_markup, identity_markup, keybind_grid

if TYPE_CHECKING:
    from awstui.ui.stack import ViewStack


class IdentitySource(Protocol):
    def caller_identity(self) -> Result[CallerIdentity, str]: ...

    def account_aliases(self) -> Result[list[str], str]: ...


class HeaderBand(Horizontal):
    def __init__(self, identity: IdentitySource, region: str, **kwargs: str) -> None:
        super().__init__(**kwargs)
        self._identity = identity
        self._region = region
        self._cached: tuple[Ok[CallerIdentity], list[str]] | None = None

    @override
    def compose(self) -> ComposeResult:
        yield Static(id="account-info")
        yield Static(id="keybind-info")

    def account_markup(self) -> str:
        if self._cached is None:
            who = self._identity.caller_identity()
            if not isinstance(who, Ok):
                return identity_markup(who, [], self._region)
            self._cached = (who, self._identity.account_aliases().unwrap_or([]))
        return identity_markup(self._cached[0], self._cached[1], self._region)

    def show(self, actions: list[KeyAction]) -> None:
        self.query_one("#account-info", Static).update(Text.from_markup(self.account_markup()))
        self.query_one("#keybind-info", Static).update(keybind_grid(actions))


class FooterBand(Static):
    def show(self, stack: ViewStack) -> None:
        active = stack.active
        self.update(Text.from_markup(footer_markup(active.service, active.labels, stack.depth)))
