from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, Sequence, override

from result import Err, Ok, Result
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from awstui.models.keys import KeyAction
from awstui.models.records import Tag
from awstui.repo.resources import Listing, run_listing
from awstui.services.filtering import Row, make_rows
from awstui.ui.table import FilterableTable
from awstui.ui.view import Navigator, View


class TableView(View):
    """A view backed by a filterable table.

    ``fetch`` returns the rows to show; a failure is reported and leaves the
    table empty.
    """

    headers: tuple[str, ...] = ()

    def __init__(self, nav: Navigator, headers: Sequence[str] | None = None) -> None:
        self.nav = nav
        self.table = FilterableTable(headers if headers is not None else self.headers, on_select=self.on_select)

    @property
    @override
    def widget(self) -> Widget:
        return self.table

    @override
    def focus(self) -> None:
        self.table.focus_rows()

    @override
    def key_actions(self) -> list[KeyAction]:
        return [KeyAction("slash", "Filter", self.table.open_filter)]

    @abstractmethod
    def fetch(self) -> Result[list[Row], str]: ...

    @override
    def render(self) -> None:
        rows = self.fetch()
        if isinstance(rows, Err):
            self.table.set_rows([])
            self.nav.show_error(rows.unwrap_err())
            return
        self.table.set_rows(rows.unwrap())

    def on_select(self, row: Row) -> None:
        return None

    def selected_item(self) -> Any:
        row = self.table.selected()
        return row.item if row is not None else None


class ResourceTableView(TableView):
    """Read-only listing of one resource type."""

    def __init__(self, nav: Navigator, service: str, label: str, listing: Listing, client: Any) -> None:
        super().__init__(nav, listing.headers)
        self.service = service
        self._label = label
        self._listing = listing
        self._client = client

    @property
    @override
    def labels(self) -> list[str]:
        return [self._label]

    @override
    def fetch(self) -> Result[list[Row], str]:
        return run_listing(self._listing, self._client).map(make_rows)


class KeyValueView(TableView):
    headers = ("KEY", "VALUE")

    def __init__(
        self,
        nav: Navigator,
        service: str,
        labels: list[str],
        source: Callable[[], Result[list[Tag], str]],
    ) -> None:
        super().__init__(nav)
        self.service = service
        self._labels = labels
        self._source = source

    @property
    @override
    def labels(self) -> list[str]:
        return list(self._labels)

    @override
    def fetch(self) -> Result[list[Row], str]:
        return self._source().map(lambda tags: make_rows([[tag.key, tag.value] for tag in tags], tags))


class DocumentBody(VerticalScroll):
    def __init__(self) -> None:
        super().__init__(classes="document")
        self.text = ""
        self._ready = False

    @override
    def compose(self) -> ComposeResult:
        yield Static(Text(self.text), classes="document-text")

    def on_mount(self) -> None:
        self._ready = True
        self.show(self.text)

    def show(self, text: str) -> None:
        self.text = text
        if self._ready:
            self.query_one(".document-text", Static).update(Text(text))


class DocumentView(View):
    """Scrollable plain text loaded from ``source``."""

    def __init__(
        self,
        nav: Navigator,
        service: str,
        labels: list[str],
        source: Callable[[], Result[str, str]],
    ) -> None:
        self.nav = nav
        self.service = service
        self._labels = labels
        self._source = source
        self.body = DocumentBody()

    @property
    @override
    def labels(self) -> list[str]:
        return list(self._labels)

    @property
    @override
    def widget(self) -> Widget:
        return self.body

    @override
    def render(self) -> None:
        text = self._source()
        if isinstance(text, Ok):
            self.body.show(text.unwrap())
            return
        self.body.show("")
        self.nav.show_error(text.unwrap_err())
