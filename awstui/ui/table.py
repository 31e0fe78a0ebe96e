from __future__ import annotations

from typing import Callable, Sequence, override

from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import DataTable, Input, Static

from awstui.models.enums import FilterMode
from awstui.services.filtering import FilterState, Row


class RowTable(DataTable):
    BINDINGS = [
        Binding("g,home", "first_row", "First row", show=False),
    ]

    def action_first_row(self) -> None:
        if self.row_count:
            self.move_cursor(row=0, animate=False)


class FilterableTable(Vertical):
    """Fixed-header table with a substring filter over every column.

    All row bookkeeping lives in ``state``; the widgets only mirror it, so
    rows can be set before the table is mounted.
    """

    BINDINGS = [
        Binding("tab", "toggle_filter", "Filter", show=False),
    ]

    def __init__(
        self,
        headers: Sequence[str],
        on_select: Callable[[Row], None] | None = None,
    ) -> None:
        super().__init__(classes="filterable-table")
        self.state = FilterState(headers=tuple(headers))
        self._on_select = on_select
        self._ready = False
        self._focus_pending = False

    @override
    def compose(self) -> ComposeResult:
        yield Input(placeholder="Type to filter…", classes="filter-input")
        yield Static(classes="filter-label")
        yield RowTable(classes="rows")

    def on_mount(self) -> None:
        table = self.query_one(RowTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        for header in self.state.headers:
            table.add_column(header)
        self._ready = True
        self._sync()
        if self._focus_pending:
            self.focus_rows()

    def focus_rows(self) -> None:
        if not self._ready:
            self._focus_pending = True
            return
        self._focus_pending = False
        if self.state.visible:
            self.query_one(".filter-input", Input).focus()
        else:
            self.query_one(RowTable).focus()

    def set_rows(self, rows: list[Row]) -> None:
        self.state.set_rows(rows)
        self._sync()

    def open_filter(self) -> None:
        if not self.state.visible:
            text = self.state.open()
            if self._ready:
                self.query_one(".filter-input", Input).value = text
        self._sync()
        self.focus_rows()

    def commit_filter(self) -> None:
        if not self.state.visible:
            return
        self.state.commit()
        self._sync()
        self.focus_rows()

    def action_toggle_filter(self) -> None:
        if self.state.mode is FilterMode.EDITING:
            self.commit_filter()
        else:
            self.open_filter()

    def selected(self) -> Row | None:
        return self.state.selected()

    def selected_value(self, header: str) -> str | None:
        return self.state.selected_value(header)

    @on(Input.Changed, ".filter-input")
    def _on_filter_changed(self, event: Input.Changed) -> None:
        event.stop()
        if not self.state.visible or event.value == self.state.text:
            return
        self.state.update(event.value)
        self._sync_rows()

    @on(Input.Submitted, ".filter-input")
    def _on_filter_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.commit_filter()

    @on(DataTable.RowHighlighted)
    def _on_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        event.stop()
        self.state.move_to(event.cursor_row)

    @on(DataTable.RowSelected)
    def _on_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        self.state.move_to(event.cursor_row)
        row = self.state.selected()
        if row is not None and self._on_select is not None:
            self._on_select(row)

    def _sync(self) -> None:
        if not self._ready:
            return
        self.query_one(".filter-input", Input).display = self.state.visible
        label = self.query_one(".filter-label", Static)
        label.update(Text(self.state.label))
        label.display = self.state.mode is FilterMode.COMMITTED
        self._sync_rows()

    def _sync_rows(self) -> None:
        if not self._ready:
            return
        table = self.query_one(RowTable)
        table.clear()
        for row in self.state.displayed:
            table.add_row(*(Text(cell) for cell in row.cells))
        if self.state.cursor is not None:
            table.move_cursor(row=self.state.cursor, animate=False)
