from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from awstui.models.enums import FilterMode


@dataclass(slots=True, frozen=True)
class Row:
    cells: tuple[str, ...]
    item: Any = None


def make_rows(data: Sequence[Sequence[str]], items: Sequence[Any] | None = None) -> list[Row]:
    if items is None:
        return [Row(cells=tuple(cells)) for cells in data]
    return [Row(cells=tuple(cells), item=item) for cells, item in zip(data, items, strict=True)]


def row_matches(row: Row, needle: str) -> bool:
    return any(needle in cell.casefold() for cell in row.cells)


def filter_rows(rows: list[Row], text: str) -> list[Row]:
    if not text:
        return list(rows)
    needle = text.casefold()
    return [row for row in rows if row_matches(row, needle)]


@dataclass(slots=True)
class FilterState:
    """Rows behind a table plus the substring filter applied to them.

    ``text`` follows the input while editing; ``committed_text`` is what stays
    applied once the editor closes.
    """

    headers: tuple[str, ...]
    rows: list[Row] = field(default_factory=list)
    filtered: list[Row] = field(default_factory=list)
    text: str = ""
    committed_text: str = ""
    visible: bool = False
    committed: bool = False
    cursor: int | None = None

    @property
    def mode(self) -> FilterMode:
        if self.visible:
            return FilterMode.EDITING
        if self.committed:
            return FilterMode.COMMITTED
        return FilterMode.BROWSING

    @property
    def displayed(self) -> list[Row]:
        if self.visible or self.committed:
            return self.filtered
        return self.rows

    @property
    def label(self) -> str:
        if self.committed and self.committed_text:
            return f"Filter: {self.committed_text}"
        return ""

    def set_rows(self, rows: list[Row]) -> None:
        self.rows = list(rows)
        if self.visible:
            self.filtered = filter_rows(self.rows, self.text)
        elif self.committed:
            self.filtered = filter_rows(self.rows, self.committed_text)
        else:
            self.filtered = list(self.rows)
        self.select_first()

    def open(self) -> str:
        """Start editing; returns the text to pre-fill the input with."""
        self.visible = True
        self.text = self.committed_text
        self.filtered = filter_rows(self.rows, self.text)
        self.select_first()
        return self.text

    def update(self, text: str) -> None:
        self.text = text
        self.filtered = filter_rows(self.rows, text)
        self.select_first()

    def commit(self) -> None:
        self.visible = False
        self.committed_text = self.text
        self.committed = self.text != ""
        self.filtered = filter_rows(self.rows, self.committed_text)
        self.select_first()

    def select_first(self) -> None:
        self.cursor = 0 if self.displayed else None

    def move_to(self, index: int) -> None:
        shown = self.displayed
        if not shown:
            self.cursor = None
            return
        self.cursor = max(0, min(len(shown) - 1, index))

    def selected(self) -> Row | None:
        shown = self.displayed
        if self.cursor is None or not shown or self.cursor >= len(shown):
            return None
        return shown[self.cursor]

    def selected_value(self, header: str) -> str | None:
        row = self.selected()
        if row is None or header not in self.headers:
            return None
        return row.cells[self.headers.index(header)]
