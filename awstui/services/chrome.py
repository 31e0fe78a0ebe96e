from __future__ import annotations

from rich.markup import escape
from rich.table import Table
from rich.text import Text
from result import Err, Result

from awstui.models.keys import KeyAction
from awstui.models.records import CallerIdentity

KEYBIND_ROWS = 4


def identity_markup(identity: Result[CallerIdentity, str], aliases: list[str], region: str) -> str:
    region = region or "unknown"
    if isinstance(identity, Err):
        return "\n".join(
            [
                "[bold red]Error:[/] Failed to get AWS credentials",
                f"[bold red]Details:[/] {escape(identity.unwrap_err())}",
                f"[bold #de935f]Region:[/]  {escape(region)}",
            ]
        )

    who = identity.unwrap()
    alias_text = f" ({', '.join(aliases)})" if aliases else ""
    return "\n".join(
        [
            f"[bold #de935f]Account:[/] {escape(who.account)}{escape(alias_text)}",
            f"[bold #de935f]ARN:[/]     {escape(who.arn)}",
            f"[bold #de935f]User ID:[/] {escape(who.user_id)}",
            f"[bold #de935f]Region:[/]  {escape(region)}",
        ]
    )


def keybind_columns(actions: list[KeyAction], rows: int = KEYBIND_ROWS) -> list[list[KeyAction]]:
    """Fill a fixed number of rows top to bottom, then start a new column."""
    return [actions[start : start + rows] for start in range(0, len(actions), rows)]


def keybind_grid(actions: list[KeyAction], rows: int = KEYBIND_ROWS) -> Table:
    columns = keybind_columns(actions, rows)
    grid = Table.grid(padding=(0, 2))
    for _ in columns:
        grid.add_column(no_wrap=True)
    for row in range(rows):
        cells: list[Text] = []
        for column in columns:
            if row < len(column):
                action = column[row]
                cells.append(Text.from_markup(f"[bold #ff87d7]<{escape(action.label)}>[/] {escape(action.description)}"))
            else:
                cells.append(Text(""))
        grid.add_row(*cells)
    return grid


def breadcrumb(service: str, labels: list[str]) -> str:
    return " > ".join([service, *labels])


def footer_markup(service: str, labels: list[str], depth: int) -> str:
    return f"[#81a2be]{escape(breadcrumb(service, labels))}[/]  [#969896]depth {depth}[/]"
