from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import Callable, Literal, override

from result import Err, Result
from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widget import Widget
from textual.widgets import Button, Input, Select, Static, TextArea

from awstui.ui.view import Navigator, View

logger = logging.getLogger(__name__)

FieldKind = Literal["input", "select", "area", "text"]


@dataclass(slots=True, frozen=True)
class Field:
    name: str
    label: str
    value: str = ""
    kind: FieldKind = "input"
    options: tuple[str, ...] = ()


class FormBody(VerticalScroll):
    def __init__(
        self,
        title: str,
        fields: list[Field],
        action_label: str,
        on_submit: Callable[[], None],
        on_cancel: Callable[[], None],
    ) -> None:
        super().__init__(classes="form")
        self.border_title = f" {title} "
        self.fields = fields
        self._action_label = action_label
        self._on_submit = on_submit
        self._on_cancel = on_cancel
        self._ready = False
        self._focus_pending = False

    @override
    def compose(self) -> ComposeResult:
        for field in self.fields:
            yield Static(field.label, classes="form-label")
            widget_id = f"field-{field.name}"
            if field.kind == "select":
                yield Select(
                    [(option, option) for option in field.options],
                    value=field.value,
                    allow_blank=False,
                    id=widget_id,
                )
            elif field.kind == "area":
                yield TextArea(field.value, id=widget_id)
            elif field.kind == "text":
                yield Static(Text(field.value), id=widget_id, classes="form-text")
            else:
                yield Input(value=field.value, id=widget_id)
        yield Horizontal(
            Button(self._action_label, id="form-submit", variant="primary"),
            Button("Cancel", id="form-cancel"),
            classes="form-buttons",
        )

    def on_mount(self) -> None:
        self._ready = True
        if self._focus_pending:
            self.focus_first()

    def focus_first(self) -> None:
        if not self._ready:
            self._focus_pending = True
            return
        self._focus_pending = False
        for widget in self.query("Input, Select, TextArea, Button"):
            if widget.focusable:
                widget.focus()
                return

    def values(self) -> dict[str, str]:
        values = {field.name: field.value for field in self.fields}
        if not self._ready:
            return values
        for field in self.fields:
            widget = self.query_one(f"#field-{field.name}")
            if isinstance(widget, Input):
                values[field.name] = widget.value
            elif isinstance(widget, TextArea):
                values[field.name] = widget.text
            elif isinstance(widget, Select) and isinstance(widget.value, str):
                values[field.name] = widget.value
        return values

    @on(Button.Pressed, "#form-submit")
    def _on_submit_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_submit()

    @on(Button.Pressed, "#form-cancel")
    def _on_cancel_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_cancel()


class FormView(View):
    """Base for the create/update/delete style pages.

    Subclasses list their fields and implement ``submit``. A failed submit
    keeps the form on screen behind an error dialog; a successful one runs
    ``on_complete`` and closes the form.
    """

    title = ""
    action_label = "Submit"

    def __init__(self, nav: Navigator, on_complete: Callable[[], None] | None = None) -> None:
        self.nav = nav
        self.on_complete = on_complete
        self._body: FormBody | None = None

    @property
    @override
    def widget(self) -> Widget:
        if self._body is None:
            self._body = FormBody(self.title, self.fields(), self.action_label, self.submit_form, self.nav.close)
        return self._body

    @override
    def render(self) -> None:
        return None

    @override
    def focus(self) -> None:
        if self._body is not None:
            self._body.focus_first()

    @abstractmethod
    def fields(self) -> list[Field]: ...

    @abstractmethod
    def submit(self, values: dict[str, str]) -> Result[object, str]: ...

    def submit_form(self, values: dict[str, str] | None = None) -> None:
        if values is None:
            values = self._body.values() if self._body is not None else {f.name: f.value for f in self.fields()}
        result = self.submit(values)
        if isinstance(result, Err):
            logger.info("%s rejected: %s", self.title, result.unwrap_err())
            self.nav.show_error(result.unwrap_err())
            return
        if self.on_complete is not None:
            self.on_complete()
        self.nav.close()
