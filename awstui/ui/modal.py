from __future__ import annotations

from typing import override

from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ErrorModal(ModalScreen[None]):
    CSS = """
    ErrorModal {
        align: center middle;
        background: rgba(0,0,0,0.45);
    }
    #error-box {
        width: 60%;
        height: auto;
        max-height: 80%;
        background: #282a2e;
        border: solid #cc6666;
        padding: 1 2;
        color: #c5c8c6;
    }
    #error-title {
        color: #cc6666;
        text-style: bold;
        margin-bottom: 1;
    }
    #error-ok {
        margin-top: 1;
    }
    """

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    @override
    def compose(self) -> ComposeResult:
        yield Vertical(
            Static("Error", id="error-title"),
            Static(Text(self.message), id="error-message"),
            Button("OK", id="error-ok", variant="error"),
            id="error-box",
        )

    def on_mount(self) -> None:
        self.query_one("#error-ok", Button).focus()

    @on(Button.Pressed, "#error-ok")
    def _on_ok(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss()

    def key_escape(self) -> None:
        self.dismiss()
