from __future__ import annotations

from typing import Any

import pytest

from awstui.models.keys import KeyAction
from awstui.ui.stack import ViewStack, page_name
from awstui.ui.view import View


class FakeView(View):
    def __init__(self, service: str, labels: list[str] | None = None, actions: list[KeyAction] | None = None) -> None:
        self.service = service
        self._labels = labels or []
        self._actions = actions or []
        self.renders = 0
        self.escapes = 0
        self.content: list[str] = []

    @property
    def labels(self) -> list[str]:
        return list(self._labels)

    def key_actions(self) -> list[KeyAction]:
        return list(self._actions)

    def render(self) -> None:
        self.renders += 1
        self.content = [f"{self.service}-row"]

    @property
    def widget(self) -> Any:
        return self

    def on_escape(self) -> None:
        self.escapes += 1


class FakeHost:
    def __init__(self) -> None:
        self.pages: list[str] = []
        self.current: str | None = None
        self.chrome_renders = 0
        self.calls: list[str] = []

    def add_page(self, name: str, view: View) -> None:
        self.calls.append(f"add {name}")
        self.pages.append(name)

    def remove_page(self, name: str, view: View) -> None:
        self.calls.append(f"remove {name}")
        self.pages.remove(name)

    def switch_to(self, name: str, view: View) -> None:
        self.calls.append(f"switch {name}")
        self.current = name

    def render_chrome(self, stack: ViewStack) -> None:
        self.calls.append("chrome")
        self.chrome_renders += 1


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def stack(host: FakeHost) -> ViewStack:
    return ViewStack(host, FakeView("Services"))


def test_root_is_pushed_and_rendered(stack: ViewStack, host: FakeHost) -> None:
    assert stack.depth == 1
    assert host.pages == ["0 | Services | "]
    assert host.current == "0 | Services | "
    assert stack.title == " Services "
    assert stack.root.renders == 1  # type: ignore[attr-defined]


def test_page_name_includes_index_and_labels() -> None:
    view = FakeView("S3", ["my-bucket", "logs/app.log"])
    assert page_name(2, view) == "2 | S3 | my-bucket > logs/app.log"


def test_push_orders_host_calls(stack: ViewStack, host: FakeHost) -> None:
    host.calls.clear()
    stack.push_and_switch(FakeView("S3", ["Buckets"]))
    assert host.calls == ["add 1 | S3 | Buckets", "switch 1 | S3 | Buckets", "chrome"]
    assert stack.title == " S3 "


def test_close_at_root_is_noop(stack: ViewStack, host: FakeHost) -> None:
    renders = host.chrome_renders

    stack.close()

    assert stack.depth == 1
    assert host.pages == ["0 | Services | "]
    assert host.chrome_renders == renders


def test_push_then_close_restores_state(stack: ViewStack, host: FakeHost) -> None:
    before = (stack.depth, list(host.pages), host.current)

    stack.push_and_switch(FakeView("S3", ["Buckets"]))
    stack.close()

    assert (stack.depth, host.pages, host.current) == before


def test_return_to_top(stack: ViewStack, host: FakeHost) -> None:
    stack.push_and_switch(FakeView("S3", ["Buckets"]))
    stack.push_and_switch(FakeView("S3", ["my-bucket"]))
    stack.push_and_switch(FakeView("S3", ["my-bucket", "a.txt"]))
    assert stack.depth == 4
    renders = host.chrome_renders

    stack.return_to_top()

    assert stack.depth == 1
    assert host.current == "0 | Services | "
    assert host.chrome_renders == renders + 1


def test_return_to_top_at_root_is_noop(stack: ViewStack, host: FakeHost) -> None:
    renders = host.chrome_renders
    stack.return_to_top()
    assert host.chrome_renders == renders


def test_depth_never_drops_below_one(stack: ViewStack) -> None:
    root = stack.root
    for _ in range(3):
        stack.handle_key("escape")
    assert stack.depth == 1
    assert stack.root is root


def test_refresh_rerenders_active_view(stack: ViewStack, host: FakeHost) -> None:
    view = FakeView("SQS", ["Queues"])
    stack.push_and_switch(view)
    first = list(view.content)

    assert stack.handle_key("ctrl+r")

    assert view.renders == 2
    assert view.content == first
    assert host.calls[-1] == "chrome"


def test_escape_runs_view_hook_then_closes(stack: ViewStack) -> None:
    view = FakeView("S3", ["Buckets"])
    stack.push_and_switch(view)
    stack.handle_key("escape")
    assert view.escapes == 1
    assert stack.depth == 1


def test_escape_at_root_still_runs_hook(stack: ViewStack) -> None:
    stack.handle_key("escape")
    assert stack.root.escapes == 1  # type: ignore[attr-defined]


def test_enter_is_never_consumed(stack: ViewStack) -> None:
    hits: list[str] = []
    stack.push_and_switch(FakeView("S3", actions=[KeyAction("enter", "Open", lambda: hits.append("enter"))]))
    assert not stack.handle_key("enter")
    assert hits == []


def test_local_action_dispatch(stack: ViewStack) -> None:
    hits: list[str] = []
    stack.push_and_switch(FakeView("S3", actions=[KeyAction("d", "Download", lambda: hits.append("d"))]))
    assert stack.handle_key("d", "d")
    assert not stack.handle_key("q", "q")
    assert hits == ["d"]


def test_globals_always_present_and_unique(stack: ViewStack) -> None:
    hits: list[str] = []
    shadowing = [
        KeyAction("ctrl+r", "Shadow", lambda: hits.append("shadow")),
        KeyAction("c", "Create", lambda: None),
        KeyAction("c", "Copy", lambda: None),
    ]
    stack.push_and_switch(FakeView("Route 53", actions=shadowing))

    actions = stack.active_key_actions()
    keys = [action.key for action in actions]

    assert len(keys) == len(set(keys))
    assert {"ctrl+r", "ctrl+t"} <= set(keys)
    assert [a.description for a in actions if a.key == "ctrl+r"] == ["Refresh"]
    assert [a.description for a in actions if a.key == "c"] == ["Create"]
    stack.handle_key("ctrl+r")
    assert hits == []
