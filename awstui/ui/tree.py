from __future__ import annotations

from typing import Callable

from textual import events, on
from textual.widgets import Tree
from textual.widgets.tree import TreeNode

from awstui.services.typeahead import TypeAhead, first_prefix_match

_CLEARING_KEYS = frozenset({"enter", "escape", "up", "down", "left", "right"})


class NavTree(Tree[str]):
    """Tree presenter.

    Enter toggles nodes that have children and hands every other node to
    ``on_leaf``. With ``type_ahead`` on, printable keys drive an incremental
    prefix search over the nodes registered with ``track``; keys listed in
    ``passthrough`` are left alone while no search is running.
    """

    def __init__(
        self,
        label: str,
        on_leaf: Callable[[TreeNode[str]], None] | None = None,
        *,
        data: str | None = None,
        type_ahead: bool = False,
        passthrough: tuple[str, ...] = (),
        show_root: bool = False,
    ) -> None:
        super().__init__(label, data=data)
        self.show_root = show_root
        self.auto_expand = False
        self._on_leaf = on_leaf
        self._type_ahead = type_ahead
        self._passthrough = frozenset(passthrough)
        self._search_nodes: list[TreeNode[str]] = []
        self._pending_cursor: TreeNode[str] | None = None
        self._ready = False
        self.search = TypeAhead(self.set_timer, on_clear=self._search_cleared)

    def on_mount(self) -> None:
        self._ready = True
        if self._pending_cursor is not None:
            self.call_after_refresh(self._apply_pending_cursor)

    def reset_nodes(self) -> None:
        self.clear()
        self._search_nodes = []

    def track(self, node: TreeNode[str]) -> TreeNode[str]:
        self._search_nodes.append(node)
        return node

    def focus_node(self, node: TreeNode[str]) -> None:
        parent = node.parent
        while parent is not None:
            parent.expand()
            parent = parent.parent
        self._pending_cursor = node
        if self._ready:
            self.call_after_refresh(self._apply_pending_cursor)

    def _apply_pending_cursor(self) -> None:
        node = self._pending_cursor
        self._pending_cursor = None
        if node is None:
            return
        self.move_cursor(node)
        self.scroll_to_node(node)

    @on(Tree.NodeSelected)
    def _on_node_selected(self, event: Tree.NodeSelected[str]) -> None:
        event.stop()
        node = event.node
        if node.children:
            if node.is_expanded:
                node.collapse()
            else:
                node.expand()
                self.focus_node(node.children[0])
            return
        if self._on_leaf is not None:
            self._on_leaf(node)

    def on_key(self, event: events.Key) -> None:
        if not self._type_ahead:
            return
        if event.key in _CLEARING_KEYS:
            self.search.clear()
            return
        if event.key == "backspace":
            if self.search.active:
                self.search.pop()
                self._apply_search()
                event.stop()
                event.prevent_default()
            return

        char = event.character
        if not event.is_printable or not char:
            return
        if not self.search.active and (char == " " or char in self._passthrough):
            return
        self.search.push(char)
        self._apply_search()
        event.stop()
        event.prevent_default()

    def _apply_search(self) -> None:
        buffer = self.search.buffer
        self.border_title = f" Search: {buffer} " if buffer else ""
        labels = [str(node.label) for node in self._search_nodes]
        index = first_prefix_match(labels, buffer)
        if index is not None:
            self.focus_node(self._search_nodes[index])

    def _search_cleared(self) -> None:
        self.border_title = ""
