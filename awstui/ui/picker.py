from __future__ import annotations

import logging
from typing import Callable, Mapping, override

from result import Err
from textual.widget import Widget
from textual.widgets.tree import TreeNode

from awstui.config.store import SettingsStore
from awstui.models.keys import KeyAction
from awstui.services.catalog import (
    FAVORITES_LABEL,
    SERVICE_CATALOG,
    PickerEntry,
    catalog_refs,
    picker_sections,
)
from awstui.ui.tree import NavTree
from awstui.ui.view import Navigator, View

logger = logging.getLogger(__name__)

ViewFactory = Callable[[Navigator], View]


class DispatchError(RuntimeError):
    pass


def check_dispatch(
    factories: Mapping[str, ViewFactory],
    catalog: dict[str, tuple[str, ...]] = SERVICE_CATALOG,
) -> None:
    """Every selectable catalog entry must open something."""
    missing = [ref for ref in catalog_refs(catalog) if ref not in factories]
    if missing:
        raise DispatchError(f"No view registered for: {', '.join(missing)}")


class ServicePicker(View):
    service = "Services"

    def __init__(
        self,
        nav: Navigator,
        settings: SettingsStore,
        factories: Mapping[str, ViewFactory],
        catalog: dict[str, tuple[str, ...]] = SERVICE_CATALOG,
    ) -> None:
        check_dispatch(factories, catalog)
        self.nav = nav
        self.settings = settings
        self.factories = factories
        self.catalog = catalog
        self.tree = NavTree("Services", on_leaf=self.open_node, type_ahead=True, passthrough=("d", "x"))
        self.tree.add_class("picker")
        self.favorites_node: TreeNode[str] | None = None
        self.services_node: TreeNode[str] | None = None
        self.rebuild()
        if self.favorites_node is not None and self.favorites_node.children:
            self.tree.focus_node(self.favorites_node.children[0])

    @property
    @override
    def widget(self) -> Widget:
        return self.tree

    @override
    def key_actions(self) -> list[KeyAction]:
        return [
            KeyAction("d", "Add Favorite", self.add_favorite),
            KeyAction("x", "Remove Favorite", self.remove_favorite),
        ]

    @override
    def render(self) -> None:
        return None

    @override
    def on_escape(self) -> None:
        self.tree.search.clear()

    def rebuild(self) -> None:
        self.tree.reset_nodes()
        self.favorites_node = None
        self.services_node = None
        for section in picker_sections(self.settings.favorites, self.catalog):
            node = self.tree.root.add(section.label, expand=section.expanded)
            if section.label == FAVORITES_LABEL:
                self.favorites_node = node
            else:
                self.services_node = node
            for entry in section.children:
                self._add_entry(node, entry)

    def _add_entry(self, parent: TreeNode[str], entry: PickerEntry) -> None:
        if not entry.children:
            self.tree.track(parent.add_leaf(entry.label, data=entry.ref))
            return
        node = self.tree.track(parent.add(entry.label, data=entry.ref, expand=entry.expanded))
        for child in entry.children:
            self._add_entry(node, child)

    def open_node(self, node: TreeNode[str]) -> None:
        ref = node.data
        if ref is None:
            return
        logger.info("Opening %s", ref)
        self.nav.push(self.factories[ref](self.nav))

    def add_favorite(self) -> None:
        node = self.tree.cursor_node
        if node is None or node.data is None:
            return
        ref = node.data
        if not self.settings.is_favorite(ref):
            saved = self.settings.add_favorite(ref)
            if isinstance(saved, Err):
                self.nav.notify(f"Failed to save favorites: {saved.unwrap_err()}", severity="error")
            self.rebuild()
        if self.favorites_node is None:
            return
        for child in self.favorites_node.children:
            if child.data == ref:
                self.tree.focus_node(child)
                return

    def remove_favorite(self) -> None:
        node = self.tree.cursor_node
        if node is None or node.data is None or node.parent is not self.favorites_node:
            return
        saved = self.settings.remove_favorite(node.data)
        if isinstance(saved, Err):
            self.nav.notify(f"Failed to save favorites: {saved.unwrap_err()}", severity="error")
        self.rebuild()
        if self.favorites_node is not None and self.favorites_node.children:
            self.tree.focus_node(self.favorites_node.children[0])
        elif self.services_node is not None:
            self.tree.focus_node(self.services_node)
