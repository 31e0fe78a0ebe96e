from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

_KEY_LABELS: dict[str, str] = {
    "slash": "/",
    "enter": "Enter",
    "escape": "Esc",
    "backspace": "Backspace",
    "delete": "Delete",
    "tab": "Tab",
    "home": "Home",
    "space": "Space",
}


def key_label(key: str) -> str:
    label = _KEY_LABELS.get(key)
    if label is not None:
        return label
    if key.startswith("ctrl+"):
        return "Ctrl-" + key[len("ctrl+") :].upper()
    return key


@dataclass(slots=True, eq=False)
class KeyAction:
    key: str
    description: str
    action: Callable[[], None]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyAction):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    @property
    def label(self) -> str:
        return key_label(self.key)

    def matches(self, key: str, character: str | None = None) -> bool:
        if key == self.key:
            return True
        return len(self.key) == 1 and character == self.key


def unique_actions(actions: list[KeyAction]) -> list[KeyAction]:
    seen: set[str] = set()
    out: list[KeyAction] = []
    for action in actions:
        if action.key in seen:
            continue
        seen.add(action.key)
        out.append(action)
    return out
