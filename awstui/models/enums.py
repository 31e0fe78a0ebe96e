from __future__ import annotations

from enum import Enum


class FilterMode(str, Enum):
    BROWSING = "browsing"
    EDITING = "editing"
    COMMITTED = "committed"


class FormMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
