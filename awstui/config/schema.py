from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Settings:
    favorites: list[str] = field(default_factory=list)
    local_directory: str = ""

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"favorites": list(self.favorites)}
        if self.local_directory:
            payload["local_directory"] = self.local_directory
        return payload


def _unique(values: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def from_dict(data: dict[str, Any]) -> Settings:
    favorites_raw = data.get("favorites") or []
    if not isinstance(favorites_raw, list):
        favorites_raw = []
    local_directory = data.get("local_directory") or ""

    return Settings(
        favorites=_unique([str(x) for x in favorites_raw]),
        local_directory=str(local_directory),
    )
