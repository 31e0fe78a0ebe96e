from __future__ import annotations

from typing import Callable, Protocol, Sequence

SEARCH_TIMEOUT = 1.0


class Cancellable(Protocol):
    def stop(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]


def first_prefix_match(labels: Sequence[str], buffer: str) -> int | None:
    if not buffer:
        return None
    needle = buffer.casefold()
    for index, label in enumerate(labels):
        if label.casefold().startswith(needle):
            return index
    return None


class TypeAhead:
    """Incremental search buffer that empties itself after a quiet period.

    ``schedule`` must run its callback on the UI thread; textual's
    ``set_timer`` does.
    """

    def __init__(
        self,
        schedule: Scheduler,
        on_clear: Callable[[], None] | None = None,
        timeout: float = SEARCH_TIMEOUT,
    ) -> None:
        self._schedule = schedule
        self._on_clear = on_clear
        self._timeout = timeout
        self._timer: Cancellable | None = None
        self.buffer = ""

    @property
    def active(self) -> bool:
        return self.buffer != ""

    def push(self, character: str) -> str:
        self.buffer += character
        self._restart_timer()
        return self.buffer

    def pop(self) -> str:
        if not self.buffer:
            return self.buffer
        self.buffer = self.buffer[:-1]
        if self.buffer:
            self._restart_timer()
        else:
            self.clear()
        return self.buffer

    def clear(self) -> None:
        self.buffer = ""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
        if self._on_clear is not None:
            self._on_clear()

    def _restart_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
        self._timer = self._schedule(self._timeout, self._expire)

    def _expire(self) -> None:
        self._timer = None
        self.clear()
