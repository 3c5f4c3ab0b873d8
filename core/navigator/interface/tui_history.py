"""Address bar with browser-like back/forward history."""

from typing import Callable, List, Optional

from core.navigator.interface.constants import ADDRESS_HISTORY_LIMIT


class AddressBar:
    """In-memory `LocationSink`: `push` adds an entry, `replace` rewrites the current one."""

    def __init__(self, initial: str = "", limit: int = ADDRESS_HISTORY_LIMIT) -> None:
        self._entries: List[str] = [initial.lstrip("?")]
        self._index = 0
        self._limit = max(2, limit)
        self._listeners: List[Callable[[str], None]] = []

    @property
    def current(self) -> str:
        return self._entries[self._index]

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    @property
    def can_go_back(self) -> bool:
        return self._index > 0

    @property
    def can_go_forward(self) -> bool:
        return self._index < len(self._entries) - 1

    def push(self, query: str) -> None:
        if query == self.current:
            return
        del self._entries[self._index + 1:]
        self._entries.append(query)
        if len(self._entries) > self._limit:
            del self._entries[0]
        self._index = len(self._entries) - 1
        self._emit()

    def replace(self, query: str) -> None:
        if query == self.current:
            return
        self._entries[self._index] = query
        self._emit()

    def back(self) -> Optional[str]:
        if not self.can_go_back:
            return None
        self._index -= 1
        self._emit()
        return self.current

    def forward(self) -> Optional[str]:
        if not self.can_go_forward:
            return None
        self._index += 1
        self._emit()
        return self.current

    def subscribe(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self.current)


__all__ = ["AddressBar"]
