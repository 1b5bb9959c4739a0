"""In-process model of browser local storage shared by several tabs.

Writes are visible to every tab immediately, but change notifications go
only to the *other* tabs, mirroring the browser ``storage`` event. The
notifications are a best-effort broadcast: a tab that was not listening
when a change happened learns about it only when it reconciles on focus,
and two tabs may hold different in-memory state until then.
"""

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class StorageEvent:
    key: str | None
    old_value: str | None
    new_value: str | None


StorageListener = Callable[[StorageEvent], None]


class BrowserStorage:
    """Key/value strings shared by all tabs of one browser profile."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}
        self._tabs: list["TabStorage"] = []

    def open_tab(self) -> "TabStorage":
        tab = TabStorage(self)
        self._tabs.append(tab)
        return tab

    def close_tab(self, tab: "TabStorage") -> None:
        if tab in self._tabs:
            self._tabs.remove(tab)

    def _get(self, key: str) -> str | None:
        return self._items.get(key)

    def _write(self, origin: "TabStorage", key: str, value: str | None) -> None:
        old_value = self._items.get(key)
        if value is None:
            self._items.pop(key, None)
        else:
            self._items[key] = value
        if old_value == value:
            return

        event = StorageEvent(key=key, old_value=old_value, new_value=value)
        for tab in list(self._tabs):
            if tab is not origin:
                tab._dispatch(event)


class TabStorage:
    """One tab's handle on the shared storage."""

    def __init__(self, storage: BrowserStorage) -> None:
        self._storage = storage
        self._listeners: list[StorageListener] = []

    def get_item(self, key: str) -> str | None:
        return self._storage._get(key)

    def set_item(self, key: str, value: str) -> None:
        self._storage._write(self, key, value)

    def remove_item(self, key: str) -> None:
        self._storage._write(self, key, None)

    def add_listener(self, listener: StorageListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StorageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _dispatch(self, event: StorageEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
