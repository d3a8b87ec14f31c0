"""In-process models of the browser collaborators the navigation core drives.

:class:`BrowserHistory` follows the History API: ``push_state`` and
``replace_state`` change the current entry silently, while ``back``,
``forward`` and ``go`` emit ``popstate`` to registered listeners.
"""

import logging
from typing import Callable, List, Literal

logger = logging.getLogger(__name__)

PopStateListener = Callable[[str], None]


class BrowserHistory:
    def __init__(self, initial_path: str = "/") -> None:
        self._entries: List[str] = [initial_path]
        self._index = 0
        self._listeners: List[PopStateListener] = []

    @property
    def path(self) -> str:
        return self._entries[self._index]

    @property
    def entries(self) -> List[str]:
        """Entries up to and including the current one."""
        return self._entries[: self._index + 1]

    @property
    def length(self) -> int:
        return len(self._entries)

    def push_state(self, path: str) -> None:
        # Pushing discards any forward entries, as the browser does
        del self._entries[self._index + 1 :]
        self._entries.append(path)
        self._index += 1

    def replace_state(self, path: str) -> None:
        self._entries[self._index] = path

    def go(self, delta: int) -> None:
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return
        self._index = target
        logger.debug("popstate", extra={"path": self.path})
        for listener in list(self._listeners):
            listener(self.path)

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def add_popstate_listener(self, listener: PopStateListener) -> None:
        self._listeners.append(listener)

    def remove_popstate_listener(self, listener: PopStateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)


class Viewport:
    """Records scroll requests issued by the navigation core."""

    def __init__(self) -> None:
        self.scroll_top = 0
        self.scroll_calls: List[tuple] = []

    def scroll_to(self, top: int = 0, behavior: Literal["auto", "smooth"] = "auto") -> None:
        self.scroll_top = top
        self.scroll_calls.append((top, behavior))
