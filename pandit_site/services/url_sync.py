"""Bidirectional bridge between the navigation store and the address bar.

Outbound (state → URL) runs on store changes and pushes a history entry only
when the computed path differs from the current browser path. Inbound
(URL → state) runs on mount and on genuine ``popstate`` events. The two
directions never trigger each other: ``push_state`` emits no ``popstate``,
and outbound is suppressed while an inbound write is being applied.
"""

import logging
from typing import Callable, Dict, Optional

from pandit_site.models.navigation import KNOWN_PAGES, NavigationState
from pandit_site.services.browser import BrowserHistory
from pandit_site.services.store import NavigationStore

logger = logging.getLogger(__name__)

BLOG_PREFIX = "/blog/"

# Slugs addressable as /{slug}; blog-detail is only reachable through /blog/{slug}
_PATH_SLUGS = frozenset(p for p in KNOWN_PAGES if p != "blog-detail")


def canonical_path(page: str, blog_id: str = "") -> str:
    if page == "home":
        return "/"
    if page == "blog-detail" and blog_id:
        return f"{BLOG_PREFIX}{blog_id}"
    return f"/{page}"


def path_for_state(state: NavigationState) -> str:
    return canonical_path(state.current_page, state.current_blog_id)


def parse_path(path: str) -> Optional[Dict[str, str]]:
    """Return the store update *path* maps to, or ``None`` if unrecognised."""
    if path in ("", "/", "/home"):
        return {"current_page": "home"}
    if path == "/admin":
        return {"current_page": "admin"}
    if path.startswith(BLOG_PREFIX):
        rest = path[len(BLOG_PREFIX) :]
        if rest:
            return {"current_page": "blog-detail", "current_blog_id": rest}
    slug = path[1:] if path.startswith("/") else path
    if slug in _PATH_SLUGS:
        return {"current_page": slug}
    return None


class UrlSynchronizer:
    def __init__(self, store: NavigationStore, history: BrowserHistory) -> None:
        self._store = store
        self._history = history
        self._applying_inbound = False
        self._unsubscribe: Optional[Callable[[], None]] = None

    def sync_outbound(self) -> bool:
        """Push the path for the current state; return True if an entry was added."""
        target = path_for_state(self._store.get())
        if target == self._history.path:
            return False
        self._history.push_state(target)
        logger.debug("History entry pushed", extra={"path": target})
        return True

    def sync_inbound(self) -> bool:
        """Apply the current browser path to the store; return True if recognised."""
        update = parse_path(self._history.path)
        if update is None:
            logger.debug("Ignoring unrecognised path", extra={"path": self._history.path})
            return False
        self._applying_inbound = True
        try:
            self._store.set(**update)
        finally:
            self._applying_inbound = False
        return True

    def _on_state_change(self, state: NavigationState, previous: NavigationState) -> None:
        if self._applying_inbound:
            return
        if (state.current_page, state.current_blog_id) == (
            previous.current_page,
            previous.current_blog_id,
        ):
            return
        self.sync_outbound()

    def _on_popstate(self, path: str) -> None:
        self.sync_inbound()

    def start(self) -> None:
        if self._unsubscribe is not None:
            return
        self.sync_inbound()
        self._unsubscribe = self._store.subscribe(self._on_state_change)
        self._history.add_popstate_listener(self._on_popstate)

    def stop(self) -> None:
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None
        self._history.remove_popstate_listener(self._on_popstate)
