"""Navigation state store.

Holds the current :class:`~pandit_site.models.navigation.NavigationState`,
persists it to durable storage on every write and notifies subscribers of
changes. Instances are passed around explicitly; there is no module-level
store.
"""

import json
import logging
from typing import Callable, Dict, List

from pandit_site.models.navigation import NavigationState
from pandit_site.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

Listener = Callable[[NavigationState, NavigationState], None]

# Field name -> durable storage key
STORAGE_KEYS: Dict[str, str] = {
    "current_page": "currentPage",
    "current_category": "currentCategory",
    "current_blog_id": "currentBlogId",
}


class NavigationStore:
    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        self._state = self._restore()
        self._listeners: List[Listener] = []

    def _restore(self) -> NavigationState:
        defaults = NavigationState()
        values = {}
        for field, key in STORAGE_KEYS.items():
            raw = self._storage.get_item(key)
            if raw is None:
                continue
            try:
                value = json.loads(raw)
            except ValueError as exc:
                logger.error("Error loading %s from storage: %s", key, exc)
                continue
            if not isinstance(value, str):
                logger.error("Ignoring non-string %s in storage: %r", key, value)
                continue
            values[field] = value
        return defaults.model_copy(update=values)

    def _persist(self) -> None:
        for field, key in STORAGE_KEYS.items():
            self._storage.set_item(key, json.dumps(getattr(self._state, field)))

    def get(self) -> NavigationState:
        return self._state

    def set(self, **partial: str) -> NavigationState:
        """Merge *partial* into the state, persist it and notify listeners.

        Values are stored without validation. Listeners only run when the
        state actually changed; persistence happens on every call.
        """
        unknown = set(partial) - set(STORAGE_KEYS)
        if unknown:
            raise TypeError(f"Unknown navigation state fields: {sorted(unknown)}")

        previous = self._state
        self._state = previous.model_copy(update=partial)
        self._persist()

        if self._state != previous:
            # Copy so listeners may unsubscribe while being notified
            for listener in list(self._listeners):
                listener(self._state, previous)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
