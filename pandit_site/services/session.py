"""Client session: one browsing context with its navigation collaborators wired up."""

import logging
from typing import List, Optional, Union

from pandit_site.models.blog import BlogPost
from pandit_site.models.navigation import NavigationRequest, NavigationState
from pandit_site.models.rendered_page import RenderedPage
from pandit_site.services.browser import BrowserHistory, Viewport
from pandit_site.services.dispatcher import Navigator
from pandit_site.services.injector import new_document
from pandit_site.services.metadata_sync import MetadataSync
from pandit_site.services.records import RecordStore
from pandit_site.services.renderer import render_page
from pandit_site.services.storage import KeyValueStorage, MemoryStorage
from pandit_site.services.store import NavigationStore
from pandit_site.services.url_sync import UrlSynchronizer

logger = logging.getLogger(__name__)


class ClientSession:
    """Holds the store, history, viewport and document of a single visitor.

    Without a record store the session still navigates and keeps the URL in
    sync but never touches the document head.
    """

    def __init__(
        self,
        records: Optional[RecordStore] = None,
        storage: Optional[KeyValueStorage] = None,
        initial_path: str = "/",
        site_url: str = "",
    ) -> None:
        self.storage = storage if storage is not None else MemoryStorage()
        self.store = NavigationStore(self.storage)
        self.history = BrowserHistory(initial_path)
        self.viewport = Viewport()
        self.document = new_document()
        self.navigator = Navigator(self.store, self.viewport)
        self.url_sync = UrlSynchronizer(self.store, self.history)
        self.metadata: Optional[MetadataSync] = None
        if records is not None:
            self.metadata = MetadataSync(self.store, records, self.document, site_url=site_url)

    @property
    def state(self) -> NavigationState:
        return self.store.get()

    def mount(self) -> None:
        """Apply the initial URL and start both sync paths.

        With a record store this must run inside an event loop, since the
        initial metadata refresh is scheduled as a task.
        """
        self.url_sync.start()
        if self.metadata is not None:
            self.metadata.start()
            self.metadata.schedule()
        logger.debug("Session mounted", extra={"path": self.history.path})

    def unmount(self) -> None:
        self.url_sync.stop()
        if self.metadata is not None:
            self.metadata.stop()

    def navigate(self, request: Union[str, NavigationRequest]) -> None:
        self.navigator.navigate(request)

    def render(self, blogs: Optional[List[BlogPost]] = None) -> RenderedPage:
        return render_page(self.store.get(), blogs)
