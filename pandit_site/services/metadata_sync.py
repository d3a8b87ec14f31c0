"""Page-keyed metadata effect.

Whenever the page or blog id in the navigation store changes, metadata for
the new state is fetched and injected into the document head. Each refresh
captures a generation number; a response that arrives after a newer
navigation is discarded, so a slow fetch can never overwrite the metadata of
the page the user has moved on to. While a fetch is pending the previously
applied metadata stays in place.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Set

from bs4 import BeautifulSoup

from pandit_site.models.blog import BlogPost
from pandit_site.models.metadata import EffectiveMetadata
from pandit_site.models.navigation import NavigationState
from pandit_site.services.injector import apply_metadata
from pandit_site.services.records import RecordStore, RecordStoreError
from pandit_site.services.renderer import find_blog
from pandit_site.services.resolver import blog_page_record, resolve
from pandit_site.services.store import NavigationStore

logger = logging.getLogger(__name__)


async def load_effective_metadata(
    records: RecordStore,
    page_id: str,
    blog_id: str = "",
    site_url: str = "",
    blogs: Optional[List[BlogPost]] = None,
) -> EffectiveMetadata:
    """Fetch the inputs for *page_id* and resolve them.

    Record-store failures are logged and treated as missing data, so this
    always returns usable metadata.
    """
    try:
        site_defaults = await records.fetch_site_defaults()
    except RecordStoreError as exc:
        logger.warning("Error fetching site metadata defaults: %s", exc)
        site_defaults = None

    record = None
    try:
        if page_id == "blog-detail":
            if blogs is None:
                blogs = await records.fetch_blogs()
            post = find_blog(blogs, blog_id)
            if post is not None:
                record = blog_page_record(post)
        else:
            record = await records.fetch_page_metadata(page_id)
    except RecordStoreError as exc:
        logger.warning("Error fetching metadata for %s: %s", page_id, exc)

    return resolve(page_id, site_defaults, record, blog_id=blog_id, site_url=site_url)


class MetadataSync:
    def __init__(
        self,
        store: NavigationStore,
        records: RecordStore,
        document: BeautifulSoup,
        site_url: str = "",
    ) -> None:
        self._store = store
        self._records = records
        self._document = document
        self._site_url = site_url
        self._generation = 0
        self._tasks: Set[asyncio.Task] = set()
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def generation(self) -> int:
        return self._generation

    def _on_state_change(self, state: NavigationState, previous: NavigationState) -> None:
        if (state.current_page, state.current_blog_id) != (
            previous.current_page,
            previous.current_blog_id,
        ):
            self.schedule()

    def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_state_change)

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def schedule(self) -> asyncio.Task:
        """Start a refresh for the current state on the running event loop."""
        self._generation += 1
        task = asyncio.get_running_loop().create_task(self.refresh(self._generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def refresh(self, generation: Optional[int] = None) -> bool:
        """Resolve and apply metadata; return False if the result was stale.

        Unexpected errors are logged and leave the previous head in place.
        """
        if generation is None:
            self._generation += 1
            generation = self._generation

        state = self._store.get()
        try:
            metadata = await load_effective_metadata(
                self._records,
                state.current_page,
                state.current_blog_id,
                site_url=self._site_url,
            )
        except Exception:
            logger.exception("Unexpected error refreshing metadata for %s", state.current_page)
            return False

        if generation != self._generation:
            logger.info(
                "Discarding stale metadata",
                extra={"page": state.current_page, "generation": generation},
            )
            return False

        apply_metadata(self._document, metadata)
        return True

    async def wait_idle(self) -> None:
        """Wait for every in-flight refresh to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
