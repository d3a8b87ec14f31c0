"""Navigation dispatcher: the single entry point for page changes."""

import logging
from typing import Union

from pandit_site.models.navigation import (
    DEFAULT_CATEGORY,
    NavigateToPage,
    NavigateToPageWithContext,
    NavigationRequest,
)
from pandit_site.services.browser import Viewport
from pandit_site.services.store import NavigationStore

logger = logging.getLogger(__name__)


def as_request(request: Union[str, NavigationRequest]) -> NavigationRequest:
    """Normalise a bare page id into a :class:`NavigateToPage`."""
    if isinstance(request, str):
        return NavigateToPage(page=request)
    return request


class Navigator:
    def __init__(self, store: NavigationStore, viewport: Viewport) -> None:
        self._store = store
        self._viewport = viewport

    def navigate(self, request: Union[str, NavigationRequest]) -> None:
        """Apply *request* to the store and reset the scroll position.

        A bare page request resets the services category when leaving
        services. A request with context only touches the fields it carries,
        so an existing category survives.
        """
        request = as_request(request)

        if isinstance(request, NavigateToPageWithContext):
            update = {"current_page": request.page}
            if request.category is not None:
                update["current_category"] = request.category
            if request.blog_id is not None:
                update["current_blog_id"] = request.blog_id
        else:
            update = {"current_page": request.page}
            if request.page != "services":
                update["current_category"] = DEFAULT_CATEGORY

        logger.info("Navigate", extra={"page": request.page, "kind": request.kind})
        self._store.set(**update)
        self._viewport.scroll_to(top=0, behavior="smooth")
