"""Server-rendered page routes.

Each route resolves its own path, fetches its own data and injects head
metadata before responding. These routes never read or write a navigation
store; they share the path parser, resolver, renderer and injector with the
client session so both produce the same head for the same path.
"""

import logging
from typing import List

from bs4 import BeautifulSoup
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from pandit_site.config import Settings, get_settings
from pandit_site.dependencies import get_record_store
from pandit_site.models.blog import BlogPost
from pandit_site.models.metadata import EffectiveMetadata
from pandit_site.models.navigation import NavigationState
from pandit_site.models.rendered_page import RenderedPage
from pandit_site.rate_limit import limiter
from pandit_site.services.injector import apply_metadata, new_document
from pandit_site.services.metadata_sync import load_effective_metadata
from pandit_site.services.records import RecordStore, RecordStoreError
from pandit_site.services.renderer import render_page
from pandit_site.services.url_sync import parse_path

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])

_PAGE_NOT_FOUND = "<h1>Page Not Found</h1><p>The page you're looking for doesn't exist.</p><a href=\"/\">Home</a>"


@router.get("/", response_class=HTMLResponse, summary="Home page")
@limiter.limit("120/minute")
async def home_page(
    request: Request,
    records: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    return await _render_path("/", records, settings)


@router.get("/blog/{slug}", response_class=HTMLResponse, summary="Blog article")
@limiter.limit("120/minute")
async def blog_article(
    request: Request,
    slug: str,
    records: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    return await _render_path(f"/blog/{slug}", records, settings)


@router.get("/{page}", response_class=HTMLResponse, summary="Site page")
@limiter.limit("120/minute")
async def site_page(
    request: Request,
    page: str,
    records: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    return await _render_path(f"/{page}", records, settings)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

async def _render_path(path: str, records: RecordStore, settings: Settings) -> HTMLResponse:
    update = parse_path(path)
    if update is None:
        logger.info("Unknown page requested", extra={"path": path})
        document = new_document()
        document.title.string = "Page Not Found"
        _fill_body(document, _PAGE_NOT_FOUND)
        return HTMLResponse(str(document), status_code=404)

    state = NavigationState().model_copy(update=update)
    blogs = await _fetch_blogs(records) if state.current_page in ("blog", "blog-detail") else None

    rendered = render_page(state, blogs)
    metadata = await load_effective_metadata(
        records,
        state.current_page,
        state.current_blog_id,
        site_url=settings.site_url,
        blogs=blogs,
    )
    status_code = 404 if rendered.not_found else 200
    return HTMLResponse(_build_document(rendered, metadata), status_code=status_code)


async def _fetch_blogs(records: RecordStore) -> List[BlogPost]:
    try:
        return await records.fetch_blogs()
    except RecordStoreError as exc:
        logger.error("Error fetching blog posts: %s", exc)
        raise HTTPException(status_code=502, detail="Blog posts are temporarily unavailable.")


def _fill_body(document: BeautifulSoup, html: str) -> None:
    root = document.find(id="root")
    root.append(BeautifulSoup(html, "html.parser"))


def _build_document(rendered: RenderedPage, metadata: EffectiveMetadata) -> str:
    document = new_document()
    root = document.find(id="root")
    root["data-page"] = rendered.page
    heading = document.new_tag("h1")
    heading.string = rendered.heading
    root.append(heading)
    if rendered.body_html:
        _fill_body(document, rendered.body_html)
    apply_metadata(document, metadata)
    return str(document)
