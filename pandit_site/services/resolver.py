"""Page metadata resolution.

:func:`resolve` coalesces each field from the per-page record, then the
site-wide defaults (title, description and keywords only), then a hardcoded
literal. It is pure and never raises; both the client session and the
server-rendered routes call it.
"""

from typing import Any, Dict, Optional

from pandit_site.models.blog import BlogPost
from pandit_site.models.metadata import (
    EffectiveMetadata,
    PageMetadataRecord,
    SiteMetadataDefaults,
)
from pandit_site.services.structured_data import PERSON_NAME, page_schema
from pandit_site.services.url_sync import canonical_path

FALLBACK_TITLE = "Pandit Rajesh Joshi - Hindu Priest & Spiritual Guide"
FALLBACK_DESCRIPTION = "Professional Hindu priest services"
FALLBACK_KEYWORDS = "hindu priest, pandit, spiritual guide"
ROBOTS = "index, follow"
AUTHOR = PERSON_NAME

BLOG_TITLE_SUFFIX = " | Spiritual Wisdom Blog"


def _first(*values: Optional[str]) -> str:
    for value in values:
        if value and value.strip():
            return value
    return ""


def resolve(
    page_id: str,
    site_defaults: Optional[SiteMetadataDefaults],
    page_record: Optional[PageMetadataRecord] = None,
    *,
    blog_id: str = "",
    site_url: str = "",
    structured_data: Optional[Dict[str, Any]] = None,
) -> EffectiveMetadata:
    record = page_record or PageMetadataRecord(slug=page_id)
    defaults = site_defaults or SiteMetadataDefaults()

    title = _first(record.meta_title, record.title, defaults.title, FALLBACK_TITLE)
    description = _first(record.meta_description, defaults.description, FALLBACK_DESCRIPTION)
    keywords = _first(", ".join(record.meta_keywords), defaults.keywords, FALLBACK_KEYWORDS)

    canonical = record.canonical_url or (
        site_url.rstrip("/") + canonical_path(page_id, blog_id)
    )

    return EffectiveMetadata(
        title=title,
        description=description,
        keywords=keywords,
        robots=ROBOTS,
        author=AUTHOR,
        og_title=_first(record.og_title, title),
        og_description=_first(record.og_description, description),
        og_image=_first(record.og_image_url),
        canonical_url=canonical,
        structured_data=(
            structured_data
            if structured_data is not None
            else page_schema(page_id, canonical, record.title, site_url)
        ),
    )


def blog_page_record(post: BlogPost) -> PageMetadataRecord:
    """Express a blog post's SEO fields as a per-page override record."""
    description = _first(post.meta_description, post.excerpt)
    return PageMetadataRecord(
        slug=post.slug,
        title=post.title,
        meta_title=_first(post.meta_title, f"{post.title}{BLOG_TITLE_SUFFIX}"),
        meta_description=description or None,
        meta_keywords=post.meta_keywords,
        og_title=_first(post.meta_title, post.title),
        og_description=description or None,
        og_image_url=post.featured_image_url,
        canonical_url=post.canonical_url,
    )
