"""Page selection and body rendering.

Each page renders a heading and a short body. Unknown page ids fall back
to the home page; a blog-detail id missing from the post list renders the
not-found state.
"""

from html import escape
from typing import Dict, List, Optional

from pandit_site.models.blog import BlogPost
from pandit_site.models.navigation import NavigationState
from pandit_site.models.rendered_page import RenderedPage
from pandit_site.services.sanitizer import sanitize
from pandit_site.services.url_sync import canonical_path

PAGE_HEADINGS: Dict[str, str] = {
    "home": "Authentic Hindu Pooja & Sanatan Dharma Ceremonies",
    "services": "Pooja Services",
    "about": "About Pandit Rajesh Joshi",
    "why-choose-us": "Why Choose Us",
    "gallery": "Gallery",
    "blog": "Spiritual Wisdom Blog",
    "books": "Books",
    "charity": "Charity",
    "testimonials": "Testimonials",
    "contact": "Contact",
    "admin": "Admin Dashboard",
    "terms": "Terms of Service",
    "privacy": "Privacy Policy",
    "dakshina": "Dakshina",
}

NOT_FOUND_HEADING = "Article Not Found"
NOT_FOUND_MESSAGE = "The blog article you're looking for doesn't exist."


def select_page(page_id: str) -> str:
    """Map *page_id* to the page that will be rendered; unknown ids fall back to home."""
    if page_id == "blog-detail" or page_id in PAGE_HEADINGS:
        return page_id
    return "home"


def find_blog(blogs: Optional[List[BlogPost]], slug: str) -> Optional[BlogPost]:
    for post in blogs or []:
        if post.slug == slug:
            return post
    return None


def _render_blog_list(blogs: List[BlogPost]) -> str:
    if not blogs:
        return "<p>No articles have been published yet.</p>"
    items = []
    for post in blogs:
        href = canonical_path("blog-detail", post.slug)
        items.append(
            f'<li><a href="{escape(href)}">{escape(post.title)}</a>'
            f"<p>{escape(post.excerpt)}</p></li>"
        )
    return f'<ul class="blog-list">{"".join(items)}</ul>'


def _render_blog_post(post: BlogPost) -> str:
    meta = [escape(post.category_name or "Article")]
    if post.reading_time_minutes:
        meta.append(f"{post.reading_time_minutes} min read")
    return (
        f'<p class="blog-meta">{" · ".join(meta)}</p>'
        f'<article class="blog-content">{sanitize(post.content)}</article>'
        f'<a href="/blog">Back to Blog</a>'
    )


def _render_not_found() -> RenderedPage:
    return RenderedPage(
        page="blog-detail",
        heading=NOT_FOUND_HEADING,
        body_html=f'<p>{escape(NOT_FOUND_MESSAGE)}</p><a href="/blog">Back to Blog</a>',
        not_found=True,
    )


def render_page(state: NavigationState, blogs: Optional[List[BlogPost]] = None) -> RenderedPage:
    page = select_page(state.current_page)

    if page == "blog-detail":
        post = find_blog(blogs, state.current_blog_id)
        if post is None:
            return _render_not_found()
        return RenderedPage(page=page, heading=post.title, body_html=_render_blog_post(post))

    if page == "blog":
        return RenderedPage(page=page, heading=PAGE_HEADINGS[page], body_html=_render_blog_list(blogs or []))

    body = ""
    if page == "services" and state.current_category != "all":
        body = f'<p class="category-filter">Category: {escape(state.current_category)}</p>'
    return RenderedPage(page=page, heading=PAGE_HEADINGS[page], body_html=body)
