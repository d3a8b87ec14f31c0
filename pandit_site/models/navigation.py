from typing import Literal, Optional, Union, get_args

from pydantic import BaseModel

PageId = Literal[
    "home",
    "services",
    "about",
    "why-choose-us",
    "gallery",
    "blog",
    "blog-detail",
    "books",
    "charity",
    "testimonials",
    "contact",
    "admin",
    "terms",
    "privacy",
    "dakshina",
]

KNOWN_PAGES: tuple = get_args(PageId)

DEFAULT_PAGE = "home"
DEFAULT_CATEGORY = "all"


class NavigationState(BaseModel):
    """Logical page selection persisted across reloads.

    ``current_page`` is typed as a plain string: ids outside :data:`PageId`
    are stored as-is and resolved to the home page when rendered.
    """

    current_page: str = DEFAULT_PAGE
    current_category: str = DEFAULT_CATEGORY
    """Services filter; only meaningful while ``current_page == "services"``."""
    current_blog_id: str = ""
    """Slug of the viewed post; only meaningful on ``blog-detail``. Not cleared on exit."""


class NavigateToPage(BaseModel):
    kind: Literal["page"] = "page"
    page: str


class NavigateToPageWithContext(BaseModel):
    kind: Literal["page_with_context"] = "page_with_context"
    page: str
    category: Optional[str] = None
    blog_id: Optional[str] = None


NavigationRequest = Union[NavigateToPage, NavigateToPageWithContext]

