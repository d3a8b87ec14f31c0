from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel


class AdminTable(str, Enum):
    services = "services"
    books = "books"
    testimonials = "testimonials"
    blog_posts = "blog_posts"
    pages = "pages"
    site_metadata = "site_metadata"


# Tables whose rows are addressed by a URL slug
SLUGGED_TABLES = frozenset({AdminTable.services, AdminTable.books, AdminTable.blog_posts, AdminTable.pages})


class RecordListResponse(BaseModel):
    table: AdminTable
    count: int
    records: List[Dict[str, Any]]
