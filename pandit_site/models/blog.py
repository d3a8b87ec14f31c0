from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class BlogPost(BaseModel):
    """Published row of ``blog_posts`` with its category name flattened in."""

    id: str
    slug: str
    title: str
    excerpt: str = ""
    content: str = ""  # rich-text HTML as saved by the admin editor
    category_name: Optional[str] = None
    featured_image_url: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: List[str] = Field(default_factory=list)
    canonical_url: Optional[str] = None
    reading_time_minutes: Optional[int] = None
    published_at: Optional[str] = None
    status: str = "published"

    @field_validator("meta_keywords", mode="before")
    @classmethod
    def _keywords_as_list(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value
