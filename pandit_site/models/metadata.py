from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class PageMetadataRecord(BaseModel):
    """Per-page SEO override row from the ``pages`` table."""

    slug: str
    title: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: List[str] = Field(default_factory=list)
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image_url: Optional[str] = None
    canonical_url: Optional[str] = None

    @field_validator("meta_keywords", mode="before")
    @classmethod
    def _keywords_as_list(cls, value: Any) -> List[str]:
        # Rows written by older admin builds store a comma-separated string.
        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class SiteMetadataDefaults(BaseModel):
    """Site-wide fallbacks from the ``site_metadata`` table."""

    title: str = ""
    description: str = ""
    keywords: str = ""


class EffectiveMetadata(BaseModel):
    """Fully resolved head metadata; every field is a concrete string."""

    title: str
    description: str
    keywords: str
    robots: str
    author: str
    og_title: str
    og_description: str
    og_image: str = ""
    """Empty means the existing ``og:image`` tag is left untouched."""
    canonical_url: str
    structured_data: Dict[str, Any] = Field(default_factory=dict)
