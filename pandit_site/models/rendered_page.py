from pydantic import BaseModel


class RenderedPage(BaseModel):
    page: str
    """Page id actually rendered after the fallback switch."""
    heading: str
    body_html: str
    not_found: bool = False
