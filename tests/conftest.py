"""Shared fixtures: an in-memory stand-in for the hosted record store."""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from pandit_site.models.blog import BlogPost
from pandit_site.models.metadata import PageMetadataRecord, SiteMetadataDefaults
from pandit_site.services.records import RecordStoreError


class FakeRecords:
    """Duck-typed replacement for :class:`~pandit_site.services.records.RecordStore`.

    ``gates`` maps a page slug to an :class:`asyncio.Event` that the page
    fetch waits on, which lets tests hold a response in flight.
    """

    def __init__(
        self,
        pages: Optional[Dict[str, PageMetadataRecord]] = None,
        defaults: Optional[SiteMetadataDefaults] = None,
        blogs: Optional[List[BlogPost]] = None,
    ) -> None:
        self.pages = pages or {}
        self.defaults = defaults or SiteMetadataDefaults()
        self.blogs = blogs or []
        self.gates: Dict[str, asyncio.Event] = {}
        self.fail_pages = False
        self.fail_defaults = False
        self.fail_blogs = False
        self.fail_writes = False
        self.page_calls: List[str] = []
        self.blog_calls = 0
        self.rows: Dict[str, List[Dict[str, Any]]] = {}

    async def fetch_site_defaults(self) -> SiteMetadataDefaults:
        if self.fail_defaults:
            raise RecordStoreError("site_metadata unavailable")
        return self.defaults

    async def fetch_page_metadata(self, slug: str) -> Optional[PageMetadataRecord]:
        self.page_calls.append(slug)
        gate = self.gates.get(slug)
        if gate is not None:
            await gate.wait()
        if self.fail_pages:
            raise RecordStoreError("pages unavailable")
        return self.pages.get(slug)

    async def fetch_blogs(self) -> List[BlogPost]:
        self.blog_calls += 1
        if self.fail_blogs:
            raise RecordStoreError("blog_posts unavailable")
        return list(self.blogs)

    async def list_records(self, table: str) -> List[Dict[str, Any]]:
        if self.fail_writes:
            raise RecordStoreError(f"{table} unavailable")
        return list(self.rows.get(table, []))

    async def create_record(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]:
        if self.fail_writes:
            raise RecordStoreError(f"{table} unavailable")
        row = {"id": str(len(self.rows.get(table, [])) + 1), **data}
        self.rows.setdefault(table, []).append(row)
        return row

    async def update_record(self, table: str, record_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if self.fail_writes:
            raise RecordStoreError(f"{table} unavailable")
        for row in self.rows.get(table, []):
            if row["id"] == record_id:
                row.update(data)
                return row
        return None

    async def delete_record(self, table: str, record_id: str) -> None:
        if self.fail_writes:
            raise RecordStoreError(f"{table} unavailable")
        self.rows[table] = [r for r in self.rows.get(table, []) if r["id"] != record_id]


SAMPLE_POST = BlogPost(
    id="1",
    slug="significance-pooja",
    title="The Significance of Pooja",
    excerpt="Why daily worship matters.",
    content="<p>Pooja connects us with the divine.</p><script>alert(1)</script>",
    category_name="Rituals",
    featured_image_url="https://cdn.example.com/pooja.jpg",
    reading_time_minutes=5,
)


@pytest.fixture
def fake_records() -> FakeRecords:
    return FakeRecords(
        pages={
            "home": PageMetadataRecord(
                slug="home",
                title="Home",
                meta_title="Hindu Pooja Ireland",
                meta_description="Authentic Hindu Pooja in Ireland.",
                meta_keywords=["Hindu Pooja", "Hindu Pandit"],
            ),
            "about": PageMetadataRecord(slug="about", meta_title="About Pandit Rajesh Joshi"),
            "contact": PageMetadataRecord(slug="contact", meta_title="Contact Hindu Pandit"),
        },
        defaults=SiteMetadataDefaults(
            title="Default Title",
            description="Default description",
            keywords="default, keywords",
        ),
        blogs=[SAMPLE_POST],
    )
