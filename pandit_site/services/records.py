"""Async client for the hosted record store (Supabase PostgREST).

Read paths are cached with a freshness window per table; every mutation
invalidates the cached entries of the table it touched.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from pandit_site.config import Settings
from pandit_site.models.blog import BlogPost
from pandit_site.models.metadata import PageMetadataRecord, SiteMetadataDefaults

logger = logging.getLogger(__name__)

_PAGE_FIELDS = (
    "id,slug,title,meta_title,meta_description,meta_keywords,"
    "og_title,og_description,og_image_url,canonical_url"
)
_SITE_DEFAULT_KEYS = {
    "site_title": "title",
    "site_description": "description",
    "site_keywords": "keywords",
}

CacheKey = Tuple[str, ...]


class RecordStoreError(RuntimeError):
    """Raised when the record store cannot be reached or returns bad data."""


class RecordStore:
    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._base_url = settings.supabase_url.rstrip("/")
        self._api_key = settings.supabase_anon_key.get_secret_value()
        self._timeout = settings.request_timeout_seconds
        self._ttls = {
            "pages": settings.page_cache_ttl_seconds,
            "blog_posts": settings.page_cache_ttl_seconds,
            "site_metadata": settings.defaults_cache_ttl_seconds,
        }
        self._transport = transport
        self._clock = clock
        self._cache: Dict[CacheKey, Tuple[float, Any]] = {}

        if not self._base_url or not self._api_key:
            logger.warning(
                "Missing Supabase configuration. Set PANDIT_SITE_SUPABASE_URL and "
                "PANDIT_SITE_SUPABASE_ANON_KEY"
            )

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def _cached(self, key: CacheKey) -> Optional[Any]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._cache[key]
            return None
        return value

    def _remember(self, key: CacheKey, value: Any) -> Any:
        ttl = self._ttls.get(key[0], 0)
        if ttl > 0:
            self._cache[key] = (self._clock() + ttl, value)
        return value

    def invalidate(self, table: str) -> None:
        """Drop every cached read of *table*."""
        for key in [k for k in self._cache if k[0] == table]:
            del self._cache[key]

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        if not self._base_url or not self._api_key:
            raise RecordStoreError("Record store is not configured.")

        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        if method in ("POST", "PATCH"):
            headers["Prefer"] = "return=representation"

        url = f"{self._base_url}/rest/v1/{table}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(method, url, params=params, json=json, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RecordStoreError(
                f"{method} {table} returned HTTP {exc.response.status_code}."
            ) from exc
        except httpx.HTTPError as exc:
            raise RecordStoreError(f"{method} {table} failed: {exc}") from exc

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RecordStoreError(f"{method} {table} returned invalid JSON.") from exc

    async def _select(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        rows = await self._request("GET", table, params=params)
        if not isinstance(rows, list):
            raise RecordStoreError(f"Expected a list of rows from {table}.")
        return rows

    # ------------------------------------------------------------------
    # Metadata reads
    # ------------------------------------------------------------------

    async def fetch_page_metadata(self, slug: str) -> Optional[PageMetadataRecord]:
        """Return the ``pages`` row for *slug*, or ``None`` when there is none."""
        key = ("pages", slug)
        cached = self._cached(key)
        if cached is not None:
            return cached or None

        rows = await self._select(
            "pages",
            {"select": _PAGE_FIELDS, "slug": f"eq.{slug}", "limit": "1"},
        )
        try:
            record = PageMetadataRecord.model_validate(rows[0]) if rows else None
        except ValueError as exc:
            raise RecordStoreError(f"Malformed pages row for {slug}: {exc}") from exc
        # Misses are cached as False so they are not refetched until expiry
        self._remember(key, record or False)
        return record

    async def fetch_site_defaults(self) -> SiteMetadataDefaults:
        key = ("site_metadata", "defaults")
        cached = self._cached(key)
        if cached is not None:
            return cached

        rows = await self._select(
            "site_metadata",
            {
                "select": "setting_key,setting_value",
                "setting_key": f"in.({','.join(_SITE_DEFAULT_KEYS)})",
            },
        )
        values = {}
        for row in rows:
            field = _SITE_DEFAULT_KEYS.get(row.get("setting_key"))
            if field and isinstance(row.get("setting_value"), str):
                values[field] = row["setting_value"]
        return self._remember(key, SiteMetadataDefaults(**values))

    async def fetch_blogs(self) -> List[BlogPost]:
        """Return published posts, newest first."""
        key = ("blog_posts", "published")
        cached = self._cached(key)
        if cached is not None:
            return cached

        rows = await self._select(
            "blog_posts",
            {
                "select": "*,blog_categories(name)",
                "status": "eq.published",
                "order": "published_at.desc",
            },
        )
        posts = []
        for row in rows:
            category = row.pop("blog_categories", None) or {}
            row["category_name"] = category.get("name")
            try:
                posts.append(BlogPost.model_validate(row))
            except ValueError as exc:
                logger.warning("Skipping malformed blog post %s: %s", row.get("slug"), exc)
        return self._remember(key, posts)

    # ------------------------------------------------------------------
    # Generic CRUD (admin)
    # ------------------------------------------------------------------

    async def list_records(self, table: str) -> List[Dict[str, Any]]:
        return await self._select(table, {"select": "*"})

    async def create_record(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]:
        rows = await self._request("POST", table, json=data)
        self.invalidate(table)
        logger.info("Record created", extra={"table": table})
        return rows[0] if rows else {}

    async def update_record(self, table: str, record_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        rows = await self._request("PATCH", table, params={"id": f"eq.{record_id}"}, json=data)
        self.invalidate(table)
        logger.info("Record updated", extra={"table": table, "record_id": record_id})
        return rows[0] if rows else None

    async def delete_record(self, table: str, record_id: str) -> None:
        await self._request("DELETE", table, params={"id": f"eq.{record_id}"})
        self.invalidate(table)
        logger.info("Record deleted", extra={"table": table, "record_id": record_id})
