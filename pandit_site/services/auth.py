"""Owner capability check backed by Supabase auth."""

import logging
from typing import Optional

import httpx

from pandit_site.config import Settings

logger = logging.getLogger(__name__)

OWNER_ROLE = "owner"


class OwnerOracle:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._base_url = settings.supabase_url.rstrip("/")
        self._api_key = settings.supabase_anon_key.get_secret_value()
        self._timeout = settings.request_timeout_seconds
        self._transport = transport

    async def is_owner(self, access_token: Optional[str]) -> bool:
        """Return True when *access_token* belongs to a user with the owner role.

        Any failure to verify the token counts as "not owner".
        """
        if not access_token or not self._base_url:
            return False

        headers = {"apikey": self._api_key, "Authorization": f"Bearer {access_token}"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(f"{self._base_url}/auth/v1/user", headers=headers)
                if response.status_code in (401, 403):
                    return False
                response.raise_for_status()
                user = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Owner check failed: %s", exc)
            return False

        app_metadata = user.get("app_metadata") if isinstance(user, dict) else None
        return isinstance(app_metadata, dict) and app_metadata.get("role") == OWNER_ROLE
