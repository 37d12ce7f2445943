"""
Media resolvers: stored file name -> public URL.

SupabaseMediaResolver asks Supabase storage for the bucket's public URL.
StaticMediaResolver joins a fixed base URL, bucket, and quoted path (CDN or
local file server). NullMediaResolver resolves nothing. Empty paths never
resolve.
"""

import logging
from typing import Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)


class SupabaseMediaResolver:
    """Public URLs from a Supabase storage bucket."""

    def __init__(self, url: str, key: str):
        try:
            from supabase import create_client
        except ImportError:
            raise ImportError(
                "supabase is required for SupabaseMediaResolver. pip install supabase"
            )
        if not url or not key:
            raise ValueError("SupabaseMediaResolver requires SUPABASE_URL and SUPABASE_KEY")
        self._client = create_client(url, key)

    async def get_public_url(self, bucket: str, path: str) -> Optional[str]:
        if not path:
            return None
        url = self._client.storage.from_(bucket).get_public_url(path)
        return url or None


class StaticMediaResolver:
    """{base_url}/{bucket}/{path}, with the path percent-encoded."""

    def __init__(self, base_url: str):
        if not base_url or not base_url.strip():
            raise ValueError("StaticMediaResolver requires a base URL")
        self._base_url = base_url.strip().rstrip("/")

    async def get_public_url(self, bucket: str, path: str) -> Optional[str]:
        if not path:
            return None
        return f"{self._base_url}/{quote(bucket, safe='')}/{quote(path.lstrip('/'))}"


class NullMediaResolver:
    """No storage configured: every reference is a resolution miss."""

    async def get_public_url(self, bucket: str, path: str) -> Optional[str]:
        return None
