"""Profile picture storage.

Uploads are best-effort: when storage is unreachable the caller keeps the
user's previous picture and carries on.
"""

import logging
import os
from typing import Optional

import httpx

from fitgoals.core.config import settings

logger = logging.getLogger(__name__)


class PictureStore:
    def __init__(
        self,
        uploads_dir: str,
        storage_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.uploads_dir = uploads_dir
        self.storage_url = storage_url.rstrip("/") if storage_url else None
        self.timeout = timeout
        self._transport = transport

    def _put_remote(self, key: str, data: bytes, content_type: str) -> str:
        url = f"{self.storage_url}/{key}"
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            r = client.put(url, content=data, headers={"Content-Type": content_type})
            r.raise_for_status()
            # Storage may answer with a public download URL
            try:
                body = r.json()
            except ValueError:
                body = {}
        return body.get("url") or url

    def _write_local(self, key: str, data: bytes) -> str:
        save_path = os.path.join(self.uploads_dir, key)
        os.makedirs(os.path.dirname(save_path), exist_ok=True)
        with open(save_path, "wb") as out:
            out.write(data)
        return "/" + "/".join(["uploads", key])

    def save(self, user_id: int, filename: str, data: bytes, content_type: str) -> Optional[str]:
        """Store the picture and return its URL, or None if the upload failed."""
        ext = os.path.splitext(filename)[1].lower()
        key = f"profile_pictures/{user_id}/avatar{ext}"
        try:
            if self.storage_url:
                return self._put_remote(key, data, content_type)
            return self._write_local(key, data)
        except (httpx.HTTPError, OSError):
            logger.warning("Profile picture upload failed for user %s", user_id, exc_info=True)
            return None


def get_picture_store() -> PictureStore:
    return PictureStore(
        uploads_dir=settings.uploads_dir,
        storage_url=settings.storage_url,
        timeout=settings.storage_timeout_seconds,
    )
