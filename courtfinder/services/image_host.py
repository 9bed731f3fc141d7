"""Image hosting via an ImgBB-compatible upload API.

Venue forms submit photos as base64 data URIs. Those are pushed to the image
host and replaced by the hosted URL before anything is written to the
database. Uploads are best-effort: a failed upload yields ``None`` and the
caller drops that image rather than failing the save.
"""

import asyncio
import logging
import re

import httpx

from courtfinder.core.config import Settings

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = re.compile(r"^data:image/[\w.+-]+;base64,")


def is_data_uri(value: str) -> bool:
    return value.startswith("data:")


class ImageHost:
    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.settings = settings
        self._client = client or httpx.AsyncClient(timeout=settings.image_host_timeout_seconds)

    @property
    def enabled(self) -> bool:
        return bool(self.settings.image_host_api_key)

    async def upload(self, data_uri: str) -> str | None:
        """Upload one base64 image and return its hosted URL, or None on any failure."""
        if not self.enabled:
            logger.warning("Image host API key not configured; dropping inline image")
            return None

        payload = DATA_URI_PREFIX.sub("", data_uri)
        try:
            response = await self._client.post(
                self.settings.image_host_upload_url,
                params={"key": self.settings.image_host_api_key},
                data={"image": payload},
            )
            response.raise_for_status()
            url = (response.json().get("data") or {}).get("url")
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Image upload failed: %s", exc)
            return None

        if not url:
            logger.error("Image host response carried no URL")
        return url or None

    async def process_images(self, images: list[str]) -> list[str]:
        """Replace data URIs with hosted URLs, keeping order and dropping failures."""

        async def _one(image: str) -> str | None:
            if image and is_data_uri(image):
                return await self.upload(image)
            return image or None

        results = await asyncio.gather(*(_one(image) for image in images))
        return [url for url in results if url is not None]

    async def process_org_icon(self, value: str | None) -> str | None:
        """Upload an inline icon and cap the result to the column width."""
        if not value:
            return None
        if is_data_uri(value):
            value = await self.upload(value)
            if not value:
                return None
        return value[: self.settings.org_icon_max_length]

    async def aclose(self) -> None:
        await self._client.aclose()
