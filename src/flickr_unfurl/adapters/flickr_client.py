"""Flickr REST API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from flickr_unfurl.errors import FlickrApiError


class FlickrClient(Protocol):
    """Interface for Flickr API interactions."""

    async def get_info(self, photo_id: str) -> dict[str, object]:
        """Fetch ``flickr.photos.getInfo`` data for a photo."""

    async def get_sizes(self, photo_id: str) -> dict[str, object]:
        """Fetch ``flickr.photos.getSizes`` data for a photo."""

    async def get_all_contexts(self, photo_id: str) -> dict[str, object]:
        """Fetch ``flickr.photos.getAllContexts`` data for a photo."""


@dataclass
class HttpxFlickrClient(FlickrClient):
    """HTTPX-backed Flickr client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFlickrClient":
        """Create a Flickr client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def get_info(self, photo_id: str) -> dict[str, object]:
        """Fetch photo info."""
        return await self._call("flickr.photos.getInfo", photo_id)

    async def get_sizes(self, photo_id: str) -> dict[str, object]:
        """Fetch the available image sizes."""
        return await self._call("flickr.photos.getSizes", photo_id)

    async def get_all_contexts(self, photo_id: str) -> dict[str, object]:
        """Fetch the albums and groups containing the photo."""
        return await self._call("flickr.photos.getAllContexts", photo_id)

    async def _call(self, method: str, photo_id: str) -> dict[str, object]:
        response = await self.http_client.get(
            self.base_url,
            params={
                "method": method,
                "api_key": self.api_key,
                "photo_id": photo_id,
                "format": "json",
                "nojsoncallback": 1,
            },
            timeout=10,
        )
        response.raise_for_status()
        payload = response.json()
        if payload.get("stat") != "ok":
            raise FlickrApiError(
                f"{method} failed: {payload.get('message', 'unknown error')}"
            )
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
