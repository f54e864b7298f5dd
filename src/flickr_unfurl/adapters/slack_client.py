"""Slack Web API client adapter."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from flickr_unfurl.errors import SlackApiError


class SlackClient(Protocol):
    """Interface for Slack Web API interactions."""

    async def unfurl(
        self, channel: str, ts: str, unfurls: dict[str, dict[str, object]]
    ) -> None:
        """Attach unfurls to a message."""


@dataclass
class HttpxSlackClient:
    """Slack client implemented with httpx."""

    token: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, token: str, base_url: str) -> "HttpxSlackClient":
        """Create a Slack client with a managed httpx session."""
        return cls(token=token, base_url=base_url, http_client=httpx.AsyncClient())

    async def unfurl(
        self, channel: str, ts: str, unfurls: dict[str, dict[str, object]]
    ) -> None:
        """Attach unfurls using Slack's chat.unfurl API."""
        response = await self.http_client.post(
            f"{self.base_url}/chat.unfurl",
            headers={"Authorization": f"Bearer {self.token}"},
            json={"channel": channel, "ts": ts, "unfurls": unfurls},
            timeout=10,
        )
        response.raise_for_status()
        payload = response.json()
        if not payload.get("ok"):
            raise SlackApiError(f"chat.unfurl failed: {payload.get('error')}")

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
