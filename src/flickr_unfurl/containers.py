"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from flickr_unfurl.adapters.flickr_client import FlickrClient, HttpxFlickrClient
from flickr_unfurl.adapters.slack_client import HttpxSlackClient, SlackClient
from flickr_unfurl.config import Settings
from flickr_unfurl.services.interactions import InteractionService
from flickr_unfurl.services.photos import PhotoService
from flickr_unfurl.services.unfurls import UnfurlService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    flickr_client: FlickrClient
    slack_client: SlackClient
    photo_service: PhotoService
    unfurl_service: UnfurlService
    interaction_service: InteractionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    flickr_client = HttpxFlickrClient.create(
        api_key=resolved_settings.flickr_api_key,
        base_url=resolved_settings.flickr_base_url,
    )
    slack_client = HttpxSlackClient.create(
        token=resolved_settings.slack_client_token,
        base_url=resolved_settings.slack_base_url,
    )
    photo_service = PhotoService(flickr_client)
    unfurl_service = UnfurlService(
        photo_service=photo_service,
        slack_client=slack_client,
    )

    async def close_resources() -> None:
        await flickr_client.close()
        await slack_client.close()

    return AppContainer(
        settings=resolved_settings,
        flickr_client=flickr_client,
        slack_client=slack_client,
        photo_service=photo_service,
        unfurl_service=unfurl_service,
        interaction_service=InteractionService(),
        close_resources=close_resources,
    )
