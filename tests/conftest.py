"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from flickr_unfurl.adapters.flickr_client import FlickrClient
from flickr_unfurl.adapters.slack_client import SlackClient
from flickr_unfurl.config import Settings
from flickr_unfurl.containers import AppContainer
from flickr_unfurl.services.interactions import InteractionService
from flickr_unfurl.services.photos import PhotoService
from flickr_unfurl.services.unfurls import UnfurlService

PHOTO_URL = "https://www.flickr.com/photos/owner/123456/"


def make_info_payload(  # noqa: PLR0913
    photo_id: str = "123456",
    title: str = "Sunset",
    description: str = "",
    tags: tuple[str, ...] = ("Beach", "golden hour"),
    taken: str | None = None,
    posted: str | None = None,
) -> dict[str, object]:
    dates: dict[str, object] = {}
    if taken is not None:
        dates["taken"] = taken
        dates["takenunknown"] = "0"
    if posted is not None:
        dates["posted"] = posted
    return {
        "stat": "ok",
        "photo": {
            "id": photo_id,
            "owner": {
                "nsid": "12345678@N00",
                "username": "owner",
                "realname": "Ada Owner",
                "iconserver": "7",
                "iconfarm": 8,
                "path_alias": "owner",
            },
            "title": {"_content": title},
            "description": {"_content": description},
            "dates": dates,
            "tags": {"tag": [{"raw": tag, "_content": tag.lower()} for tag in tags]},
            "urls": {
                "url": [
                    {
                        "type": "photopage",
                        "_content": f"https://www.flickr.com/photos/owner/{photo_id}/",
                    }
                ]
            },
        },
    }


def make_sizes_payload(
    sizes: tuple[tuple[int, int], ...] = ((1024, 768),),
) -> dict[str, object]:
    return {
        "stat": "ok",
        "sizes": {
            "size": [
                {
                    "label": f"{width}x{height}",
                    "width": width,
                    "height": height,
                    "source": f"https://live.staticflickr.com/{width}x{height}.jpg",
                }
                for width, height in sizes
            ]
        },
    }


def make_contexts_payload(
    albums: tuple[tuple[str, str], ...] = (),
    groups: tuple[tuple[str, str], ...] = (),
) -> dict[str, object]:
    payload: dict[str, object] = {"stat": "ok"}
    if albums:
        payload["set"] = [{"id": id_, "title": title} for id_, title in albums]
    if groups:
        payload["pool"] = [
            {"id": id_, "title": title, "url": f"/groups/{id_}/pool/"}
            for id_, title in groups
        ]
    return payload


@dataclass
class FakeFlickrClient(FlickrClient):
    """Fake Flickr client serving canned payloads for any photo id."""

    info: dict[str, object] = field(default_factory=make_info_payload)
    sizes: dict[str, object] = field(default_factory=make_sizes_payload)
    contexts: dict[str, object] = field(default_factory=make_contexts_payload)
    failing_ids: set[str] = field(default_factory=set)
    calls: list[tuple[str, str]] = field(default_factory=list)

    async def get_info(self, photo_id: str) -> dict[str, object]:
        return self._respond("getInfo", photo_id, self.info)

    async def get_sizes(self, photo_id: str) -> dict[str, object]:
        return self._respond("getSizes", photo_id, self.sizes)

    async def get_all_contexts(self, photo_id: str) -> dict[str, object]:
        return self._respond("getAllContexts", photo_id, self.contexts)

    def _respond(
        self, method: str, photo_id: str, payload: dict[str, object]
    ) -> dict[str, object]:
        self.calls.append((method, photo_id))
        if photo_id in self.failing_ids:
            raise RuntimeError(f"Flickr {method} failed for {photo_id}")
        return payload


@dataclass
class FakeSlackClient(SlackClient):
    """Fake Slack client that records unfurl calls."""

    unfurls: list[tuple[str, str, dict[str, dict[str, object]]]] = field(
        default_factory=list
    )

    async def unfurl(
        self, channel: str, ts: str, unfurls: dict[str, dict[str, object]]
    ) -> None:
        self.unfurls.append((channel, ts, unfurls))


def first_variant(variants):  # type: ignore[no-untyped-def]
    return variants[0]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        slack_verification_token="verification-token",
        slack_client_token="xoxb-test",
        flickr_api_key="flickr-key",
    )


@pytest.fixture
def flickr_client() -> FakeFlickrClient:
    return FakeFlickrClient()


@pytest.fixture
def slack_client() -> FakeSlackClient:
    return FakeSlackClient()


@pytest.fixture
def unfurl_service(
    flickr_client: FakeFlickrClient, slack_client: FakeSlackClient
) -> UnfurlService:
    return UnfurlService(
        photo_service=PhotoService(flickr_client),
        slack_client=slack_client,
        sample=first_variant,
    )


@pytest.fixture
def container(
    settings: Settings,
    flickr_client: FakeFlickrClient,
    slack_client: FakeSlackClient,
    unfurl_service: UnfurlService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        flickr_client=flickr_client,
        slack_client=slack_client,
        photo_service=unfurl_service.photo_service,
        unfurl_service=unfurl_service,
        interaction_service=InteractionService(),
        close_resources=close_resources,
    )
