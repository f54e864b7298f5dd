"""Photo lookups against the Flickr API."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from urllib.parse import urlsplit

from flickr_unfurl.adapters.flickr_client import FlickrClient
from flickr_unfurl.domain.photos import (
    ImageVariant,
    PhotoContext,
    PhotoOwner,
    PhotoRecord,
    PhotoTag,
)
from flickr_unfurl.errors import InvalidPhotoUrlError

FLICKR_WEB_URL = "https://www.flickr.com"
_DEFAULT_BUDDY_ICON = f"{FLICKR_WEB_URL}/images/buddyicon.gif"
_TAKEN_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger = logging.getLogger(__name__)


def extract_photo_id(url: str) -> str:
    """Return the photo id from a ``/photos/<owner>/<id>/`` URL."""
    segments = urlsplit(url).path.split("/")[1:]
    if len(segments) < 3 or segments[0] != "photos" or not segments[2]:
        raise InvalidPhotoUrlError(f"not a Flickr photo URL: {url}")
    return segments[2]


@dataclass
class PhotoService:
    """Aggregates everything Flickr knows about a photo."""

    flickr_client: FlickrClient

    async def get_photo(self, photo_id: str) -> PhotoRecord:
        """Fetch info, sizes and contexts concurrently and combine them."""
        info, sizes, contexts = await asyncio.gather(
            self.flickr_client.get_info(photo_id),
            self.flickr_client.get_sizes(photo_id),
            self.flickr_client.get_all_contexts(photo_id),
        )
        photo = info["photo"]
        owner = _parse_owner(photo.get("owner") or {})
        owner_path = owner.profile_url.rstrip("/").rsplit("/", 1)[-1]
        record = PhotoRecord(
            id=str(photo.get("id", photo_id)),
            title=_content(photo.get("title")),
            url=_photo_page_url(photo, owner_path, photo_id),
            owner=owner,
            description=_content(photo.get("description")) or None,
            tags=[
                PhotoTag(raw=tag["raw"])
                for tag in (photo.get("tags") or {}).get("tag", [])
            ],
            taken_at=_parse_taken(photo.get("dates") or {}),
            posted_at=_parse_posted(photo.get("dates") or {}),
            image_variants=_parse_sizes(sizes),
            albums=[
                PhotoContext(
                    id=str(album["id"]),
                    title=_content(album.get("title")),
                    url=f"{FLICKR_WEB_URL}/photos/{owner_path}/albums/{album['id']}",
                )
                for album in contexts.get("set", [])
            ],
            groups=[
                PhotoContext(
                    id=str(group["id"]),
                    title=_content(group.get("title")),
                    url=_absolute_url(group.get("url") or f"/groups/{group['id']}/"),
                )
                for group in contexts.get("pool", [])
            ],
        )
        _logger.info(
            "Fetched Flickr photo %s: %s sizes, %s albums, %s groups",
            record.id,
            len(record.image_variants),
            len(record.albums),
            len(record.groups),
        )
        return record


def _content(value: object) -> str:
    """Unwrap Flickr's ``{"_content": ...}`` text nodes."""
    if isinstance(value, dict):
        return str(value.get("_content", ""))
    if value is None:
        return ""
    return str(value)


def _absolute_url(path: str) -> str:
    if path.startswith("http"):
        return path
    return f"{FLICKR_WEB_URL}{path}"


def _parse_owner(owner: dict[str, object]) -> PhotoOwner:
    nsid = str(owner.get("nsid", ""))
    path_alias = owner.get("path_alias") or nsid
    icon_server = int(owner.get("iconserver") or 0)
    if icon_server > 0:
        icon_url = (
            f"https://farm{owner.get('iconfarm')}.staticflickr.com/"
            f"{icon_server}/buddyicons/{nsid}.jpg"
        )
    else:
        icon_url = _DEFAULT_BUDDY_ICON
    return PhotoOwner(
        username=str(owner.get("username", "")),
        name=owner.get("realname") or None,
        icon_url=icon_url,
        profile_url=f"{FLICKR_WEB_URL}/people/{path_alias}/",
    )


def _photo_page_url(photo: dict[str, object], owner_path: str, photo_id: str) -> str:
    for entry in (photo.get("urls") or {}).get("url", []):
        if entry.get("type") == "photopage":
            return _content(entry)
    return f"{FLICKR_WEB_URL}/photos/{owner_path}/{photo_id}/"


def _parse_taken(dates: dict[str, object]) -> datetime | None:
    """Parse the taken date; Flickr reports it without a timezone."""
    raw = dates.get("taken")
    if not raw or str(dates.get("takenunknown", "0")) == "1":
        return None
    try:
        return datetime.strptime(str(raw), _TAKEN_FORMAT).replace(tzinfo=UTC)
    except ValueError:
        _logger.warning("Unparseable Flickr taken date: %s", raw)
        return None


def _parse_posted(dates: dict[str, object]) -> datetime | None:
    raw = dates.get("posted")
    if not raw:
        return None
    try:
        return datetime.fromtimestamp(int(raw), tz=UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        _logger.warning("Unparseable Flickr posted date: %s", raw)
        return None


def _parse_sizes(payload: dict[str, object]) -> list[ImageVariant]:
    sizes = (payload.get("sizes") or {}).get("size", [])
    return [
        ImageVariant(
            url=str(size["source"]),
            width=int(size["width"]),
            height=int(size["height"]),
        )
        for size in sizes
        if size.get("width") and size.get("height")
    ]
