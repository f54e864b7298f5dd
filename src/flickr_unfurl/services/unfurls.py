"""Link unfurling pipeline."""

import asyncio
import json
import logging
import random
from dataclasses import dataclass
from datetime import datetime
from email.utils import format_datetime

from flickr_unfurl.adapters.slack_client import SlackClient
from flickr_unfurl.domain.attachments import (
    AttachmentAction,
    AttachmentField,
    PreviewAttachment,
    key_by_url,
)
from flickr_unfurl.domain.interactions import (
    PhotoDetailsAction,
    photo_details_callback_id,
)
from flickr_unfurl.domain.photos import PhotoContext, PhotoRecord
from flickr_unfurl.services.images import Sampler, find_best_image
from flickr_unfurl.services.photos import PhotoService, extract_photo_id

_logger = logging.getLogger(__name__)

# Slack rejects attachment actions whose value is longer than this
MAX_ACTION_VALUE_LENGTH = 2000


@dataclass
class UnfurlService:
    """Turns shared Flickr links into Slack unfurls.

    Links are processed all-or-nothing: if any link fails, the exception
    propagates and ``chat.unfurl`` is never called.
    """

    photo_service: PhotoService
    slack_client: SlackClient
    sample: Sampler = random.choice

    async def attachment_from_link(self, url: str) -> PreviewAttachment:
        """Build the preview attachment for one shared link."""
        photo = await self.photo_service.get_photo(extract_photo_id(url))
        image = find_best_image(photo.image_variants, sample=self.sample)
        return build_attachment(photo, image_url=image.url, link_url=url)

    async def unfurl(
        self, channel: str, message_ts: str, urls: list[str]
    ) -> dict[str, dict[str, object]]:
        """Unfurl every link of a message and publish the previews."""
        attachments = await asyncio.gather(
            *(self.attachment_from_link(url) for url in urls)
        )
        unfurls = key_by_url(list(attachments))
        await self.slack_client.unfurl(channel=channel, ts=message_ts, unfurls=unfurls)
        _logger.info("Unfurled %s links", len(unfurls), extra={"channel": channel})
        return unfurls


def build_attachment(
    photo: PhotoRecord, image_url: str, link_url: str | None = None
) -> PreviewAttachment:
    """Shape a photo into a Slack attachment."""
    author_name = photo.owner.name or photo.owner.username
    has_author = bool(author_name and photo.owner.icon_url and photo.owner.profile_url)
    fields = _photo_fields(photo)
    has_details = bool(photo.albums or photo.groups)
    return PreviewAttachment(
        fallback=(
            f"{photo.title}: {photo.description}" if photo.description else photo.title
        ),
        title=photo.title,
        title_link=photo.url,
        image_url=image_url,
        author_name=author_name if has_author else None,
        author_icon=photo.owner.icon_url if has_author else None,
        author_link=photo.owner.profile_url if has_author else None,
        fields=fields or None,
        callback_id=photo_details_callback_id(photo.id) if has_details else None,
        actions=_detail_actions(photo) if has_details else None,
        url=link_url,
    )


def _photo_fields(photo: PhotoRecord) -> list[AttachmentField]:
    fields: list[AttachmentField] = []
    if photo.description:
        fields.append(AttachmentField(title="Description", value=photo.description))
    if photo.tags:
        fields.append(
            AttachmentField(title="Tags", value=", ".join(t.raw for t in photo.tags))
        )
    if photo.taken_at:
        fields.append(AttachmentField(title="Taken", value=_http_date(photo.taken_at)))
    if photo.posted_at:
        fields.append(
            AttachmentField(title="Posted", value=_http_date(photo.posted_at))
        )
    return fields


def _http_date(value: datetime) -> str:
    """Render a timestamp like ``Sun, 01 Jan 2017 12:00:00 GMT``."""
    return format_datetime(value, usegmt=True)


def _detail_actions(photo: PhotoRecord) -> list[AttachmentAction]:
    """Buttons carrying their album/group data inline in ``value``."""
    buttons = [
        (PhotoDetailsAction.LIST_PHOTOSETS, photo.albums),
        (PhotoDetailsAction.LIST_POOLS, photo.groups),
    ]
    return [
        AttachmentAction(
            name=action.value.name,
            text=action.value.label,
            value=serialize_contexts(contexts),
        )
        for action, contexts in buttons
    ]


def serialize_contexts(contexts: list[PhotoContext]) -> str:
    """Encode albums or groups for an action's ``value``.

    Trailing entries are dropped until the JSON fits Slack's limit on action
    values.
    """
    items = [{"title": c.title, "url": c.url} for c in contexts]
    encoded = json.dumps(items, separators=(",", ":"))
    while len(encoded) > MAX_ACTION_VALUE_LENGTH:
        items.pop()
        encoded = json.dumps(items, separators=(",", ":"))
    if len(items) < len(contexts):
        _logger.warning(
            "Truncated action value to %s of %s entries", len(items), len(contexts)
        )
    return encoded
