"""Interactive message handling for unfurled photos."""

import json
import logging
from dataclasses import dataclass
from typing import assert_never

from flickr_unfurl.api.slack_models import SlackAction, SlackInteractionPayload
from flickr_unfurl.domain.attachments import AttachmentField, PreviewAttachment
from flickr_unfurl.domain.interactions import (
    InteractionKind,
    PhotoDetailsAction,
    parse_callback_id,
)
from flickr_unfurl.domain.photos import PhotoContext
from flickr_unfurl.errors import UnrecognizedInteractionError

_logger = logging.getLogger(__name__)


@dataclass
class InteractionService:
    """Builds replacement attachments for button presses."""

    def handle(self, payload: SlackInteractionPayload) -> PreviewAttachment:
        """Dispatch a verified interaction payload by its callback id."""
        kind, photo_id = parse_callback_id(payload.callback_id)
        if kind is InteractionKind.PHOTO_DETAILS:
            return self.handle_photo_details(payload, photo_id)
        if kind is InteractionKind.UNRECOGNIZED:
            raise UnrecognizedInteractionError(
                f"unhandled callback id: {payload.callback_id}"
            )
        assert_never(kind)

    def handle_photo_details(
        self, payload: SlackInteractionPayload, photo_id: str | None = None
    ) -> PreviewAttachment:
        """Add an Albums or Groups field to the original attachment."""
        if not payload.actions or not payload.original_message.attachments:
            raise UnrecognizedInteractionError("interaction carries no action")
        pressed = payload.actions[0]
        action = PhotoDetailsAction.from_name(pressed.name)
        if action is PhotoDetailsAction.UNRECOGNIZED:
            raise UnrecognizedInteractionError(f"unhandled action: {pressed.name}")
        _logger.info(
            "Photo details requested",
            extra={"photo_id": photo_id, "action": pressed.name},
        )
        original = payload.original_message.attachments[0]
        return replace_field(original, action, _contexts_from_action(pressed))


def replace_field(
    attachment: PreviewAttachment,
    action: PhotoDetailsAction,
    contexts: list[PhotoContext],
) -> PreviewAttachment:
    """Return a copy of ``attachment`` with one fresh field for ``action``."""
    detail = action.value
    if contexts:
        value = "\n".join(
            f":small_blue_diamond: <{context.url}|{context.title}>"
            for context in contexts
        )
    else:
        value = detail.empty_text
    fields = [
        field for field in attachment.fields or [] if field.title != detail.label
    ]
    fields.append(AttachmentField(title=detail.label, value=value))
    return attachment.model_copy(update={"fields": fields}, deep=True)


def _contexts_from_action(action: SlackAction) -> list[PhotoContext]:
    """Decode the albums or groups serialized into a button's value."""
    if not action.value:
        return []
    return [
        PhotoContext(id=str(item.get("id", "")), title=item["title"], url=item["url"])
        for item in json.loads(action.value)
    ]
