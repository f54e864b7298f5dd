"""Slack message attachment models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Flickr logo pink
FLICKR_PINK = "#ff0084"


class AttachmentField(BaseModel):
    """Titled value rendered as a table cell inside an attachment."""

    model_config = ConfigDict(extra="ignore")

    title: str
    value: str
    short: bool | None = None


class AttachmentAction(BaseModel):
    """Interactive button attached to a message attachment."""

    model_config = ConfigDict(extra="ignore")

    name: str
    text: str
    type: str = "button"
    value: str | None = None


class PreviewAttachment(BaseModel):
    """Slack message attachment describing one unfurled link.

    Unknown keys are dropped on validation, so attachments echoed back by Slack
    (which carry ``id``, ``from_url``, ``service_name`` and friends) come out
    clean. ``url`` records which shared link produced the attachment; it is never
    serialized.
    """

    model_config = ConfigDict(extra="ignore")

    fallback: str
    color: str = FLICKR_PINK
    title: str
    title_link: str
    image_url: str
    author_name: str | None = None
    author_icon: str | None = None
    author_link: str | None = None
    fields: list[AttachmentField] | None = None
    callback_id: str | None = None
    actions: list[AttachmentAction] | None = None
    url: str | None = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def _check_author_block(self) -> "PreviewAttachment":
        author = (self.author_name, self.author_icon, self.author_link)
        if any(part is not None for part in author) and None in author:
            raise ValueError("author_name, author_icon and author_link go together")
        return self

    def to_slack(self) -> dict[str, object]:
        """Serialize for the Slack API, omitting absent optionals."""
        return self.model_dump(exclude_none=True)


def key_by_url(attachments: list[PreviewAttachment]) -> dict[str, dict[str, object]]:
    """Build a ``chat.unfurl`` payload keyed by the source link of each attachment."""
    unfurls: dict[str, dict[str, object]] = {}
    for attachment in attachments:
        if attachment.url is None:
            raise ValueError("attachment has no source url")
        unfurls[attachment.url] = attachment.to_slack()
    return unfurls
