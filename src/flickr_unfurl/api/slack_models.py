"""Pydantic models for Slack webhook payloads."""

from pydantic import BaseModel, Field

from flickr_unfurl.domain.attachments import PreviewAttachment


class SlackLink(BaseModel):
    """Link found in a shared message."""

    url: str
    domain: str | None = None


class SlackEvent(BaseModel):
    """Inner event of an Events API callback."""

    type: str
    channel: str | None = None
    message_ts: str | None = None
    links: list[SlackLink] = Field(default_factory=list)


class SlackEventEnvelope(BaseModel):
    """Outer Events API payload."""

    type: str
    token: str | None = None
    challenge: str | None = None
    team_id: str | None = None
    event: SlackEvent | None = None


class SlackAction(BaseModel):
    """Button press reported by an interactive message callback."""

    name: str
    value: str | None = None
    type: str | None = None


class SlackOriginalMessage(BaseModel):
    """Message that carried the pressed button."""

    attachments: list[PreviewAttachment] = Field(default_factory=list)


class SlackInteractionPayload(BaseModel):
    """Interactive message callback payload."""

    token: str | None = None
    callback_id: str
    actions: list[SlackAction]
    original_message: SlackOriginalMessage
    response_url: str | None = None
