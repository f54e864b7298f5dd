"""FastAPI application factory."""

import hmac
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from flickr_unfurl.api.slack_models import SlackEventEnvelope, SlackInteractionPayload
from flickr_unfurl.app_logging import configure_logging
from flickr_unfurl.containers import AppContainer

# Placeholder channel for links typed into the composer; Slack rejects unfurls there
COMPOSER_CHANNEL = "COMPOSER"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    async def publish_unfurls(channel: str, message_ts: str, urls: list[str]) -> None:
        try:
            await app.state.container.unfurl_service.unfurl(channel, message_ts, urls)
        except Exception:
            logger.exception(
                "Failed to unfurl links",
                extra={"channel": channel, "message_ts": message_ts, "urls": urls},
            )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/slack/events")
    async def slack_events(
        envelope: SlackEventEnvelope,
        request: Request,
        background_tasks: BackgroundTasks,
    ) -> dict[str, str | None]:
        """Handle Slack Events API callbacks."""
        state_container: AppContainer = request.app.state.container
        if not _is_verified(
            envelope.token, state_container.settings.slack_verification_token
        ):
            logger.warning(
                "An unverified request was sent to the Slack events request URL",
                extra={"event_type": envelope.type},
            )
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        if envelope.type == "url_verification":
            return {"challenge": envelope.challenge}

        event = envelope.event
        if envelope.type == "event_callback" and event and event.type == "link_shared":
            if event.channel == COMPOSER_CHANNEL:
                logger.info("Ignoring link_shared event from the message composer")
                return {"status": "ok"}
            if event.channel and event.message_ts and event.links:
                background_tasks.add_task(
                    publish_unfurls,
                    event.channel,
                    event.message_ts,
                    [link.url for link in event.links],
                )
        return {"status": "ok"}

    @app.post("/slack/messages")
    async def slack_messages(request: Request) -> JSONResponse:
        """Handle Slack interactive message callbacks."""
        state_container: AppContainer = request.app.state.container
        form = await request.form()
        raw_payload = form.get("payload")
        if not isinstance(raw_payload, str):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
        try:
            body = json.loads(raw_payload)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST) from exc
        if not isinstance(body, dict):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)

        token = body.get("token")
        if not _is_verified(
            token if isinstance(token, str) else None,
            state_container.settings.slack_verification_token,
        ):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        try:
            payload = SlackInteractionPayload.model_validate(body)
            attachment = state_container.interaction_service.handle(payload)
        except Exception:
            logger.exception(
                "Failed to handle interaction",
                extra={"callback_id": body.get("callback_id")},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
            ) from None
        return JSONResponse(attachment.to_slack())

    return app


def _is_verified(token: str | None, expected: str) -> bool:
    """Compare a request's verification token with the configured one."""
    if not token:
        return False
    return hmac.compare_digest(token.encode(), expected.encode())
