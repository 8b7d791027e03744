"""API routes for rsspoll.

Provides configuration intake, the feed read endpoint, health checks and the
notification relay.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import ValidationError

from rsspoll.config.settings import Settings
from rsspoll.exceptions import ConfigurationError, DispatchError, SourceFetchError
from rsspoll.fetcher import FeedFetcher
from rsspoll.models.payloads import (
    FeedRecord,
    NotificationPayload,
    PollerConfig,
    snapshot_to_records,
)
from rsspoll.notifiers.discord import DiscordNotifier
from rsspoll.scheduler import PollScheduler
from rsspoll.services.poll_service import PollService

logger = structlog.get_logger()

router = APIRouter(tags=["poller"])


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_poll_service(request: Request) -> PollService:
    return request.app.state.poll_service


def get_scheduler(request: Request) -> PollScheduler:
    return request.app.state.scheduler


def get_fetcher(request: Request) -> FeedFetcher:
    return request.app.state.fetcher


def get_relay(request: Request) -> DiscordNotifier:
    return request.app.state.relay


def _require_json(request: Request) -> None:
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != "application/json":
        raise ConfigurationError("the request does not contain a JSON payload")


async def parse_config_payload(request: Request) -> PollerConfig:
    """Validate a configuration request.

    Raises:
        ConfigurationError: On a non-JSON content type or a malformed body.
    """
    _require_json(request)
    body = await request.body()
    try:
        return PollerConfig.model_validate_json(body)
    except ValidationError as e:
        raise ConfigurationError(f"invalid configuration: {e.error_count()} error(s)") from e


@router.post("/config")
async def configure(
    request: Request,
    poll_service: PollService = Depends(get_poll_service),
    scheduler: PollScheduler = Depends(get_scheduler),
    settings: Settings = Depends(get_settings),
):
    """Replace the feed sources and (re)start polling.

    Request body: ``{"rss_feeds": ["https://...", ...]}``.
    """
    try:
        config = await parse_config_payload(request)
    except ConfigurationError as e:
        logger.warning("Configuration rejected", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    poll_service.set_sources(config.rss_feeds)
    scheduler.start(settings.poll_interval_seconds)

    return {"status": "ok", "rss_feeds": config.rss_feeds}


@router.get(
    "/rss",
    response_model=list[FeedRecord],
    response_model_exclude_none=True,
)
async def read_feeds(
    poll_service: PollService = Depends(get_poll_service),
    fetcher: FeedFetcher = Depends(get_fetcher),
):
    """Return every item of the last published snapshot.

    Before the first cycle has published, the configured sources are fetched
    on demand. That result is served but not cached.
    """
    snapshot = poll_service.cache.get()
    if snapshot is None:
        logger.info("Cache empty, fetching feeds on demand")
        try:
            snapshot = await fetcher.fetch_all(poll_service.sources)
        except SourceFetchError as e:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return snapshot_to_records(snapshot)


@router.get("/healthz")
async def healthz():
    return {"status": "healthy"}


@router.post("/push")
async def push_notification(
    request: Request,
    relay: DiscordNotifier = Depends(get_relay),
):
    """Relay a poller notification to its Discord webhook.

    Request body: ``{"feed_url": [...], "webhook_url": "..."}``. Responds
    with the status Discord answered with.
    """
    try:
        _require_json(request)
        payload = NotificationPayload.model_validate_json(await request.body())
    except (ConfigurationError, ValidationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not payload.feed_url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="no messages to send")

    try:
        webhook_status = await relay.send_links(payload.webhook_url, payload.feed_url)
    except DispatchError as e:
        logger.error("Relay failed", error=str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return Response(status_code=webhook_status)
