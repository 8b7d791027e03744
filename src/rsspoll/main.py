"""Main application entry point.

Initializes all components and starts the API server with the background
poller, or runs a single poll cycle from the command line.
"""

import argparse
import asyncio
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rsspoll import __version__
from rsspoll.api import router
from rsspoll.cache import FeedCache
from rsspoll.config.settings import Settings, settings as default_settings
from rsspoll.fetcher import FeedFetcher
from rsspoll.notifiers.discord import DiscordNotifier
from rsspoll.notifiers.factory import create_dispatcher
from rsspoll.parsers.rss_parser import RssParser
from rsspoll.scheduler import PollScheduler
from rsspoll.services.poll_service import PollService
from rsspoll.sources.http import HttpFeedReader
from rsspoll.utils.logger import configure_logging, get_logger


def create_fetcher(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FeedFetcher:
    """Create the feed fetcher from settings."""
    reader = HttpFeedReader(
        timeout=settings.rss_fetch_timeout,
        user_agent=settings.rss_user_agent,
        transport=transport,
    )
    return FeedFetcher(reader=reader, parser=RssParser())


def create_poll_service(
    settings: Settings,
    fetcher: FeedFetcher,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PollService:
    """Create the poll service with a fresh cache."""
    return PollService(
        fetcher=fetcher,
        cache=FeedCache(),
        dispatcher=create_dispatcher(settings, transport),
        destination=settings.notification_endpoint,
        sources=settings.feed_urls,
    )


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Settings to use, defaults to the environment.
        transport: Optional httpx transport shared by all outbound clients.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager.

        Handles startup and shutdown of the poller.
        """
        logger = get_logger("lifespan")
        logger.info("Starting rsspoll application")

        fetcher = create_fetcher(settings, transport)
        poll_service = create_poll_service(settings, fetcher, transport)
        scheduler = PollScheduler(poll_service)

        app.state.settings = settings
        app.state.fetcher = fetcher
        app.state.poll_service = poll_service
        app.state.scheduler = scheduler
        app.state.relay = DiscordNotifier(
            timeout=settings.notification_timeout,
            transport=transport,
        )

        if poll_service.sources:
            scheduler.start(settings.poll_interval_seconds)
        else:
            logger.info("No feed sources configured, waiting for /config")

        yield

        await scheduler.shutdown()
        logger.info("rsspoll application stopped")

    app = FastAPI(
        title="rsspoll API",
        description="RSS poller with new-item webhook notifications",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.include_router(router)
    return app


async def run_cli_once(settings: Settings) -> dict:
    """Run a single poll cycle without the API server."""
    logger = get_logger("cli")
    logger.info("Running one-time poll cycle", source_count=len(settings.feed_urls))

    fetcher = create_fetcher(settings)
    poll_service = create_poll_service(settings, fetcher)
    stats = await poll_service.run_cycle()

    logger.info("Poll cycle finished", published=stats["published"])
    return stats


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="rsspoll - RSS poller with notifications")
    parser.add_argument(
        "--run-once",
        action="store_true",
        help="Poll FEED_URLS once, print new links and exit (no API server)",
    )
    parser.add_argument(
        "--host",
        default=default_settings.api_host,
        help=f"API server host (default: {default_settings.api_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=default_settings.api_port,
        help=f"API server port (default: {default_settings.api_port})",
    )
    args = parser.parse_args()

    configure_logging(
        log_level=default_settings.log_level,
        json_format=default_settings.log_json,
    )

    if args.run_once:
        stats = asyncio.run(run_cli_once(default_settings))
        for link in stats["new_links"]:
            print(link)
        if stats["errors"]:
            raise SystemExit(1)
    else:
        app = create_app(default_settings)
        uvicorn.run(
            app,
            host=args.host,
            port=args.port,
            log_level=default_settings.log_level.lower(),
        )


if __name__ == "__main__":
    main()
