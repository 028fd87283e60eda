#!/usr/bin/env python3
"""
Sleeper Gateway - Main entry point

This service answers player-lookup and league queries by fetching from the
Sleeper API, caching responses and joining league data into scoreboards.
"""
import asyncio
import logging
import signal
import sys

import structlog

from sleeper_gateway.config import Config, init_config
from sleeper_gateway.service import GatewayService


logger = logging.getLogger(__name__)


def configure_logging(config: Config):
    """Set up stdlib logging and structlog rendering."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Set httpx and httpcore loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    renderer = (
        structlog.processors.JSONRenderer()
        if config.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(config.log_level)),
    )


async def main():
    """Main entry point for the Sleeper gateway."""
    config = init_config()
    configure_logging(config)

    service = GatewayService(config)

    # Handle graceful shutdown
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, lambda s=sig: asyncio.create_task(_shutdown(service, s)))

    try:
        await service.start()
        await service.wait_closed()
    except Exception as e:
        logger.error(f"Service failed with error: {e}")
        sys.exit(1)
    finally:
        await service.stop()
        logger.info("Sleeper gateway stopped")


async def _shutdown(service: GatewayService, sig: signal.Signals):
    logger.info(f"Received signal {sig.name}, shutting down gracefully...")
    await service.stop()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
