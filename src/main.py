"""
PumpSentry - Main application entry point.

Runs either the API (ticker ingestion, momentum scoring and the simulated
position tracker) or, with ``-watch``, the standalone pump alert watcher that
posts and edits Telegram alerts.
"""

import asyncio
import sys

import uvicorn
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from pumpsentry.comm.telegram import TelegramBot
from pumpsentry.config.logging import get_logger
from pumpsentry.config.settings import get_settings
from pumpsentry.services.alerts.watcher import run_watcher
from pumpsentry.utils.config import (
    initialize_application,
    missing_env_vars_message,
    validate_environment,
)


def run_watch_mode() -> None:
    """Run the alert watcher until interrupted."""
    logger = get_logger(__name__)
    settings = get_settings()
    bot = TelegramBot(settings.telegram_bot_token, settings.telegram_chat_id)

    try:
        asyncio.run(run_watcher(settings, bot))
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
        print("\nShutting down...")


def run_api_mode() -> None:
    """Serve the API; the stream and snapshot job run inside its lifespan."""
    logger = get_logger(__name__)
    settings = get_settings()

    logger.info(
        "Starting API",
        host=settings.endpoint_host,
        port=settings.endpoint_port,
        stream_url=settings.stream_url,
    )

    try:
        uvicorn.run(
            "pumpsentry.webapi.app:create_app",
            factory=True,
            host=settings.endpoint_host,
            port=settings.endpoint_port,
            reload=settings.api_reload,
            log_level=settings.api_log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
        print("\nShutting down...")


def main() -> None:
    """Main application entry point."""
    initialize_application()

    logger = get_logger(__name__)
    watch = "-watch" in sys.argv
    logger.info("Starting PumpSentry", mode="watch" if watch else "api")

    if not validate_environment(watcher=watch):
        logger.error("Environment validation failed")
        print(
            "Please set the required environment variables before running the application."
        )
        print(missing_env_vars_message(watcher=watch))
        sys.exit(1)

    if watch:
        run_watch_mode()
    else:
        run_api_mode()


if __name__ == "__main__":
    main()
