"""Greeting Service - Entry Point

Serves two static greetings over HTTP with JSON 404/500 fallbacks.
The listener port comes from the PORT environment variable (default 3000).
"""

import logging

from config import Settings
from greeter.models import ServerConfig
from greeter.services.server import HttpServer
from greeter.utils.log_config import configure_logging

logger = logging.getLogger("greeter")


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.debug(f"Environment: {settings.environment}")

    server = HttpServer(ServerConfig.from_settings(settings))
    server.run()


if __name__ == "__main__":
    main()
