"""
Syndicator Core Module.

This module provides the main entry point for the syndicator, which
publishes JF2 posts from a personal site to Mastodon.

The syndicator entry point embeds Gunicorn to run the syndication receiver
as a WSGI application, which:
1. Receives JF2 posts via POST /syndicate
2. Validates them against the JF2 post JSON Schema
3. Uploads photos and composes a status within the server's character limit
4. Posts a status, a reblog or a favourite to every configured Mastodon account

Functions:
    configure_logging(debug) -> None:
        Configures the root logger with a rotating log file and stdout.
    main(debug) -> None:
        Entry point for the syndicator console command.

Example:
    Run via console script:
        $ syndicator --debug
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler


logger = logging.getLogger(__name__)

LOG_FILE = "syndicator.log"
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 3


def configure_logging(debug: bool = False) -> None:
    """Configure the root logger with a rotating file handler and stdout.

    Args:
        debug: Log at DEBUG level instead of INFO
    """
    log_level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers to avoid duplicates (e.g., from gunicorn)
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    log_handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT
    )
    log_handler.setLevel(log_level)
    log_handler.setFormatter(formatter)
    root_logger.addHandler(log_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def main(debug: bool = False) -> None:
    """Start the syndication receiver with Gunicorn.

    Debug mode is enabled by the --debug flag or the SYNDICATOR_DEBUG
    environment variable; it switches logging to DEBUG level and disables
    the Gunicorn worker timeout.
    """
    from gunicorn.app.base import BaseApplication
    from config import load_config
    from receiver import create_app
    from social.mastodon_client import MastodonClient

    if not debug:
        debug = os.environ.get("SYNDICATOR_DEBUG", "").lower() in ("true", "1", "yes")
        if "--debug" in sys.argv[1:]:
            debug = True

    configure_logging(debug)
    if debug:
        logger.info("Debug mode enabled: verbose logging and worker timeout disabled")

    logger.info("Loading configuration from config.yml")
    config = load_config()

    logger.info("Initializing Mastodon clients from configuration")
    mastodon_clients = MastodonClient.from_config(config)
    logger.info(f"Initialized {len(mastodon_clients)} Mastodon client(s)")
    for client in mastodon_clients:
        if client.enabled:
            logger.info(f"  - Mastodon account '{client.account_name}' enabled for {client.instance_url}")
        else:
            logger.warning(f"  - Mastodon account '{client.account_name}' disabled (missing credentials or config)")

    app = create_app(config=config, mastodon_clients=mastodon_clients)

    config_path = os.path.join(os.path.dirname(__file__), "..", "receiver", "gunicorn_config.py")

    class StandaloneApplication(BaseApplication):
        """Custom Gunicorn application for embedding within the syndicator entry point."""

        def __init__(self, app, options=None):
            self.options = options or {}
            self.application = app
            super().__init__()

        def load_config(self):
            config_file = self.options.get("config")
            if config_file:
                with open(config_file, "r") as f:
                    config_code = f.read()
                config_namespace = {}
                exec(config_code, config_namespace)
                for key, value in config_namespace.items():
                    if key in self.cfg.settings and value is not None:
                        self.cfg.set(key.lower(), value)

            if self.options.get("debug"):
                self.cfg.set("timeout", 0)
                self.cfg.set("loglevel", "debug")

        def load(self):
            return self.application

    options = {
        "config": config_path,
        "debug": debug
    }
    StandaloneApplication(app, options).run()


if __name__ == "__main__":
    main()
