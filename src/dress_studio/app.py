"""Application entry point."""

from __future__ import annotations

from dress_studio.api import create_app
from dress_studio.config import load_config
from dress_studio.db.migrations import apply_migrations
from dress_studio.db.storage import create_storage
from dress_studio.logging_config import configure_logging, get_logger


def main() -> int:
    """Start the DressStudio API server."""
    config = load_config()
    configure_logging(config.log_level)
    logger = get_logger(__name__)
    logger.info("Starting %s", config.app_name)

    storage = create_storage(config)
    try:
        version = apply_migrations(storage)
        logger.info("Database ready at schema version %s", version)
        app = create_app(config, storage=storage)
        logger.info("Listening on http://%s:%s", config.host, config.port)
        app.run(host=config.host, port=config.port)
    finally:
        storage.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
