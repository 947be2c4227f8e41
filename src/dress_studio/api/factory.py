"""Flask application factory."""

from __future__ import annotations

from typing import Optional

from flask import Flask
from flask_cors import CORS

from dress_studio.api.deps import EXTENSION_KEY
from dress_studio.api.errors import register_error_handlers
from dress_studio.api.routes import BLUEPRINTS
from dress_studio.app_services import build_services
from dress_studio.config import StudioConfig, load_config
from dress_studio.db.migrations import apply_migrations
from dress_studio.db.storage import Storage, create_storage
from dress_studio.logging_config import get_logger


def create_app(
    config: Optional[StudioConfig] = None,
    storage: Optional[Storage] = None,
) -> Flask:
    """Build the API around an injected storage, or one chosen by configuration.

    A storage passed in is used as-is; one created here is migrated first.
    """
    logger = get_logger("app")
    config = config or load_config()
    if storage is None:
        storage = create_storage(config)
        version = apply_migrations(storage)
        logger.info("Database ready at schema version %s", version)

    app = Flask(__name__)
    app.json.ensure_ascii = False
    CORS(app)

    app.extensions[EXTENSION_KEY] = build_services(storage, config)
    register_error_handlers(app)
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)
        logger.debug("Registered blueprint %s", blueprint.name)
    return app
