"""Flask application factory."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Mapping

from bson import ObjectId
from bson.errors import InvalidId
from flask import Flask
from flask.json.provider import DefaultJSONProvider
from flask_cors import CORS
from pymongo.errors import PyMongoError

from . import config
from .config import ConfigError
from .db import get_collections
from .routes import auth_jwt_bp, build_collections_blueprint
from .utils.payloads import json_error

logger = logging.getLogger(__name__)


def _mongo_default(obj: Any) -> Any:
    if isinstance(obj, ObjectId):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    return DefaultJSONProvider.default(obj)


class MongoJSONProvider(DefaultJSONProvider):
    """JSON provider that renders BSON types found in raw documents."""

    default = staticmethod(_mongo_default)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(InvalidId)
    def handle_invalid_id(exc: InvalidId):
        return json_error("Invalid identifier.", 400)

    @app.errorhandler(ConfigError)
    def handle_config_error(exc: ConfigError):
        logger.exception("Missing configuration")
        return json_error(str(exc), 500)

    @app.errorhandler(PyMongoError)
    def handle_db_error(exc: PyMongoError):
        logger.exception("Request failed due to MongoDB error")
        return json_error("Database unavailable. Please try again later.", 503)


def create_app(database, *, config_overrides: Mapping[str, Any] | None = None) -> Flask:
    """Build the application around ``database``.

    ``database`` is any pymongo-compatible database object; its collection
    handles are bound to the route handlers here, once.
    """

    app = Flask(__name__)
    app.json = MongoJSONProvider(app)
    app.config.update(
        ACCESS_TOKEN_SECRET=None,
        REQUIRE_TOKEN_ON_WRITES=config.require_token_on_writes(),
    )
    if config_overrides:
        app.config.update(config_overrides)

    CORS(app, origins="*", supports_credentials=True)

    collections = get_collections(database)
    app.register_blueprint(auth_jwt_bp)
    app.register_blueprint(
        build_collections_blueprint(
            collections, protect_writes=app.config["REQUIRE_TOKEN_ON_WRITES"]
        )
    )
    _register_error_handlers(app)

    @app.get("/")
    def root():
        return "Hello World!"

    if app.config["REQUIRE_TOKEN_ON_WRITES"]:
        logger.info("Bearer token required on mutating routes")
    return app


__all__ = ["MongoJSONProvider", "create_app"]
