"""MongoDB helpers for the application."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from . import config

logger = logging.getLogger(__name__)


def create_client(uri: str) -> MongoClient:
    """Create the process-wide MongoDB client.

    The client is owned by the process root and is never closed; it lives
    until the process exits.
    """

    return MongoClient(
        uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
        serverSelectionTimeoutMS=5000,
    )


@dataclass(frozen=True)
class Collections:
    instructors: Collection
    classes: Collection
    users: Collection
    selected: Collection
    added_classes: Collection

    def by_name(self, name: str) -> Collection:
        return getattr(self, name)


def get_collections(database) -> Collections:
    """Open the five named collection handles on ``database``."""

    return Collections(
        instructors=database[config.INSTRUCTORS_COLLECTION],
        classes=database[config.CLASSES_COLLECTION],
        users=database[config.USERS_COLLECTION],
        selected=database[config.SELECTED_COLLECTION],
        added_classes=database[config.ADDED_CLASSES_COLLECTION],
    )


def ping(client) -> bool:
    """Send a ping to confirm the deployment is reachable."""

    try:
        client["admin"].command({"ping": 1})
    except PyMongoError:
        logger.exception("Could not ping MongoDB deployment")
        return False
    logger.info("Pinged your deployment. You successfully connected to MongoDB!")
    return True


def serialize_insert_result(result) -> Dict[str, Any]:
    """Convert an ``InsertOneResult`` into a JSON-friendly acknowledgment."""

    return {
        "acknowledged": result.acknowledged,
        "inserted_id": result.inserted_id,
    }


def serialize_update_result(result) -> Dict[str, Any]:
    """Convert an ``UpdateResult`` into a JSON-friendly acknowledgment."""

    return {
        "acknowledged": result.acknowledged,
        "matched_count": result.matched_count,
        "modified_count": result.modified_count,
        "upserted_id": result.upserted_id,
    }


__all__ = [
    "Collections",
    "create_client",
    "get_collections",
    "ping",
    "serialize_insert_result",
    "serialize_update_result",
]
