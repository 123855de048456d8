"""Seed helper that loads the reference collections into MongoDB.

Instructors and the class catalog are read-only over HTTP, so this is the only
write path for them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from pymongo.errors import PyMongoError

from acoustica.config import ConfigError, get_db_name, get_mongo_uri
from acoustica.db import create_client

ROOT_DIR = Path(__file__).resolve().parent.parent
BACKEND_DIR = ROOT_DIR / "backend"
ENV_PATH = BACKEND_DIR / ".env"
SEED_PATH = Path(__file__).resolve().parent / "seed.json"

logger = logging.getLogger("seed")


def load_env() -> None:
    if ENV_PATH.exists():
        load_dotenv(ENV_PATH)


def read_seed_file(path: Path = SEED_PATH) -> Dict[str, List[Dict[str, Any]]]:
    with path.open("r", encoding="utf-8") as seed_file:
        data = json.load(seed_file)
    if not isinstance(data, dict):
        raise ValueError("Seed file must contain an object of collections")
    return data


def seed_database(database, seed_data: Dict[str, List[Dict[str, Any]]]) -> Dict[str, int]:
    """Replace the contents of each listed collection with the seed documents."""

    loaded: Dict[str, int] = {}
    for collection_name, documents in seed_data.items():
        if not isinstance(documents, list):
            raise ValueError(
                f"Seed data for collection '{collection_name}' must be a list"
            )

        collection = database[collection_name]
        collection.delete_many({})
        if documents:
            collection.insert_many(documents)

        loaded[collection_name] = len(documents)
        logger.info(
            "Loaded %d document(s) into '%s' collection", len(documents), collection_name
        )
    return loaded


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    load_env()
    try:
        uri = get_mongo_uri()
        db_name = get_db_name()
    except ConfigError as exc:  # pragma: no cover - simple CLI utility
        logger.error("Configuration error: %s", exc)
        raise SystemExit(1)

    client = create_client(uri)

    try:
        seed_database(client[db_name], read_seed_file())
        logger.info("Seeding complete for database '%s'.", db_name)
    except PyMongoError as exc:  # pragma: no cover - requires Mongo connection
        logger.error("MongoDB error: %s", exc)
        raise SystemExit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
