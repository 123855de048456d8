"""Application configuration helpers."""

import os
from datetime import timedelta
from urllib.parse import quote_plus

from dotenv import load_dotenv

_BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_DOTENV_PATH = os.path.join(_BASE_DIR, ".env")

if os.path.exists(_DOTENV_PATH):
    load_dotenv(_DOTENV_PATH)


class ConfigError(RuntimeError):
    """Raised when configuration values are missing or invalid."""


DEFAULT_DB_NAME = "Acoustica"
DEFAULT_CLUSTER = "cluster0.jaehzkc.mongodb.net"
DEFAULT_PORT = 5000

TOKEN_ALGORITHM = "HS256"
TOKEN_EXPIRES_IN = timedelta(days=7)

INSTRUCTORS_COLLECTION = "instructors"
CLASSES_COLLECTION = "classes"
USERS_COLLECTION = "users"
SELECTED_COLLECTION = "selected"
ADDED_CLASSES_COLLECTION = "add-class"

_MONGO_URI_CACHE = None


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def get_mongo_uri():
    """Return the MongoDB connection string.

    ``MONGODB_URI`` wins when present. Otherwise the Atlas SRV string is
    assembled from ``DB_USER``, ``DB_PASS`` and ``DB_CLUSTER``.
    """

    global _MONGO_URI_CACHE

    if _MONGO_URI_CACHE:
        return _MONGO_URI_CACHE

    uri = os.getenv("MONGODB_URI")
    if not uri:
        user = os.getenv("DB_USER")
        password = os.getenv("DB_PASS")
        if not user or not password:
            raise ConfigError(
                "DB_USER and DB_PASS are not set. Define them (or MONGODB_URI) "
                "in backend/.env."
            )
        cluster = os.getenv("DB_CLUSTER") or DEFAULT_CLUSTER
        uri = (
            f"mongodb+srv://{quote_plus(user)}:{quote_plus(password)}@{cluster}/"
            "?retryWrites=true&w=majority"
        )

    _MONGO_URI_CACHE = uri
    return uri


def get_db_name():
    """Return the database holding the application's collections."""

    return os.getenv("MONGODB_DB") or DEFAULT_DB_NAME


def get_token_secret():
    """Return the secret used to sign and verify access tokens."""

    secret = os.getenv("ACCESS_TOKEN_SECRET")
    if not secret:
        raise ConfigError("ACCESS_TOKEN_SECRET is not set. Define it in backend/.env.")
    return secret


def get_port() -> int:
    raw = os.getenv("PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw!r}.") from None


def require_token_on_writes() -> bool:
    """Whether mutating routes demand a bearer token."""

    return _env_flag("REQUIRE_TOKEN_ON_WRITES")


def debug_enabled() -> bool:
    return _env_flag("FLASK_DEBUG")


def get_log_level() -> str:
    return (os.getenv("LOG_LEVEL") or "INFO").upper()


__all__ = [
    "ConfigError",
    "get_mongo_uri",
    "get_db_name",
    "get_token_secret",
    "get_port",
    "require_token_on_writes",
    "debug_enabled",
    "get_log_level",
]
