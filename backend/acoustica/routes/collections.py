"""Collection endpoints generated from a declarative route table.

Every endpoint runs exactly one collection operation and returns the storage
result. The four handler shapes are implemented once below and bound to a
collection when the blueprint is built, so the same table can be served from a
real database or a substitute store.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Dict, Mapping, Tuple

from bson import ObjectId
from flask import Blueprint, jsonify, request
from pymongo.collection import Collection

from ..db import Collections, serialize_insert_result, serialize_update_result
from ..utils.payloads import (
    Validator,
    validate_document_payload,
    validate_user_payload,
    validation_error,
)
from .auth_jwt import require_token

logger = logging.getLogger(__name__)

CREATE = "create"
LIST_ALL = "list_all"
ROLE_CHECK = "role_check"
SET_FIELD = "set_field"


@dataclasses.dataclass(frozen=True)
class RouteSpec:
    method: str
    rule: str
    endpoint: str
    shape: str
    collection: str
    options: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    protected: bool = False


ROUTES: Tuple[RouteSpec, ...] = (
    RouteSpec("GET", "/users/admin/<email>", "is_admin", ROLE_CHECK, "users",
              {"key": "admin", "role": "admin"}),
    RouteSpec("GET", "/users/instructor/<email>", "is_instructor", ROLE_CHECK, "users",
              {"key": "instructor", "role": "instructor"}),
    RouteSpec("POST", "/users", "create_user", CREATE, "users",
              {"validator": validate_user_payload, "unique_field": "email",
               "exists_message": "user already exists"}),
    RouteSpec("GET", "/users", "list_users", LIST_ALL, "users"),
    RouteSpec("PATCH", "/users/admin/<item_id>", "make_admin", SET_FIELD, "users",
              {"field": "role", "value": "admin", "upsert": False}, protected=True),
    RouteSpec("PATCH", "/users/instructor/<item_id>", "make_instructor", SET_FIELD, "users",
              {"field": "role", "value": "instructor", "upsert": False}, protected=True),
    RouteSpec("GET", "/instructors", "list_instructors", LIST_ALL, "instructors"),
    RouteSpec("GET", "/classes", "list_classes", LIST_ALL, "classes"),
    RouteSpec("POST", "/my-selected", "create_selected", CREATE, "selected",
              {"validator": validate_document_payload}, protected=True),
    RouteSpec("GET", "/my-selected", "list_selected", LIST_ALL, "selected"),
    RouteSpec("POST", "/add-class", "create_added_class", CREATE, "added_classes",
              {"validator": validate_document_payload}, protected=True),
    RouteSpec("GET", "/add-class", "list_added_classes", LIST_ALL, "added_classes"),
    RouteSpec("GET", "/manage-classes", "manage_classes", LIST_ALL, "added_classes"),
    RouteSpec("PATCH", "/approved-classes/<item_id>", "approve_class", SET_FIELD, "added_classes",
              {"field": "status", "value": "approved", "upsert": True}, protected=True),
    RouteSpec("PATCH", "/denied-classes/<item_id>", "deny_class", SET_FIELD, "added_classes",
              {"field": "status", "value": "denied", "upsert": True}, protected=True),
)


def make_create_handler(
    collection: Collection,
    validator: Validator,
    unique_field: str | None = None,
    exists_message: str = "document already exists",
) -> Callable[..., Any]:
    def handler():
        cleaned, errors = validator(request.get_json(silent=True))
        if errors:
            return validation_error(errors)

        if unique_field is not None:
            existing = collection.find_one({unique_field: cleaned.get(unique_field)})
            if existing:
                return jsonify({"message": exists_message})

        result = collection.insert_one(cleaned)
        return jsonify(serialize_insert_result(result))

    return handler


def make_list_handler(collection: Collection) -> Callable[..., Any]:
    def handler():
        return jsonify(list(collection.find()))

    return handler


def make_role_check_handler(collection: Collection, key: str, role: str) -> Callable[..., Any]:
    def handler(email: str):
        user = collection.find_one({"email": email})
        return jsonify({key: bool(user) and user.get("role") == role})

    return handler


def make_set_field_handler(
    collection: Collection, field: str, value: Any, upsert: bool
) -> Callable[..., Any]:
    def handler(item_id: str):
        result = collection.update_one(
            {"_id": ObjectId(item_id)},
            {"$set": {field: value}},
            upsert=upsert,
        )
        if upsert and result.upserted_id is not None:
            logger.info("Created %s document %s with %s=%s",
                        collection.name, result.upserted_id, field, value)
        return jsonify(serialize_update_result(result))

    return handler


_FACTORIES: Dict[str, Callable[..., Callable[..., Any]]] = {
    CREATE: make_create_handler,
    LIST_ALL: make_list_handler,
    ROLE_CHECK: make_role_check_handler,
    SET_FIELD: make_set_field_handler,
}


def build_collections_blueprint(
    collections: Collections, *, protect_writes: bool = False
) -> Blueprint:
    """Bind every route in ``ROUTES`` to its collection handle."""

    blueprint = Blueprint("collections", __name__)

    for route in ROUTES:
        view = _FACTORIES[route.shape](collections.by_name(route.collection), **route.options)
        if protect_writes and route.protected:
            view = require_token(view)
        blueprint.add_url_rule(
            route.rule, endpoint=route.endpoint, view_func=view, methods=[route.method]
        )

    return blueprint


__all__ = [
    "ROUTES",
    "RouteSpec",
    "build_collections_blueprint",
    "make_create_handler",
    "make_list_handler",
    "make_role_check_handler",
    "make_set_field_handler",
]
