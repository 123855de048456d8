"""Bearer token issuance and verification."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

import jwt
from flask import Blueprint, current_app, g, jsonify, request

from .. import config
from ..security import decode_token, issue_token
from ..utils.payloads import validate_token_payload, validation_error

auth_jwt_bp = Blueprint("auth_jwt", __name__)

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., Any])


def _unauthorized():
    return jsonify({"error": True, "message": "unauthorized access"}), 401


def _token_secret() -> str:
    return current_app.config.get("ACCESS_TOKEN_SECRET") or config.get_token_secret()


def require_token(func: _F) -> _F:
    """Reject the request unless it carries a valid bearer token.

    The decoded claims are exposed to the handler as ``g.decoded``.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        authorization = request.headers.get("Authorization")
        if not authorization:
            return _unauthorized()

        parts = authorization.split()
        if len(parts) < 2:
            return _unauthorized()

        try:
            g.decoded = decode_token(parts[1], _token_secret())
        except jwt.PyJWTError as exc:
            logger.info("Rejected bearer token: %s", exc)
            return _unauthorized()
        return func(*args, **kwargs)

    return cast(_F, wrapper)


@auth_jwt_bp.post("/jwt")
def create_token():
    cleaned, errors = validate_token_payload(request.get_json(silent=True))
    if errors:
        return validation_error(errors)
    return jsonify({"token": issue_token(cleaned, _token_secret())})


__all__ = ["auth_jwt_bp", "require_token"]
