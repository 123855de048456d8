"""Request-body contracts for the write routes."""

from __future__ import annotations

from typing import Any, Callable, Dict, Tuple

from flask import jsonify

Cleaned = Dict[str, Any]
Errors = Dict[str, str]
Validator = Callable[[Any], Tuple[Cleaned, Errors]]

_NOT_JSON = "Request body must be JSON."


def json_error(message: str, status: int, details: Dict[str, Any] | None = None):
    payload: Dict[str, Any] = {"error": message}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def validation_error(errors: Errors):
    details = {k: v for k, v in errors.items() if k != "_global"}
    message = errors.get("_global", "Validation failed.")
    return json_error(message, 400, details if details else None)


def validate_token_payload(payload: Any) -> Tuple[Cleaned, Errors]:
    """Any JSON object may be signed into a token.

    Registered claim names are only accepted when the signed token can still
    be verified afterwards.
    """

    if not isinstance(payload, dict):
        return {}, {"_global": _NOT_JSON}

    errors: Errors = {}

    for claim in ("exp", "iat"):
        if claim in payload:
            errors[claim] = "Issue and expiry times are assigned by the server."

    if "nbf" in payload and not _is_number(payload["nbf"]):
        errors["nbf"] = "Not-before must be a numeric timestamp."

    for claim in ("iss", "sub", "jti"):
        if claim in payload and not isinstance(payload[claim], str):
            errors[claim] = f"{claim} must be a string."

    if "aud" in payload:
        audience = payload["aud"]
        if not (
            isinstance(audience, str)
            or (isinstance(audience, list) and all(isinstance(a, str) for a in audience))
        ):
            errors["aud"] = "Audience must be a string or a list of strings."

    return dict(payload), errors


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_user_payload(payload: Any) -> Tuple[Cleaned, Errors]:
    if not isinstance(payload, dict):
        return {}, {"_global": _NOT_JSON}

    errors: Errors = {}
    cleaned: Cleaned = dict(payload)

    email = payload.get("email")
    if not isinstance(email, str) or email.strip() == "":
        errors["email"] = "Email is required."
    elif "@" not in email:
        errors["email"] = "Enter a valid email address."
    else:
        cleaned["email"] = email.strip()

    # Roles are granted through the PATCH endpoints only.
    if "role" in payload:
        errors["role"] = "Role cannot be set at signup."

    if "_id" in payload:
        errors["_id"] = "Identifiers are assigned by the server."

    return cleaned, errors


def validate_document_payload(payload: Any) -> Tuple[Cleaned, Errors]:
    """Selections and submitted classes: any non-empty object without ``_id``."""

    if not isinstance(payload, dict):
        return {}, {"_global": _NOT_JSON}
    if not payload:
        return {}, {"_global": "Request body must not be empty."}

    errors: Errors = {}
    if "_id" in payload:
        errors["_id"] = "Identifiers are assigned by the server."
    return dict(payload), errors


__all__ = [
    "Validator",
    "json_error",
    "validation_error",
    "validate_token_payload",
    "validate_user_payload",
    "validate_document_payload",
]
