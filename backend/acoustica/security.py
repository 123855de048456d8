"""Signing and verification of bearer access tokens."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping

import jwt

from . import config


def issue_token(
    payload: Mapping[str, Any],
    secret: str,
    *,
    expires_in: timedelta = config.TOKEN_EXPIRES_IN,
) -> str:
    """Sign ``payload`` into a token that expires after ``expires_in``."""

    now = datetime.now(timezone.utc)
    claims: Dict[str, Any] = dict(payload)
    claims.update({"iat": now, "exp": now + expires_in})
    return jwt.encode(claims, secret, algorithm=config.TOKEN_ALGORITHM)


def decode_token(token: str, secret: str) -> Dict[str, Any]:
    """Verify signature and expiry and return the decoded claims.

    Raises ``jwt.PyJWTError`` when the token cannot be trusted.
    """

    # Audience and subject are client data here, not checked claims.
    return jwt.decode(
        token,
        secret,
        algorithms=[config.TOKEN_ALGORITHM],
        options={"verify_aud": False, "verify_sub": False, "verify_jti": False},
    )


__all__ = ["issue_token", "decode_token"]
