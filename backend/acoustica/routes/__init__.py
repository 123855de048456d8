"""Application route blueprints and helpers."""

from .auth_jwt import auth_jwt_bp, require_token
from .collections import ROUTES, build_collections_blueprint

__all__ = ["ROUTES", "auth_jwt_bp", "build_collections_blueprint", "require_token"]
