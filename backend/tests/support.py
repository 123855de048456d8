"""Shared fixtures: an app bound to a throwaway in-memory database."""

from __future__ import annotations

import sys
import unittest
import uuid
from pathlib import Path
from typing import Any, Dict

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import mongomock

from acoustica import create_app
from acoustica.security import issue_token

TEST_SECRET = "test-access-token-secret"


class AppTestCase(unittest.TestCase):
    config_overrides: Dict[str, Any] = {}

    def setUp(self) -> None:
        self.database = mongomock.MongoClient()[f"acoustica_{uuid.uuid4().hex}"]
        overrides: Dict[str, Any] = {
            "TESTING": True,
            "ACCESS_TOKEN_SECRET": TEST_SECRET,
            "REQUIRE_TOKEN_ON_WRITES": False,
        }
        overrides.update(self.config_overrides)
        self.app = create_app(self.database, config_overrides=overrides)
        self.client = self.app.test_client()

    def auth_headers(self, **claims: Any) -> Dict[str, str]:
        token = issue_token(claims or {"email": "tester@example.com"}, TEST_SECRET)
        return {"Authorization": f"Bearer {token}"}
