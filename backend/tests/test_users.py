"""Signup, role checks and role promotion endpoints."""

from __future__ import annotations

import unittest

from bson import ObjectId

from tests.support import AppTestCase


class CreateUserTestCase(AppTestCase):
    def test_signup_is_idempotent_on_email(self) -> None:
        first = self.client.post("/users", json={"email": "x@y.com", "name": "X"})

        self.assertEqual(200, first.status_code)
        body = first.get_json()
        self.assertTrue(body["acknowledged"])
        self.assertTrue(ObjectId.is_valid(body["inserted_id"]))

        second = self.client.post("/users", json={"email": "x@y.com", "name": "Other"})

        self.assertEqual({"message": "user already exists"}, second.get_json())
        self.assertEqual(1, self.database["users"].count_documents({}))
        self.assertEqual("X", self.database["users"].find_one({"email": "x@y.com"})["name"])

    def test_signup_keeps_extra_fields(self) -> None:
        self.client.post("/users", json={"email": "x@y.com", "photo": "p.png"})

        self.assertEqual("p.png", self.database["users"].find_one()["photo"])

    def test_signup_rejects_invalid_bodies(self) -> None:
        cases = [
            ({"name": "No Email"}, "email"),
            ({"email": "not-an-email"}, "email"),
            ({"email": "x@y.com", "role": "admin"}, "role"),
            ({"email": "x@y.com", "_id": "abc"}, "_id"),
        ]
        for payload, field in cases:
            with self.subTest(field=field, payload=payload):
                response = self.client.post("/users", json=payload)
                self.assertEqual(400, response.status_code)
                self.assertIn(field, response.get_json()["details"])

        response = self.client.post("/users", data="x@y.com", content_type="text/plain")
        self.assertEqual(400, response.status_code)
        self.assertEqual(0, self.database["users"].count_documents({}))

    def test_list_users_returns_every_document(self) -> None:
        self.database["users"].insert_many(
            [{"email": "a@b.com"}, {"email": "c@d.com", "role": "admin"}]
        )

        response = self.client.get("/users")

        users = response.get_json()
        self.assertEqual(["a@b.com", "c@d.com"], [user["email"] for user in users])
        self.assertTrue(all(isinstance(user["_id"], str) for user in users))


class RoleCheckTestCase(AppTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.database["users"].insert_many(
            [
                {"email": "boss@acoustica.example", "role": "admin"},
                {"email": "teach@acoustica.example", "role": "instructor"},
                {"email": "student@acoustica.example"},
            ]
        )

    def test_admin_check(self) -> None:
        expected = {
            "boss@acoustica.example": True,
            "teach@acoustica.example": False,
            "student@acoustica.example": False,
            "ghost@acoustica.example": False,
        }
        for email, is_admin in expected.items():
            with self.subTest(email=email):
                response = self.client.get(f"/users/admin/{email}")
                self.assertEqual({"admin": is_admin}, response.get_json())

    def test_instructor_check(self) -> None:
        expected = {
            "boss@acoustica.example": False,
            "teach@acoustica.example": True,
            "ghost@acoustica.example": False,
        }
        for email, is_instructor in expected.items():
            with self.subTest(email=email):
                response = self.client.get(f"/users/instructor/{email}")
                self.assertEqual({"instructor": is_instructor}, response.get_json())


class PromoteUserTestCase(AppTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_id = self.database["users"].insert_one(
            {"email": "x@y.com", "name": "X"}
        ).inserted_id

    def test_make_admin_sets_role_only(self) -> None:
        response = self.client.patch(f"/users/admin/{self.user_id}")

        body = response.get_json()
        self.assertEqual(1, body["matched_count"])
        self.assertEqual(1, body["modified_count"])
        self.assertIsNone(body["upserted_id"])
        user = self.database["users"].find_one({"_id": self.user_id})
        self.assertEqual({"_id": self.user_id, "email": "x@y.com", "name": "X", "role": "admin"}, user)

    def test_make_instructor(self) -> None:
        self.client.patch(f"/users/instructor/{self.user_id}")

        self.assertEqual(
            "instructor", self.database["users"].find_one({"_id": self.user_id})["role"]
        )

    def test_promoting_unknown_user_creates_nothing(self) -> None:
        response = self.client.patch(f"/users/admin/{ObjectId()}")

        self.assertEqual(200, response.status_code)
        self.assertEqual(0, response.get_json()["matched_count"])
        self.assertEqual(1, self.database["users"].count_documents({}))

    def test_malformed_identifier_is_rejected(self) -> None:
        response = self.client.patch("/users/admin/not-an-object-id")

        self.assertEqual(400, response.status_code)
        self.assertEqual({"error": "Invalid identifier."}, response.get_json())


if __name__ == "__main__":
    unittest.main()
