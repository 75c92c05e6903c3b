from unittest import TestCase

from sqlalchemy import select

from models.Token import Token
from routes.tests.fixtures import DatabaseTestMixin


class TestAuth(DatabaseTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.create_admin("moderator@example.com", role="moderator")

    def test_login_me_logout(self):
        # When 1
        response = self.client.post(
            "/auth/login",
            json={"email": "moderator@example.com", "password": "password"},
        )

        # Expect 1
        self.assertEqual(response.status_code, 200)
        token = response.json()["token"]
        self.assertTrue(response.json()["success"])
        self.assertIn("admin_token", response.headers.get("set-cookie"))
        session = self.session.execute(
            select(Token).where(Token.token == token)
        ).scalar()
        self.assertIsNotNone(session)

        # When 2
        response = self.client.get(
            "/auth/me/", headers={"Authorization": f"Bearer {token}"}
        )

        # Expect 2
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json()["admin"],
            {
                "id": str(self.admin.id),
                "email": "moderator@example.com",
                "role": "moderator",
                "vendor_id": None,
            },
        )

        # When 3
        response = self.client.post(
            "/auth/logout/", headers={"Authorization": f"Bearer {token}"}
        )

        # Expect 3
        self.assertEqual(response.status_code, 200)
        response = self.client.get(
            "/auth/me/", headers={"Authorization": f"Bearer {token}"}
        )
        self.assertEqual(response.status_code, 401)

    def test_login_wrong_password(self):
        response = self.client.post(
            "/auth/login",
            json={"email": "moderator@example.com", "password": "wrong-password"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Invalid credentials")

    def test_login_validation_error(self):
        response = self.client.post(
            "/auth/login", json={"email": "not-an-email", "password": "password"}
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["errors"][0]["field"], "email")

    def test_swagger_token_form(self):
        response = self.client.post(
            "/auth/token/",
            data={"username": "moderator@example.com", "password": "password"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["token_type"], "bearer")

    def test_forged_token(self):
        response = self.client.get(
            "/auth/me/", headers={"Authorization": "Bearer not.a.jwt"}
        )
        self.assertEqual(response.status_code, 401)
