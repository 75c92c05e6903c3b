from unittest import TestCase

from models.AdminUser import AdminUser
from routes.tests.fixtures import DatabaseTestMixin


class TestAdminUsers(DatabaseTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.create_admin("root@example.com", role="admin")
        self.headers = self.auth_header(self.admin)
        self.vendor = self.create_admin("vendor@example.com", role="vendor")

    def test_only_admin_manages_users(self):
        moderator = self.create_admin("mod@example.com", role="moderator")
        headers = self.auth_header(moderator)

        self.assertEqual(self.client.get("/admin/users", headers=headers).status_code, 403)
        self.assertEqual(self.client.get("/admin/vendors", headers=headers).status_code, 403)
        response = self.client.post(
            "/admin/users",
            json={"email": "new@example.com", "password": "secret1", "role": "admin"},
            headers=headers,
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.client.get("/admin/users").status_code, 401)

    def test_list_users_and_vendors(self):
        self.create_admin("another-vendor@example.com", role="vendor")

        response = self.client.get("/admin/users", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        emails = [user["email"] for user in response.json()["users"]]
        self.assertIn("root@example.com", emails)
        self.assertIn("vendor@example.com", emails)

        response = self.client.get("/admin/vendors", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        vendor_emails = [vendor["email"] for vendor in response.json()["vendors"]]
        self.assertNotIn("root@example.com", vendor_emails)
        self.assertLess(
            vendor_emails.index("another-vendor@example.com"),
            vendor_emails.index("vendor@example.com"),
        )

    def test_create_vendor_moderator(self):
        response = self.client.post(
            "/admin/users",
            json={
                "email": "Helper@Example.com",
                "password": "secret1",
                "role": "vendor_moderator",
                "vendor_id": str(self.vendor.id),
            },
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 201)
        user = response.json()["user"]
        self.assertEqual(user["email"], "helper@example.com")
        self.assertEqual(user["role"], "vendor_moderator")
        self.assertEqual(user["vendor_id"], str(self.vendor.id))

        # the new account can sign in
        response = self.client.post(
            "/auth/login",
            json={"email": "helper@example.com", "password": "secret1"},
        )
        self.assertEqual(response.status_code, 200)

    def test_vendor_link_dropped_for_other_roles(self):
        response = self.client.post(
            "/admin/users",
            json={
                "email": "mod@example.com",
                "password": "secret1",
                "role": "moderator",
                "vendor_id": str(self.vendor.id),
            },
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.json()["user"]["vendor_id"])

    def test_create_rejects_bad_input(self):
        response = self.client.post(
            "/admin/users",
            json={"email": "helper@example.com", "password": "secret1", "role": "vendor_moderator"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 422)

        response = self.client.post(
            "/admin/users",
            json={"email": "vendor@example.com", "password": "secret1", "role": "vendor"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Email already exists")

        response = self.client.post(
            "/admin/users",
            json={
                "email": "helper@example.com",
                "password": "secret1",
                "role": "vendor_moderator",
                "vendor_id": str(self.admin.id),
            },
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Vendor not found")

    def test_update_user(self):
        helper = self.create_admin(
            "helper@example.com", role="vendor_moderator", vendor_id=self.vendor.id
        )

        response = self.client.patch(
            f"/admin/users/{helper.id}",
            json={"role": "moderator", "password": "changed1"},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 200)
        user = response.json()["user"]
        self.assertEqual(user["role"], "moderator")
        self.assertIsNone(user["vendor_id"])
        response = self.client.post(
            "/auth/login",
            json={"email": "helper@example.com", "password": "changed1"},
        )
        self.assertEqual(response.status_code, 200)

    def test_update_rejects_bad_input(self):
        helper = self.create_admin("helper@example.com", role="moderator")

        response = self.client.patch(
            f"/admin/users/{helper.id}", json={}, headers=self.headers
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "No updates provided")

        response = self.client.patch(
            f"/admin/users/{helper.id}",
            json={"email": "vendor@example.com"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)

        response = self.client.patch(
            "/admin/users/00000000-0000-4000-8000-000000000000",
            json={"role": "admin"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 404)

    def test_delete_user(self):
        helper = self.create_admin("helper@example.com", role="moderator")
        helper_headers = self.auth_header(helper)

        response = self.client.delete(f"/admin/users/{helper.id}", headers=self.headers)

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])
        self.assertIsNone(self.session.get(AdminUser, helper.id))
        self.assertEqual(self.client.get("/auth/me/", headers=helper_headers).status_code, 401)

    def test_cannot_delete_self(self):
        response = self.client.delete(f"/admin/users/{self.admin.id}", headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Cannot delete your own account")
