from unittest import TestCase

from core.helper import get_current_time_in_timezone
from routes.tests.fixtures import DatabaseTestMixin


class TestOrderVerification(DatabaseTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.vendor = self.create_admin("vendor@example.com", role="vendor")
        self.headers = self.auth_header(self.vendor)
        self.event = self.create_event(
            vendor=self.vendor,
            require_social_verification=True,
            allowed_email_domains=["example.edu"],
        )
        self.order = self.create_order(
            self.event,
            ["Asha"],
            email="asha@cs.example.edu",
            social_handle="@asha",
            social_verification_status="pending",
        )

    def test_approve_social_handle_unlocks_scan(self):
        ticket = self.tickets_of(self.order)[0]
        response = self.client.post(
            "/tickets/verify",
            json={"scanPayload": ticket.qr_code_data},
            headers=self.headers,
        )
        self.assertEqual(response.json()["error"], "Social verification required")

        response = self.client.patch(
            f"/orders/{self.order.id}/social-verification",
            json={"status": "approved"},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 200)
        order = response.json()["order"]
        self.assertEqual(order["social_verification_status"], "approved")
        self.assertEqual(order["social_verified_by"], str(self.vendor.id))
        self.assertIsNotNone(order["social_verified_at"])

        response = self.client.post(
            "/tickets/verify",
            json={"scanPayload": ticket.qr_code_data},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)

    def test_back_to_pending_clears_reviewer(self):
        self.client.patch(
            f"/orders/{self.order.id}/social-verification",
            json={"status": "rejected"},
            headers=self.headers,
        )
        response = self.client.patch(
            f"/orders/{self.order.id}/social-verification",
            json={"status": "pending"},
            headers=self.headers,
        )

        order = response.json()["order"]
        self.assertEqual(order["social_verification_status"], "pending")
        self.assertIsNone(order["social_verified_by"])
        self.assertIsNone(order["social_verified_at"])

    def test_cannot_approve_without_handle(self):
        order = self.create_order(self.event, ["Ravi"], social_handle=None)

        response = self.client.patch(
            f"/orders/{order.id}/social-verification",
            json={"status": "approved"},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["message"], "Cannot approve without a social handle"
        )

    def test_invalid_status(self):
        response = self.client.patch(
            f"/orders/{self.order.id}/social-verification",
            json={"status": "maybe"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 422)

    def test_evaluate_email_domain(self):
        response = self.client.post(
            f"/orders/{self.order.id}/email-domain/evaluate", headers=self.headers
        )

        self.assertEqual(response.status_code, 200)
        order = response.json()["order"]
        self.assertEqual(order["email_domain"], "cs.example.edu")
        self.assertEqual(order["email_domain_status"], "approved")

    def test_set_email_domain_status(self):
        response = self.client.patch(
            f"/orders/{self.order.id}/email-domain",
            json={"status": "rejected"},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["order"]["email_domain_status"], "rejected")

    def test_other_vendor_cannot_review(self):
        other = self.create_admin("other@example.com", role="vendor")

        response = self.client.patch(
            f"/orders/{self.order.id}/social-verification",
            json={"status": "approved"},
            headers=self.auth_header(other),
        )

        self.assertEqual(response.status_code, 403)

    def test_unknown_order(self):
        response = self.client.patch(
            "/orders/00000000-0000-4000-8000-000000000000/email-domain",
            json={"status": "approved"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 404)


class TestSocialReviewQueue(DatabaseTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.vendor = self.create_admin("vendor@example.com", role="vendor")
        self.headers = self.auth_header(self.vendor)
        self.event = self.create_event(vendor=self.vendor, title="Handle Night")
        self.pending = self.create_order(
            self.event,
            ["Asha"],
            social_handle="@asha",
            social_verification_status="pending",
        )
        self.approved = self.create_order(
            self.event,
            ["Ravi"],
            social_handle="@ravi",
            social_verification_status="approved",
        )
        # not part of the queue
        self.create_order(self.event, ["Meera"], social_handle=None)
        self.create_order(self.event, ["Kiran"], status="created", social_handle="@kiran")

    def test_lists_paid_orders_with_handle(self):
        response = self.client.get("/social-reviews", headers=self.headers)

        self.assertEqual(response.status_code, 200)
        orders = response.json()["orders"]
        self.assertEqual(
            [order["id"] for order in orders],
            [str(self.approved.id), str(self.pending.id)],
        )
        self.assertEqual(orders[1]["event_title"], "Handle Night")
        self.assertEqual(orders[1]["social_verification_status"], "pending")
        self.assertEqual(orders[1]["attendee_names"], ["Asha"])

    def test_filter_by_status(self):
        response = self.client.get(
            "/social-reviews", params={"status": "pending"}, headers=self.headers
        )
        self.assertEqual(
            [order["id"] for order in response.json()["orders"]], [str(self.pending.id)]
        )

    def test_other_vendor_sees_nothing(self):
        other = self.create_admin("other@example.com", role="vendor")
        response = self.client.get("/social-reviews", headers=self.auth_header(other))
        self.assertEqual(response.json()["orders"], [])

        helper = self.create_admin("helper@example.com", role="vendor_moderator")
        response = self.client.get("/social-reviews", headers=self.auth_header(helper))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["orders"], [])


class TestRefunds(DatabaseTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.vendor = self.create_admin("vendor@example.com", role="vendor")
        self.headers = self.auth_header(self.vendor)
        self.event = self.create_event(vendor=self.vendor, title="Refund Night")
        self.order = self.create_order(
            self.event,
            ["Asha"],
            refund_requested=True,
            refund_reason="Cannot attend",
            refund_requested_at=get_current_time_in_timezone(),
        )

    def test_mark_refund_processed(self):
        response = self.client.patch(
            f"/orders/{self.order.id}/refund",
            json={"processed": True, "notes": "Sent back via UPI"},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["message"], "Refund marked as processed")
        self.assertTrue(data["order"]["refund_processed"])
        self.assertIsNotNone(data["order"]["refund_processed_at"])
        self.assertEqual(data["order"]["refund_notes"], "Sent back via UPI")
        self.session.refresh(self.order)
        self.assertEqual(self.order.refund_processed_by, self.vendor.id)

        response = self.client.patch(
            f"/orders/{self.order.id}/refund",
            json={"processed": False},
            headers=self.headers,
        )
        data = response.json()
        self.assertEqual(data["message"], "Refund status updated")
        self.assertFalse(data["order"]["refund_processed"])
        self.assertEqual(data["order"]["refund_notes"], "Sent back via UPI")

    def test_refund_must_be_requested(self):
        order = self.create_order(self.event, ["Ravi"])

        response = self.client.patch(
            f"/orders/{order.id}/refund", json={"processed": True}, headers=self.headers
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["message"], "No refund was requested for this order"
        )

    def test_other_vendor_cannot_process(self):
        other = self.create_admin("other@example.com", role="vendor")

        response = self.client.patch(
            f"/orders/{self.order.id}/refund",
            json={"processed": True},
            headers=self.auth_header(other),
        )
        self.assertEqual(response.status_code, 403)

        response = self.client.get("/refunds", headers=self.auth_header(other))
        self.assertEqual(response.json()["orders"], [])

    def test_list_refunds(self):
        self.create_order(self.event, ["Ravi"])

        response = self.client.get("/refunds", headers=self.headers)

        self.assertEqual(response.status_code, 200)
        orders = response.json()["orders"]
        self.assertEqual([order["id"] for order in orders], [str(self.order.id)])
        self.assertEqual(orders[0]["refund_reason"], "Cannot attend")
        self.assertEqual(orders[0]["event_title"], "Refund Night")
        self.assertFalse(orders[0]["refund_processed"])

        response = self.client.get(
            "/refunds", params={"processed": "true"}, headers=self.headers
        )
        self.assertEqual(response.json()["orders"], [])
