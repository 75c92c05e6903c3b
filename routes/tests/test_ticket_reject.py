from unittest import TestCase

from routes.tests.fixtures import DatabaseTestMixin


class TestTicketReject(DatabaseTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.vendor = self.create_admin("vendor@example.com", role="vendor")
        self.headers = self.auth_header(self.vendor)
        self.event = self.create_event(vendor=self.vendor)
        self.order = self.create_order(self.event, ["Asha"])
        self.ticket = self.tickets_of(self.order)[0]

    def reject(self, ticket_id, headers=None):
        return self.client.post(
            "/tickets/reject",
            json={"ticketId": str(ticket_id)},
            headers=headers or self.headers,
        )

    def test_reject_active_ticket(self):
        response = self.reject(self.ticket.id)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["message"], "Ticket rejected successfully")
        self.assertEqual(data["ticket"]["status"], "cancelled")
        self.session.refresh(self.ticket)
        self.assertEqual(self.ticket.status, "cancelled")

    def test_reject_twice(self):
        self.reject(self.ticket.id)
        response = self.reject(self.ticket.id)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Ticket already cancelled")

    def test_reject_used_ticket(self):
        self.ticket.status = "used"
        self.session.commit()

        response = self.reject(self.ticket.id)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["message"],
            "This ticket has already been scanned and cannot be rejected",
        )

    def test_reject_unknown_ticket(self):
        response = self.reject("00000000-0000-4000-8000-000000000000")
        self.assertEqual(response.status_code, 404)

        response = self.reject("garbage")
        self.assertEqual(response.status_code, 404)

    def test_reject_requires_ticket_id(self):
        response = self.client.post("/tickets/reject", json={}, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Ticket ID is required")

    def test_reject_other_vendor_ticket(self):
        other = self.create_admin("other@example.com", role="vendor")

        response = self.reject(self.ticket.id, headers=self.auth_header(other))

        self.assertEqual(response.status_code, 403)
        self.session.refresh(self.ticket)
        self.assertEqual(self.ticket.status, "active")


class TestGetTicket(DatabaseTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.vendor = self.create_admin("vendor@example.com", role="vendor")
        self.event = self.create_event(vendor=self.vendor)
        self.order = self.create_order(self.event, ["Asha", "Ravi"])
        self.ticket = self.tickets_of(self.order)[1]

    def test_get_ticket_view(self):
        response = self.client.get(
            f"/tickets/{self.ticket.id}", headers=self.auth_header(self.vendor)
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["ticket"]["attendee_name"], "Ravi")
        self.assertEqual(data["event"]["title"], "Test Meetup")
        self.assertEqual(
            [sibling["attendee_name"] for sibling in data["siblingTickets"]],
            ["Asha", "Ravi"],
        )
        self.assertEqual(data["gateScanProgress"]["totalCount"], 0)
        self.assertNotIn("payment_provider_raw", data["order"])

    def test_get_ticket_outside_scope(self):
        other = self.create_admin("other@example.com", role="vendor")
        response = self.client.get(
            f"/tickets/{self.ticket.id}", headers=self.auth_header(other)
        )
        self.assertEqual(response.status_code, 403)

    def test_get_ticket_unauthenticated(self):
        response = self.client.get(f"/tickets/{self.ticket.id}")
        self.assertEqual(response.status_code, 401)
