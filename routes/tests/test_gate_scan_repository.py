from unittest import TestCase

from core.helper import get_current_time_in_timezone
from models.Ticket import TicketStatus
from repository.ticket import transition_ticket_status
from repository.ticket_gate_scan import get_scanned_gate_ids, insert_gate_scan_if_absent
from routes.tests.fixtures import DatabaseTestMixin


class TestGateScanRepository(DatabaseTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.event = self.create_event(enable_entry_gate_flow=True)
        self.gate = self.create_gate(self.event, "Main Gate")
        self.ticket = self.tickets_of(self.create_order(self.event, ["Asha"]))[0]

    def insert_scan(self):
        return insert_gate_scan_if_absent(
            db=self.session,
            ticket_id=self.ticket.id,
            event_id=self.event.id,
            gate_id=self.gate.id,
            scanned_by_admin_id=None,
            scanned_at=get_current_time_in_timezone(),
            scan_source="test",
        )

    def test_duplicate_gate_scan_is_dropped(self):
        self.assertTrue(self.insert_scan())
        self.assertFalse(self.insert_scan())
        self.assertEqual(
            get_scanned_gate_ids(self.session, self.ticket.id), {str(self.gate.id)}
        )

    def test_status_transition_happens_once(self):
        now = get_current_time_in_timezone()
        transition = dict(
            db=self.session,
            ticket_id=self.ticket.id,
            from_status=TicketStatus.ACTIVE,
            to_status=TicketStatus.USED,
            now=now,
            stamp_scanned_at=True,
        )

        self.assertTrue(transition_ticket_status(**transition))
        self.assertFalse(transition_ticket_status(**transition))
        self.session.refresh(self.ticket)
        self.assertEqual(self.ticket.status, "used")
        self.assertIsNotNone(self.ticket.scanned_at)
