import json
from unittest import TestCase

from core.exceptions import ScanBadRequestError
from core.ticket_lookup import (
    ScanPayload,
    encode_scan_payload,
    parse_scan_payload,
    pick_by_position,
)


class TestParseScanPayload(TestCase):
    def payload(self, **overrides):
        data = {
            "order_id": "7d0f5b1e-6d3c-4f57-9a43-3f1a8f1f1c11",
            "ticket_index": 1,
            "event_id": "0b3f0c55-5a8e-4a4e-8f4c-1c2d9d7e4a21",
            "tier_id": None,
            "attendee_name": "Asha",
            "timestamp": 1760000000000,
        }
        data.update(overrides)
        return json.dumps(data)

    def test_valid_payload(self):
        parsed = parse_scan_payload(self.payload())
        self.assertEqual(parsed.ticket_index, 1)
        self.assertEqual(parsed.attendee_name, "Asha")

    def test_empty_payload(self):
        for value in (None, ""):
            with self.assertRaises(ScanBadRequestError) as ctx:
                parse_scan_payload(value)
            self.assertEqual(ctx.exception.message, "QR code data is required")

    def test_not_json(self):
        with self.assertRaises(ScanBadRequestError) as ctx:
            parse_scan_payload("TICKET-123")
        self.assertEqual(ctx.exception.error, "Invalid QR code format")
        self.assertEqual(ctx.exception.message, "QR code is not valid JSON")

    def test_json_that_is_not_an_object(self):
        with self.assertRaises(ScanBadRequestError) as ctx:
            parse_scan_payload("[1, 2]")
        self.assertEqual(ctx.exception.message, "Missing required fields in QR code")

    def test_missing_fields(self):
        data = json.loads(self.payload())
        del data["ticket_index"]
        with self.assertRaises(ScanBadRequestError) as ctx:
            parse_scan_payload(json.dumps(data))
        self.assertEqual(ctx.exception.error, "Invalid QR code structure")

        with self.assertRaises(ScanBadRequestError):
            parse_scan_payload(self.payload(order_id=""))

    def test_ticket_index_zero_is_present(self):
        self.assertEqual(parse_scan_payload(self.payload(ticket_index=0)).ticket_index, 0)

    def test_encoded_payload_parses(self):
        payload = ScanPayload(
            order_id="o-1", ticket_index=2, event_id="e-1", attendee_name="Ravi"
        )
        self.assertEqual(parse_scan_payload(encode_scan_payload(payload)), payload)


class TestPickByPosition(TestCase):
    def test_in_range(self):
        self.assertEqual(pick_by_position(["a", "b", "c"], 2), "c")

    def test_out_of_range_falls_back_to_first(self):
        self.assertEqual(pick_by_position(["a", "b"], 5), "a")
        self.assertEqual(pick_by_position(["a", "b"], -1), "a")

    def test_no_tickets(self):
        self.assertIsNone(pick_by_position([], 0))
