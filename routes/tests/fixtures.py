import json
import uuid
from datetime import timedelta
from typing import List, Optional

import alembic.config
from fastapi.testclient import TestClient

from core.helper import get_current_time_in_timezone
from core.security import generate_hash_password, generate_token_from_admin
from main import app
from models import db, engine, get_db_sync, get_db_sync_for_test
from models.AdminUser import AdminUser
from models.EntryGate import EntryGate
from models.Event import Event
from models.Order import Order
from models.Ticket import Ticket
from models.TicketTier import TicketTier


class DatabaseTestMixin:
    """Per-test transaction that is rolled back in tearDown

    Every commit inside the test releases a savepoint only, so nothing leaks
    between tests.
    """

    @classmethod
    def setUpClass(cls):
        alembic_args = ["upgrade", "head"]
        alembic.config.main(argv=alembic_args)

    def setUp(self):
        # connect to the database
        self.connection = engine.connect()

        # begin a non-ORM transaction
        self.trans = self.connection.begin()

        # bind an individual Session to the connection, selecting
        # "create_savepoint" join_transaction_mode
        self.session = db(
            bind=self.connection, join_transaction_mode="create_savepoint"
        )
        app.dependency_overrides[get_db_sync] = get_db_sync_for_test(db=self.session)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.session.close()
        self.trans.rollback()
        self.connection.close()

    def create_admin(
        self,
        email: str,
        role: str = "admin",
        vendor_id: Optional[uuid.UUID] = None,
        password: str = "password",
    ) -> AdminUser:
        admin = AdminUser(
            email=email,
            password=generate_hash_password(password),
            role=role,
            vendor_id=vendor_id,
            created_at=get_current_time_in_timezone(),
        )
        self.session.add(admin)
        self.session.commit()
        return admin

    def auth_header(self, admin: AdminUser) -> dict:
        token = generate_token_from_admin(db=self.session, admin=admin)
        return {"Authorization": f"Bearer {token}"}

    def create_event(
        self,
        vendor: Optional[AdminUser] = None,
        enable_entry_gate_flow: bool = False,
        **kwargs,
    ) -> Event:
        event = Event(
            vendor_id=vendor.id if vendor else None,
            title=kwargs.pop("title", "Test Meetup"),
            start_at=get_current_time_in_timezone(),
            enable_entry_gate_flow=enable_entry_gate_flow,
            created_at=get_current_time_in_timezone(),
            **kwargs,
        )
        self.session.add(event)
        self.session.commit()
        return event

    def create_gate(
        self, event: Event, name: str, sort_order: int = 0, is_active: bool = True
    ) -> EntryGate:
        gate = EntryGate(
            event_id=event.id, name=name, sort_order=sort_order, is_active=is_active
        )
        self.session.add(gate)
        self.session.commit()
        return gate

    def create_order(
        self, event: Event, attendee_names: List[str], status: str = "paid", **kwargs
    ) -> Order:
        """Order with one ticket per attendee, tickets created in attendee order"""
        tier = TicketTier(event_id=event.id, name="General", price_cents=50000)
        self.session.add(tier)
        self.session.flush()

        order = Order(
            event_id=event.id,
            email=kwargs.pop("email", "attendee@example.com"),
            attendee_names=attendee_names,
            status=status,
            total_amount_cents=tier.price_cents * len(attendee_names),
            created_at=get_current_time_in_timezone(),
            **kwargs,
        )
        self.session.add(order)
        self.session.flush()

        created_at = get_current_time_in_timezone()
        for index, attendee_name in enumerate(attendee_names):
            self.session.add(
                Ticket(
                    order_id=order.id,
                    event_id=event.id,
                    tier_id=tier.id,
                    attendee_name=attendee_name,
                    qr_code_data=self.scan_payload(order, index, event),
                    created_at=created_at + timedelta(seconds=index),
                )
            )
        self.session.commit()
        return order

    def scan_payload(self, order: Order, index: int, event: Event, **extra) -> str:
        return json.dumps(
            {
                "order_id": str(order.id),
                "ticket_index": index,
                "event_id": str(event.id),
                "tier_id": None,
                "attendee_name": None,
                "timestamp": 1760000000000,
                **extra,
            }
        )

    def tickets_of(self, order: Order) -> List[Ticket]:
        from repository.ticket import get_tickets_by_order_id

        return get_tickets_by_order_id(self.session, order.id)
