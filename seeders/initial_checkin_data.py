from sqlalchemy.orm import Session
from sqlalchemy import select


def initialize_checkin_data(
    db: Session,
):
    """Seed one event with two entry gates, a paid order and two tickets"""
    import uuid

    from models.AdminUser import AdminRole, AdminUser
    from models.EntryGate import EntryGate
    from models.Event import Event
    from models.Order import Order, OrderStatus
    from models.Ticket import Ticket
    from models.TicketTier import TicketTier
    from core.security import generate_hash_password
    from core.helper import get_current_time_in_timezone
    from core.ticket_lookup import ScanPayload, encode_scan_payload

    vendor_id = uuid.UUID("550e8400-e29b-41d4-a716-446655440010")
    event_id = uuid.UUID("550e8400-e29b-41d4-a716-446655440011")
    tier_id = uuid.UUID("550e8400-e29b-41d4-a716-446655440012")
    order_id = uuid.UUID("550e8400-e29b-41d4-a716-446655440013")
    gate_ids = [
        uuid.UUID("550e8400-e29b-41d4-a716-446655440014"),
        uuid.UUID("550e8400-e29b-41d4-a716-446655440015"),
    ]

    # Check if data already exists
    existing_event = db.execute(
        select(Event).where(Event.id == event_id)
    ).scalar_one_or_none()
    if existing_event:
        print("Checkin data already exists. Skipping...")
        return

    try:
        now = get_current_time_in_timezone()

        vendor = db.execute(
            select(AdminUser).where(AdminUser.id == vendor_id)
        ).scalar_one_or_none()
        if not vendor:
            vendor = AdminUser(
                id=vendor_id,
                email="vendor@example.com",
                password=generate_hash_password("password"),
                role=AdminRole.VENDOR,
                created_at=now,
            )
            db.add(vendor)

        event = Event(
            id=event_id,
            vendor_id=vendor.id,
            title="Example Meetup",
            description="Seeded event for trying the entry scanner",
            start_at=now,
            venue_name="Main Hall",
            city="Bengaluru",
            enable_entry_gate_flow=True,
            created_at=now,
        )
        db.add(event)

        for position, (gate_id, name, code) in enumerate(
            zip(gate_ids, ["Main Gate", "Hall Entrance"], ["G1", "G2"])
        ):
            db.add(
                EntryGate(
                    id=gate_id,
                    event_id=event.id,
                    name=name,
                    code=code,
                    sort_order=position,
                    is_active=True,
                )
            )

        tier = TicketTier(
            id=tier_id, event_id=event.id, name="General", price_cents=50000
        )
        db.add(tier)

        attendee_names = ["Test Attendee", "Second Attendee"]
        order = Order(
            id=order_id,
            event_id=event.id,
            email="attendee@example.com",
            attendee_names=attendee_names,
            status=OrderStatus.PAID,
            total_amount_cents=tier.price_cents * len(attendee_names),
            created_at=now,
        )
        db.add(order)
        db.flush()

        for index, attendee_name in enumerate(attendee_names):
            qr_code_data = encode_scan_payload(
                ScanPayload(
                    order_id=str(order.id),
                    ticket_index=index,
                    event_id=str(event.id),
                    tier_id=str(tier.id),
                    attendee_name=attendee_name,
                    timestamp=int(now.timestamp() * 1000),
                )
            )
            db.add(
                Ticket(
                    order_id=order.id,
                    event_id=event.id,
                    tier_id=tier.id,
                    attendee_name=attendee_name,
                    qr_code_data=qr_code_data,
                    created_at=now,
                )
            )
            print(f"ticket {index} qr payload: {qr_code_data}")

        db.commit()
        print("Checkin data initialized successfully!")
    except Exception as e:
        db.rollback()
        print(f"Error initializing checkin data: {e}")
        raise
