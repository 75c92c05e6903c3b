from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from models.Event import Event
from models.Order import EmailDomainStatus, Order, OrderStatus, SocialVerificationStatus


def get_order_by_id(db: Session, order_id: str) -> Optional[Order]:
    stmt = select(Order).where(Order.id == order_id)
    return db.execute(stmt).scalar_one_or_none()


def update_social_verification(
    db: Session,
    order: Order,
    status: SocialVerificationStatus,
    verified_by: Optional[str],
    now: datetime,
    is_commit: bool = True,
) -> Order:
    """Set the social handle review result on an order

    approved and rejected are stamped with reviewer and time, any other
    status clears the stamp.
    """
    order.social_verification_status = status.value
    if status in (SocialVerificationStatus.APPROVED, SocialVerificationStatus.REJECTED):
        order.social_verified_at = now
        order.social_verified_by = verified_by
    else:
        order.social_verified_at = None
        order.social_verified_by = None

    if is_commit:
        db.commit()
        db.refresh(order)
    return order


def update_email_domain_status(
    db: Session,
    order: Order,
    status: EmailDomainStatus,
    email_domain: Optional[str] = None,
    is_commit: bool = True,
) -> Order:
    order.email_domain_status = status.value
    if email_domain is not None:
        order.email_domain = email_domain

    if is_commit:
        db.commit()
        db.refresh(order)
    return order


def _scoped_orders_query(vendor_id: Optional[str]):
    query = select(Order).options(joinedload(Order.event))
    if vendor_id is not None:
        query = query.join(Event, Order.event_id == Event.id).where(
            Event.vendor_id == vendor_id
        )
    return query


def get_social_review_orders(
    db: Session,
    vendor_id: Optional[str] = None,
    status: Optional[SocialVerificationStatus] = None,
) -> List[Order]:
    """Paid orders that carry a social handle, newest first

    vendor_id limits the queue to that vendor's events, None means every event.
    """
    query = _scoped_orders_query(vendor_id).where(
        Order.social_handle.is_not(None),
        Order.social_handle != "",
        Order.status == OrderStatus.PAID.value,
    )
    if status is not None:
        query = query.where(Order.social_verification_status == status.value)

    query = query.order_by(Order.created_at.desc())
    return list(db.execute(query).scalars().all())


def get_refund_requested_orders(
    db: Session,
    vendor_id: Optional[str] = None,
    processed: Optional[bool] = None,
) -> List[Order]:
    query = _scoped_orders_query(vendor_id).where(Order.refund_requested.is_(True))
    if processed is not None:
        query = query.where(Order.refund_processed.is_(processed))

    query = query.order_by(Order.refund_requested_at.desc().nulls_last())
    return list(db.execute(query).scalars().all())


def update_refund_status(
    db: Session,
    order: Order,
    processed: bool,
    processed_by: Optional[str],
    now: datetime,
    notes: Optional[str] = None,
    is_commit: bool = True,
) -> Order:
    """Record how a requested refund was handled

    Marking it processed stamps the admin and time. Notes are only replaced
    when given.
    """
    order.refund_processed = processed
    if processed:
        order.refund_processed_at = now
        order.refund_processed_by = processed_by
    if notes is not None:
        order.refund_notes = notes

    if is_commit:
        db.commit()
        db.refresh(order)
    return order
