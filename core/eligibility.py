from typing import Optional

from pydantic import BaseModel

from models.Event import Event
from models.Order import EmailDomainStatus, Order, OrderStatus, SocialVerificationStatus
from models.Ticket import Ticket, TicketStatus


class EligibilityRejection(BaseModel):
    error: str
    message: str


def check_admission(
    ticket: Ticket, order: Order, event: Event
) -> Optional[EligibilityRejection]:
    """Check the non-scan prerequisites of a ticket.

    Checks run in a fixed order and the first failure wins. "already used"
    comes last so the operator sees the underlying reason when several
    conditions are stale at once.

    Args:
        ticket (Ticket): resolved ticket
        order (Order): order the ticket belongs to
        event (Event): event the ticket belongs to

    Returns:
        EligibilityRejection | None: None when the ticket may be admitted
    """
    if ticket.status == TicketStatus.CANCELLED:
        return EligibilityRejection(
            error="Ticket cancelled", message="This ticket has been cancelled"
        )

    if order.status != OrderStatus.PAID:
        return EligibilityRejection(
            error="Payment not completed",
            message=f"Order status is {order.status}, payment must be completed",
        )

    if (
        event.require_social_verification
        and order.social_verification_status != SocialVerificationStatus.APPROVED
    ):
        return EligibilityRejection(
            error="Social verification required",
            message="This order has not been approved for social handle verification yet",
        )

    if (
        event.require_email_domain_verification
        and order.email_domain_status != EmailDomainStatus.APPROVED
    ):
        return EligibilityRejection(
            error="Email domain verification failed",
            message="This order email is not approved for this event",
        )

    if ticket.status == TicketStatus.USED:
        return EligibilityRejection(
            error="Ticket already used",
            message="This ticket has already been scanned and used",
        )

    return None


def get_email_domain(email: Optional[str]) -> Optional[str]:
    if not email or "@" not in email:
        return None
    domain = email.rsplit("@", 1)[1].strip().lower()
    return domain or None


def evaluate_email_domain(
    email: Optional[str], allowed_domains: Optional[list]
) -> EmailDomainStatus:
    """approved when the email's domain (or a parent domain) is allowed

    No allowed domains configured means the check does not apply.
    """
    allowed = {d.strip().lower().lstrip("@") for d in allowed_domains or [] if d}
    if not allowed:
        return EmailDomainStatus.NOT_REQUIRED

    domain = get_email_domain(email)
    if domain is None:
        return EmailDomainStatus.REJECTED

    if any(domain == d or domain.endswith(f".{d}") for d in allowed):
        return EmailDomainStatus.APPROVED
    return EmailDomainStatus.REJECTED
