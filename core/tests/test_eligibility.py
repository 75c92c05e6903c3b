from unittest import TestCase
from unittest.mock import Mock

from core.eligibility import check_admission, evaluate_email_domain, get_email_domain
from models.Order import EmailDomainStatus


class TestCheckAdmission(TestCase):
    def setUp(self):
        self.ticket = Mock(status="active")
        self.order = Mock(
            status="paid",
            social_verification_status="not_required",
            email_domain_status="not_required",
        )
        self.event = Mock(
            require_social_verification=False,
            require_email_domain_verification=False,
        )

    def test_active_paid_ticket_is_admitted(self):
        self.assertIsNone(check_admission(self.ticket, self.order, self.event))

    def test_cancelled_ticket(self):
        self.ticket.status = "cancelled"
        rejection = check_admission(self.ticket, self.order, self.event)
        self.assertEqual(rejection.error, "Ticket cancelled")

    def test_unpaid_order_message_names_status(self):
        self.order.status = "created"
        rejection = check_admission(self.ticket, self.order, self.event)
        self.assertEqual(rejection.error, "Payment not completed")
        self.assertEqual(
            rejection.message, "Order status is created, payment must be completed"
        )

    def test_social_verification_required(self):
        self.event.require_social_verification = True
        self.order.social_verification_status = "pending"
        rejection = check_admission(self.ticket, self.order, self.event)
        self.assertEqual(rejection.error, "Social verification required")

        self.order.social_verification_status = "approved"
        self.assertIsNone(check_admission(self.ticket, self.order, self.event))

    def test_social_status_ignored_when_not_required(self):
        self.order.social_verification_status = "rejected"
        self.assertIsNone(check_admission(self.ticket, self.order, self.event))

    def test_email_domain_verification(self):
        self.event.require_email_domain_verification = True
        self.order.email_domain_status = "rejected"
        rejection = check_admission(self.ticket, self.order, self.event)
        self.assertEqual(rejection.error, "Email domain verification failed")

    def test_used_ticket(self):
        self.ticket.status = "used"
        rejection = check_admission(self.ticket, self.order, self.event)
        self.assertEqual(rejection.error, "Ticket already used")
        self.assertEqual(
            rejection.message, "This ticket has already been scanned and used"
        )

    def test_first_failure_wins(self):
        # used ticket on an unpaid order reports the payment problem
        self.ticket.status = "used"
        self.order.status = "refunded"
        rejection = check_admission(self.ticket, self.order, self.event)
        self.assertEqual(rejection.error, "Payment not completed")

        # cancelled beats everything
        self.ticket.status = "cancelled"
        rejection = check_admission(self.ticket, self.order, self.event)
        self.assertEqual(rejection.error, "Ticket cancelled")

    def test_payment_checked_before_social(self):
        self.order.status = "failed"
        self.event.require_social_verification = True
        self.order.social_verification_status = "pending"
        rejection = check_admission(self.ticket, self.order, self.event)
        self.assertEqual(rejection.error, "Payment not completed")


class TestEmailDomain(TestCase):
    def test_get_email_domain(self):
        self.assertEqual(get_email_domain("Someone@Example.COM"), "example.com")
        self.assertIsNone(get_email_domain("not-an-email"))
        self.assertIsNone(get_email_domain(None))

    def test_no_allowed_domains_is_not_required(self):
        self.assertEqual(
            evaluate_email_domain("a@example.com", []), EmailDomainStatus.NOT_REQUIRED
        )
        self.assertEqual(
            evaluate_email_domain("a@example.com", None),
            EmailDomainStatus.NOT_REQUIRED,
        )

    def test_allowed_domain(self):
        allowed = ["example.com", "@Partner.org"]
        self.assertEqual(
            evaluate_email_domain("a@example.com", allowed), EmailDomainStatus.APPROVED
        )
        self.assertEqual(
            evaluate_email_domain("b@mail.partner.org", allowed),
            EmailDomainStatus.APPROVED,
        )
        self.assertEqual(
            evaluate_email_domain("c@notexample.com", allowed),
            EmailDomainStatus.REJECTED,
        )
        self.assertEqual(
            evaluate_email_domain(None, allowed), EmailDomainStatus.REJECTED
        )
