from unittest import TestCase
from unittest.mock import Mock

from core.access_control import (
    EventScope,
    Permission,
    has_permission,
    resolve_event_scope,
)
from models.AdminUser import AdminRole

VENDOR_A = "a7e1c1de-0000-4000-8000-00000000000a"
VENDOR_B = "b7e1c1de-0000-4000-8000-00000000000b"


class TestEventScope(TestCase):
    def test_admin_and_moderator_are_unrestricted(self):
        for role in (AdminRole.ADMIN, AdminRole.MODERATOR):
            scope = resolve_event_scope(role, "some-id", None)
            self.assertTrue(scope.unrestricted)
            self.assertTrue(scope.allows(VENDOR_A))
            self.assertTrue(scope.allows(None))

    def test_vendor_sees_own_events(self):
        scope = resolve_event_scope(AdminRole.VENDOR, VENDOR_A, None)
        self.assertTrue(scope.allows(VENDOR_A))
        self.assertFalse(scope.allows(VENDOR_B))
        self.assertFalse(scope.allows(None))

    def test_vendor_moderator_acts_for_vendor(self):
        scope = resolve_event_scope(AdminRole.VENDOR_MODERATOR, "mod-id", VENDOR_A)
        self.assertTrue(scope.allows(VENDOR_A))
        self.assertFalse(scope.allows(VENDOR_B))

    def test_vendor_moderator_without_vendor_sees_nothing(self):
        scope = resolve_event_scope(AdminRole.VENDOR_MODERATOR, "mod-id", None)
        self.assertEqual(scope, EventScope())
        self.assertTrue(scope.is_empty)
        self.assertFalse(scope.allows(VENDOR_A))
        self.assertFalse(scope.allows(None))

    def test_unknown_role_is_rejected(self):
        with self.assertRaises(ValueError):
            resolve_event_scope("superuser", "some-id", None)


class TestPermissions(TestCase):
    def test_every_role_can_scan(self):
        for role in AdminRole:
            self.assertTrue(has_permission(Mock(role=role.value), Permission.TICKET_SCAN))

    def test_vendor_moderator_cannot_edit_events(self):
        self.assertFalse(
            has_permission(Mock(role="vendor_moderator"), Permission.EVENT_EDIT)
        )
        self.assertTrue(has_permission(Mock(role="vendor"), Permission.EVENT_EDIT))

    def test_only_admin_manages_users(self):
        for role in AdminRole:
            self.assertEqual(
                has_permission(Mock(role=role.value), Permission.USER_MANAGE),
                role == AdminRole.ADMIN,
            )
