from types import SimpleNamespace

from django.contrib.auth.models import AnonymousUser
from django.test import SimpleTestCase

from community.exceptions import AuthenticationError, AuthorizationError
from community.services.gate import (
    BLOCKED,
    COLLEGE_MISMATCH,
    NOT_AUTHENTICATED,
    can_interact,
    check_can_publish,
    check_interaction,
    denial_reason,
)


def member(college="Riverside", **flags):
    return SimpleNamespace(is_authenticated=True, college=college,
                           is_admin=flags.get("is_admin", False),
                           is_blocked=flags.get("is_blocked", False))


class InteractionGateTests(SimpleTestCase):
    def setUp(self):
        self.target = SimpleNamespace(college="Riverside")

    def test_same_college_member_may_interact(self):
        self.assertTrue(can_interact(member(), self.target))

    def test_other_college_member_denied(self):
        self.assertEqual(denial_reason(member("Northgate"), self.target), COLLEGE_MISMATCH)
        self.assertFalse(can_interact(member("Northgate"), self.target))

    def test_admin_bypasses_college(self):
        self.assertTrue(can_interact(member("Northgate", is_admin=True), self.target))

    def test_blocked_is_absolute_even_for_admins(self):
        self.assertEqual(denial_reason(member(is_blocked=True), self.target), BLOCKED)
        self.assertEqual(denial_reason(member(is_admin=True, is_blocked=True), self.target), BLOCKED)

    def test_anonymous_denied(self):
        self.assertEqual(denial_reason(AnonymousUser(), self.target), NOT_AUTHENTICATED)
        self.assertEqual(denial_reason(None, self.target), NOT_AUTHENTICATED)

    def test_check_interaction_error_codes(self):
        with self.assertRaises(AuthenticationError) as ctx:
            check_interaction(AnonymousUser(), self.target)
        self.assertEqual(ctx.exception.get_codes(), NOT_AUTHENTICATED)

        with self.assertRaises(AuthorizationError) as ctx:
            check_interaction(member(is_blocked=True), self.target)
        self.assertEqual(ctx.exception.get_codes(), BLOCKED)

        with self.assertRaises(AuthorizationError) as ctx:
            check_interaction(member("Northgate"), self.target)
        self.assertEqual(ctx.exception.get_codes(), COLLEGE_MISMATCH)

    def test_check_interaction_passes_silently(self):
        self.assertIsNone(check_interaction(member(), self.target))

    def test_blocked_users_cannot_publish(self):
        with self.assertRaises(AuthorizationError):
            check_can_publish(member(is_blocked=True))
        self.assertIsNone(check_can_publish(member()))
