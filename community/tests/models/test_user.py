import re

from django.db import IntegrityError
from django.test import TestCase

from community.models import User
from community.models.user import generate_anon_id
from community.tests.helpers import make_user


class UserModelTests(TestCase):
    def test_anon_id_format(self):
        self.assertRegex(generate_anon_id(), re.compile(r"^Anon_[0-9A-F]{8}$"))

    def test_each_user_gets_distinct_anon_id(self):
        first = make_user()
        second = make_user()
        self.assertNotEqual(first.anon_id, second.anon_id)

    def test_defaults(self):
        user = make_user()
        self.assertFalse(user.is_admin)
        self.assertFalse(user.is_blocked)
        self.assertEqual(user.display_name, "Anonymous")

    def test_email_unique(self):
        make_user(email="same@example.org")
        with self.assertRaises(IntegrityError):
            User.objects.create_user(username="another", email="same@example.org", college="X")

    def test_str(self):
        user = make_user(college="Riverside College")
        self.assertEqual(str(user), f"{user.anon_id} (Riverside College)")
