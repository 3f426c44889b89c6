from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from community.models import Competition, Post, User


class SeedCommandTests(TestCase):
    def test_seed_then_unseed(self):
        out = StringIO()
        call_command("seed", posts_per_user=1, seed=7, stdout=out)
        self.assertIn("Seeding complete", out.getvalue())
        self.assertEqual(User.objects.filter(is_admin=True).count(), 1)
        self.assertEqual(User.objects.count(), 61)
        self.assertEqual(Post.objects.count(), 60)
        self.assertEqual(Competition.objects.count(), 8)
        for post in Post.objects.all():
            self.assertEqual(post.college, post.author.college)

        call_command("unseed", stdout=StringIO())
        self.assertFalse(User.objects.exists())
        self.assertFalse(Post.objects.exists())
