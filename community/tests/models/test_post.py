from django.test import TestCase

from community.models import Post
from community.tests.helpers import make_post


class PostModelTests(TestCase):
    def test_defaults(self):
        post = make_post()
        self.assertEqual(post.category, Post.CATEGORY_GENERAL)
        self.assertEqual(post.tags, [])
        self.assertFalse(post.has_image)
        self.assertEqual(post.like_count, 0)
        self.assertTrue(post.is_active)

    def test_is_hot(self):
        post = make_post(like_count=40, comment_count=11)
        self.assertTrue(post.is_hot)
        post.like_count = 10
        self.assertFalse(post.is_hot)

    def test_pinned_posts_first(self):
        older_pinned = make_post(title="pinned", is_pinned=True)
        newer = make_post(title="newer")
        self.assertEqual(list(Post.objects.all()), [older_pinned, newer])

    def test_str(self):
        self.assertEqual(str(make_post(title="Hello")), "Hello")
