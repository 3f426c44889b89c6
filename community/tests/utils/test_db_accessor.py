from django.test import TestCase

from community.db_accessor import DB_Accessor
from community.models import Post
from community.tests.helpers import make_post


class DBAccessorTests(TestCase):
    def setUp(self):
        self.accessor = DB_Accessor(Post)
        self.post = make_post(title="Original title")

    def test_list_as_dict(self):
        rows = self.accessor.list(filters={"pk": self.post.pk}, as_dict=True)
        self.assertEqual(rows[0]["title"], "Original title")

    def test_list_orders_and_filters(self):
        later = make_post(title="Zebra crossing", author=self.post.author)
        self.assertEqual(list(self.accessor.list(order_by=["-title"])), [later, self.post])
        self.assertEqual(list(self.accessor.list(filters={"title": "Zebra crossing"})), [later])

    def test_first(self):
        self.assertEqual(self.accessor.first(pk=self.post.pk), self.post)
        self.assertIsNone(self.accessor.first(title="missing"))

    def test_delete(self):
        self.assertEqual(self.accessor.delete(pk=self.post.pk), 1)
        self.assertFalse(Post.objects.exists())
