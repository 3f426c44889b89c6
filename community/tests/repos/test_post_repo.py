from django.test import TestCase

from community.models import ModerationStatus, Post
from community.repos.post_repo import PostRepo
from community.tests.helpers import OTHER_COLLEGE, make_post, make_user


class PostRepoTestCase(TestCase):
    def setUp(self):
        self.repo = PostRepo()
        self.user = make_user()
        self.other = make_user(college=OTHER_COLLEGE)
        self.soup = make_post(author=self.user, title="Soup night", category="campus-life", like_count=5)
        self.exam = make_post(author=self.user, title="Exam tips", content="Sleep well before exams.",
                              category="academic", comment_count=7)
        self.far = make_post(author=self.other, title="Far away")

    def test_feed_filters_by_college(self):
        self.assertEqual(set(self.repo.list_for_feed(college=self.user.college)), {self.soup, self.exam})

    def test_feed_category_all_means_no_filter(self):
        self.assertEqual(len(self.repo.list_for_feed(category="all")), 3)
        self.assertEqual(list(self.repo.list_for_feed(category="Academic")), [self.exam])

    def test_feed_search_matches_title_or_content(self):
        self.assertEqual(list(self.repo.list_for_feed(search="sleep")), [self.exam])
        self.assertEqual(list(self.repo.list_for_feed(search="SOUP")), [self.soup])

    def test_feed_sorting(self):
        college = self.user.college
        self.assertEqual(list(self.repo.list_for_feed(college=college, sort="popular"))[0], self.soup)
        self.assertEqual(list(self.repo.list_for_feed(college=college, sort="discussed"))[0], self.exam)
        self.assertEqual(list(self.repo.list_for_feed(college=college, sort="oldest"))[0], self.soup)
        self.assertEqual(list(self.repo.list_for_feed(college=college, sort="bogus"))[0], self.exam)

    def test_feed_skips_removed_posts(self):
        Post.objects.filter(pk=self.far.pk).update(is_active=False)
        self.assertNotIn(self.far, self.repo.list_for_feed())

    def test_list_by_status(self):
        pending = make_post(author=self.user, status=ModerationStatus.PENDING)
        self.assertEqual(list(self.repo.list_by_status("pending")), [pending])
        self.assertEqual(len(self.repo.list_by_status()), 4)

    def test_list_for_author(self):
        self.assertEqual(set(self.repo.list_for_author(self.other.pk)), {self.far})
