from unittest.mock import patch

from django.urls import reverse

from community.models import Comment, ModerationStatus, Post, ReportStatus
from community.tests.helpers import (
    OTHER_COLLEGE,
    ApiTestCase,
    make_admin,
    make_comment,
    make_competition,
    make_post,
    make_report,
    make_user,
)


class AdminAccessTests(ApiTestCase):
    def test_members_are_refused(self):
        self.login(make_user())
        response = self.client.get(reverse("admin_stats"))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Admin access required.")

    def test_anonymous_is_401(self):
        self.assertEqual(self.client.get(reverse("admin_stats")).status_code, 401)


class AdminModerationViewTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = make_admin()
        self.author = make_user()
        self.login(self.admin)

    def moderate(self, post, **data):
        return self.client.put(reverse("admin_moderate_post", args=[post.pk]), data, format="json")

    def test_stats(self):
        make_post(author=self.author, status=ModerationStatus.PENDING)
        body = self.client.get(reverse("admin_stats")).json()
        self.assertEqual(body["pending_posts"], 1)
        self.assertEqual(body["total_users"], 2)

    def test_queue_filters_by_status(self):
        make_post(author=self.author)
        make_post(author=self.author, title="needs review", status=ModerationStatus.FLAGGED)
        body = self.client.get(reverse("admin_posts"), {"status": "flagged"}).json()
        self.assertEqual([p["title"] for p in body["results"]], ["needs review"])
        self.assertEqual(body["results"][0]["moderation_reason"], "Flagged by screen")
        self.assertEqual(self.client.get(reverse("admin_posts"), {"status": "nope"}).status_code, 400)

    def test_approve(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        response = self.moderate(post, status="approved")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["moderation_status"], "approved")
        post.refresh_from_db()
        self.assertEqual(post.moderated_by, self.admin)
        self.assertIsNotNone(post.moderated_at)

    def test_reject_requires_reason(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        response = self.moderate(post, status="rejected")
        self.assertEqual(response.status_code, 400)
        self.assertIn("reason", response.json()["errors"])

    def test_stale_decision_conflicts(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        self.assertEqual(self.moderate(post, status="approved").status_code, 200)
        response = self.moderate(post, status="rejected", reason="spam", expected_status="pending")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "conflict")

    def test_reverse_decision_from_current_view(self):
        post = make_post(author=self.author)
        response = self.moderate(post, status="rejected", reason="spam", expected_status="approved")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["moderation_reason"], "spam")

    def test_pin_and_unpin(self):
        post = make_post(author=self.author)
        url = reverse("admin_pin_post", args=[post.pk])
        self.assertTrue(self.client.put(url).json()["is_pinned"])
        self.assertFalse(self.client.put(url).json()["is_pinned"])

    @patch("community.services.admin.asset_host.destroy_image")
    def test_hard_delete(self, mock_destroy):
        post = make_post(author=self.author)
        response = self.client.delete(reverse("admin_delete_post", args=[post.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Post.objects.filter(pk=post.pk).exists())
        mock_destroy.assert_not_called()

    def test_competitions(self):
        competition = make_competition(author=self.author, status=ModerationStatus.PENDING)
        make_competition(author=make_user(college=OTHER_COLLEGE))
        body = self.client.get(reverse("admin_competitions"), {"college": self.author.college}).json()
        self.assertEqual(body["total"], 1)

        url = reverse("admin_moderate_competition", args=[competition.pk])
        response = self.client.put(url, {"status": "approved"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["moderation_status"], "approved")


class AdminReportViewTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = make_admin()
        self.reporter = make_user()
        self.post = make_post(author=make_user())
        self.login(self.admin)

    def test_report_list_defaults_to_open_reports(self):
        open_report = make_report(reporter=self.reporter, post=self.post)
        closed = make_report(reporter=make_user(), post=self.post)
        closed.status = ReportStatus.DISMISSED
        closed.save()

        body = self.client.get(reverse("admin_reports")).json()
        self.assertEqual([r["id"] for r in body["results"]], [str(open_report.pk)])
        self.assertEqual(body["results"][0]["reporter_id"], self.reporter.pk)
        self.assertEqual(self.client.get(reverse("admin_reports"), {"status": "all"}).json()["total"], 2)

    def test_resolve_twice_conflicts(self):
        report = make_report(reporter=self.reporter, post=self.post)
        url = reverse("admin_resolve_report", args=[report.pk])
        response = self.client.put(url, {"status": "dismissed", "admin_notes": "not spam"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "dismissed")
        self.assertEqual(self.client.put(url, {"status": "resolved"}, format="json").status_code, 409)


class AdminUserViewTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = make_admin()
        self.member = make_user()
        self.login(self.admin)

    def test_block_and_unblock(self):
        response = self.client.put(
            reverse("admin_block_user", args=[self.member.pk]), {"reason": "spamming"}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["is_blocked"])
        self.assertEqual(response.json()["block_reason"], "spamming")

        response = self.client.put(reverse("admin_unblock_user", args=[self.member.pk]))
        self.assertFalse(response.json()["is_blocked"])

    def test_cannot_block_self(self):
        response = self.client.put(reverse("admin_block_user", args=[self.admin.pk]), {}, format="json")
        self.assertEqual(response.status_code, 400)

    def test_unknown_user(self):
        response = self.client.put(reverse("admin_block_user", args=[999999]), {}, format="json")
        self.assertEqual(response.status_code, 404)

    def test_user_list(self):
        blocked = make_user(is_blocked=True)
        body = self.client.get(reverse("admin_users")).json()
        self.assertEqual(body["total"], 3)
        self.assertEqual(body["results"][0]["id"], blocked.pk)

        body = self.client.get(reverse("admin_users"), {"is_blocked": "true"}).json()
        self.assertEqual([u["id"] for u in body["results"]], [blocked.pk])

    def test_toggle_admin(self):
        url = reverse("admin_toggle_admin", args=[self.member.pk])
        response = self.client.put(url)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["is_admin"])
        self.assertFalse(self.client.put(url).json()["is_admin"])

    def test_cannot_toggle_own_admin_status(self):
        response = self.client.put(reverse("admin_toggle_admin", args=[self.admin.pk]))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "You cannot change your own admin status.")
        self.admin.refresh_from_db()
        self.assertTrue(self.admin.is_admin)

    def test_members_cannot_list_users(self):
        self.login(self.member)
        self.assertEqual(self.client.get(reverse("admin_users")).status_code, 403)
        self.assertEqual(self.client.put(reverse("admin_toggle_admin", args=[self.member.pk])).status_code, 403)


class AdminCommentViewTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = make_admin()
        self.post = make_post(author=make_user())
        self.login(self.admin)

    def test_list_includes_removed_comments(self):
        kept = make_comment(post=self.post, content="Kept")
        removed = make_comment(post=self.post, content="Removed")
        Comment.objects.filter(pk=removed.pk).update(is_active=False)

        body = self.client.get(reverse("admin_comments"), {"post": str(self.post.pk)}).json()
        self.assertEqual(body["total"], 2)
        by_id = {c["id"]: c for c in body["results"]}
        self.assertFalse(by_id[str(removed.pk)]["is_active"])
        self.assertEqual(by_id[str(kept.pk)]["author_id"], kept.author_id)

    def test_malformed_post_filter(self):
        self.assertEqual(self.client.get(reverse("admin_comments"), {"post": "nope"}).status_code, 400)

    def test_remove_comment(self):
        comment = make_comment(post=self.post)
        response = self.client.delete(reverse("admin_delete_comment", args=[comment.pk]))
        self.assertEqual(response.status_code, 200)
        comment.refresh_from_db()
        self.assertFalse(comment.is_active)
        self.assertEqual(self.client.delete(reverse("admin_delete_comment", args=[comment.pk])).status_code, 404)
