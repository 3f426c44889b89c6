from django.test import TestCase

from community.exceptions import ConflictError, NotFoundError, ValidationError
from community.models import Competition, ModerationStatus, Post
from community.services.moderation import ModerationService
from community.tests.helpers import make_admin, make_competition, make_post, make_user


class ModerationServiceTests(TestCase):
    def setUp(self):
        self.service = ModerationService()
        self.admin = make_admin()
        self.author = make_user()

    def test_initial_state_is_pending(self):
        state = self.service.initial_state()
        self.assertEqual(state.status, ModerationStatus.PENDING)
        self.assertEqual(state.reason, "")

    def test_approve_clears_reason_and_records_admin(self):
        post = make_post(author=self.author, status=ModerationStatus.FLAGGED, reason="screen")
        result = self.service.moderate(Post, post.pk, "approved", self.admin)
        self.assertEqual(result.moderation_status, ModerationStatus.APPROVED)
        self.assertEqual(result.moderation_reason, "")
        self.assertEqual(result.moderated_by, self.admin)
        self.assertIsNotNone(result.moderated_at)

    def test_reject_requires_reason(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        with self.assertRaises(ValidationError):
            self.service.moderate(Post, post.pk, "rejected", self.admin, reason="  ")
        post.refresh_from_db()
        self.assertEqual(post.moderation_status, ModerationStatus.PENDING)

    def test_reject_stores_reason(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        result = self.service.moderate(Post, post.pk, "rejected", self.admin, reason="spam")
        self.assertEqual(result.moderation_status, ModerationStatus.REJECTED)
        self.assertEqual(result.moderation_reason, "spam")

    def test_unknown_or_non_admin_decision_rejected(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        with self.assertRaises(ValidationError):
            self.service.moderate(Post, post.pk, "published", self.admin)
        with self.assertRaises(ValidationError):
            self.service.moderate(Post, post.pk, "flagged", self.admin, reason="x")

    def test_approving_twice_is_idempotent(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        first = self.service.moderate(Post, post.pk, "approved", self.admin)
        second = self.service.moderate(Post, post.pk, "approved", make_admin())
        self.assertEqual(second.moderation, first.moderation)
        self.assertEqual(second.moderation_reason, "")
        self.assertEqual(second.moderated_by, self.admin)
        self.assertEqual(second.moderated_at, first.moderated_at)

    def test_conflicting_decisions_from_stale_view(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        self.service.moderate(Post, post.pk, "approved", self.admin, expected_status="pending")
        with self.assertRaises(ConflictError):
            self.service.moderate(
                Post, post.pk, "rejected", make_admin(), reason="spam", expected_status="pending"
            )
        post.refresh_from_db()
        self.assertEqual(post.moderation_status, ModerationStatus.APPROVED)

    def test_conflict_without_expected_status(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        self.service.moderate(Post, post.pk, "rejected", self.admin, reason="spam")
        with self.assertRaises(ConflictError):
            self.service.moderate(Post, post.pk, "approved", self.admin)

    def test_expected_status_allows_reversing_a_decision(self):
        post = make_post(author=self.author, status=ModerationStatus.REJECTED, reason="spam")
        result = self.service.moderate(
            Post, post.pk, "approved", self.admin, expected_status="rejected"
        )
        self.assertEqual(result.moderation_status, ModerationStatus.APPROVED)
        self.assertEqual(result.moderation_reason, "")

    def test_missing_item(self):
        post = make_post(author=self.author)
        pk = post.pk
        post.delete()
        with self.assertRaises(NotFoundError):
            self.service.moderate(Post, pk, "approved", self.admin)

    def test_moderates_competitions(self):
        competition = make_competition(author=self.author, status=ModerationStatus.PENDING)
        result = self.service.moderate(Competition, competition.pk, "approved", self.admin)
        self.assertEqual(result.moderation_status, ModerationStatus.APPROVED)

    def test_flag_only_from_allowed_statuses(self):
        pending = make_post(author=self.author, status=ModerationStatus.PENDING)
        self.assertTrue(self.service.flag(pending, "Content flagged for: harassment"))
        pending.refresh_from_db()
        self.assertEqual(pending.moderation_status, ModerationStatus.FLAGGED)
        self.assertEqual(pending.moderation_reason, "Content flagged for: harassment")

        rejected = make_post(author=self.author, status=ModerationStatus.REJECTED, reason="spam")
        self.assertFalse(self.service.flag(rejected, "again"))
        rejected.refresh_from_db()
        self.assertEqual(rejected.moderation_status, ModerationStatus.REJECTED)

    def test_flag_requires_reason(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        with self.assertRaises(ValueError):
            self.service.flag(post, "")

    def test_resubmit_moves_any_status_to_pending_and_saves_changes(self):
        post = make_post(author=self.author, status=ModerationStatus.REJECTED, reason="spam")
        result = self.service.resubmit(post, content="A completely rewritten body.")
        self.assertEqual(result.moderation_status, ModerationStatus.PENDING)
        self.assertEqual(result.moderation_reason, "")
        self.assertEqual(result.content, "A completely rewritten body.")

    def test_resubmit_conflicts_when_status_changed_meanwhile(self):
        post = make_post(author=self.author, status=ModerationStatus.PENDING)
        stale = Post.objects.get(pk=post.pk)
        self.service.moderate(Post, post.pk, "approved", self.admin)
        with self.assertRaises(ConflictError):
            self.service.resubmit(stale, title="Edited title")
        post.refresh_from_db()
        self.assertEqual(post.moderation_status, ModerationStatus.APPROVED)
        self.assertNotEqual(post.title, "Edited title")
