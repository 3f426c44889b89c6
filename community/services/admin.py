"""Admin-only operations: dashboard stats, pinning, hard deletes and user management."""

import logging
import uuid

from django.contrib.auth import get_user_model
from django.db.models import Q
from django.utils import timezone

from community import asset_host
from community.exceptions import ValidationError, not_found
from community.models import Comment, Competition, ModerationStatus, Post, Report, ReportStatus
from community.repos.post_repo import PostRepo

logger = logging.getLogger(__name__)

User = get_user_model()


class AdminService:
    """Encapsulate admin dashboard queries and user/post management."""

    def __init__(self, repo=None):
        self.repo = repo or PostRepo()

    def stats(self):
        active_posts = Post.objects.filter(is_active=True)
        return {
            "total_posts": active_posts.count(),
            "total_users": User.objects.count(),
            "blocked_users": User.objects.filter(is_blocked=True).count(),
            "pending_posts": active_posts.filter(moderation_status=ModerationStatus.PENDING).count(),
            "flagged_posts": active_posts.filter(moderation_status=ModerationStatus.FLAGGED).count(),
            "pending_reports": Report.objects.filter(status=ReportStatus.PENDING).count(),
            "active_competitions": Competition.objects.filter(
                is_active=True, expires_at__gt=timezone.now()
            ).count(),
        }

    def moderation_queue(self, status=None):
        if status and status not in ModerationStatus.values:
            raise ValidationError(f"Unknown moderation status '{status}'.")
        return self.repo.list_by_status(status)

    def toggle_pin(self, post_id):
        post = self.repo.first(id=post_id)
        if post is None:
            raise not_found("Post")
        post.is_pinned = not post.is_pinned
        post.save(update_fields=["is_pinned"])
        logger.info("Post %s %s", post.pk, "pinned" if post.is_pinned else "unpinned")
        return post

    def hard_delete(self, post_id):
        """Remove a post and everything hanging off it, then its hosted image."""
        post = self.repo.first(id=post_id)
        if post is None:
            raise not_found("Post")
        public_id = post.image_public_id
        self.repo.delete(pk=post.pk)
        logger.info("Post %s permanently deleted", post_id)
        if public_id:
            asset_host.destroy_image(public_id)

    def list_users(self, search=None, is_blocked=None, is_admin=None):
        """Every account, newest first, optionally narrowed by a search term and flags."""
        qs = User.objects.all()
        if search:
            qs = qs.filter(
                Q(username__icontains=search)
                | Q(email__icontains=search)
                | Q(anon_id__icontains=search)
                | Q(college__icontains=search)
            )
        if is_blocked is not None:
            qs = qs.filter(is_blocked=is_blocked)
        if is_admin is not None:
            qs = qs.filter(is_admin=is_admin)
        return qs.order_by("-date_joined", "-pk")

    def list_comments(self, post_id=None, search=None, is_active=None):
        """All comments including removed ones, newest first."""
        qs = Comment.objects.select_related("post", "author")
        if post_id:
            try:
                post_id = uuid.UUID(str(post_id))
            except ValueError:
                raise ValidationError("post must be a post id.")
            qs = qs.filter(post_id=post_id)
        if search:
            qs = qs.filter(Q(content__icontains=search) | Q(anon_id__icontains=search))
        if is_active is not None:
            qs = qs.filter(is_active=is_active)
        return qs.order_by("-created_at")

    def _fetch_user(self, user_id):
        user = User.objects.filter(pk=user_id).first()
        if user is None:
            raise not_found("User")
        return user

    def block_user(self, admin, user_id, reason=""):
        user = self._fetch_user(user_id)
        if user.pk == admin.pk:
            raise ValidationError("You cannot block yourself.")
        if user.is_admin:
            raise ValidationError("Admins cannot be blocked.")
        user.is_blocked = True
        user.blocked_at = timezone.now()
        user.block_reason = (reason or "").strip()
        user.save(update_fields=["is_blocked", "blocked_at", "block_reason"])
        logger.warning("User %s blocked by admin %s: %s", user.pk, admin.pk, user.block_reason)
        return user

    def unblock_user(self, admin, user_id):
        user = self._fetch_user(user_id)
        user.is_blocked = False
        user.blocked_at = None
        user.block_reason = ""
        user.save(update_fields=["is_blocked", "blocked_at", "block_reason"])
        logger.info("User %s unblocked by admin %s", user.pk, admin.pk)
        return user

    def toggle_admin(self, admin, user_id):
        user = self._fetch_user(user_id)
        if user.pk == admin.pk:
            raise ValidationError("You cannot change your own admin status.")
        if user.is_blocked and not user.is_admin:
            raise ValidationError("Unblock this user before granting admin rights.")
        user.is_admin = not user.is_admin
        user.save(update_fields=["is_admin"])
        logger.warning(
            "User %s %s admin rights by admin %s",
            user.pk,
            "granted" if user.is_admin else "revoked",
            admin.pk,
        )
        return user

