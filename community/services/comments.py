"""Service helpers for creating, listing, deleting and liking comments."""

import logging

from django.db import IntegrityError, transaction
from django.db.models import F
from django.db.models.functions import Greatest

from community import prescreen
from community.exceptions import AuthenticationError, AuthorizationError, ValidationError, not_found
from community.models import Comment, CommentLike, Post
from community.services.gate import check_interaction
from community.services.visibility import Visibility, VisibilityPolicy

logger = logging.getLogger(__name__)


class CommentService:
    """Encapsulate comment CRUD and likes for posts."""

    def __init__(self, policy=None):
        self.policy = policy or VisibilityPolicy()

    def fetch_post(self, post_id):
        post = Post.objects.select_related("author").filter(id=post_id).first()
        if post is None:
            raise not_found("Post")
        return post

    def fetch(self, comment_id):
        """Fetch an active comment by id or raise NotFoundError."""
        comment = (
            Comment.objects.select_related("post", "post__author")
            .filter(id=comment_id, is_active=True)
            .first()
        )
        if comment is None:
            raise not_found("Comment")
        return comment

    def list_for_post(self, viewer, post_id):
        """Active comments on a post the viewer can read, newest first."""
        post = self.fetch_post(post_id)
        result = self.policy.visibility(viewer, post)
        if result == Visibility.DENIED_UNDER_REVIEW:
            raise not_found("Post")
        if result == Visibility.DENIED_COLLEGE:
            raise AuthorizationError(
                "You can only view comments on posts from your college.", code="college_mismatch"
            )
        if result == Visibility.PUBLIC:
            raise AuthenticationError("Please log in to read comments.")
        return Comment.objects.filter(post=post, is_active=True).order_by("-created_at")

    def create(self, user, post_id, content):
        """Add a comment to a post; flagged comments are refused outright."""
        post = self.fetch_post(post_id)
        self.policy.require_not_hidden(user, post)
        check_interaction(user, post)

        screen = prescreen.screen(content=content)
        if screen.flagged:
            logger.info("Comment by user %s on post %s refused: %s", user.pk, post.pk, screen.reason)
            raise ValidationError(f"Your comment was flagged: {screen.reason}", code="comment_flagged")

        with transaction.atomic():
            comment = Comment.objects.create(
                post=post,
                author=user,
                college=user.college,
                anon_id=user.anon_id,
                display_name=user.display_name,
                content=content,
            )
            Post.objects.filter(pk=post.pk).update(comment_count=F("comment_count") + 1)
        return comment

    def can_delete(self, comment, user):
        """Return True when the user owns the comment or is an admin."""
        return comment.author_id == user.pk or user.is_admin

    def delete(self, user, comment_id):
        """Soft-delete a comment. The post's comment_count is left as is."""
        comment = self.fetch(comment_id)
        if not self.can_delete(comment, user):
            raise AuthorizationError("You can only delete your own comments.")
        Comment.objects.filter(pk=comment.pk).update(is_active=False)
        logger.info("Comment %s removed by user %s", comment.pk, user.pk)
        return comment.post_id

    def toggle_like(self, user, comment_id):
        """Like or unlike a comment; returns ``(liked, like_count)``."""
        comment = self.fetch(comment_id)
        self.policy.require_not_hidden(user, comment.post, "Comment")
        check_interaction(user, comment)

        with transaction.atomic():
            removed, _ = CommentLike.objects.filter(user=user, comment=comment).delete()
            if removed:
                Comment.objects.filter(pk=comment.pk).update(like_count=Greatest(F("like_count") - 1, 0))
                liked = False
            else:
                try:
                    with transaction.atomic():
                        CommentLike.objects.create(user=user, comment=comment)
                except IntegrityError:
                    liked = True
                else:
                    Comment.objects.filter(pk=comment.pk).update(like_count=F("like_count") + 1)
                    liked = True

        comment.refresh_from_db(fields=["like_count"])
        return liked, comment.like_count

    def my_comments(self, user):
        """The user's active comments on posts that still exist."""
        return (
            Comment.objects.filter(author=user, is_active=True, post__is_active=True)
            .select_related("post")
            .order_by("-created_at")
        )

    def liked_ids(self, user, comments):
        if not user or not user.is_authenticated:
            return set()
        return set(
            CommentLike.objects.filter(user=user, comment__in=list(comments)).values_list("comment_id", flat=True)
        )
