"""Service helpers for post creation, edits, removal and likes."""

import logging

from django.db import IntegrityError, transaction
from django.db.models import F
from django.db.models.functions import Greatest

from community import asset_host, prescreen
from community.exceptions import AuthenticationError, AuthorizationError, not_found
from community.models import Post, PostLike
from community.repos.post_repo import PostRepo
from community.services.gate import check_can_publish, check_interaction
from community.services.moderation import ModerationService
from community.services.visibility import VisibilityPolicy
from community.utils.text import truncate_text

logger = logging.getLogger(__name__)

CONTENT_FIELDS = ("title", "content")
EDITABLE_FIELDS = ("title", "content", "category", "tags")


class PostService:
    """Encapsulate the post lifecycle and engagement operations."""

    def __init__(self, repo=None, moderation=None, policy=None):
        self.repo = repo or PostRepo()
        self.moderation = moderation or ModerationService()
        self.policy = policy or VisibilityPolicy()

    def fetch(self, post_id):
        """Fetch a post by id (any state) or raise NotFoundError."""
        post = Post.objects.select_related("author").filter(id=post_id).first()
        if post is None:
            raise not_found("Post")
        return post

    def get_for_viewer(self, viewer, post_id):
        """Return ``(post, visibility)`` or raise the matching visibility error."""
        post = self.fetch(post_id)
        return post, self.policy.require_readable(viewer, post)

    def feed(self, viewer, *, college=None, category=None, search=None, sort="newest"):
        """
        Posts ``viewer`` may see in the main list.

        Members only ever list their own college; admins may list any
        college or all of them. Anonymous visitors cannot list posts.
        """
        if not viewer.is_authenticated:
            raise AuthenticationError("Please log in to browse posts.")
        if not viewer.is_admin:
            college = viewer.college
        qs = self.repo.list_for_feed(college=college, category=category, search=search, sort=sort)
        return self.policy.filter_visible(qs, viewer)

    def my_posts(self, user):
        return self.repo.list_for_author(user.pk)

    def upload_image(self, user, upload):
        """Upload an image ahead of creating a post; returns the hosted Asset."""
        check_can_publish(user)
        return asset_host.upload_image(upload)

    def create(self, author, data, image=None):
        """
        Create a post from validated ``data`` and return it.

        The post always starts ``pending``; the pre-screen may then move it
        to ``flagged``. An ``image`` file is uploaded before anything is
        written and deleted again if the insert fails, so either the whole
        post exists or nothing does.
        """
        check_can_publish(author)
        screen = prescreen.screen(data["title"], data["content"])

        asset = asset_host.upload_image(image) if image is not None else None
        image_url = asset.url if asset else data.get("image_url", "")
        image_public_id = asset.public_id if asset else data.get("image_public_id", "")

        try:
            with transaction.atomic():
                post = Post.objects.create(
                    author=author,
                    college=author.college,
                    anon_id=author.anon_id,
                    display_name=author.display_name,
                    title=data["title"],
                    content=data["content"],
                    category=data.get("category") or Post.CATEGORY_GENERAL,
                    tags=data.get("tags") or [],
                    image_url=image_url or "",
                    image_public_id=image_public_id or "",
                    **self.moderation.initial_state().as_fields(),
                )
                if screen.flagged:
                    self.moderation.flag(post, screen.reason)
        except Exception:
            if asset:
                asset_host.destroy_image(asset.public_id)
            raise

        logger.info(
            "Post %s created by user %s in %s: %s",
            post.pk, author.pk, author.college, truncate_text(post.title, 60),
        )
        post.refresh_from_db()
        return post

    def update(self, editor, post_id, data):
        """
        Apply the author's edit. Changing the title or content sends the
        post back through moderation; category/tag edits do not.
        """
        post = self.fetch(post_id)
        if not post.is_authored_by(editor) or not post.is_active:
            self.policy.require_not_hidden(editor, post)
            raise AuthorizationError("You can only edit your own posts.")
        check_can_publish(editor)

        changes = {
            field: data[field]
            for field in EDITABLE_FIELDS
            if field in data and data[field] != getattr(post, field)
        }
        if not changes:
            return post

        if not any(field in changes for field in CONTENT_FIELDS):
            Post.objects.filter(pk=post.pk).update(**changes)
            post.refresh_from_db()
            return post

        screen = prescreen.screen(
            changes.get("title", post.title), changes.get("content", post.content)
        )
        with transaction.atomic():
            post = self.moderation.resubmit(post, **changes)
            if screen.flagged:
                self.moderation.flag(post, screen.reason)
        post.refresh_from_db()
        return post

    def delete(self, user, post_id):
        """Soft-delete a post; allowed for its author and for admins."""
        post = self.fetch(post_id)
        self.policy.require_not_hidden(user, post)
        if not (post.is_authored_by(user) or user.is_admin):
            raise AuthorizationError("You can only delete your own posts.")
        Post.objects.filter(pk=post.pk).update(is_active=False)
        logger.info("Post %s removed by user %s", post.pk, user.pk)

    def toggle_like(self, user, post_id):
        """Like or unlike a post; returns ``(liked, like_count)``."""
        post = self.fetch(post_id)
        self.policy.require_not_hidden(user, post)
        check_interaction(user, post)

        with transaction.atomic():
            removed, _ = PostLike.objects.filter(user=user, post=post).delete()
            if removed:
                Post.objects.filter(pk=post.pk).update(like_count=Greatest(F("like_count") - 1, 0))
                liked = False
            else:
                try:
                    with transaction.atomic():
                        PostLike.objects.create(user=user, post=post)
                except IntegrityError:
                    # a concurrent request already liked it
                    liked = True
                else:
                    Post.objects.filter(pk=post.pk).update(like_count=F("like_count") + 1)
                    liked = True

        post.refresh_from_db(fields=["like_count"])
        return liked, post.like_count

    def liked_ids(self, user, posts):
        """Ids of ``posts`` that ``user`` has liked."""
        if not user or not user.is_authenticated:
            return set()
        return set(
            PostLike.objects.filter(user=user, post__in=list(posts)).values_list("post_id", flat=True)
        )
