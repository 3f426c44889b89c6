"""Model for anonymous comments on posts."""

import uuid

from django.conf import settings
from django.db import models

from .post import Post


class Comment(models.Model):
    """User-authored comment on a post, scoped to the commenter's college."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="comments",
    )

    college = models.CharField(max_length=200, db_index=True, editable=False)
    anon_id = models.CharField(max_length=20, editable=False)
    display_name = models.CharField(max_length=100, default="Anonymous", editable=False)

    # text (1–2000)
    content = models.TextField(max_length=2000)
    like_count = models.PositiveIntegerField(default=0)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """DB table name and newest-first ordering for comments."""
        db_table = "comment"
        ordering = ["-created_at"]

    def __str__(self):
        """Readable identifier for admin/debugging."""
        return f"Comment by {self.anon_id} on {self.post_id}"
