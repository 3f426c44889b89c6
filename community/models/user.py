"""Custom user model carrying the college affiliation and moderation flags."""

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


def generate_anon_id():
    """Return a fresh pseudonymous handle such as ``Anon_3F9A1C0B``."""
    return f"Anon_{uuid.uuid4().hex[:8].upper()}"


class User(AbstractUser):
    """Registered member of a college community.

    ``username`` holds the Firebase uid. ``college`` is fixed at
    registration and drives every visibility and interaction decision.
    """

    email = models.EmailField(unique=True, blank=False)
    college = models.CharField(max_length=200, db_index=True)
    anon_id = models.CharField(max_length=20, unique=True, default=generate_anon_id, editable=False)
    display_name = models.CharField(max_length=100, default="Anonymous")

    is_admin = models.BooleanField(default=False, help_text="Community administrator (moderation rights)")
    is_blocked = models.BooleanField(default=False)
    blocked_at = models.DateTimeField(null=True, blank=True)
    block_reason = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        """Default ordering for users."""
        ordering = ["-date_joined"]

    def __str__(self):
        return f"{self.anon_id} ({self.college})"
