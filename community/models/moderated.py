"""
Moderation state shared by every piece of user content that goes through review.

ModerationStatus:
- `pending`: newly created or resubmitted after an edit, waiting for an admin.
- `approved`: published; visible to the author's college.
- `rejected`: an admin turned it down; only the author (and admins) see it,
  together with the reason.
- `flagged`: the automated pre-screen (or the report threshold) marked it;
  hidden like `pending` but listed separately in the admin queue.

ModerationState is the (status, reason) pair as a single value. Its
constructors are the only way the services build a new state, so a rejected
or flagged state always carries a reason and an approved or pending state
never does.

ModeratedContent is the abstract base for Post and Competition. The
moderation fields are not editable through forms or serializers; the
moderation service writes them with conditional updates.
"""

import uuid
from dataclasses import dataclass

from django.conf import settings
from django.db import models


class ModerationStatus(models.TextChoices):
    PENDING = "pending", "Pending review"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"
    FLAGGED = "flagged", "Flagged"


UNDER_REVIEW = (ModerationStatus.PENDING, ModerationStatus.FLAGGED)
HIDDEN_STATUSES = (ModerationStatus.PENDING, ModerationStatus.FLAGGED, ModerationStatus.REJECTED)
ADMIN_DECISIONS = (ModerationStatus.APPROVED, ModerationStatus.REJECTED)


@dataclass(frozen=True)
class ModerationState:
    """Moderation status together with the reason that explains it."""

    status: str
    reason: str = ""

    def __post_init__(self):
        needs_reason = self.status in (ModerationStatus.REJECTED, ModerationStatus.FLAGGED)
        if needs_reason and not self.reason.strip():
            raise ValueError(f"A {self.status} moderation state requires a reason.")
        if not needs_reason and self.reason:
            raise ValueError(f"A {self.status} moderation state cannot carry a reason.")

    @classmethod
    def pending(cls):
        return cls(ModerationStatus.PENDING)

    @classmethod
    def approved(cls):
        return cls(ModerationStatus.APPROVED)

    @classmethod
    def rejected(cls, reason):
        return cls(ModerationStatus.REJECTED, (reason or "").strip())

    @classmethod
    def flagged(cls, reason):
        return cls(ModerationStatus.FLAGGED, (reason or "").strip())

    @property
    def is_under_review(self):
        return self.status in UNDER_REVIEW

    @property
    def is_rejected(self):
        return self.status == ModerationStatus.REJECTED

    def as_fields(self):
        """Column values for a queryset update."""
        return {"moderation_status": self.status, "moderation_reason": self.reason}


class ModeratedContent(models.Model):
    """Author-owned, college-scoped content that passes through moderation."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="%(class)ss",
    )
    # copied from the author at creation, never updated afterwards
    college = models.CharField(max_length=200, db_index=True, editable=False)
    anon_id = models.CharField(max_length=20, editable=False)
    display_name = models.CharField(max_length=100, default="Anonymous", editable=False)

    moderation_status = models.CharField(
        max_length=20,
        choices=ModerationStatus.choices,
        default=ModerationStatus.PENDING,
        editable=False,
        db_index=True,
    )
    moderation_reason = models.TextField(blank=True, default="", editable=False)
    moderated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        editable=False,
        related_name="+",
    )
    moderated_at = models.DateTimeField(null=True, blank=True, editable=False)

    is_active = models.BooleanField(default=True, help_text="False once the author or an admin removes it")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    @property
    def moderation(self):
        """Current moderation state as a ModerationState value."""
        return ModerationState(self.moderation_status, self.moderation_reason)

    def is_authored_by(self, user):
        return bool(user) and getattr(user, "pk", None) is not None and user.pk == self.author_id
