"""Model for user-submitted reports against posts or competitions."""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q

from .competition import Competition
from .post import Post


class ReportStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    RESOLVED = "resolved", "Resolved"
    DISMISSED = "dismissed", "Dismissed"


class Report(models.Model):
    """User-submitted report against a post or a competition.

    Exactly one of ``post`` / ``competition`` is set. ``status`` is written
    only by the reporting service; a report leaves ``pending`` once, when an
    admin resolves or dismisses it.
    """
    REPORT_REASONS = [
        ("spam", "Spam"),
        ("harassment", "Harassment"),
        ("hate-speech", "Hate speech"),
        ("violence", "Violence"),
        ("misinformation", "Misinformation"),
        ("inappropriate", "Inappropriate content"),
        ("other", "Other"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Who is reporting?
    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="submitted_reports",
    )

    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="reports",
    )
    competition = models.ForeignKey(
        Competition,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="reports",
    )

    reason = models.CharField(max_length=20, choices=REPORT_REASONS)
    description = models.TextField(max_length=500, blank=True, default="", help_text="Additional details from the user")

    status = models.CharField(
        max_length=20,
        choices=ReportStatus.choices,
        default=ReportStatus.PENDING,
        editable=False,
        db_index=True,
    )
    admin_notes = models.TextField(blank=True, default="", editable=False, help_text="Admin's notes on the decision")
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        editable=False,
        related_name="reviewed_reports",
    )
    reviewed_at = models.DateTimeField(null=True, blank=True, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Ordering, table name and one-open-report-per-target constraints."""
        db_table = "report"
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(post__isnull=False, competition__isnull=True)
                    | Q(post__isnull=True, competition__isnull=False)
                ),
                name="chk_report_single_target",
            ),
            models.UniqueConstraint(
                fields=("reporter", "post"),
                condition=Q(status="pending", post__isnull=False),
                name="uniq_open_report_reporter_post",
            ),
            models.UniqueConstraint(
                fields=("reporter", "competition"),
                condition=Q(status="pending", competition__isnull=False),
                name="uniq_open_report_reporter_competition",
            ),
        ]

    def __str__(self):
        """Readable summary of the report target and reporter."""
        target = "Post" if self.post_id else "Competition"
        return f"Report on {target} by {self.reporter.anon_id}"

    @property
    def target(self):
        return self.post if self.post_id else self.competition

    @property
    def is_open(self):
        return self.status == ReportStatus.PENDING
