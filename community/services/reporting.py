"""Service helpers for reporting posts or competitions and reviewing reports."""

import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from community.exceptions import ConflictError, ValidationError, not_found
from community.models import Competition, ModerationStatus, Post, Report, ReportStatus
from community.services.gate import check_interaction
from community.services.moderation import ModerationService
from community.services.visibility import VisibilityPolicy

logger = logging.getLogger(__name__)

REPORT_REASONS = {value for value, _ in Report.REPORT_REASONS}
REVIEW_DECISIONS = (ReportStatus.RESOLVED, ReportStatus.DISMISSED)


class ReportingService:
    """Encapsulate report filing, the admin review queue and report resolution."""

    def __init__(self, moderation=None, policy=None):
        self.moderation = moderation or ModerationService()
        self.policy = policy or VisibilityPolicy()

    def fetch_post(self, post_id):
        post = Post.objects.select_related("author").filter(id=post_id).first()
        if post is None:
            raise not_found("Post")
        return post

    def fetch_competition(self, competition_id):
        competition = Competition.objects.select_related("author").filter(id=competition_id).first()
        if competition is None:
            raise not_found("Competition")
        return competition

    def report_post(self, reporter, post_id, reason, description=""):
        post = self.fetch_post(post_id)
        return self._file(reporter, post, "post", reason, description)

    def report_competition(self, reporter, competition_id, reason, description=""):
        competition = self.fetch_competition(competition_id)
        return self._file(reporter, competition, "competition", reason, description)

    def _file(self, reporter, target, field, reason, description):
        label = field.capitalize()
        self.policy.require_not_hidden(reporter, target, label)
        check_interaction(reporter, target)

        if reason not in REPORT_REASONS:
            raise ValidationError(f"Unknown report reason '{reason}'.")
        description = (description or "").strip()
        if len(description) > 500:
            raise ValidationError("Description must be at most 500 characters.")

        if self.has_open_report(reporter, target, field):
            raise ConflictError(f"You have already reported this {field}.")

        try:
            with transaction.atomic():
                report = Report.objects.create(
                    reporter=reporter,
                    reason=reason,
                    description=description,
                    **{field: target},
                )
                if field == "post":
                    Post.objects.filter(pk=target.pk).update(report_count=F("report_count") + 1)
        except IntegrityError:
            raise ConflictError(f"You have already reported this {field}.")

        logger.info("%s %s reported by user %s (%s)", label, target.pk, reporter.pk, reason)
        self._maybe_auto_flag(target, field)
        return report

    def has_open_report(self, reporter, target, field):
        return Report.objects.filter(
            reporter=reporter,
            status=ReportStatus.PENDING,
            **{field: target},
        ).exists()

    def _maybe_auto_flag(self, target, field):
        """Flag published content once enough reports are open against it."""
        threshold = getattr(settings, "REPORT_AUTO_FLAG_THRESHOLD", None)
        if not threshold:
            return False
        open_reports = Report.objects.filter(status=ReportStatus.PENDING, **{field: target}).count()
        if open_reports < threshold:
            return False
        return self.moderation.flag(
            target,
            f"Automatically flagged after {open_reports} user reports.",
            from_statuses=(ModerationStatus.APPROVED,),
        )

    def resolve(self, report_id, decision, admin, admin_notes=""):
        """
        Close an open report as resolved or dismissed.

        Resolving a report never changes the moderation state of its target;
        admins moderate the target separately.
        """
        if decision not in REVIEW_DECISIONS:
            raise ValidationError("Status must be 'resolved' or 'dismissed'.")

        updated = Report.objects.filter(pk=report_id, status=ReportStatus.PENDING).update(
            status=decision,
            admin_notes=(admin_notes or "").strip(),
            reviewed_by=admin,
            reviewed_at=timezone.now(),
        )
        report = Report.objects.select_related("reporter", "reviewed_by").filter(pk=report_id).first()
        if report is None:
            raise not_found("Report")
        if not updated:
            raise ConflictError(f"Report has already been {report.status}.")

        logger.info("Report %s %s by admin %s", report_id, decision, admin.pk)
        return report

    def my_reports(self, reporter):
        """Reports filed by ``reporter``, newest first, whatever their target's state."""
        return (
            Report.objects.filter(reporter=reporter)
            .select_related("post", "competition", "reviewed_by")
            .order_by("-created_at")
        )

    def list_reports(self, status=None):
        """Admin review queue, newest first. Open reports unless ``status`` says otherwise (``all`` for every report)."""
        qs = Report.objects.select_related("reporter", "post", "competition", "reviewed_by")
        if status is None:
            status = ReportStatus.PENDING
        if status != "all":
            if status not in ReportStatus.values:
                raise ValidationError(f"Unknown report status '{status}'.")
            qs = qs.filter(status=status)
        return qs.order_by("-created_at")
