"""Moderation state machine for posts and competitions.

Every write of ``moderation_status`` / ``moderation_reason`` goes through
this module as a conditional UPDATE (``WHERE moderation_status IN ...``), so
two concurrent transitions on the same row cannot both succeed.

    (new)              -> pending      initial_state()
    any                -> pending      resubmit()      author edits content
    pending / approved -> flagged      flag()          pre-screen, report threshold
    pending / flagged  -> approved     moderate()      admin
    pending / flagged  -> rejected     moderate()      admin, reason required
"""

import logging

from django.db import transaction
from django.utils import timezone

from community.exceptions import ConflictError, ValidationError, not_found
from community.models.moderated import (
    ADMIN_DECISIONS,
    UNDER_REVIEW,
    ModerationState,
    ModerationStatus,
)

logger = logging.getLogger(__name__)


def _label(model):
    return model._meta.verbose_name.capitalize()


class ModerationService:
    """Apply moderation transitions to ModeratedContent rows."""

    def __init__(self, clock=timezone.now):
        self.clock = clock

    def initial_state(self):
        """State every newly created post or competition starts in."""
        return ModerationState.pending()

    def resubmit(self, item, **changes):
        """
        Save the author's ``changes`` and send ``item`` back to ``pending``.

        The update only applies if the status is still the one the author
        saw when the item was loaded; otherwise an admin decided in between
        and ConflictError is raised so the author can reload.
        """
        model = type(item)
        state = ModerationState.pending()
        changes["updated_at"] = self.clock()
        updated = model.objects.filter(
            pk=item.pk,
            moderation_status=item.moderation_status,
        ).update(**state.as_fields(), **changes)
        if not updated:
            if not model.objects.filter(pk=item.pk).exists():
                raise not_found(_label(model))
            raise ConflictError(
                f"This {model._meta.verbose_name} was reviewed while you were editing it. Reload and try again."
            )

        logger.info(
            "%s %s resubmitted for review (was %s)", _label(model), item.pk, item.moderation_status
        )
        return model.objects.get(pk=item.pk)

    def flag(self, item, reason, from_statuses=(ModerationStatus.PENDING,)):
        """
        Move ``item`` to ``flagged`` if it is currently in ``from_statuses``.

        Returns True when the row changed. Flagging never overrides an admin
        rejection and is a no-op when the item already left ``from_statuses``.
        """
        model = type(item)
        state = ModerationState.flagged(reason)
        updated = model.objects.filter(
            pk=item.pk,
            moderation_status__in=from_statuses,
        ).update(**state.as_fields())
        if updated:
            logger.info("%s %s flagged: %s", _label(model), item.pk, state.reason)
        return bool(updated)

    def _decision_state(self, decision, reason):
        try:
            decision = ModerationStatus(decision)
        except ValueError:
            raise ValidationError(f"Unknown moderation status '{decision}'.")
        if decision not in ADMIN_DECISIONS:
            raise ValidationError("Status must be 'approved' or 'rejected'.")
        if decision == ModerationStatus.APPROVED:
            return ModerationState.approved()
        if not (reason or "").strip():
            raise ValidationError("A reason is required when rejecting content.")
        return ModerationState.rejected(reason)

    def _source_statuses(self, expected_status):
        if expected_status is None:
            return UNDER_REVIEW
        try:
            return (ModerationStatus(expected_status),)
        except ValueError:
            raise ValidationError(f"Unknown moderation status '{expected_status}'.")

    def moderate(self, model, pk, decision, admin, reason=None, expected_status=None):
        """
        Record an admin decision on the ``model`` row ``pk``.

        ``expected_status`` is the status the admin was looking at; without
        it any item still under review may be decided. Repeating the
        decision that is already in place is a no-op. Deciding an item whose
        status moved on since the admin looked at it raises ConflictError.
        """
        state = self._decision_state(decision, reason)
        sources = self._source_statuses(expected_status)

        with transaction.atomic():
            updated = model.objects.filter(
                pk=pk,
                moderation_status__in=sources,
            ).exclude(
                moderation_status=state.status,
                moderation_reason=state.reason,
            ).update(
                **state.as_fields(),
                moderated_by=admin,
                moderated_at=self.clock(),
            )
            current = model.objects.filter(pk=pk).first()

        if current is None:
            raise not_found(_label(model))
        if updated:
            logger.info(
                "%s %s %s by admin %s", _label(model), pk, state.status, getattr(admin, "pk", None)
            )
            return current
        if current.moderation == state:
            return current
        raise ConflictError(
            f"{_label(model)} is already {current.moderation_status}; reload before deciding again."
        )
