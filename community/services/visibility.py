"""What a viewer may see of a post or competition.

``visibility()`` is the single decision point; serializers and list filters
both derive from it. Rules, first match wins:

0. anonymous viewer                         -> DENIED_UNDER_REVIEW if hidden,
                                               else PUBLIC (metadata preview)
1. admin                                    -> FULL
2. author of active content                 -> OWNER_PENDING / OWNER_REJECTED / FULL
3. hidden (under review, rejected, removed,
   or written by a blocked author)          -> DENIED_UNDER_REVIEW
4. other college                            -> DENIED_COLLEGE
5. otherwise                                -> FULL
"""

import enum

from django.db.models import Q

from community.exceptions import CollegeVisibilityDenied, not_found
from community.models.moderated import HIDDEN_STATUSES, ModerationStatus


class Visibility(str, enum.Enum):
    FULL = "FULL"
    OWNER_PENDING = "OWNER_PENDING"
    OWNER_REJECTED = "OWNER_REJECTED"
    DENIED_COLLEGE = "DENIED_COLLEGE"
    DENIED_UNDER_REVIEW = "DENIED_UNDER_REVIEW"
    PUBLIC = "PUBLIC"


OWNER_VIEWS = (Visibility.OWNER_PENDING, Visibility.OWNER_REJECTED)
READABLE = (Visibility.FULL,) + OWNER_VIEWS


def _is_authenticated(user):
    return bool(user) and getattr(user, "is_authenticated", False)


def is_hidden(item):
    """True when nobody but the author and admins may see ``item``."""
    if not item.is_active:
        return True
    if item.moderation_status in HIDDEN_STATUSES:
        return True
    return bool(item.author.is_blocked)


def visibility(viewer, item):
    """Return the Visibility of ``item`` for ``viewer``."""
    if not _is_authenticated(viewer):
        return Visibility.DENIED_UNDER_REVIEW if is_hidden(item) else Visibility.PUBLIC
    if getattr(viewer, "is_admin", False):
        return Visibility.FULL
    if item.is_authored_by(viewer) and item.is_active:
        if item.moderation_status == ModerationStatus.REJECTED:
            return Visibility.OWNER_REJECTED
        if item.moderation_status == ModerationStatus.APPROVED:
            return Visibility.FULL
        return Visibility.OWNER_PENDING
    if is_hidden(item):
        return Visibility.DENIED_UNDER_REVIEW
    if viewer.college != item.college:
        return Visibility.DENIED_COLLEGE
    return Visibility.FULL


def preview_of(item):
    """Metadata a viewer may see without the body."""
    return {
        "id": str(item.id),
        "title": item.title,
        "college": item.college,
        "category": getattr(item, "category", None),
        "created_at": item.created_at.isoformat() if item.created_at else None,
    }


class VisibilityPolicy:
    """Apply the visibility rules to single objects and to querysets."""

    def visibility(self, viewer, item):
        return visibility(viewer, item)

    def require_readable(self, viewer, item, label="Post"):
        """
        Return the viewer's Visibility of ``item`` when they may read it.

        Hidden content raises NotFoundError so that its existence is not
        revealed; content from another college raises CollegeVisibilityDenied
        carrying a preview. Anonymous viewers get PUBLIC back and callers
        decide how much to show.
        """
        result = visibility(viewer, item)
        if result == Visibility.DENIED_UNDER_REVIEW:
            raise not_found(label)
        if result == Visibility.DENIED_COLLEGE:
            raise CollegeVisibilityDenied(
                preview_of(item),
                detail=f"This {label.lower()} belongs to another college.",
            )
        return result

    def require_not_hidden(self, viewer, item, label="Post"):
        """Raise NotFoundError when ``item`` is hidden from ``viewer``."""
        if visibility(viewer, item) == Visibility.DENIED_UNDER_REVIEW:
            raise not_found(label)

    def visible_filter(self, viewer):
        """Q object matching exactly the rows ``visibility()`` does not hide from ``viewer``."""
        published = (
            Q(is_active=True)
            & Q(moderation_status=ModerationStatus.APPROVED)
            & Q(author__is_blocked=False)
        )
        if not _is_authenticated(viewer):
            return published
        if getattr(viewer, "is_admin", False):
            return Q()
        return published | Q(author=viewer, is_active=True)

    def filter_visible(self, queryset, viewer):
        """Narrow ``queryset`` to what ``viewer`` may see in a list."""
        return queryset.filter(self.visible_filter(viewer))
