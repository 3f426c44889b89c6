"""Interaction gate: who may like, comment on, report or vote on a piece of content.

The gate is a pure predicate over the caller and the target's college. It
holds no state and never looks at moderation status; visibility is decided
separately by the visibility policy.
"""

from community.exceptions import AuthenticationError, AuthorizationError

COLLEGE_MISMATCH = "college_mismatch"
BLOCKED = "blocked"
NOT_AUTHENTICATED = "not_authenticated"

_MESSAGES = {
    NOT_AUTHENTICATED: "Please log in to interact with posts.",
    BLOCKED: "Your account has been blocked.",
    COLLEGE_MISMATCH: "You can only interact with content from your college.",
}


def _is_authenticated(user):
    return bool(user) and getattr(user, "is_authenticated", False)


def denial_reason(user, target):
    """Return why ``user`` may not interact with ``target``, or None when allowed.

    Blocked is an absolute veto and is checked before the admin bypass, so a
    blocked admin cannot interact either.
    """
    if not _is_authenticated(user):
        return NOT_AUTHENTICATED
    if getattr(user, "is_blocked", False):
        return BLOCKED
    if getattr(user, "is_admin", False):
        return None
    if user.college != target.college:
        return COLLEGE_MISMATCH
    return None


def can_interact(user, target):
    return denial_reason(user, target) is None


def check_interaction(user, target):
    """Raise the matching API error when the gate denies the interaction."""
    reason = denial_reason(user, target)
    if reason is None:
        return
    if reason == NOT_AUTHENTICATED:
        raise AuthenticationError(_MESSAGES[reason], code=reason)
    raise AuthorizationError(_MESSAGES[reason], code=reason)


def check_can_publish(user):
    """Blocked members may read but not create or edit content."""
    if not _is_authenticated(user):
        raise AuthenticationError(_MESSAGES[NOT_AUTHENTICATED], code=NOT_AUTHENTICATED)
    if getattr(user, "is_blocked", False):
        raise AuthorizationError(_MESSAGES[BLOCKED], code=BLOCKED)
