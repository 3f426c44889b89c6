from rest_framework import permissions
from rest_framework.throttling import UserRateThrottle


class IsCommunityAdmin(permissions.BasePermission):
    """Allow access only to community administrators."""

    message = "Admin access required."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, "is_admin", False))


class PostCreateThrottle(UserRateThrottle):
    """Rate-limit post creation per user; reads are never throttled."""

    scope = "posts"

    def allow_request(self, request, view):
        if request.method != "POST":
            return True
        return super().allow_request(request, view)
