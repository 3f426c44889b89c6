import logging

from django.contrib.auth import get_user_model
from firebase_admin import auth
from rest_framework import authentication
from rest_framework import exceptions

from .firebase_admin_client import get_app

logger = logging.getLogger(__name__)

User = get_user_model()


class FirebaseAuthentication(authentication.BaseAuthentication):
    """DRF authentication backend validating Firebase ID tokens.

    The verified token's ``uid`` is the local user's ``username``. Blocked
    users still authenticate; the interaction gate refuses their writes.
    """

    keyword = "Bearer"

    def authenticate(self, request):
        """Validate Authorization header token and return (user, auth)."""
        auth_header = request.META.get("HTTP_AUTHORIZATION")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0] != self.keyword:
            raise exceptions.AuthenticationFailed("Invalid authorization header.")
        id_token = parts[1]

        try:
            decoded_token = auth.verify_id_token(id_token, app=get_app())
        except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError,
                auth.RevokedIdTokenError, auth.CertificateFetchError) as e:
            logger.info("Rejected Firebase token: %s", e)
            raise exceptions.AuthenticationFailed("Invalid or expired token.")

        uid = decoded_token.get("uid")
        try:
            user = User.objects.get(username=uid)
        except User.DoesNotExist:
            raise exceptions.AuthenticationFailed("User not found.")
        return (user, decoded_token)

    def authenticate_header(self, request):
        return self.keyword
