from unittest.mock import MagicMock, patch

from django.test import TestCase
from rest_framework import exceptions

from community.authentication import FirebaseAuthentication
from community.tests.helpers import make_user


class FirebaseAuthenticationTests(TestCase):
    def setUp(self):
        self.auth = FirebaseAuthentication()
        self.request = MagicMock()
        self.user = make_user(username="firebase-uid-1")

    @patch("community.authentication.auth.verify_id_token")
    def test_authenticate_success(self, mock_verify):
        self.request.META = {"HTTP_AUTHORIZATION": "Bearer token123"}
        mock_verify.return_value = {"uid": "firebase-uid-1"}

        user, token = self.auth.authenticate(self.request)

        self.assertEqual(user, self.user)
        self.assertEqual(token["uid"], "firebase-uid-1")
        self.assertEqual(mock_verify.call_args.args[0], "token123")

    def test_authenticate_no_header(self):
        self.request.META = {}
        self.assertIsNone(self.auth.authenticate(self.request))

    @patch("community.authentication.auth.verify_id_token")
    def test_authenticate_invalid_header_format(self, mock_verify):
        for header in ("Basic token", "Bearer", "Bearer a b"):
            self.request.META = {"HTTP_AUTHORIZATION": header}
            with self.assertRaises(exceptions.AuthenticationFailed):
                self.auth.authenticate(self.request)
        mock_verify.assert_not_called()

    @patch("community.authentication.auth.verify_id_token")
    def test_authenticate_invalid_token(self, mock_verify):
        self.request.META = {"HTTP_AUTHORIZATION": "Bearer bad"}
        mock_verify.side_effect = ValueError("Boom")
        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(self.request)

    @patch("community.authentication.auth.verify_id_token")
    def test_authenticate_unknown_user(self, mock_verify):
        self.request.META = {"HTTP_AUTHORIZATION": "Bearer token123"}
        mock_verify.return_value = {"uid": "nobody"}
        with self.assertRaisesMessage(exceptions.AuthenticationFailed, "User not found."):
            self.auth.authenticate(self.request)

    @patch("community.authentication.auth.verify_id_token")
    def test_blocked_user_still_authenticates(self, mock_verify):
        self.user.is_blocked = True
        self.user.save()
        self.request.META = {"HTTP_AUTHORIZATION": "Bearer token123"}
        mock_verify.return_value = {"uid": "firebase-uid-1"}
        user, _ = self.auth.authenticate(self.request)
        self.assertTrue(user.is_blocked)

    def test_authenticate_header(self):
        self.assertEqual(self.auth.authenticate_header(self.request), "Bearer")
