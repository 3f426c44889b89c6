from django.http import Http404
from django.test import SimpleTestCase
from rest_framework import exceptions, serializers

from community.exceptions import (
    AuthorizationError,
    CollegeVisibilityDenied,
    ConflictError,
    api_exception_handler,
)


class ApiExceptionHandlerTests(SimpleTestCase):
    def handle(self, exc):
        return api_exception_handler(exc, {})

    def test_plain_api_error(self):
        response = self.handle(ConflictError("Report has already been resolved."))
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data, {"message": "Report has already been resolved.", "code": "conflict"})

    def test_custom_code(self):
        response = self.handle(AuthorizationError("Your account has been blocked.", code="blocked"))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data["code"], "blocked")

    def test_field_errors(self):
        response = self.handle(serializers.ValidationError({"title": ["Too short."]}))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "Too short.")
        self.assertEqual(response.data["code"], "invalid")
        self.assertEqual(response.data["errors"], {"title": ["Too short."]})

    def test_college_denial_carries_preview(self):
        preview = {"id": "abc", "title": "Hello"}
        response = self.handle(CollegeVisibilityDenied(preview))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data["code"], "college_mismatch")
        self.assertEqual(response.data["visibility"], "DENIED_COLLEGE")
        self.assertEqual(response.data["preview"], preview)

    def test_throttled_includes_retry_after(self):
        response = self.handle(exceptions.Throttled(wait=42))
        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.data["retry_after"], 42)

    def test_django_404(self):
        response = self.handle(Http404())
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["code"], "not_found")

    def test_unhandled_exceptions_pass_through(self):
        self.assertIsNone(self.handle(RuntimeError("boom")))
