import uuid
from datetime import timedelta

from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from community.models import (
    Comment,
    Competition,
    CompetitionOption,
    ModerationState,
    ModerationStatus,
    Post,
    Report,
    User,
)

COLLEGE = "Riverside College"
OTHER_COLLEGE = "Northgate University"


def make_user(**kwargs):
    username = kwargs.pop("username", f"uid-{uuid.uuid4().hex[:10]}")
    email = kwargs.pop("email", f"{username}@example.org")
    return User.objects.create_user(
        username=username,
        email=email,
        password=kwargs.pop("password", "Password123"),
        college=kwargs.pop("college", COLLEGE),
        **kwargs,
    )


def make_admin(**kwargs):
    kwargs.setdefault("is_admin", True)
    return make_user(**kwargs)


def _state(status, reason):
    if status == ModerationStatus.APPROVED:
        return ModerationState.approved()
    if status == ModerationStatus.REJECTED:
        return ModerationState.rejected(reason or "Not suitable")
    if status == ModerationStatus.FLAGGED:
        return ModerationState.flagged(reason or "Flagged by screen")
    return ModerationState.pending()


def make_post(*, author=None, status=ModerationStatus.APPROVED, reason=None, **extra):
    """
    creates and returns a post. Defaults to an approved post so tests
    start from published content unless they say otherwise.
    """
    if author is None:
        author = make_user()
    extra.setdefault("title", "A post about the library")
    extra.setdefault("content", "The library is open late this week for exams.")
    return Post.objects.create(
        author=author,
        college=author.college,
        anon_id=author.anon_id,
        display_name=author.display_name,
        **_state(status, reason).as_fields(),
        **extra,
    )


def make_competition(*, author=None, status=ModerationStatus.APPROVED, reason=None,
                     options=("Pizza", "Tacos"), hours=24, **extra):
    if author is None:
        author = make_user()
    extra.setdefault("title", "Best lunch on campus")
    competition = Competition.objects.create(
        author=author,
        college=author.college,
        anon_id=author.anon_id,
        display_name=author.display_name,
        expires_at=timezone.now() + timedelta(hours=hours),
        **_state(status, reason).as_fields(),
        **extra,
    )
    for index, name in enumerate(options):
        CompetitionOption.objects.create(competition=competition, position=index, name=name)
    return competition


def make_comment(*, post, author=None, content="Nice one"):
    if author is None:
        author = make_user(college=post.college)
    return Comment.objects.create(
        post=post,
        author=author,
        college=author.college,
        anon_id=author.anon_id,
        display_name=author.display_name,
        content=content,
    )


def make_report(*, reporter, post=None, competition=None, reason="spam", description=""):
    return Report.objects.create(
        reporter=reporter,
        post=post,
        competition=competition,
        reason=reason,
        description=description,
    )


class ApiTestCase(TestCase):
    """Shared setup for API view tests: an APIClient and a clean throttle cache."""

    def setUp(self):
        super().setUp()
        cache.clear()
        self.client = APIClient()

    def login(self, user):
        self.client.force_authenticate(user=user)

    def logout(self):
        self.client.force_authenticate(user=None)
