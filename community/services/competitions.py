"""Service helpers for competitions (polls and comparisons) and voting."""

import logging

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from community import prescreen
from community.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ValidationError,
    not_found,
)
from community.models import Competition, CompetitionOption, CompetitionVote
from community.services.gate import check_can_publish, check_interaction
from community.services.moderation import ModerationService
from community.services.visibility import VisibilityPolicy

logger = logging.getLogger(__name__)

MIN_OPTIONS = 2
MAX_OPTIONS = 10
MAX_DURATION_HOURS = 720


class CompetitionService:
    """Encapsulate competition lifecycle and voting."""

    def __init__(self, moderation=None, policy=None):
        self.moderation = moderation or ModerationService()
        self.policy = policy or VisibilityPolicy()

    def fetch(self, competition_id):
        competition = (
            Competition.objects.select_related("author")
            .prefetch_related("options")
            .filter(id=competition_id)
            .first()
        )
        if competition is None:
            raise not_found("Competition")
        return competition

    def get_for_viewer(self, viewer, competition_id):
        competition = self.fetch(competition_id)
        return competition, self.policy.require_readable(viewer, competition, "Competition")

    def list_active(self, viewer, college=None):
        """Open competitions the viewer may see, newest first."""
        if not viewer.is_authenticated:
            raise AuthenticationError("Please log in to browse competitions.")
        if not viewer.is_admin:
            college = viewer.college
        qs = Competition.objects.filter(is_active=True, expires_at__gt=timezone.now())
        if college:
            qs = qs.filter(college=college)
        qs = self.policy.filter_visible(qs, viewer)
        return qs.select_related("author").prefetch_related("options").order_by("-created_at")

    def list_all(self, college=None, is_active=None):
        """Admin listing including removed and expired competitions."""
        qs = Competition.objects.select_related("author").prefetch_related("options")
        if college:
            qs = qs.filter(college=college)
        if is_active is not None:
            qs = qs.filter(is_active=is_active)
        return qs.order_by("-created_at")

    def _validate_options(self, options):
        if not MIN_OPTIONS <= len(options) <= MAX_OPTIONS:
            raise ValidationError(f"A competition needs between {MIN_OPTIONS} and {MAX_OPTIONS} options.")
        names = [(option.get("name") or "").strip() for option in options]
        if not all(names):
            raise ValidationError("Every option needs a name.")
        if len({name.lower() for name in names}) != len(names):
            raise ValidationError("Option names must be unique.")
        return names

    def create(self, author, data):
        """Create a competition with its options; it starts ``pending`` like a post."""
        check_can_publish(author)
        options = data.get("options") or []
        names = self._validate_options(options)
        duration = data.get("duration_hours") or Competition.DEFAULT_DURATION_HOURS
        if not 1 <= duration <= MAX_DURATION_HOURS:
            raise ValidationError(f"Duration must be between 1 and {MAX_DURATION_HOURS} hours.")

        screen = prescreen.screen(
            data["title"], "\n".join([data.get("description") or ""] + names)
        )

        with transaction.atomic():
            competition = Competition.objects.create(
                author=author,
                college=author.college,
                anon_id=author.anon_id,
                display_name=author.display_name,
                title=data["title"],
                description=data.get("description") or "",
                kind=data.get("kind") or Competition.KIND_COMPARISON,
                expires_at=Competition.expiry_for(duration),
                **self.moderation.initial_state().as_fields(),
            )
            CompetitionOption.objects.bulk_create(
                CompetitionOption(
                    competition=competition,
                    position=index,
                    name=name,
                    image_url=option.get("image_url") or "",
                    image_public_id=option.get("image_public_id") or "",
                )
                for index, (name, option) in enumerate(zip(names, options))
            )
            if screen.flagged:
                self.moderation.flag(competition, screen.reason)

        logger.info("Competition %s created by user %s in %s", competition.pk, author.pk, author.college)
        return self.fetch(competition.pk)

    def vote(self, user, competition_id, option_index):
        """Cast the user's single vote; returns the refreshed competition."""
        competition = self.fetch(competition_id)
        self.policy.require_not_hidden(user, competition, "Competition")
        check_interaction(user, competition)

        if competition.has_ended:
            raise ValidationError("Voting has ended for this competition.")
        options = list(competition.options.all())
        if not isinstance(option_index, int) or not 0 <= option_index < len(options):
            raise ValidationError("Invalid option.")
        option = options[option_index]

        try:
            with transaction.atomic():
                CompetitionVote.objects.create(competition=competition, option=option, user=user)
                CompetitionOption.objects.filter(pk=option.pk).update(vote_count=F("vote_count") + 1)
                Competition.objects.filter(pk=competition.pk).update(total_votes=F("total_votes") + 1)
        except IntegrityError:
            raise ConflictError("You have already voted in this competition.")

        logger.info("User %s voted in competition %s", user.pk, competition.pk)
        return self.fetch(competition.pk)

    def results(self, viewer, competition_id):
        """Final vote counts; only once voting closed, except for admins."""
        competition, _ = self.get_for_viewer(viewer, competition_id)
        if not competition.results_visible and not getattr(viewer, "is_admin", False):
            raise ValidationError("Results are available once voting has ended.")
        return competition

    def delete(self, user, competition_id):
        """Soft-delete a competition; allowed for its author and for admins."""
        competition = self.fetch(competition_id)
        self.policy.require_not_hidden(user, competition, "Competition")
        if not (competition.is_authored_by(user) or user.is_admin):
            raise AuthorizationError("You can only delete your own competitions.")
        Competition.objects.filter(pk=competition.pk).update(is_active=False)
        logger.info("Competition %s removed by user %s", competition.pk, user.pk)
