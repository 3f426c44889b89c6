"""Competition (poll / comparison) models with per-user votes."""

from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone

from .moderated import ModeratedContent


class Competition(ModeratedContent):
    """Time-boxed vote between two or more options, scoped to a college."""
    KIND_POLL = "poll"
    KIND_COMPARISON = "comparison"
    KIND_CHOICES = [
        (KIND_POLL, "Poll"),
        (KIND_COMPARISON, "Comparison"),
    ]

    DEFAULT_DURATION_HOURS = 24

    title = models.CharField(max_length=200)
    description = models.TextField(max_length=500, blank=True, default="")
    kind = models.CharField(max_length=20, choices=KIND_CHOICES, default=KIND_COMPARISON)
    expires_at = models.DateTimeField()
    total_votes = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "competition"
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    @staticmethod
    def expiry_for(duration_hours, now=None):
        return (now or timezone.now()) + timedelta(hours=duration_hours)

    @property
    def has_ended(self):
        return timezone.now() >= self.expires_at

    @property
    def results_visible(self):
        """Vote counts are only revealed once voting has closed."""
        return self.has_ended

    def has_user_voted(self, user):
        if not user or not getattr(user, "is_authenticated", False):
            return False
        return self.votes.filter(user=user).exists()


class CompetitionOption(models.Model):
    competition = models.ForeignKey(Competition, on_delete=models.CASCADE, related_name="options")
    position = models.PositiveIntegerField(default=0)
    name = models.CharField(max_length=100)
    image_url = models.URLField(max_length=500, blank=True, default="")
    image_public_id = models.CharField(max_length=255, blank=True, default="")
    vote_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "competition_option"
        ordering = ["position", "id"]

    def __str__(self):
        return f"{self.name} ({self.competition_id})"


class CompetitionVote(models.Model):
    """One vote per user per competition."""
    competition = models.ForeignKey(Competition, on_delete=models.CASCADE, related_name="votes")
    option = models.ForeignKey(CompetitionOption, on_delete=models.CASCADE, related_name="votes")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="competition_votes",
    )
    voted_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "competition_vote"
        constraints = [
            models.UniqueConstraint(fields=("user", "competition"), name="uniq_competition_vote_user"),
        ]

    def __str__(self):
        return f"{self.user_id} voted {self.option_id}"
