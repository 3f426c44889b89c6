from datetime import timedelta

from django.db import IntegrityError
from django.test import TestCase
from django.utils import timezone

from community.models import Competition, CompetitionVote
from community.tests.helpers import make_competition, make_user


class CompetitionModelTests(TestCase):
    def test_expiry_for(self):
        now = timezone.now()
        self.assertEqual(Competition.expiry_for(24, now=now), now + timedelta(hours=24))

    def test_results_hidden_until_expiry(self):
        competition = make_competition(hours=2)
        self.assertFalse(competition.has_ended)
        self.assertFalse(competition.results_visible)
        competition.expires_at = timezone.now() - timedelta(minutes=1)
        self.assertTrue(competition.results_visible)

    def test_options_ordered_by_position(self):
        competition = make_competition(options=("A", "B", "C"))
        self.assertEqual([o.name for o in competition.options.all()], ["A", "B", "C"])

    def test_one_vote_per_user(self):
        competition = make_competition()
        voter = make_user()
        option = competition.options.first()
        CompetitionVote.objects.create(competition=competition, option=option, user=voter)
        self.assertTrue(competition.has_user_voted(voter))
        with self.assertRaises(IntegrityError):
            CompetitionVote.objects.create(competition=competition, option=option, user=voter)
