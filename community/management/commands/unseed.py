from django.core.management.base import BaseCommand
from django.db import transaction

from community.models import User


class Command(BaseCommand):
    """
    Remove the data created by the ``seed`` command.

    Seeded users are recognised by their ``seed-`` username prefix; deleting
    them cascades to their posts, comments, likes, votes and reports.
    """

    help = "Removes seeded sample data"

    def handle(self, *args, **options):
        with transaction.atomic():
            deleted_count, _ = User.objects.filter(username__startswith="seed-").delete()

        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted_count} seeded rows."))
