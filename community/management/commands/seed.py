"""Management command to seed the database with sample colleges, users, posts and competitions."""

from random import choice, randint, random, sample

from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import F
from faker import Faker

from community.models import (
    Comment,
    Competition,
    CompetitionOption,
    ModerationState,
    Post,
    PostLike,
    User,
)

COLLEGES = [
    "Riverside College",
    "Northgate University",
    "St Aldhelm's College",
    "Harbour Institute of Technology",
]

REJECTION_REASONS = ["Spam", "Off-topic", "Personal information"]


class Command(BaseCommand):
    """Seed the database with sample members, content and interactions."""
    USERS_PER_COLLEGE = 15
    help = "Seeds the database with sample data"

    def add_arguments(self, parser):
        parser.add_argument("--posts-per-user", type=int, default=2)
        parser.add_argument("--seed", type=int, default=None, help="Faker seed for repeatable data.")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.faker = Faker("en_GB")

    def handle(self, *args, **options):
        if options.get("seed") is not None:
            Faker.seed(options["seed"])
        with transaction.atomic():
            users = self.create_users()
            self.create_admin()
            posts = self.seed_posts(users, per_user=options["posts_per_user"])
            self.seed_likes(users, posts)
            self.seed_comments(users, posts)
            self.seed_competitions(users)
        self.stdout.write(self.style.SUCCESS("Seeding complete"))

    def create_users(self):
        users = []
        for college in COLLEGES:
            for _ in range(self.USERS_PER_COLLEGE):
                username = f"seed-{self.faker.unique.uuid4()}"
                users.append(User.objects.create_user(
                    username=username,
                    email=self.faker.unique.email(),
                    password=None,
                    college=college,
                ))
        self.stdout.write(f"Created {len(users)} users")
        return users

    def create_admin(self):
        admin, created = User.objects.get_or_create(
            username="seed-admin",
            defaults={"email": "admin@example.org", "college": COLLEGES[0], "is_admin": True},
        )
        if created:
            self.stdout.write("Created seed admin (username 'seed-admin')")
        return admin

    def _state(self):
        roll = random()
        if roll < 0.75:
            return ModerationState.approved()
        if roll < 0.9:
            return ModerationState.pending()
        return ModerationState.rejected(choice(REJECTION_REASONS))

    def seed_posts(self, users, per_user):
        posts = []
        categories = [value for value, _ in Post.CATEGORY_CHOICES]
        for user in users:
            for _ in range(per_user):
                posts.append(Post.objects.create(
                    author=user,
                    college=user.college,
                    anon_id=user.anon_id,
                    display_name=user.display_name,
                    title=self.faker.sentence(nb_words=6).rstrip("."),
                    content="\n\n".join(self.faker.paragraphs(nb=randint(1, 3))),
                    category=choice(categories),
                    tags=self.faker.words(nb=randint(0, 3), unique=True),
                    **self._state().as_fields(),
                ))
        self.stdout.write(f"Created {len(posts)} posts")
        return posts

    def _same_college(self, users, college):
        return [user for user in users if user.college == college]

    def seed_likes(self, users, posts, max_likes_per_post=10):
        for post in posts:
            peers = self._same_college(users, post.college)
            likers = sample(peers, k=min(len(peers), randint(0, max_likes_per_post)))
            PostLike.objects.bulk_create(PostLike(user=user, post=post) for user in likers)
            Post.objects.filter(pk=post.pk).update(like_count=len(likers))

    def seed_comments(self, users, posts, max_comments_per_post=4):
        for post in posts:
            peers = self._same_college(users, post.college)
            for _ in range(randint(0, max_comments_per_post)):
                user = choice(peers)
                Comment.objects.create(
                    post=post,
                    author=user,
                    college=user.college,
                    anon_id=user.anon_id,
                    display_name=user.display_name,
                    content=self.faker.sentence(nb_words=12),
                )
                Post.objects.filter(pk=post.pk).update(comment_count=F("comment_count") + 1)

    def seed_competitions(self, users, per_college=2):
        for college in COLLEGES:
            for user in sample(self._same_college(users, college), k=per_college):
                competition = Competition.objects.create(
                    author=user,
                    college=college,
                    anon_id=user.anon_id,
                    display_name=user.display_name,
                    title=f"Best {self.faker.word()} on campus?",
                    description=self.faker.sentence(),
                    kind=choice([Competition.KIND_POLL, Competition.KIND_COMPARISON]),
                    expires_at=Competition.expiry_for(randint(1, 72)),
                    **ModerationState.approved().as_fields(),
                )
                CompetitionOption.objects.bulk_create(
                    CompetitionOption(competition=competition, position=index, name=name)
                    for index, name in enumerate(self.faker.words(nb=randint(2, 4), unique=True))
                )
