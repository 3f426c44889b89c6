import community.models.user
import django.contrib.auth.models
import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from django.conf import settings
from django.db import migrations, models


MODERATION_CHOICES = [
    ("pending", "Pending review"),
    ("approved", "Approved"),
    ("rejected", "Rejected"),
    ("flagged", "Flagged"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("username", models.CharField(error_messages={"unique": "A user with that username already exists."}, help_text="Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.", max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name="username")),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("is_staff", models.BooleanField(default=False, help_text="Designates whether the user can log into this admin site.", verbose_name="staff status")),
                ("is_active", models.BooleanField(default=True, help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.", verbose_name="active")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("college", models.CharField(db_index=True, max_length=200)),
                ("anon_id", models.CharField(default=community.models.user.generate_anon_id, editable=False, max_length=20, unique=True)),
                ("display_name", models.CharField(default="Anonymous", max_length=100)),
                ("is_admin", models.BooleanField(default=False, help_text="Community administrator (moderation rights)")),
                ("is_blocked", models.BooleanField(default=False)),
                ("blocked_at", models.DateTimeField(blank=True, null=True)),
                ("block_reason", models.CharField(blank=True, default="", max_length=500)),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
            ],
            options={
                "ordering": ["-date_joined"],
            },
            managers=[
                ("objects", django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="Post",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("college", models.CharField(db_index=True, editable=False, max_length=200)),
                ("anon_id", models.CharField(editable=False, max_length=20)),
                ("display_name", models.CharField(default="Anonymous", editable=False, max_length=100)),
                ("moderation_status", models.CharField(choices=MODERATION_CHOICES, db_index=True, default="pending", editable=False, max_length=20)),
                ("moderation_reason", models.TextField(blank=True, default="", editable=False)),
                ("moderated_at", models.DateTimeField(blank=True, editable=False, null=True)),
                ("is_active", models.BooleanField(default=True, help_text="False once the author or an admin removes it")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=200)),
                ("content", models.TextField(max_length=10000)),
                ("category", models.CharField(choices=[("general", "General"), ("academic", "Academic"), ("campus-life", "Campus life"), ("confession", "Confession"), ("advice", "Advice"), ("humor", "Humor"), ("other", "Other")], default="general", max_length=20)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("image_url", models.URLField(blank=True, default="", max_length=500)),
                ("image_public_id", models.CharField(blank=True, default="", max_length=255)),
                ("is_pinned", models.BooleanField(default=False)),
                ("like_count", models.PositiveIntegerField(default=0)),
                ("comment_count", models.PositiveIntegerField(default=0)),
                ("report_count", models.PositiveIntegerField(default=0)),
                ("author", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="posts", to=settings.AUTH_USER_MODEL)),
                ("moderated_by", models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "post",
                "ordering": ["-is_pinned", "-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Comment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("college", models.CharField(db_index=True, editable=False, max_length=200)),
                ("anon_id", models.CharField(editable=False, max_length=20)),
                ("display_name", models.CharField(default="Anonymous", editable=False, max_length=100)),
                ("content", models.TextField(max_length=2000)),
                ("like_count", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("author", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="comments", to=settings.AUTH_USER_MODEL)),
                ("post", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="comments", to="community.post")),
            ],
            options={
                "db_table": "comment",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="PostLike",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("post", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="likes", to="community.post")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="post_likes", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "post_like",
                "constraints": [models.UniqueConstraint(fields=("user", "post"), name="uniq_post_like_user_post")],
            },
        ),
        migrations.CreateModel(
            name="CommentLike",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("comment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="likes", to="community.comment")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="comment_likes", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "comment_like",
                "constraints": [models.UniqueConstraint(fields=("user", "comment"), name="uniq_comment_like_user_comment")],
            },
        ),
        migrations.CreateModel(
            name="Competition",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("college", models.CharField(db_index=True, editable=False, max_length=200)),
                ("anon_id", models.CharField(editable=False, max_length=20)),
                ("display_name", models.CharField(default="Anonymous", editable=False, max_length=100)),
                ("moderation_status", models.CharField(choices=MODERATION_CHOICES, db_index=True, default="pending", editable=False, max_length=20)),
                ("moderation_reason", models.TextField(blank=True, default="", editable=False)),
                ("moderated_at", models.DateTimeField(blank=True, editable=False, null=True)),
                ("is_active", models.BooleanField(default=True, help_text="False once the author or an admin removes it")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="", max_length=500)),
                ("kind", models.CharField(choices=[("poll", "Poll"), ("comparison", "Comparison")], default="comparison", max_length=20)),
                ("expires_at", models.DateTimeField()),
                ("total_votes", models.PositiveIntegerField(default=0)),
                ("author", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="competitions", to=settings.AUTH_USER_MODEL)),
                ("moderated_by", models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "competition",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="CompetitionOption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField(default=0)),
                ("name", models.CharField(max_length=100)),
                ("image_url", models.URLField(blank=True, default="", max_length=500)),
                ("image_public_id", models.CharField(blank=True, default="", max_length=255)),
                ("vote_count", models.PositiveIntegerField(default=0)),
                ("competition", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="options", to="community.competition")),
            ],
            options={
                "db_table": "competition_option",
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="CompetitionVote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("voted_at", models.DateTimeField(auto_now_add=True)),
                ("competition", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="votes", to="community.competition")),
                ("option", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="votes", to="community.competitionoption")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="competition_votes", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "competition_vote",
                "constraints": [models.UniqueConstraint(fields=("user", "competition"), name="uniq_competition_vote_user")],
            },
        ),
        migrations.CreateModel(
            name="Report",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("reason", models.CharField(choices=[("spam", "Spam"), ("harassment", "Harassment"), ("hate-speech", "Hate speech"), ("violence", "Violence"), ("misinformation", "Misinformation"), ("inappropriate", "Inappropriate content"), ("other", "Other")], max_length=20)),
                ("description", models.TextField(blank=True, default="", help_text="Additional details from the user", max_length=500)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("resolved", "Resolved"), ("dismissed", "Dismissed")], db_index=True, default="pending", editable=False, max_length=20)),
                ("admin_notes", models.TextField(blank=True, default="", editable=False, help_text="Admin's notes on the decision")),
                ("reviewed_at", models.DateTimeField(blank=True, editable=False, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("competition", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="reports", to="community.competition")),
                ("post", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="reports", to="community.post")),
                ("reporter", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="submitted_reports", to=settings.AUTH_USER_MODEL)),
                ("reviewed_by", models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reviewed_reports", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "report",
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(models.Q(("competition__isnull", True), ("post__isnull", False)), models.Q(("competition__isnull", False), ("post__isnull", True)), _connector="OR"), name="chk_report_single_target"),
                    models.UniqueConstraint(condition=models.Q(("post__isnull", False), ("status", "pending")), fields=("reporter", "post"), name="uniq_open_report_reporter_post"),
                    models.UniqueConstraint(condition=models.Q(("competition__isnull", False), ("status", "pending")), fields=("reporter", "competition"), name="uniq_open_report_reporter_competition"),
                ],
            },
        ),
    ]
