from django.db import models

from .moderated import ModeratedContent

"""
Post model

The primary content type of the community: an anonymous text post scoped to
the author's college.

- `title` / `content` are stored already sanitised (script tags and inline
  handlers stripped) by the post service.
- `category` is one of the fixed CATEGORY_CHOICES.
- `tags` is a JSON list of short strings.
- `image_url` / `image_public_id` reference an image held by the external
  asset host; both are empty when the post has no image.
- `is_pinned` is set by admins and is independent of moderation.
- `like_count` is kept in step with PostLike rows; `comment_count` only ever
  grows; `report_count` counts every report filed against the post.

Moderation fields, author and college come from ModeratedContent.
"""


class Post(ModeratedContent):
    CATEGORY_GENERAL = "general"
    CATEGORY_CHOICES = [
        ("general", "General"),
        ("academic", "Academic"),
        ("campus-life", "Campus life"),
        ("confession", "Confession"),
        ("advice", "Advice"),
        ("humor", "Humor"),
        ("other", "Other"),
    ]

    title = models.CharField(max_length=200)
    content = models.TextField(max_length=10000)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default=CATEGORY_GENERAL)
    tags = models.JSONField(default=list, blank=True)

    image_url = models.URLField(max_length=500, blank=True, default="")
    image_public_id = models.CharField(max_length=255, blank=True, default="")

    is_pinned = models.BooleanField(default=False)

    like_count = models.PositiveIntegerField(default=0)
    comment_count = models.PositiveIntegerField(default=0)
    report_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "post"
        ordering = ["-is_pinned", "-created_at"]

    def __str__(self):
        return self.title

    @property
    def has_image(self):
        return bool(self.image_url)

    @property
    def is_hot(self):
        return self.like_count + self.comment_count > 50
