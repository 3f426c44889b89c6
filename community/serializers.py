from rest_framework import serializers

from community.models import (
    Comment,
    Competition,
    ModerationStatus,
    Post,
    Report,
    ReportStatus,
    User,
)
from community.services.visibility import OWNER_VIEWS, Visibility, preview_of, visibility
from community.utils.text import sanitize_content


def _viewer(serializer):
    request = serializer.context.get("request")
    return getattr(request, "user", None)


def _is_admin(user):
    return bool(getattr(user, "is_admin", False))


class PostPreviewSerializer(serializers.BaseSerializer):
    """Metadata-only view of a post for viewers who may not read it."""

    def to_representation(self, instance):
        data = preview_of(instance)
        data["visibility"] = Visibility.PUBLIC.value
        return data


class PostSerializer(serializers.ModelSerializer):
    """Full post as seen by a viewer who may read it.

    ``liked_ids`` in the context (a set of post ids) avoids one query per
    post when listing.
    """
    image = serializers.SerializerMethodField()

    class Meta:
        model = Post
        fields = [
            "id",
            "title",
            "content",
            "category",
            "tags",
            "image",
            "college",
            "anon_id",
            "display_name",
            "is_pinned",
            "like_count",
            "comment_count",
            "is_hot",
            "moderation_status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_image(self, obj):
        if not obj.has_image:
            return None
        return {"url": obj.image_url, "public_id": obj.image_public_id}

    def to_representation(self, instance):
        viewer = _viewer(self)
        result = visibility(viewer, instance)
        if result == Visibility.PUBLIC:
            return PostPreviewSerializer(instance).data

        data = super().to_representation(instance)
        data["visibility"] = result.value
        data["is_owner"] = instance.is_authored_by(viewer)
        data["is_under_review"] = instance.moderation.is_under_review
        data["is_rejected"] = instance.moderation.is_rejected
        liked_ids = self.context.get("liked_ids")
        if liked_ids is not None:
            data["is_liked"] = instance.pk in liked_ids
        else:
            data["is_liked"] = instance.likes.filter(user=viewer).exists()
        if result in OWNER_VIEWS or _is_admin(viewer):
            data["moderation_reason"] = instance.moderation_reason
        if _is_admin(viewer):
            data["report_count"] = instance.report_count
            data["is_active"] = instance.is_active
            data["moderated_at"] = instance.moderated_at
            data["author_id"] = instance.author_id
        return data


class PostWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    content = serializers.CharField(max_length=10000)
    category = serializers.ChoiceField(choices=Post.CATEGORY_CHOICES, required=False)
    tags = serializers.ListField(
        child=serializers.CharField(max_length=30, allow_blank=True),
        max_length=10,
        required=False,
    )
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    image_public_id = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate_title(self, value):
        value = sanitize_content(value)
        if len(value) < 3:
            raise serializers.ValidationError("Title must be at least 3 characters.")
        return value

    def validate_content(self, value):
        value = sanitize_content(value)
        if len(value) < 10:
            raise serializers.ValidationError("Content must be at least 10 characters.")
        return value

    def validate_tags(self, value):
        tags = []
        for tag in value:
            tag = sanitize_content(tag).lower()
            if tag and tag not in tags:
                tags.append(tag)
        return tags

    def validate(self, attrs):
        if bool(attrs.get("image_url")) != bool(attrs.get("image_public_id")):
            raise serializers.ValidationError("image_url and image_public_id must be given together.")
        return attrs


class CommentSerializer(serializers.ModelSerializer):
    post_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Comment
        fields = ["id", "post_id", "content", "college", "anon_id", "display_name", "like_count", "created_at"]
        read_only_fields = fields

    def to_representation(self, instance):
        viewer = _viewer(self)
        data = super().to_representation(instance)
        data["is_owner"] = bool(viewer) and instance.author_id == viewer.pk
        liked_ids = self.context.get("liked_ids")
        if liked_ids is not None:
            data["is_liked"] = instance.pk in liked_ids
        if _is_admin(viewer):
            data["author_id"] = instance.author_id
            data["is_active"] = instance.is_active
        return data


class CommentWriteSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=2000)

    def validate_content(self, value):
        value = sanitize_content(value)
        if not value:
            raise serializers.ValidationError("Comment cannot be empty.")
        return value


class CompetitionSerializer(serializers.ModelSerializer):
    """Competition with its options; vote counts stay hidden until voting closes."""

    class Meta:
        model = Competition
        fields = [
            "id",
            "title",
            "description",
            "kind",
            "college",
            "anon_id",
            "display_name",
            "expires_at",
            "moderation_status",
            "created_at",
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        viewer = _viewer(self)
        result = visibility(viewer, instance)
        if result == Visibility.PUBLIC:
            data = preview_of(instance)
            data["visibility"] = result.value
            return data

        data = super().to_representation(instance)
        show_counts = instance.results_visible or self.context.get("show_results", False)
        data["visibility"] = result.value
        data["has_ended"] = instance.has_ended
        data["results_visible"] = show_counts
        data["is_owner"] = instance.is_authored_by(viewer)
        data["has_voted"] = instance.has_user_voted(viewer)
        data["total_votes"] = instance.total_votes if show_counts else None
        data["options"] = [
            {
                "index": index,
                "name": option.name,
                "image_url": option.image_url or None,
                "vote_count": option.vote_count if show_counts else None,
            }
            for index, option in enumerate(instance.options.all())
        ]
        if result in OWNER_VIEWS or _is_admin(viewer):
            data["moderation_reason"] = instance.moderation_reason
        if _is_admin(viewer):
            data["is_active"] = instance.is_active
        return data


class CompetitionOptionWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    image_public_id = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate_name(self, value):
        return sanitize_content(value)


class CompetitionWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    kind = serializers.ChoiceField(choices=Competition.KIND_CHOICES, required=False)
    duration_hours = serializers.IntegerField(min_value=1, max_value=720, required=False)
    options = CompetitionOptionWriteSerializer(many=True)

    def validate_title(self, value):
        value = sanitize_content(value)
        if len(value) < 3:
            raise serializers.ValidationError("Title must be at least 3 characters.")
        return value

    def validate_description(self, value):
        return sanitize_content(value)


class VoteSerializer(serializers.Serializer):
    option_index = serializers.IntegerField(min_value=0)


class ReportCreateSerializer(serializers.Serializer):
    reason = serializers.ChoiceField(choices=Report.REPORT_REASONS)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")

    def validate_description(self, value):
        return sanitize_content(value)


class ReportSerializer(serializers.ModelSerializer):
    """A report as its reporter sees it; admins also get the reporter and reviewer."""

    class Meta:
        model = Report
        fields = ["id", "reason", "description", "status", "admin_notes", "reviewed_at", "created_at"]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        target = instance.target
        data["target_type"] = "post" if instance.post_id else "competition"
        data["target_id"] = str(target.pk)
        data["target_title"] = target.title
        if _is_admin(_viewer(self)):
            data["reporter"] = instance.reporter.anon_id
            data["reporter_id"] = instance.reporter_id
            data["reviewed_by"] = instance.reviewed_by.anon_id if instance.reviewed_by_id else None
        return data


class ModerationDecisionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[ModerationStatus.APPROVED, ModerationStatus.REJECTED]
    )
    reason = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")
    expected_status = serializers.ChoiceField(choices=ModerationStatus.choices, required=False)

    def validate(self, attrs):
        if attrs["status"] == ModerationStatus.REJECTED and not attrs.get("reason", "").strip():
            raise serializers.ValidationError({"reason": "A reason is required when rejecting content."})
        return attrs


class ReportResolutionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[ReportStatus.RESOLVED, ReportStatus.DISMISSED])
    admin_notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")


class BlockUserSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "anon_id",
            "email",
            "college",
            "display_name",
            "is_admin",
            "is_blocked",
            "blocked_at",
            "block_reason",
        ]
        read_only_fields = fields
