"""Admin API: moderation queue, decisions, report review, users and comments."""

from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from community.models import Competition, Post
from community.pagination import paginate
from community.permissions import IsCommunityAdmin
from community.serializers import (
    BlockUserSerializer,
    CommentSerializer,
    CompetitionSerializer,
    ModerationDecisionSerializer,
    PostSerializer,
    ReportResolutionSerializer,
    ReportSerializer,
    UserSummarySerializer,
)
from community.services import (
    AdminService,
    CommentService,
    CompetitionService,
    ModerationService,
    ReportingService,
)
from community.utils.http import query_flag

admin_service = AdminService()
comment_service = CommentService()
competition_service = CompetitionService()
moderation_service = ModerationService()
reporting_service = ReportingService()


def _decide(request, model, pk):
    serializer = ModerationDecisionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    return moderation_service.moderate(
        model,
        pk,
        data["status"],
        request.user,
        reason=data.get("reason"),
        expected_status=data.get("expected_status"),
    )


@api_view(["GET"])
@permission_classes([IsCommunityAdmin])
def stats(request):
    return Response(admin_service.stats())


@api_view(["GET"])
@permission_classes([IsCommunityAdmin])
def moderation_queue(request):
    """All posts, newest first; ``?status=`` narrows to one moderation status."""
    qs = admin_service.moderation_queue(request.query_params.get("status"))
    return paginate(
        request, qs,
        lambda page: PostSerializer(page, many=True, context={"request": request, "liked_ids": set()}).data,
    )


@api_view(["PUT"])
@permission_classes([IsCommunityAdmin])
def moderate_post(request, post_id):
    post = _decide(request, Post, post_id)
    return Response(PostSerializer(post, context={"request": request, "liked_ids": set()}).data)


@api_view(["PUT"])
@permission_classes([IsCommunityAdmin])
def pin_post(request, post_id):
    post = admin_service.toggle_pin(post_id)
    return Response({"id": str(post.pk), "is_pinned": post.is_pinned})


@api_view(["DELETE"])
@permission_classes([IsCommunityAdmin])
def delete_post(request, post_id):
    admin_service.hard_delete(post_id)
    return Response({"message": "Post permanently deleted."})


@api_view(["GET"])
@permission_classes([IsCommunityAdmin])
def competition_list(request):
    qs = competition_service.list_all(
        college=request.query_params.get("college"),
        is_active=query_flag(request, "is_active"),
    )
    return paginate(
        request, qs,
        lambda page: CompetitionSerializer(page, many=True, context={"request": request}).data,
    )


@api_view(["PUT"])
@permission_classes([IsCommunityAdmin])
def moderate_competition(request, competition_id):
    competition = _decide(request, Competition, competition_id)
    return Response(CompetitionSerializer(competition, context={"request": request}).data)


@api_view(["GET"])
@permission_classes([IsCommunityAdmin])
def report_list(request):
    qs = reporting_service.list_reports(request.query_params.get("status") or None)
    return paginate(
        request, qs,
        lambda page: ReportSerializer(page, many=True, context={"request": request}).data,
    )


@api_view(["PUT"])
@permission_classes([IsCommunityAdmin])
def resolve_report(request, report_id):
    serializer = ReportResolutionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    report = reporting_service.resolve(
        report_id,
        serializer.validated_data["status"],
        request.user,
        serializer.validated_data["admin_notes"],
    )
    return Response(ReportSerializer(report, context={"request": request}).data)


@api_view(["PUT"])
@permission_classes([IsCommunityAdmin])
def block_user(request, user_id):
    serializer = BlockUserSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = admin_service.block_user(request.user, user_id, serializer.validated_data["reason"])
    return Response(UserSummarySerializer(user).data)


@api_view(["PUT"])
@permission_classes([IsCommunityAdmin])
def unblock_user(request, user_id):
    user = admin_service.unblock_user(request.user, user_id)
    return Response(UserSummarySerializer(user).data)


@api_view(["GET"])
@permission_classes([IsCommunityAdmin])
def user_list(request):
    qs = admin_service.list_users(
        search=request.query_params.get("search"),
        is_blocked=query_flag(request, "is_blocked"),
        is_admin=query_flag(request, "is_admin"),
    )
    return paginate(request, qs, lambda page: UserSummarySerializer(page, many=True).data)


@api_view(["PUT"])
@permission_classes([IsCommunityAdmin])
def toggle_admin(request, user_id):
    user = admin_service.toggle_admin(request.user, user_id)
    return Response(UserSummarySerializer(user).data)


@api_view(["GET"])
@permission_classes([IsCommunityAdmin])
def comment_list(request):
    """Every comment, removed ones included; ``?post=`` narrows to one post."""
    qs = admin_service.list_comments(
        post_id=request.query_params.get("post"),
        search=request.query_params.get("search"),
        is_active=query_flag(request, "is_active"),
    )
    return paginate(
        request, qs,
        lambda page: CommentSerializer(page, many=True, context={"request": request}).data,
    )


@api_view(["DELETE"])
@permission_classes([IsCommunityAdmin])
def delete_comment(request, comment_id):
    comment_service.delete(request.user, comment_id)
    return Response({"message": "Comment removed."})
