"""API views for comments and comment likes."""

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from community.pagination import paginate
from community.serializers import CommentSerializer, CommentWriteSerializer
from community.services import CommentService

comment_service = CommentService()


def _serialize_comments(request, comments):
    context = {"request": request, "liked_ids": comment_service.liked_ids(request.user, comments)}
    return CommentSerializer(comments, many=True, context=context).data


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated])
def post_comments(request, post_id):
    if request.method == "GET":
        qs = comment_service.list_for_post(request.user, post_id)
        return paginate(request, qs, lambda page: _serialize_comments(request, page))

    serializer = CommentWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    comment = comment_service.create(request.user, post_id, serializer.validated_data["content"])
    return Response(
        CommentSerializer(comment, context={"request": request, "liked_ids": set()}).data,
        status=status.HTTP_201_CREATED,
    )


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def my_comments(request):
    qs = comment_service.my_comments(request.user)
    return paginate(request, qs, lambda page: _serialize_comments(request, page))


@api_view(["DELETE"])
@permission_classes([IsAuthenticated])
def comment_detail(request, comment_id):
    comment_service.delete(request.user, comment_id)
    return Response({"message": "Comment deleted."})


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def comment_like(request, comment_id):
    liked, like_count = comment_service.toggle_like(request.user, comment_id)
    return Response({"liked": liked, "like_count": like_count})
