"""API views for posts, post likes and post reports."""

from rest_framework import status
from rest_framework.decorators import api_view, parser_classes, permission_classes, throttle_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from community.exceptions import ValidationError
from community.pagination import paginate
from community.permissions import PostCreateThrottle
from community.serializers import (
    PostSerializer,
    PostWriteSerializer,
    ReportCreateSerializer,
    ReportSerializer,
)
from community.services import PostService, ReportingService
from community.utils.http import uploaded_image

post_service = PostService()
reporting_service = ReportingService()


def _serialize_posts(request, posts):
    liked_ids = post_service.liked_ids(request.user, posts)
    context = {"request": request, "liked_ids": liked_ids}
    return PostSerializer(posts, many=True, context=context).data


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated])
@throttle_classes([PostCreateThrottle])
@parser_classes([JSONParser, MultiPartParser, FormParser])
def post_list(request):
    """
    GET: the post feed (``?category=``, ``?search=``, ``?sort=``, ``?college=`` for admins).
    POST: create a post, optionally with an ``image`` file in a multipart body.
    """
    if request.method == "GET":
        qs = post_service.feed(
            request.user,
            college=request.query_params.get("college"),
            category=request.query_params.get("category"),
            search=request.query_params.get("search"),
            sort=request.query_params.get("sort", "newest"),
        )
        return paginate(request, qs, lambda page: _serialize_posts(request, page))

    serializer = PostWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    post = post_service.create(request.user, serializer.validated_data, image=uploaded_image(request))
    return Response(
        PostSerializer(post, context={"request": request, "liked_ids": set()}).data,
        status=status.HTTP_201_CREATED,
    )


@api_view(["POST"])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def post_image_upload(request):
    """Upload an image ahead of creating a post; returns ``{url, public_id}``."""
    upload = uploaded_image(request)
    if upload is None:
        raise ValidationError("No image file provided.")
    asset = post_service.upload_image(request.user, upload)
    return Response({"url": asset.url, "public_id": asset.public_id}, status=status.HTTP_201_CREATED)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def my_posts(request):
    """The caller's own posts in every moderation state."""
    qs = post_service.my_posts(request.user)
    return paginate(request, qs, lambda page: _serialize_posts(request, page))


@api_view(["GET", "PUT", "PATCH", "DELETE"])
@permission_classes([IsAuthenticatedOrReadOnly])
def post_detail(request, post_id):
    if request.method == "GET":
        post, _ = post_service.get_for_viewer(request.user, post_id)
        return Response(PostSerializer(post, context={"request": request}).data)

    if request.method == "DELETE":
        post_service.delete(request.user, post_id)
        return Response({"message": "Post deleted."})

    serializer = PostWriteSerializer(data=request.data, partial=request.method == "PATCH")
    serializer.is_valid(raise_exception=True)
    post = post_service.update(request.user, post_id, serializer.validated_data)
    return Response(PostSerializer(post, context={"request": request}).data)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def post_like(request, post_id):
    liked, like_count = post_service.toggle_like(request.user, post_id)
    return Response({"liked": liked, "like_count": like_count})


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def post_report(request, post_id):
    serializer = ReportCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    report = reporting_service.report_post(
        request.user,
        post_id,
        serializer.validated_data["reason"],
        serializer.validated_data["description"],
    )
    return Response(
        ReportSerializer(report, context={"request": request}).data,
        status=status.HTTP_201_CREATED,
    )
