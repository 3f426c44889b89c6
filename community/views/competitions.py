"""API views for competitions, voting and competition reports."""

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from community.pagination import paginate
from community.serializers import (
    CompetitionSerializer,
    CompetitionWriteSerializer,
    ReportCreateSerializer,
    ReportSerializer,
    VoteSerializer,
)
from community.services import CompetitionService, ReportingService

competition_service = CompetitionService()
reporting_service = ReportingService()


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated])
def competition_list(request):
    if request.method == "GET":
        qs = competition_service.list_active(request.user, college=request.query_params.get("college"))
        return paginate(
            request, qs,
            lambda page: CompetitionSerializer(page, many=True, context={"request": request}).data,
        )

    serializer = CompetitionWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    competition = competition_service.create(request.user, serializer.validated_data)
    return Response(
        CompetitionSerializer(competition, context={"request": request}).data,
        status=status.HTTP_201_CREATED,
    )


@api_view(["GET", "DELETE"])
@permission_classes([IsAuthenticatedOrReadOnly])
def competition_detail(request, competition_id):
    if request.method == "DELETE":
        competition_service.delete(request.user, competition_id)
        return Response({"message": "Competition deleted."})

    competition, _ = competition_service.get_for_viewer(request.user, competition_id)
    return Response(CompetitionSerializer(competition, context={"request": request}).data)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def competition_vote(request, competition_id):
    serializer = VoteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    competition = competition_service.vote(
        request.user, competition_id, serializer.validated_data["option_index"]
    )
    return Response(CompetitionSerializer(competition, context={"request": request}).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def competition_results(request, competition_id):
    competition = competition_service.results(request.user, competition_id)
    context = {"request": request, "show_results": True}
    return Response(CompetitionSerializer(competition, context=context).data)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def competition_report(request, competition_id):
    serializer = ReportCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    report = reporting_service.report_competition(
        request.user,
        competition_id,
        serializer.validated_data["reason"],
        serializer.validated_data["description"],
    )
    return Response(
        ReportSerializer(report, context={"request": request}).data,
        status=status.HTTP_201_CREATED,
    )
