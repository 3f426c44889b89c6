from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from community.pagination import paginate
from community.serializers import ReportSerializer
from community.services import ReportingService

reporting_service = ReportingService()


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def my_reports(request):
    """Reports the caller has filed, with their current status."""
    qs = reporting_service.my_reports(request.user)
    return paginate(
        request, qs,
        lambda page: ReportSerializer(page, many=True, context={"request": request}).data,
    )
