"""Page-number pagination used by every list endpoint."""

from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class CommunityPagination(PageNumberPagination):
    page_size = settings.API_PAGE_SIZE
    page_size_query_param = "limit"
    max_page_size = settings.API_MAX_PAGE_SIZE

    def get_paginated_response(self, data):
        page = self.page
        return Response({
            "results": data,
            "page": page.number,
            "pages": page.paginator.num_pages,
            "total": page.paginator.count,
            "has_more": page.has_next(),
        })


def paginate(request, queryset, serialize):
    """
    Paginate ``queryset`` for a function view and return the Response.

    ``serialize`` receives the list of objects on the page and returns
    their serialized data.
    """
    paginator = CommunityPagination()
    page = paginator.paginate_queryset(queryset, request)
    return paginator.get_paginated_response(serialize(page))
