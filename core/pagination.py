"""Page/limit pagination used by every list endpoint.

Responses look like ``{"data": [...], "meta": {"total", "page", "limit", "totalPages"}}``.
Pages past the end are returned empty rather than as a 404.
"""

import math

from django.core.paginator import EmptyPage
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from .exceptions import ValidationFailed


def _positive_int(raw, name, default):
    if raw in (None, ''):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationFailed(f'{name} must be a positive integer.')
    if value < 1:
        raise ValidationFailed(f'{name} must be a positive integer.')
    return value


class StandardResultsSetPagination(PageNumberPagination):
    """``?page=`` / ``?limit=`` with a 1000 row cap; bad values are a 400."""

    page_size = 10
    page_query_param = 'page'
    page_size_query_param = 'limit'
    max_page_size = 1000

    def get_page_size(self, request):
        limit = _positive_int(request.query_params.get(self.page_size_query_param), 'limit', self.page_size)
        return min(limit, self.max_page_size)

    def get_page_number(self, request, paginator):
        return _positive_int(request.query_params.get(self.page_query_param), 'page', 1)

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.limit = self.get_page_size(request)
        paginator = self.django_paginator_class(queryset, self.limit)
        self.page_number = self.get_page_number(request, paginator)
        self.total = paginator.count
        try:
            self.page = paginator.page(self.page_number)
        except EmptyPage:
            self.page = None
            return []
        return list(self.page)

    def get_paginated_response(self, data):
        return Response({
            'data': data,
            'meta': {
                'total': self.total,
                'page': self.page_number,
                'limit': self.limit,
                'totalPages': math.ceil(self.total / self.limit),
            },
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'data': schema,
                'meta': {
                    'type': 'object',
                    'properties': {
                        'total': {'type': 'integer'},
                        'page': {'type': 'integer'},
                        'limit': {'type': 'integer'},
                        'totalPages': {'type': 'integer'},
                    },
                },
            },
        }
