"""Shared API views: the resource viewset base class and the health probe."""

from django.db import connection
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .pagination import StandardResultsSetPagination


class ResourceViewSet(viewsets.GenericViewSet):
    """CRUD endpoints that delegate every call to a :class:`ResourceService`.

    The serializer only validates input and renders records; the service
    owns the queries and the write outcomes (404 / 409). Lists go through
    ``filterset_class`` and :class:`StandardResultsSetPagination`.
    """

    service_class = None
    serializer_class = None
    filterset_class = None
    filter_backends = [DjangoFilterBackend]
    pagination_class = StandardResultsSetPagination

    def get_service(self):
        return self.service_class()

    def get_queryset(self):
        return self.get_service().get_queryset()

    def list(self, request):
        page = self.paginate_queryset(self.filter_queryset(self.get_queryset()))
        return self.get_paginated_response(self.get_serializer(page, many=True).data)

    def retrieve(self, request, pk=None):
        record = self.get_service().get_one(pk)
        return Response(self.get_serializer(record).data)

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = self.get_service().create(serializer.validated_data)
        return Response(self.get_serializer(record).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None, partial=False):
        service = self.get_service()
        record = service.get_one(pk)
        serializer = self.get_serializer(record, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        record = service.update(pk, serializer.validated_data)
        return Response(self.get_serializer(record).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        record = self.get_service().delete(pk)
        return Response(self.get_serializer(record).data)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    """Liveness probe that also checks the database connection."""
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
    return Response({
        'status': 'ok',
        'service': 'api',
        'timestamp': timezone.now().isoformat(),
    })
