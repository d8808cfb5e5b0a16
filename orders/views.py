"""Orders API views."""

from rest_framework.decorators import action
from rest_framework.response import Response

from core.views import ResourceViewSet

from .filters import OrderFilter
from .serializers import OrderSerializer
from .services import OrderService


class OrderViewSet(ResourceViewSet):
    """CRUD for orders plus ``GET /api/orders/summary``.

    The list accepts ``status``, ``supplierId``, ``forwarderId`` and
    ``search`` (reference number) alongside ``page`` / ``limit``.
    """

    service_class = OrderService
    serializer_class = OrderSerializer
    filterset_class = OrderFilter

    @action(detail=False, methods=['get'])
    def summary(self, request):
        return Response(self.get_service().summary())
