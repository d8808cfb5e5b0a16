"""Suppliers API views."""

from core.views import ResourceViewSet

from .serializers import SupplierSerializer
from .services import SupplierService


class SupplierViewSet(ResourceViewSet):
    """CRUD for suppliers: ``/api/suppliers``."""

    service_class = SupplierService
    serializer_class = SupplierSerializer
