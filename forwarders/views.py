"""Forwarders API views."""

from core.views import ResourceViewSet

from .serializers import ForwarderSerializer
from .services import ForwarderService


class ForwarderViewSet(ResourceViewSet):
    service_class = ForwarderService
    serializer_class = ForwarderSerializer
