from core.services import ResourceService

from .models import Forwarder


class ForwarderService(ResourceService):
    model = Forwarder
    label = 'Forwarder'
    conflict_message = 'A forwarder with this name already exists'
    protected_message = 'Forwarder is still referenced by orders'
