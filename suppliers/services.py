from core.services import ResourceService

from .models import Supplier


class SupplierService(ResourceService):
    model = Supplier
    label = 'Supplier'
    conflict_message = 'A supplier with this name already exists'
    protected_message = 'Supplier is still referenced by orders'
