"""Order persistence: nested item replacement and the dashboard summary."""

from django.db.models import Count

from core.services import ResourceService

from .models import Order, OrderItem, OrderStatus


class OrderService(ResourceService):
    model = Order
    label = 'Order'
    conflict_message = 'An order with this reference number already exists'
    protected_message = 'Order still has invoices'

    def get_queryset(self):
        return (
            Order.objects.select_related('supplier', 'forwarder')
            .prefetch_related('items')
            .order_by('-created_at')
        )

    def write(self, record, data):
        data = dict(data)
        items = data.pop('items', None)
        record = super().write(record, data)
        if items is not None:
            record.items.all().delete()
            for item in items:
                OrderItem.objects.create(order=record, **item)
        return record

    def summary(self):
        """Order count overall and per status (every status present, zero included)."""
        counts = dict(
            Order.objects.values_list('status').annotate(n=Count('id')).order_by()
        )
        by_status = {value: counts.get(value, 0) for value in OrderStatus.values}
        return {'total': sum(by_status.values()), 'byStatus': by_status}
