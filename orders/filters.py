"""Query-string filters for the orders list."""

import django_filters

from .models import Order, OrderStatus


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    supplierId = django_filters.UUIDFilter(field_name='supplier_id')
    forwarderId = django_filters.UUIDFilter(field_name='forwarder_id')
    search = django_filters.CharFilter(field_name='ref_number', lookup_expr='icontains')

    class Meta:
        model = Order
        fields = []
