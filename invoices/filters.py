import django_filters

from .models import Invoice


class InvoiceFilter(django_filters.FilterSet):
    orderId = django_filters.UUIDFilter(field_name='order_id')
    search = django_filters.CharFilter(field_name='invoice_number', lookup_expr='icontains')

    class Meta:
        model = Invoice
        fields = []
