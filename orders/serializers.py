"""DRF serializers for orders APIs."""

from rest_framework import serializers

from forwarders.models import Forwarder
from suppliers.models import Supplier

from .models import Order, OrderItem, OrderStatus


class OrderItemSerializer(serializers.ModelSerializer):
    unitPrice = serializers.DecimalField(source='unit_price', max_digits=12, decimal_places=2, min_value=0)
    total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'description', 'quantity', 'unitPrice', 'total']
        extra_kwargs = {'quantity': {'min_value': 1}}


class PartyRefSerializer(serializers.Serializer):
    """``{id, name}`` view of the supplier or forwarder on an order."""

    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)


class OrderSerializer(serializers.ModelSerializer):
    """Order with its items.

    Writes take ``supplierId`` / ``forwarderId``; reads also embed the
    referenced ``supplier`` and ``forwarder``. When ``items`` is sent it
    replaces the existing items.
    """

    refNumber = serializers.CharField(source='ref_number', max_length=100)
    supplierId = serializers.PrimaryKeyRelatedField(source='supplier', queryset=Supplier.objects.all())
    forwarderId = serializers.PrimaryKeyRelatedField(source='forwarder', queryset=Forwarder.objects.all())
    supplier = PartyRefSerializer(read_only=True)
    forwarder = PartyRefSerializer(read_only=True)
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    orderDate = serializers.DateField(source='order_date', required=False, allow_null=True)
    estimatedDeliveryDate = serializers.DateField(source='estimated_delivery_date', required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    items = OrderItemSerializer(many=True, required=False)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'refNumber', 'supplierId', 'forwarderId', 'supplier', 'forwarder',
            'status', 'orderDate', 'estimatedDeliveryDate', 'notes', 'items',
            'createdAt', 'updatedAt',
        ]
