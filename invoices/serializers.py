"""Serializers for invoices and invoice documents."""

from rest_framework import serializers

from orders.models import Order

from .models import Invoice, InvoiceDocument


class InvoiceDocumentSerializer(serializers.ModelSerializer):
    invoiceId = serializers.UUIDField(source='invoice_id', read_only=True)
    originalName = serializers.CharField(source='original_name', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = InvoiceDocument
        fields = ['id', 'invoiceId', 'filename', 'originalName', 'filepath', 'mimetype', 'size', 'createdAt']
        read_only_fields = fields


class OrderRefSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    refNumber = serializers.CharField(source='ref_number', read_only=True)


class InvoiceSerializer(serializers.ModelSerializer):
    """Invoice with its order reference and attached document count."""

    orderId = serializers.PrimaryKeyRelatedField(source='order', queryset=Order.objects.all())
    order = OrderRefSerializer(read_only=True)
    invoiceNumber = serializers.CharField(source='invoice_number', max_length=100)
    invoiceDate = serializers.DateField(source='invoice_date')
    documentCount = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Invoice
        fields = [
            'id', 'orderId', 'order', 'invoiceNumber', 'invoiceDate',
            'documentCount', 'createdAt', 'updatedAt',
        ]

    def get_documentCount(self, obj):
        count = getattr(obj, 'document_count', None)
        return obj.documents.count() if count is None else count
