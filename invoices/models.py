"""Database models for invoices and their attached documents."""

import uuid

from django.db import models

from core.models import TimeStampedModel
from orders.models import Order


class Invoice(TimeStampedModel):
    """Billing document tied to one order."""

    order = models.ForeignKey(Order, on_delete=models.PROTECT, related_name='invoices')
    invoice_number = models.CharField(max_length=100, unique=True)
    invoice_date = models.DateField()

    class Meta(TimeStampedModel.Meta):
        db_table = 'invoices'

    def __str__(self):
        return f'Invoice {self.invoice_number}'


class InvoiceDocument(models.Model):
    """A file attached to an invoice.

    ``filename`` is generated by the document store and is the only name used
    on disk; ``original_name`` is what the uploader called the file and is
    only echoed back in the download's Content-Disposition.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name='documents')
    filename = models.CharField(max_length=255, unique=True)
    original_name = models.CharField(max_length=255)
    filepath = models.CharField(max_length=1024)
    mimetype = models.CharField(max_length=255)
    size = models.PositiveBigIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'invoice_documents'
        ordering = ['-created_at']

    def __str__(self):
        return self.original_name
