"""Invoice persistence; deletes go through the document store."""

import logging

from django.db.models import Count

from core.services import ResourceService

from .models import Invoice
from .storage import DocumentStore

logger = logging.getLogger(__name__)


class InvoiceService(ResourceService):
    model = Invoice
    label = 'Invoice'
    conflict_message = 'An invoice with this number already exists'

    def __init__(self, store=None):
        self.store = store or DocumentStore()

    def get_queryset(self):
        return (
            Invoice.objects.select_related('order')
            .annotate(document_count=Count('documents'))
            .order_by('-created_at')
        )

    def delete(self, pk):
        invoice = self.get_one(pk)
        # Files first, then records, same as a single document delete.
        for document in invoice.documents.all():
            self.store.remove_file(document)
        logger.info('Removed document files of invoice %s', invoice.pk)
        return super().delete(pk)
