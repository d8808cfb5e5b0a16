"""URL routes for invoice documents (mounted under /api/)."""

from django.urls import re_path

from .views import InvoiceDocumentDetailView, InvoiceDocumentDownloadView, InvoiceDocumentListView

urlpatterns = [
    re_path(
        r'^invoices/(?P<invoice_id>[^/.]+)/documents/?$',
        InvoiceDocumentListView.as_view(),
        name='invoice_documents',
    ),
    re_path(
        r'^invoices/(?P<invoice_id>[^/.]+)/documents/(?P<document_id>[^/.]+)/download/?$',
        InvoiceDocumentDownloadView.as_view(),
        name='invoice_document_download',
    ),
    re_path(
        r'^invoices/(?P<invoice_id>[^/.]+)/documents/(?P<document_id>[^/.]+)/?$',
        InvoiceDocumentDetailView.as_view(),
        name='invoice_document_detail',
    ),
]
