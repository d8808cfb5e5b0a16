"""Invoices API views, including document attachments.

Document routes live under ``/api/invoices/<invoice_id>/documents``:

- ``GET``    list (newest first) / ``POST`` multipart upload, field ``file``
- ``GET  .../<document_id>/download`` binary download
- ``DELETE .../<document_id>``
"""

from django.http import FileResponse
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import ValidationFailed
from core.views import ResourceViewSet

from .filters import InvoiceFilter
from .serializers import InvoiceDocumentSerializer, InvoiceSerializer
from .services import InvoiceService
from .storage import DocumentStore
from .uploadhandlers import MaxSizeUploadHandler


class InvoiceViewSet(ResourceViewSet):
    service_class = InvoiceService
    serializer_class = InvoiceSerializer
    filterset_class = InvoiceFilter


class InvoiceDocumentListView(APIView):
    parser_classes = [MultiPartParser, FormParser]

    def get(self, request, invoice_id):
        documents = DocumentStore().list(invoice_id)
        return Response(InvoiceDocumentSerializer(documents, many=True).data)

    def post(self, request, invoice_id):
        # Must be installed before the body is parsed.
        limiter = MaxSizeUploadHandler(request._request)
        request._request.upload_handlers.insert(0, limiter)
        upload = request.FILES.get('file')
        if limiter.exceeded:
            raise ValidationFailed('File too large')
        document = DocumentStore().store(invoice_id, upload)
        return Response(InvoiceDocumentSerializer(document).data, status=status.HTTP_201_CREATED)


class InvoiceDocumentDetailView(APIView):
    def delete(self, request, invoice_id, document_id):
        DocumentStore().delete(invoice_id, document_id)
        return Response({'message': 'Document deleted successfully'})


class InvoiceDocumentDownloadView(APIView):
    def get(self, request, invoice_id, document_id):
        handle, document = DocumentStore().retrieve(invoice_id, document_id)
        # FileResponse closes the handle when the response is closed.
        return FileResponse(
            handle,
            as_attachment=True,
            filename=document.original_name,
            content_type=document.mimetype,
        )
