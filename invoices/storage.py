"""Filesystem store for invoice documents.

Each upload is written under ``INVOICE_UPLOAD_DIR`` with a generated name
(random hex plus the original extension); the client's filename is kept only
as metadata. Removal always deletes the file before the record, so a crash in
between leaves a record without a file, which ``verify_invoice_documents``
can find, never a file without a record.
"""

import logging
import re
import uuid
from pathlib import Path

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.exceptions import NotFound

from core.exceptions import ValidationFailed

from .models import Invoice, InvoiceDocument

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset([
    'application/pdf',
    'image/jpeg',
    'image/jpg',
    'image/png',
    'image/webp',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
])

CHUNK_SIZE = 64 * 1024

_EXTENSION_RE = re.compile(r'^\.[A-Za-z0-9]{1,10}$')


class DocumentNotFound(NotFound):
    default_detail = 'Document not found'


class InvoiceNotFound(NotFound):
    """Upload target is missing; reported as a bad request."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invoice not found'


def generate_filename(original_name):
    """Collision-free on-disk name that keeps a well-formed extension only."""
    suffix = Path(original_name or '').suffix
    if not _EXTENSION_RE.match(suffix):
        suffix = ''
    return f'{uuid.uuid4().hex}{suffix}'


def _parse_id(value):
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class DocumentStore:
    def __init__(self, upload_dir=None, max_size=None):
        self.upload_dir = Path(upload_dir or settings.INVOICE_UPLOAD_DIR)
        self.max_size = max_size or settings.INVOICE_DOCUMENT_MAX_SIZE

    def store(self, invoice_id, upload):
        """Write ``upload`` to disk and record it against the invoice.

        Type and declared size are checked before anything touches the disk;
        the size is checked again while writing. On any failure after the
        file was opened, the file is removed.
        """
        if upload is None:
            raise ValidationFailed('No file uploaded')
        if upload.content_type not in ALLOWED_MIME_TYPES:
            logger.warning('Rejected upload %r for invoice %s: type %s', upload.name, invoice_id, upload.content_type)
            raise ValidationFailed('Invalid file type')
        if upload.size is not None and upload.size > self.max_size:
            logger.warning('Rejected upload %r for invoice %s: %s bytes', upload.name, invoice_id, upload.size)
            raise ValidationFailed('File too large')

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        filename = generate_filename(upload.name)
        path = self.upload_dir / filename
        written = self._write(upload, path)

        invoice_pk = _parse_id(invoice_id)
        if invoice_pk is None or not Invoice.objects.filter(pk=invoice_pk).exists():
            path.unlink(missing_ok=True)
            logger.warning('Upload for missing invoice %s discarded', invoice_id)
            raise InvoiceNotFound()

        try:
            document = InvoiceDocument.objects.create(
                invoice_id=invoice_pk,
                filename=filename,
                original_name=upload.name,
                filepath=str(path),
                mimetype=upload.content_type,
                size=written,
            )
        except Exception:
            path.unlink(missing_ok=True)
            raise
        logger.info('Stored document %s (%s bytes) for invoice %s', document.pk, written, invoice_pk)
        return document

    def _write(self, upload, path):
        written = 0
        try:
            with open(path, 'wb') as fh:
                for chunk in upload.chunks(CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_size:
                        raise ValidationFailed('File too large')
                    fh.write(chunk)
        except Exception:
            path.unlink(missing_ok=True)
            raise
        return written

    def list(self, invoice_id):
        invoice_pk = _parse_id(invoice_id)
        if invoice_pk is None:
            return InvoiceDocument.objects.none()
        return InvoiceDocument.objects.filter(invoice_id=invoice_pk).order_by('-created_at')

    def get(self, invoice_id, document_id):
        invoice_pk = _parse_id(invoice_id)
        document_pk = _parse_id(document_id)
        if invoice_pk is None or document_pk is None:
            raise DocumentNotFound()
        try:
            return InvoiceDocument.objects.get(pk=document_pk, invoice_id=invoice_pk)
        except (InvoiceDocument.DoesNotExist, DjangoValidationError):
            raise DocumentNotFound()

    def retrieve(self, invoice_id, document_id):
        """Return ``(open binary file, document)``; the caller must close the file."""
        document = self.get(invoice_id, document_id)
        try:
            handle = open(document.filepath, 'rb')
        except FileNotFoundError:
            logger.warning('Document %s has no file at %s', document.pk, document.filepath)
            raise DocumentNotFound()
        return handle, document

    def delete(self, invoice_id, document_id):
        document = self.get(invoice_id, document_id)
        self.remove_file(document)
        # No compensation if this fails: the record is left without its file.
        document.delete()
        logger.info('Deleted document %s of invoice %s', document_id, invoice_id)

    def remove_file(self, document):
        try:
            Path(document.filepath).unlink()
        except FileNotFoundError:
            logger.warning('File for document %s was already missing', document.pk)

    def dangling(self, queryset=None):
        """Documents whose file is gone from disk."""
        if queryset is None:
            queryset = InvoiceDocument.objects.all()
        for document in queryset.iterator():
            if not Path(document.filepath).exists():
                yield document
