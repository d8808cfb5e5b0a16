"""
Report invoice document records whose file is missing from the upload dir.

Removal deletes the file before the record, so an interrupted delete leaves
exactly this kind of dangling record. ``--fix`` deletes them.

Usage:
  python manage.py verify_invoice_documents
  python manage.py verify_invoice_documents --invoice <uuid> --fix
"""

import uuid

from django.core.management.base import BaseCommand, CommandError

from invoices.models import InvoiceDocument
from invoices.storage import DocumentStore


class Command(BaseCommand):
    help = "Find invoice document records whose file no longer exists"

    def add_arguments(self, parser):
        parser.add_argument(
            "--invoice",
            default=None,
            help="Only check documents of this invoice id",
        )
        parser.add_argument(
            "--fix",
            action="store_true",
            help="Delete the dangling records",
        )

    def handle(self, *args, **options):
        documents = InvoiceDocument.objects.all()
        if options["invoice"]:
            try:
                invoice_id = uuid.UUID(options["invoice"])
            except ValueError:
                raise CommandError(f"Invalid invoice id: {options['invoice']!r}")
            documents = documents.filter(invoice_id=invoice_id)

        scanned = documents.count()
        dangling = list(DocumentStore().dangling(documents))

        self.stdout.write(f"Scanned: {scanned}")
        if not dangling:
            self.stdout.write(self.style.SUCCESS("MISSING: 0"))
            return

        self.stdout.write(self.style.WARNING(f"MISSING: {len(dangling)}"))
        for document in dangling:
            self.stdout.write(f"  - {document.pk} {document.original_name} ({document.filepath})")

        if options["fix"]:
            InvoiceDocument.objects.filter(pk__in=[d.pk for d in dangling]).delete()
            self.stdout.write(self.style.SUCCESS(f"Deleted {len(dangling)} dangling record(s)"))
