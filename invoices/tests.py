"""Invoices app tests: invoice CRUD and the document store."""

import tempfile
from io import StringIO
from pathlib import Path
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.files.uploadhandler import StopUpload
from django.core.management import CommandError, call_command
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from core.exceptions import ValidationFailed
from forwarders.models import Forwarder
from invoices.models import Invoice, InvoiceDocument
from invoices.storage import DocumentStore, generate_filename
from invoices.uploadhandlers import MaxSizeUploadHandler
from orders.models import Order
from suppliers.models import Supplier

MISSING_ID = '6f1b2c4e-0000-4000-8000-000000000000'
PDF_BYTES = b'%PDF-1.4\n' + bytes(range(256)) * 8 + b'\n%%EOF\n'


def pdf(name='scan.pdf', content=PDF_BYTES, content_type='application/pdf'):
	return SimpleUploadedFile(name, content, content_type=content_type)


class UploadDirMixin:
	"""Point the document store at a throwaway directory for each test."""

	def setUp(self):
		super().setUp()
		tmp = tempfile.TemporaryDirectory()
		self.addCleanup(tmp.cleanup)
		self.upload_dir = Path(tmp.name) / 'invoices'
		override = override_settings(INVOICE_UPLOAD_DIR=self.upload_dir)
		override.enable()
		self.addCleanup(override.disable)

	def stored_files(self):
		if not self.upload_dir.exists():
			return []
		return sorted(p.name for p in self.upload_dir.iterdir())


class InvoiceFixtureMixin:
	@classmethod
	def setUpTestData(cls):
		cls.user = get_user_model().objects.create_user(email='ops@example.com', password='12345678')
		cls.order = Order.objects.create(
			ref_number='PO-1',
			supplier=Supplier.objects.create(name='Acme'),
			forwarder=Forwarder.objects.create(name='DHL'),
		)
		cls.invoice = Invoice.objects.create(order=cls.order, invoice_number='INV-1', invoice_date='2026-03-02')

	def setUp(self):
		super().setUp()
		self.client = APIClient()
		self.client.force_authenticate(user=self.user)

	def documents_url(self, invoice_id=None):
		return f'/api/invoices/{invoice_id or self.invoice.pk}/documents'

	def upload(self, upload=None, invoice_id=None):
		return self.client.post(self.documents_url(invoice_id), {'file': upload or pdf()}, format='multipart')


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class InvoiceApiTests(InvoiceFixtureMixin, UploadDirMixin, TestCase):
	def test_create_and_duplicate_number(self):
		payload = {'orderId': str(self.order.pk), 'invoiceNumber': 'INV-2', 'invoiceDate': '2026-03-05'}
		res = self.client.post('/api/invoices', payload, format='json')
		self.assertEqual(res.status_code, 201, res.content)
		body = res.json()
		self.assertEqual(body['order']['refNumber'], 'PO-1')
		self.assertEqual(body['documentCount'], 0)

		res = self.client.post('/api/invoices', payload, format='json')
		self.assertEqual(res.status_code, 409)
		self.assertEqual(res.json()['message'], 'An invoice with this number already exists')

	def test_filter_by_order(self):
		other = Order.objects.create(
			ref_number='PO-2', supplier=self.order.supplier, forwarder=self.order.forwarder,
		)
		Invoice.objects.create(order=other, invoice_number='INV-9', invoice_date='2026-03-03')

		res = self.client.get('/api/invoices', {'orderId': str(other.pk)})
		self.assertEqual([row['invoiceNumber'] for row in res.json()['data']], ['INV-9'])

	def test_delete_invoice_removes_document_files(self):
		self.assertEqual(self.upload().status_code, 201)
		self.assertEqual(self.upload(pdf('second.pdf')).status_code, 201)
		self.assertEqual(len(self.stored_files()), 2)

		res = self.client.delete(f'/api/invoices/{self.invoice.pk}')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(self.stored_files(), [])
		self.assertFalse(InvoiceDocument.objects.exists())


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class InvoiceDocumentApiTests(InvoiceFixtureMixin, UploadDirMixin, TestCase):
	def test_disallowed_type_writes_nothing(self):
		res = self.upload(pdf('notes.txt', b'hello', 'text/plain'))
		self.assertEqual(res.status_code, 400)
		self.assertEqual(res.json()['message'], 'Invalid file type')
		self.assertEqual(self.stored_files(), [])
		self.assertFalse(InvoiceDocument.objects.exists())

	def test_missing_file_field_is_400(self):
		res = self.client.post(self.documents_url(), {}, format='multipart')
		self.assertEqual(res.status_code, 400)
		self.assertEqual(res.json()['message'], 'No file uploaded')

	@override_settings(INVOICE_DOCUMENT_MAX_SIZE=1024)
	def test_oversized_upload_creates_no_record(self):
		res = self.upload(pdf(content=b'x' * 2048))
		self.assertEqual(res.status_code, 400)
		self.assertEqual(res.json()['message'], 'File too large')
		self.assertFalse(InvoiceDocument.objects.exists())
		self.assertEqual(self.stored_files(), [])

	@override_settings(INVOICE_DOCUMENT_MAX_SIZE=1024)
	def test_oversized_transfer_is_stopped_while_receiving(self):
		total = 3 * 1024 * 1024
		spy = mock.patch.object(
			MaxSizeUploadHandler, 'receive_data_chunk',
			autospec=True, side_effect=MaxSizeUploadHandler.receive_data_chunk,
		)
		with spy as receive, mock.patch.object(DocumentStore, 'store') as store:
			res = self.upload(pdf(content=b'x' * total))

		self.assertEqual(res.status_code, 400)
		self.assertEqual(res.json()['message'], 'File too large')
		store.assert_not_called()
		received = sum(len(call.args[1]) for call in receive.call_args_list)
		self.assertLessEqual(received, 1024 + MaxSizeUploadHandler.chunk_size)
		self.assertEqual(self.stored_files(), [])

	def test_download_header_for_non_ascii_name(self):
		document = DocumentStore().store(self.invoice.pk, pdf('Facture_été.pdf'))
		res = self.client.get(f'{self.documents_url()}/{document.pk}/download')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res['Content-Disposition'], "attachment; filename*=utf-8''Facture_%C3%A9t%C3%A9.pdf")
		res.close()

	def test_unknown_invoice_removes_written_file(self):
		res = self.upload(invoice_id=MISSING_ID)
		self.assertEqual(res.status_code, 400)
		self.assertEqual(res.json()['message'], 'Invoice not found')
		self.assertEqual(self.stored_files(), [])
		self.assertFalse(InvoiceDocument.objects.exists())

	def test_upload_then_download_round_trip(self):
		res = self.upload(pdf('Bill of Lading.pdf'))
		self.assertEqual(res.status_code, 201, res.content)
		doc = res.json()
		self.assertEqual(doc['originalName'], 'Bill of Lading.pdf')
		self.assertEqual(doc['mimetype'], 'application/pdf')
		self.assertEqual(doc['size'], len(PDF_BYTES))
		self.assertEqual(doc['invoiceId'], str(self.invoice.pk))
		self.assertTrue(doc['filename'].endswith('.pdf'))
		self.assertNotIn('Bill', doc['filename'])
		self.assertEqual(self.stored_files(), [doc['filename']])

		download = self.client.get(f"{self.documents_url()}/{doc['id']}/download")
		self.assertEqual(download.status_code, 200)
		self.assertEqual(download['Content-Type'], 'application/pdf')
		self.assertEqual(download['Content-Disposition'], 'attachment; filename="Bill of Lading.pdf"')
		self.assertEqual(b''.join(download.streaming_content), PDF_BYTES)
		download.close()

	def test_list_is_newest_first(self):
		names = ['a.pdf', 'b.png', 'c.xlsx']
		types = ['application/pdf', 'image/png', 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet']
		for name, content_type in zip(names, types):
			self.assertEqual(self.upload(pdf(name, b'data', content_type)).status_code, 201)

		res = self.client.get(self.documents_url())
		self.assertEqual(res.status_code, 200)
		self.assertEqual([doc['originalName'] for doc in res.json()], list(reversed(names)))

	def test_delete_twice(self):
		doc_id = self.upload().json()['id']

		res = self.client.delete(f'{self.documents_url()}/{doc_id}')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.json(), {'message': 'Document deleted successfully'})
		self.assertEqual(self.stored_files(), [])

		res = self.client.delete(f'{self.documents_url()}/{doc_id}')
		self.assertEqual(res.status_code, 404)
		self.assertEqual(res.json()['message'], 'Document not found')

	def test_delete_with_file_already_gone(self):
		doc = self.upload().json()
		Path(doc['filepath']).unlink()

		res = self.client.delete(f"{self.documents_url()}/{doc['id']}")
		self.assertEqual(res.status_code, 200)
		self.assertFalse(InvoiceDocument.objects.filter(pk=doc['id']).exists())

	def test_download_with_file_gone_is_404(self):
		doc = self.upload().json()
		Path(doc['filepath']).unlink()
		res = self.client.get(f"{self.documents_url()}/{doc['id']}/download")
		self.assertEqual(res.status_code, 404)

	def test_documents_are_scoped_to_their_invoice(self):
		doc_id = self.upload().json()['id']
		other = Invoice.objects.create(order=self.order, invoice_number='INV-2', invoice_date='2026-03-03')

		self.assertEqual(self.client.get(f'{self.documents_url(other.pk)}/{doc_id}/download').status_code, 404)
		self.assertEqual(self.client.delete(f'{self.documents_url(other.pk)}/{doc_id}').status_code, 404)
		self.assertEqual(self.client.get(self.documents_url(other.pk)).json(), [])
		self.assertTrue(InvoiceDocument.objects.filter(pk=doc_id).exists())

	def test_requires_authentication(self):
		res = APIClient().get(self.documents_url())
		self.assertEqual(res.status_code, 401)


class DocumentStoreTests(InvoiceFixtureMixin, UploadDirMixin, TestCase):
	def test_size_is_checked_while_writing(self):
		upload = pdf(content=b'x' * 4096)
		upload.size = 10
		store = DocumentStore(max_size=1024)
		with self.assertRaises(ValidationFailed):
			store.store(self.invoice.pk, upload)
		self.assertEqual(self.stored_files(), [])
		self.assertFalse(InvoiceDocument.objects.exists())

	def test_size_limit_handler_stops_past_the_limit(self):
		handler = MaxSizeUploadHandler(max_size=10)
		handler.new_file('file', 'scan.pdf', 'application/pdf', None)
		self.assertEqual(handler.receive_data_chunk(b'12345', 0), b'12345')
		with self.assertRaises(StopUpload) as ctx:
			handler.receive_data_chunk(b'678901', 5)
		self.assertTrue(ctx.exception.connection_reset)
		self.assertTrue(handler.exceeded)

	def test_verify_command_rejects_malformed_invoice_id(self):
		with self.assertRaises(CommandError):
			call_command('verify_invoice_documents', '--invoice', 'not-a-uuid', stdout=StringIO())

	def test_verify_command_scoped_to_one_invoice(self):
		lost = DocumentStore().store(self.invoice.pk, pdf('lost.pdf'))
		Path(lost.filepath).unlink()

		out = StringIO()
		call_command('verify_invoice_documents', '--invoice', MISSING_ID, stdout=out)
		self.assertIn('MISSING: 0', out.getvalue())
		out = StringIO()
		call_command('verify_invoice_documents', '--invoice', str(self.invoice.pk), stdout=out)
		self.assertIn('MISSING: 1', out.getvalue())

	def test_generated_names_drop_unsafe_extensions(self):
		self.assertTrue(generate_filename('report.PDF').endswith('.PDF'))
		self.assertTrue(generate_filename('archive.tar.gz').endswith('.gz'))
		self.assertNotIn('.', generate_filename('../../etc/passwd'))
		self.assertNotIn('.', generate_filename('weird.ext with space'))
		self.assertNotEqual(generate_filename('a.pdf'), generate_filename('a.pdf'))

	def test_stored_path_stays_in_upload_dir(self):
		document = DocumentStore().store(self.invoice.pk, pdf('../../escape.pdf'))
		self.assertEqual(Path(document.filepath).parent, self.upload_dir)

	def test_verify_command_reports_and_fixes_dangling_records(self):
		kept = DocumentStore().store(self.invoice.pk, pdf('kept.pdf'))
		lost = DocumentStore().store(self.invoice.pk, pdf('lost.pdf'))
		Path(lost.filepath).unlink()

		out = StringIO()
		call_command('verify_invoice_documents', stdout=out)
		self.assertIn('MISSING: 1', out.getvalue())
		self.assertTrue(InvoiceDocument.objects.filter(pk=lost.pk).exists())

		call_command('verify_invoice_documents', '--fix', stdout=StringIO())
		self.assertFalse(InvoiceDocument.objects.filter(pk=lost.pk).exists())
		self.assertTrue(InvoiceDocument.objects.filter(pk=kept.pk).exists())
