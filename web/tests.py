"""Web app tests: proxy routes, cookie login, dashboard pages."""

import json
import tempfile
from pathlib import Path
from unittest import mock

import requests
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import LiveServerTestCase, TestCase, override_settings
from requests.structures import CaseInsensitiveDict
from rest_framework_simplejwt.tokens import AccessToken

from forwarders.models import Forwarder
from invoices.models import Invoice
from orders.models import Order
from suppliers.models import Supplier


def upstream_response(status=200, body=None, content_type='application/json', headers=None, chunks=None):
	resp = mock.MagicMock()
	resp.status_code = status
	resp.ok = status < 400
	resp.headers = CaseInsensitiveDict({'Content-Type': content_type, **(headers or {})})
	if body is not None:
		resp.content = json.dumps(body).encode()
		resp.json.return_value = body
	else:
		resp.json.side_effect = ValueError('no json')
	resp.iter_content.return_value = iter(chunks or [])
	return resp


@override_settings(
	ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'],
	API_URL='http://api.test/api',
)
class ProxyTests(TestCase):
	def setUp(self):
		patcher = mock.patch('web.client.requests.Session')
		self.session_cls = patcher.start()
		self.addCleanup(patcher.stop)
		self.session = self.session_cls.return_value

	def login_cookie(self):
		self.client.cookies['access_token'] = 'tok-123'

	def test_missing_cookie_is_401_without_upstream_call(self):
		res = self.client.get('/web/suppliers')
		self.assertEqual(res.status_code, 401)
		self.assertEqual(res.json(), {'message': 'Unauthorized'})
		self.session.request.assert_not_called()

	def test_forwards_method_query_and_bearer_token(self):
		self.login_cookie()
		self.session.request.return_value = upstream_response(body={'data': [], 'meta': {}})

		res = self.client.get('/web/suppliers?page=2&limit=10')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.json(), {'data': [], 'meta': {}})

		args, kwargs = self.session.request.call_args
		self.assertEqual(args, ('GET', 'http://api.test/api/suppliers'))
		self.assertEqual(kwargs['headers']['Authorization'], 'Bearer tok-123')
		self.assertEqual(dict(kwargs['params']), {'page': ['2'], 'limit': ['10']})

	def test_forwards_json_body_and_relays_error_status(self):
		self.login_cookie()
		error = {'statusCode': 409, 'message': 'A supplier with this name already exists'}
		self.session.request.return_value = upstream_response(status=409, body=error)

		res = self.client.post('/web/suppliers', data=json.dumps({'name': 'Acme'}), content_type='application/json')
		self.assertEqual(res.status_code, 409)
		self.assertEqual(res.json(), error)

		args, kwargs = self.session.request.call_args
		self.assertEqual(args[0], 'POST')
		self.assertEqual(json.loads(kwargs['data']), {'name': 'Acme'})
		self.assertEqual(kwargs['headers']['Content-Type'], 'application/json')

	def test_nested_paths_are_forwarded(self):
		self.login_cookie()
		self.session.request.return_value = upstream_response(body=[])
		self.client.get('/web/invoices/abc/documents')
		self.assertEqual(self.session.request.call_args[0][1], 'http://api.test/api/invoices/abc/documents')

	def test_network_failure_is_500(self):
		self.login_cookie()
		self.session.request.side_effect = requests.ConnectionError('refused')
		res = self.client.get('/web/orders')
		self.assertEqual(res.status_code, 500)
		self.assertEqual(res.json(), {'message': 'Internal server error'})

	def test_document_download_streams_and_closes_upstream(self):
		self.login_cookie()
		upstream = upstream_response(
			content_type='application/pdf',
			headers={'Content-Disposition': 'attachment; filename="scan.pdf"'},
			chunks=[b'%PDF', b'-1.4'],
		)
		self.session.request.return_value = upstream

		res = self.client.get('/web/invoices/inv-1/documents/doc-1')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(self.session.request.call_args[0], ('GET', 'http://api.test/api/invoices/inv-1/documents/doc-1/download'))
		self.assertEqual(self.session.request.call_args[1]['stream'], True)
		self.assertEqual(res['Content-Type'], 'application/pdf')
		self.assertEqual(res['Content-Disposition'], 'attachment; filename="scan.pdf"')
		self.assertEqual(b''.join(res.streaming_content), b'%PDF-1.4')
		res.close()
		upstream.close.assert_called()

	def test_document_delete_goes_to_detail_route(self):
		self.login_cookie()
		self.session.request.return_value = upstream_response(status=404, body={'statusCode': 404, 'message': 'Document not found'})
		res = self.client.delete('/web/invoices/inv-1/documents/doc-1')
		self.assertEqual(res.status_code, 404)
		self.assertEqual(self.session.request.call_args[0], ('DELETE', 'http://api.test/api/invoices/inv-1/documents/doc-1'))


class ProxyLiveApiTests(LiveServerTestCase):
	"""The proxy against the real API served by a live test server."""

	def setUp(self):
		super().setUp()
		tmp = tempfile.TemporaryDirectory()
		self.addCleanup(tmp.cleanup)
		override = override_settings(
			ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'],
			API_URL=f'{self.live_server_url}/api',
			INVOICE_UPLOAD_DIR=Path(tmp.name) / 'invoices',
		)
		override.enable()
		self.addCleanup(override.disable)

		user = get_user_model().objects.create_user(email='ops@example.com', password='12345678')
		self.client.cookies['access_token'] = str(AccessToken.for_user(user))

	def send_json(self, method, url, payload):
		return getattr(self.client, method)(url, data=json.dumps(payload), content_type='application/json')

	def test_create_update_and_list_reach_the_api_unchanged(self):
		res = self.send_json('post', '/web/suppliers', {'name': 'Acme'})
		self.assertEqual(res.status_code, 201, res.content)
		supplier = res.json()
		self.assertEqual(supplier['name'], 'Acme')

		res = self.send_json('post', '/web/suppliers', {'name': 'Acme'})
		self.assertEqual(res.status_code, 409)

		res = self.send_json('patch', f"/web/suppliers/{supplier['id']}", {'name': 'Globex'})
		self.assertEqual(res.status_code, 200, res.content)
		self.assertEqual(res.json()['name'], 'Globex')

		res = self.client.get('/web/suppliers?page=1&limit=10')
		self.assertEqual(res.status_code, 200)
		body = res.json()
		self.assertEqual([row['name'] for row in body['data']], ['Globex'])
		self.assertEqual(body['meta'], {'total': 1, 'page': 1, 'limit': 10, 'totalPages': 1})
		self.assertEqual(Supplier.objects.get().name, 'Globex')

	def test_document_upload_and_download_through_the_proxy(self):
		order = Order.objects.create(
			ref_number='PO-1',
			supplier=Supplier.objects.create(name='Acme'),
			forwarder=Forwarder.objects.create(name='DHL'),
		)
		invoice = Invoice.objects.create(order=order, invoice_number='INV-1', invoice_date='2026-03-02')
		content = b'%PDF-1.4 proxied'

		upload = SimpleUploadedFile('bol.pdf', content, content_type='application/pdf')
		res = self.client.post(f'/web/invoices/{invoice.pk}/documents', {'file': upload})
		self.assertEqual(res.status_code, 201, res.content)
		doc = res.json()
		self.assertEqual(doc['originalName'], 'bol.pdf')
		self.assertEqual(doc['size'], len(content))

		res = self.client.get(f"/web/invoices/{invoice.pk}/documents/{doc['id']}")
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res['Content-Type'], 'application/pdf')
		self.assertEqual(res['Content-Disposition'], 'attachment; filename="bol.pdf"')
		self.assertEqual(b''.join(res.streaming_content), content)
		res.close()

		res = self.client.delete(f"/web/invoices/{invoice.pk}/documents/{doc['id']}")
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.json(), {'message': 'Document deleted successfully'})


@override_settings(
	ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'],
	API_URL='http://api.test/api',
	ACCESS_TOKEN_COOKIE_SECURE=True,
)
class CookieLoginTests(TestCase):
	def setUp(self):
		patcher = mock.patch('web.client.requests.Session')
		self.session = patcher.start().return_value
		self.addCleanup(patcher.stop)

	def post_login(self, payload):
		return self.client.post('/web/auth/login', data=json.dumps(payload), content_type='application/json')

	def test_missing_field_is_400(self):
		res = self.post_login({'email': 'ops@example.com'})
		self.assertEqual(res.status_code, 400)
		self.assertEqual(res.json(), {'message': 'Email and password are required'})
		self.session.request.assert_not_called()

	def test_success_sets_http_only_cookie(self):
		self.session.request.return_value = upstream_response(body={'accessToken': 'jwt-abc', 'user': {}})

		res = self.post_login({'email': 'ops@example.com', 'password': 'pw'})
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.json(), {'ok': True})

		cookie = res.cookies['access_token']
		self.assertEqual(cookie.value, 'jwt-abc')
		self.assertTrue(cookie['httponly'])
		self.assertTrue(cookie['secure'])
		self.assertEqual(cookie['samesite'], 'Lax')
		self.assertEqual(cookie['path'], '/')
		self.assertEqual(int(cookie['max-age']), 604800)

		args, kwargs = self.session.request.call_args
		self.assertEqual(args, ('POST', 'http://api.test/api/auth/login'))
		self.assertEqual(kwargs['json'], {'email': 'ops@example.com', 'password': 'pw'})

	def test_upstream_rejection_is_relayed(self):
		self.session.request.return_value = upstream_response(status=401, body={'statusCode': 401, 'message': 'Invalid email or password'})
		res = self.post_login({'email': 'ops@example.com', 'password': 'bad'})
		self.assertEqual(res.status_code, 401)
		self.assertEqual(res.json(), {'message': 'Invalid email or password'})
		self.assertNotIn('access_token', res.cookies)

	def test_missing_token_is_502(self):
		self.session.request.return_value = upstream_response(body={})
		res = self.post_login({'email': 'ops@example.com', 'password': 'pw'})
		self.assertEqual(res.status_code, 502)

	def test_logout_clears_cookie(self):
		self.client.cookies['access_token'] = 'jwt-abc'
		res = self.client.post('/web/auth/logout')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.cookies['access_token'].value, '')
		self.assertEqual(int(res.cookies['access_token']['max-age']), 0)


@override_settings(
	ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'],
	API_URL='http://api.test/api',
)
class DashboardPageTests(TestCase):
	def test_dashboard_without_cookie_redirects_to_login(self):
		res = self.client.get('/dashboard/orders')
		self.assertRedirects(res, '/login?next=%2Fdashboard%2Forders', fetch_redirect_response=False)

	def test_guard_covers_only_the_dashboard_tree(self):
		res = self.client.get('/dashboard')
		self.assertRedirects(res, '/login?next=%2Fdashboard', fetch_redirect_response=False)
		self.assertEqual(self.client.get('/dashboards').status_code, 404)
		self.assertEqual(self.client.get('/dashboard-archive').status_code, 404)

	def test_login_with_cookie_redirects_to_dashboard(self):
		self.client.cookies['access_token'] = 'jwt-abc'
		res = self.client.get('/login')
		self.assertRedirects(res, '/dashboard', fetch_redirect_response=False)

	def test_login_page_renders(self):
		res = self.client.get('/login?next=/dashboard/invoices')
		self.assertEqual(res.status_code, 200)
		self.assertContains(res, 'data-next="/dashboard/invoices"')

	@mock.patch('web.client.requests.Session')
	def test_overview_cards_use_cookie_token(self, session_cls):
		session = session_cls.return_value
		session.request.return_value = upstream_response(
			body={'total': 7, 'byStatus': {'IN_TRANSIT': 3, 'DELIVERED': 2}},
		)
		self.client.cookies['access_token'] = 'jwt-abc'

		res = self.client.get('/dashboard')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(
			res.context['cards'],
			[('Total Orders', 7), ('In Transit', 3), ('Delivered', 2)],
		)
		args, kwargs = session.request.call_args
		self.assertEqual(args, ('GET', 'http://api.test/api/orders/summary'))
		self.assertEqual(kwargs['headers']['Authorization'], 'Bearer jwt-abc')

	@mock.patch('web.client.requests.Session')
	def test_overview_survives_api_outage(self, session_cls):
		session_cls.return_value.request.side_effect = requests.ConnectionError('down')
		self.client.cookies['access_token'] = 'jwt-abc'
		res = self.client.get('/dashboard')
		self.assertEqual(res.status_code, 200)
		self.assertTrue(res.context['summary_error'])

	def test_section_pages_render(self):
		self.client.cookies['access_token'] = 'jwt-abc'
		for section in ('orders', 'suppliers', 'forwarders', 'invoices'):
			res = self.client.get(f'/dashboard/{section}')
			self.assertEqual(res.status_code, 200, section)
			self.assertContains(res, f'data-resource="{section}"')
