"""Suppliers app tests."""

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from forwarders.models import Forwarder
from orders.models import Order
from suppliers.models import Supplier


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class SupplierApiTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		cls.user = get_user_model().objects.create_user(email='ops@example.com', password='12345678')

	def setUp(self):
		self.client = APIClient()
		self.client.force_authenticate(user=self.user)

	def test_create_then_duplicate_name_is_conflict(self):
		res = self.client.post('/api/suppliers', {'name': 'Acme'}, format='json')
		self.assertEqual(res.status_code, 201, res.content)
		self.assertEqual(res.data['name'], 'Acme')
		self.assertIn('createdAt', res.data)

		res2 = self.client.post('/api/suppliers', {'name': 'Acme'}, format='json')
		self.assertEqual(res2.status_code, 409)
		self.assertEqual(res2.data['statusCode'], 409)
		self.assertEqual(res2.data['message'], 'A supplier with this name already exists')
		self.assertEqual(Supplier.objects.filter(name='Acme').count(), 1)

	def test_second_page_of_fifteen(self):
		for i in range(15):
			Supplier.objects.create(name=f'Supplier {i:02d}')

		res = self.client.get('/api/suppliers', {'page': 2, 'limit': 10})
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['meta'], {'total': 15, 'page': 2, 'limit': 10, 'totalPages': 2})
		self.assertEqual(len(res.data['data']), 5)

	def test_list_is_newest_first_with_defaults(self):
		Supplier.objects.create(name='Older')
		Supplier.objects.create(name='Newer')

		res = self.client.get('/api/suppliers/')
		self.assertEqual(res.status_code, 200)
		self.assertEqual([row['name'] for row in res.data['data']], ['Newer', 'Older'])
		self.assertEqual(res.data['meta']['page'], 1)
		self.assertEqual(res.data['meta']['limit'], 10)

	def test_page_past_the_end_is_empty(self):
		Supplier.objects.create(name='Only')
		res = self.client.get('/api/suppliers', {'page': 5})
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['data'], [])
		self.assertEqual(res.data['meta']['totalPages'], 1)

	def test_invalid_paging_is_400(self):
		self.assertEqual(self.client.get('/api/suppliers', {'page': 0}).status_code, 400)
		self.assertEqual(self.client.get('/api/suppliers', {'limit': 'ten'}).status_code, 400)

	def test_limit_is_capped(self):
		res = self.client.get('/api/suppliers', {'limit': 5000})
		self.assertEqual(res.data['meta']['limit'], 1000)

	def test_retrieve_missing_and_malformed_ids_are_404(self):
		res = self.client.get('/api/suppliers/6f1b2c4e-0000-4000-8000-000000000000')
		self.assertEqual(res.status_code, 404)
		self.assertEqual(res.data['message'], 'Supplier not found')
		self.assertEqual(self.client.get('/api/suppliers/not-a-uuid').status_code, 404)

	def test_update_to_existing_name_is_conflict(self):
		Supplier.objects.create(name='Acme')
		other = Supplier.objects.create(name='Globex')

		res = self.client.patch(f'/api/suppliers/{other.pk}', {'name': 'Acme'}, format='json')
		self.assertEqual(res.status_code, 409)
		other.refresh_from_db()
		self.assertEqual(other.name, 'Globex')

		res2 = self.client.patch(f'/api/suppliers/{other.pk}', {'name': 'Initech'}, format='json')
		self.assertEqual(res2.status_code, 200)
		self.assertEqual(res2.data['name'], 'Initech')

	def test_blank_name_is_400(self):
		res = self.client.post('/api/suppliers', {'name': ''}, format='json')
		self.assertEqual(res.status_code, 400)
		self.assertTrue(res.data['message'].startswith('name:'))

	def test_delete_returns_record(self):
		supplier = Supplier.objects.create(name='Acme')
		res = self.client.delete(f'/api/suppliers/{supplier.pk}')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['id'], str(supplier.pk))
		self.assertFalse(Supplier.objects.filter(pk=supplier.pk).exists())
		self.assertEqual(self.client.delete(f'/api/suppliers/{supplier.pk}').status_code, 404)

	def test_delete_referenced_supplier_is_conflict(self):
		supplier = Supplier.objects.create(name='Acme')
		forwarder = Forwarder.objects.create(name='DHL')
		Order.objects.create(ref_number='PO-1', supplier=supplier, forwarder=forwarder)

		res = self.client.delete(f'/api/suppliers/{supplier.pk}')
		self.assertEqual(res.status_code, 409)
		self.assertTrue(Supplier.objects.filter(pk=supplier.pk).exists())

	def test_routes_answer_with_and_without_trailing_slash(self):
		res = self.client.post('/api/suppliers', {'name': 'Acme'}, format='json')
		self.assertEqual(res.status_code, 201, res.content)
		pk = res.data['id']
		res = self.client.post('/api/suppliers/', {'name': 'Globex'}, format='json')
		self.assertEqual(res.status_code, 201, res.content)

		for url in ('/api/suppliers', '/api/suppliers/'):
			res = self.client.get(url, {'page': 1, 'limit': 10})
			self.assertEqual(res.status_code, 200, url)
			self.assertEqual(res.data['meta']['total'], 2)

		res = self.client.patch(f'/api/suppliers/{pk}', {'name': 'Initech'}, format='json')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['name'], 'Initech')
		res = self.client.patch(f'/api/suppliers/{pk}/', {'name': 'Umbrella'}, format='json')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(self.client.get(f'/api/suppliers/{pk}').data['name'], 'Umbrella')

	def test_requires_authentication(self):
		res = APIClient().get('/api/suppliers')
		self.assertEqual(res.status_code, 401)
