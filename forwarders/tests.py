"""Forwarders app tests."""

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from forwarders.models import Forwarder
from orders.models import Order
from suppliers.models import Supplier


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class ForwarderApiTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		cls.user = get_user_model().objects.create_user(email='ops@example.com', password='12345678')

	def setUp(self):
		self.client = APIClient()
		self.client.force_authenticate(user=self.user)

	def test_crud_round(self):
		res = self.client.post('/api/forwarders', {'name': 'Maersk'}, format='json')
		self.assertEqual(res.status_code, 201)
		pk = res.data['id']

		self.assertEqual(self.client.get(f'/api/forwarders/{pk}').data['name'], 'Maersk')

		res = self.client.put(f'/api/forwarders/{pk}', {'name': 'Maersk Line'}, format='json')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['name'], 'Maersk Line')

		res = self.client.delete(f'/api/forwarders/{pk}')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['name'], 'Maersk Line')
		self.assertEqual(self.client.get(f'/api/forwarders/{pk}').status_code, 404)

	def test_duplicate_name_is_conflict(self):
		Forwarder.objects.create(name='DHL')
		res = self.client.post('/api/forwarders', {'name': 'DHL'}, format='json')
		self.assertEqual(res.status_code, 409)
		self.assertEqual(res.data['message'], 'A forwarder with this name already exists')

	def test_update_missing_is_404(self):
		res = self.client.patch('/api/forwarders/6f1b2c4e-0000-4000-8000-000000000000', {'name': 'X'}, format='json')
		self.assertEqual(res.status_code, 404)

	def test_delete_referenced_forwarder_is_conflict(self):
		forwarder = Forwarder.objects.create(name='DHL')
		Order.objects.create(ref_number='PO-1', supplier=Supplier.objects.create(name='Acme'), forwarder=forwarder)
		res = self.client.delete(f'/api/forwarders/{forwarder.pk}')
		self.assertEqual(res.status_code, 409)
		self.assertEqual(res.data['message'], 'Forwarder is still referenced by orders')
