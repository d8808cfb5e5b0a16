"""Orders app tests."""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from forwarders.models import Forwarder
from invoices.models import Invoice
from orders.models import Order, OrderItem, OrderStatus
from suppliers.models import Supplier


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class OrderApiTests(TestCase):
	"""Orders with nested items, filters and the status summary."""

	@classmethod
	def setUpTestData(cls):
		cls.user = get_user_model().objects.create_user(email='ops@example.com', password='12345678')
		cls.supplier = Supplier.objects.create(name='Acme')
		cls.forwarder = Forwarder.objects.create(name='DHL')

	def setUp(self):
		self.client = APIClient()
		self.client.force_authenticate(user=self.user)

	def _payload(self, **overrides):
		payload = {
			'refNumber': 'PO-1001',
			'supplierId': str(self.supplier.pk),
			'forwarderId': str(self.forwarder.pk),
			'orderDate': '2026-03-01',
			'estimatedDeliveryDate': '2026-04-15',
			'items': [
				{'description': 'Pallet of widgets', 'quantity': 3, 'unitPrice': '12.50'},
				{'description': 'Crate of gadgets', 'quantity': 2, 'unitPrice': '100.00'},
			],
		}
		payload.update(overrides)
		return payload

	def test_create_computes_item_totals(self):
		res = self.client.post('/api/orders', self._payload(), format='json')
		self.assertEqual(res.status_code, 201, res.content)
		body = res.json()
		self.assertEqual(body['status'], 'DRAFT')
		self.assertEqual(body['supplier']['name'], 'Acme')
		self.assertEqual(body['forwarder']['name'], 'DHL')
		self.assertEqual(body['supplierId'], str(self.supplier.pk))
		self.assertEqual([item['total'] for item in body['items']], ['37.50', '200.00'])

		order = Order.objects.get(pk=body['id'])
		self.assertEqual(order.total, Decimal('237.50'))

	def test_duplicate_ref_number_is_conflict(self):
		self.assertEqual(self.client.post('/api/orders', self._payload(), format='json').status_code, 201)
		res = self.client.post('/api/orders', self._payload(), format='json')
		self.assertEqual(res.status_code, 409)
		self.assertEqual(Order.objects.count(), 1)

	def test_unknown_supplier_is_400(self):
		res = self.client.post(
			'/api/orders',
			self._payload(supplierId='6f1b2c4e-0000-4000-8000-000000000000'),
			format='json',
		)
		self.assertEqual(res.status_code, 400)
		self.assertTrue(res.json()['message'].startswith('supplierId:'))

	def test_update_replaces_items_only_when_sent(self):
		order_id = self.client.post('/api/orders', self._payload(), format='json').json()['id']

		res = self.client.patch(f'/api/orders/{order_id}', {'status': 'IN_TRANSIT'}, format='json')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.json()['status'], 'IN_TRANSIT')
		self.assertEqual(len(res.json()['items']), 2)

		res = self.client.patch(
			f'/api/orders/{order_id}',
			{'items': [{'description': 'Single box', 'quantity': 1, 'unitPrice': '9.99'}]},
			format='json',
		)
		self.assertEqual(res.status_code, 200)
		self.assertEqual([item['description'] for item in res.json()['items']], ['Single box'])
		self.assertEqual(OrderItem.objects.filter(order_id=order_id).count(), 1)

	def test_any_status_change_is_allowed(self):
		order = Order.objects.create(
			ref_number='PO-2', supplier=self.supplier, forwarder=self.forwarder, status=OrderStatus.DELIVERED,
		)
		res = self.client.patch(f'/api/orders/{order.pk}', {'status': 'DRAFT'}, format='json')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.json()['status'], 'DRAFT')

	def test_invalid_status_is_400(self):
		res = self.client.post('/api/orders', self._payload(status='LOST'), format='json')
		self.assertEqual(res.status_code, 400)

	def test_filters(self):
		other_supplier = Supplier.objects.create(name='Globex')
		Order.objects.create(ref_number='PO-A', supplier=self.supplier, forwarder=self.forwarder, status=OrderStatus.PLACED)
		Order.objects.create(ref_number='PO-B', supplier=other_supplier, forwarder=self.forwarder, status=OrderStatus.IN_TRANSIT)
		Order.objects.create(ref_number='XX-C', supplier=other_supplier, forwarder=self.forwarder, status=OrderStatus.IN_TRANSIT)

		res = self.client.get('/api/orders', {'status': 'IN_TRANSIT'})
		self.assertEqual(res.json()['meta']['total'], 2)

		res = self.client.get('/api/orders', {'supplierId': str(self.supplier.pk)})
		self.assertEqual([row['refNumber'] for row in res.json()['data']], ['PO-A'])

		res = self.client.get('/api/orders', {'search': 'po-', 'status': 'IN_TRANSIT'})
		self.assertEqual([row['refNumber'] for row in res.json()['data']], ['PO-B'])

		self.assertEqual(self.client.get('/api/orders', {'status': 'LOST'}).status_code, 400)

	def test_summary_counts_every_status(self):
		Order.objects.create(ref_number='PO-A', supplier=self.supplier, forwarder=self.forwarder, status=OrderStatus.IN_TRANSIT)
		Order.objects.create(ref_number='PO-B', supplier=self.supplier, forwarder=self.forwarder, status=OrderStatus.IN_TRANSIT)
		Order.objects.create(ref_number='PO-C', supplier=self.supplier, forwarder=self.forwarder, status=OrderStatus.DELIVERED)

		res = self.client.get('/api/orders/summary')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['total'], 3)
		self.assertEqual(res.data['byStatus']['IN_TRANSIT'], 2)
		self.assertEqual(res.data['byStatus']['DELIVERED'], 1)
		self.assertEqual(res.data['byStatus']['CANCELED'], 0)
		self.assertEqual(set(res.data['byStatus']), set(OrderStatus.values))

	def test_delete_cascades_items(self):
		order_id = self.client.post('/api/orders', self._payload(), format='json').json()['id']
		res = self.client.delete(f'/api/orders/{order_id}')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.json()['refNumber'], 'PO-1001')
		self.assertFalse(OrderItem.objects.filter(order_id=order_id).exists())

	def test_delete_invoiced_order_is_conflict(self):
		order = Order.objects.create(ref_number='PO-A', supplier=self.supplier, forwarder=self.forwarder)
		Invoice.objects.create(order=order, invoice_number='INV-1', invoice_date='2026-03-02')
		res = self.client.delete(f'/api/orders/{order.pk}')
		self.assertEqual(res.status_code, 409)
		self.assertTrue(Order.objects.filter(pk=order.pk).exists())
