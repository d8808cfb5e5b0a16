"""Accounts app tests."""

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class TokenLoginTests(TestCase):
	"""Login issues a bearer token that the rest of the API accepts."""

	@classmethod
	def setUpTestData(cls):
		cls.user = get_user_model().objects.create_user(
			email='ops@example.com',
			password='S3cure-pass!',
			name='Ops',
		)

	def setUp(self):
		self.client = APIClient()

	def test_login_returns_access_token_and_user(self):
		res = self.client.post('/api/auth/login', {'email': 'ops@example.com', 'password': 'S3cure-pass!'}, format='json')
		self.assertEqual(res.status_code, 200, res.content)
		self.assertTrue(res.data['accessToken'])
		self.assertEqual(res.data['user']['email'], 'ops@example.com')
		self.assertNotIn('password', res.data['user'])

	def test_login_with_wrong_password_is_401(self):
		res = self.client.post('/api/auth/login', {'email': 'ops@example.com', 'password': 'nope'}, format='json')
		self.assertEqual(res.status_code, 401)
		self.assertEqual(res.data['statusCode'], 401)
		self.assertEqual(res.data['message'], 'Invalid email or password')

	def test_login_with_missing_field_is_400(self):
		res = self.client.post('/api/auth/login', {'email': 'ops@example.com'}, format='json')
		self.assertEqual(res.status_code, 400)
		self.assertTrue(res.data['message'].startswith('password:'))

	def test_me_requires_token(self):
		res = self.client.get('/api/auth/me')
		self.assertEqual(res.status_code, 401)

	def test_me_with_token(self):
		res = self.client.post('/api/auth/login', {'email': 'ops@example.com', 'password': 'S3cure-pass!'}, format='json')
		self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['accessToken']}")
		me = self.client.get('/api/auth/me')
		self.assertEqual(me.status_code, 200)
		self.assertEqual(me.data['email'], 'ops@example.com')

	def test_trailing_slash_is_optional(self):
		res = self.client.post('/api/auth/login/', {'email': 'ops@example.com', 'password': 'S3cure-pass!'}, format='json')
		self.assertEqual(res.status_code, 200)


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class HealthTests(TestCase):
	def test_health_is_public(self):
		res = APIClient().get('/api/health')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['status'], 'ok')
		self.assertEqual(res.data['service'], 'api')
		self.assertIn('timestamp', res.data)
