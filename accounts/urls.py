"""URL routes for token auth (mounted under /api/auth/)."""

from django.urls import re_path

from .views import LoginView, MeView

urlpatterns = [
    re_path(r'^login/?$', LoginView.as_view(), name='auth_login'),
    re_path(r'^me/?$', MeView.as_view(), name='auth_me'),
]
