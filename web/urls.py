"""Proxy routes (mounted under /web/)."""

from django.urls import path, re_path

from . import views

urlpatterns = [
    path('auth/login', views.login, name='web_login'),
    path('auth/logout', views.logout, name='web_logout'),
    re_path(
        r'^invoices/(?P<invoice_id>[^/]+)/documents/(?P<document_id>[^/]+)/?$',
        views.invoice_document,
        name='web_invoice_document',
    ),
    re_path(
        r'^(?P<path>(?:suppliers|forwarders|orders|invoices)(?:/.*)?)$',
        views.proxy,
        name='web_proxy',
    ),
]
