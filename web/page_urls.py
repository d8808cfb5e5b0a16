"""Dashboard and login pages (mounted at the site root)."""

from django.urls import re_path

from . import pages

urlpatterns = [
    re_path(r'^login/?$', pages.login_page, name='login'),
    re_path(r'^dashboard/?$', pages.overview, name='dashboard'),
    re_path(
        r'^dashboard/(?P<section>orders|suppliers|forwarders|invoices)/?$',
        pages.section_page,
        name='dashboard_section',
    ),
]
