"""Server-rendered dashboard pages.

Tables and dialogs are filled in the browser by ``static/web/dashboard.js``,
which talks to the ``/web/`` proxy routes. Only the overview cards are
fetched here, with the token from the cookie.
"""

import logging

import requests
from django.shortcuts import render
from django.views.decorators.csrf import ensure_csrf_cookie

from orders.models import OrderStatus

from .client import BackendClient
from .cookies import read_access_token

logger = logging.getLogger(__name__)

NAV = [
    ('overview', '/dashboard', 'Overview'),
    ('orders', '/dashboard/orders', 'Orders'),
    ('suppliers', '/dashboard/suppliers', 'Suppliers'),
    ('forwarders', '/dashboard/forwarders', 'Forwarders'),
    ('invoices', '/dashboard/invoices', 'Invoices'),
]


def _context(section, **extra):
    return {'nav': NAV, 'section': section, **extra}


@ensure_csrf_cookie
def login_page(request):
    next_url = request.GET.get('next', '')
    if not next_url.startswith('/dashboard'):
        next_url = '/dashboard'
    return render(request, 'web/login.html', {'next': next_url})


@ensure_csrf_cookie
def overview(request):
    summary = {'total': 0, 'byStatus': {}}
    summary_error = False
    try:
        summary = BackendClient(read_access_token(request)).get_json('orders/summary')
    except (requests.RequestException, ValueError):
        logger.warning('Could not load the order summary', exc_info=True)
        summary_error = True

    by_status = summary.get('byStatus', {})
    cards = [
        ('Total Orders', summary.get('total', 0)),
        ('In Transit', by_status.get(OrderStatus.IN_TRANSIT.value, 0)),
        ('Delivered', by_status.get(OrderStatus.DELIVERED.value, 0)),
    ]
    return render(request, 'web/overview.html', _context('overview', cards=cards, summary_error=summary_error))


@ensure_csrf_cookie
def section_page(request, section):
    return render(request, f'web/{section}.html', _context(section, statuses=OrderStatus.choices))
