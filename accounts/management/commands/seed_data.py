"""Seed sample data for local development.

Creates:
- A dashboard login (``--email`` / ``--password``)
- Suppliers and forwarders
- Orders with line items spread across every status
- Invoices for part of the orders (no documents)

Existing suppliers, forwarders, orders and invoices are removed first
(document files included); users are kept.

Usage:
  python manage.py seed_data
  python manage.py seed_data --orders 40 --seed 7
"""

from __future__ import annotations

import random
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from forwarders.models import Forwarder
from invoices.models import Invoice, InvoiceDocument
from invoices.storage import DocumentStore
from orders.models import Order, OrderItem, OrderStatus
from suppliers.models import Supplier

SUPPLIER_NAMES = [
    'Shenzhen Brightway Electronics', 'Ningbo Harbor Textiles', 'Guangzhou Apex Furniture',
    'Istanbul Loom Co.', 'Hanoi Precision Parts', 'Monterrey Steelworks',
    'Chennai Cotton Mills', 'Busan Marine Supply', 'Rotterdam Agri Foods', 'Milan Leather Atelier',
]

FORWARDER_NAMES = [
    'DHL Global Forwarding', 'Kuehne+Nagel', 'DB Schenker', 'Maersk Logistics',
    'Expeditors', 'CEVA Logistics', 'DSV Air & Sea',
]

ITEM_DESCRIPTIONS = [
    'LED panel 60x60', 'Cotton bedsheet set', 'Oak dining chair', 'Stainless bolts M8 (box)',
    'Wool rug 2x3m', 'Bluetooth speaker', 'Leather handbag', 'Olive oil 5L tin',
    'Steel shelving unit', 'USB-C charger 65W', 'Ceramic tile pallet', 'Frozen shrimp carton',
]

# Weighted so the overview cards show a realistic spread.
STATUS_WEIGHTS = {
    OrderStatus.DRAFT: 2,
    OrderStatus.PLACED: 3,
    OrderStatus.DISPATCHED: 2,
    OrderStatus.IN_TRANSIT: 4,
    OrderStatus.DELIVERED: 5,
    OrderStatus.CANCELED: 1,
}


def _money(value: float | Decimal) -> Decimal:
    return Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


class Command(BaseCommand):
    help = 'Reset and seed the database with sample freight data.'

    def add_arguments(self, parser):
        parser.add_argument('--orders', type=int, default=25, help='Number of orders to generate.')
        parser.add_argument('--suppliers', type=int, default=8, help=f'Number of suppliers (max {len(SUPPLIER_NAMES)}).')
        parser.add_argument('--forwarders', type=int, default=5, help=f'Number of forwarders (max {len(FORWARDER_NAMES)}).')
        parser.add_argument('--invoice-ratio', type=float, default=0.6, help='Share of orders that get an invoice (0-1).')
        parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible data.')
        parser.add_argument('--email', default='admin@example.com', help='Login email to create if missing.')
        parser.add_argument('--password', default='Password123!', help='Password for a newly created login.')

    def handle(self, *args, **options):
        if options.get('seed') is not None:
            random.seed(int(options['seed']))

        suppliers_target = max(1, min(int(options['suppliers']), len(SUPPLIER_NAMES)))
        forwarders_target = max(1, min(int(options['forwarders']), len(FORWARDER_NAMES)))
        orders_target = max(0, int(options['orders']))
        invoice_ratio = min(max(float(options['invoice_ratio']), 0.0), 1.0)

        self._ensure_login(options['email'], options['password'])
        self._reset_database()

        self.stdout.write(self.style.NOTICE('--- Seeding database ---'))
        with transaction.atomic():
            suppliers = [Supplier.objects.create(name=name) for name in SUPPLIER_NAMES[:suppliers_target]]
            forwarders = [Forwarder.objects.create(name=name) for name in FORWARDER_NAMES[:forwarders_target]]
            self.stdout.write(f'Created {len(suppliers)} suppliers and {len(forwarders)} forwarders')

            orders = [self._create_order(i, suppliers, forwarders) for i in range(1, orders_target + 1)]
            self.stdout.write(f'Created {len(orders)} orders')

            invoiced = [o for o in orders if o.status != OrderStatus.DRAFT and random.random() < invoice_ratio]
            for n, order in enumerate(invoiced, start=1):
                Invoice.objects.create(
                    order=order,
                    invoice_number=f'INV-{timezone.now():%Y}-{n:04d}',
                    invoice_date=(order.order_date or timezone.localdate()) + timedelta(days=random.randint(0, 10)),
                )
            self.stdout.write(f'Created {len(invoiced)} invoices')

        self.stdout.write(self.style.SUCCESS('Seeding completed successfully.'))

    def _ensure_login(self, email, password):
        User = get_user_model()
        if User.objects.filter(email__iexact=email).exists():
            self.stdout.write(self.style.NOTICE(f'Login {email} already exists; password unchanged.'))
            return
        User.objects.create_superuser(email=email, password=password, name='Admin')
        self.stdout.write(self.style.NOTICE(f'Seeded login credentials (local-dev): {email} | password={password}'))

    def _reset_database(self):
        self.stdout.write(self.style.WARNING('Resetting existing data (users are kept)...'))
        store = DocumentStore()
        documents = list(InvoiceDocument.objects.all())
        self.stdout.write(f'Deleting invoice documents ({len(documents)})...')
        for document in documents:
            store.remove_file(document)
        InvoiceDocument.objects.all().delete()
        self.stdout.write('Deleting invoices...')
        Invoice.objects.all().delete()
        self.stdout.write('Deleting orders and items...')
        OrderItem.objects.all().delete()
        Order.objects.all().delete()
        self.stdout.write('Deleting suppliers and forwarders...')
        Supplier.objects.all().delete()
        Forwarder.objects.all().delete()

    def _create_order(self, index, suppliers, forwarders):
        statuses = list(STATUS_WEIGHTS)
        status = random.choices(statuses, weights=[STATUS_WEIGHTS[s] for s in statuses], k=1)[0]
        order_date = timezone.localdate() - timedelta(days=random.randint(0, 120))
        eta = None if status == OrderStatus.DRAFT else order_date + timedelta(days=random.randint(14, 60))

        order = Order.objects.create(
            ref_number=f'PO-{order_date:%y%m}-{index:04d}',
            supplier=random.choice(suppliers),
            forwarder=random.choice(forwarders),
            status=status,
            order_date=order_date,
            estimated_delivery_date=eta,
            notes='' if random.random() < 0.7 else 'Fragile: keep upright',
        )
        for description in random.sample(ITEM_DESCRIPTIONS, k=random.randint(1, 4)):
            OrderItem.objects.create(
                order=order,
                description=description,
                quantity=random.randint(1, 500),
                unit_price=_money(random.uniform(0.5, 250)),
            )
        return order
