"""Database models for orders and order items."""

from decimal import Decimal

from django.db import models

from core.models import TimeStampedModel
from forwarders.models import Forwarder
from suppliers.models import Supplier


class OrderStatus(models.TextChoices):
    """Order status labels.

    Any status may be set from any other; no workflow is enforced.
    """

    DRAFT = 'DRAFT', 'Draft'
    PLACED = 'PLACED', 'Placed'
    DISPATCHED = 'DISPATCHED', 'Dispatched'
    IN_TRANSIT = 'IN_TRANSIT', 'In Transit'
    DELIVERED = 'DELIVERED', 'Delivered'
    CANCELED = 'CANCELED', 'Canceled'


class Order(TimeStampedModel):
    """A purchase from a supplier shipped by a forwarder."""

    ref_number = models.CharField(max_length=100, unique=True)
    supplier = models.ForeignKey(Supplier, on_delete=models.PROTECT, related_name='orders')
    forwarder = models.ForeignKey(Forwarder, on_delete=models.PROTECT, related_name='orders')
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.DRAFT)
    order_date = models.DateField(null=True, blank=True)
    estimated_delivery_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True, default='')

    class Meta(TimeStampedModel.Meta):
        db_table = 'orders'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='orders_status_created_idx'),
        ]

    def __str__(self):
        return self.ref_number

    @property
    def total(self):
        return sum((item.total for item in self.items.all()), Decimal('0.00'))


class OrderItem(models.Model):
    """Line item inside an order; ``total`` is always ``quantity * unit_price``."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    description = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    total = models.DecimalField(max_digits=14, decimal_places=2, editable=False)

    class Meta:
        db_table = 'order_items'
        ordering = ['id']

    def save(self, *args, **kwargs):
        self.total = (Decimal(self.quantity) * Decimal(self.unit_price)).quantize(Decimal('0.01'))
        super().save(*args, **kwargs)

    def __str__(self):
        return f'{self.description} x{self.quantity}'
