"""Supplier model."""

from django.db import models

from core.models import TimeStampedModel


class Supplier(TimeStampedModel):
    """Vendor providing the goods on an order."""

    name = models.CharField(max_length=255, unique=True)

    class Meta(TimeStampedModel.Meta):
        db_table = 'suppliers'

    def __str__(self):
        return self.name
