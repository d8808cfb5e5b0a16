"""Forwarder model."""

from django.db import models

from core.models import TimeStampedModel


class Forwarder(TimeStampedModel):
    """Third-party logistics company moving a shipment."""

    name = models.CharField(max_length=255, unique=True)

    class Meta(TimeStampedModel.Meta):
        db_table = 'forwarders'

    def __str__(self):
        return self.name
