"""Abstract base models shared by the resource apps."""

import uuid

from django.db import models


class TimeStampedModel(models.Model):
    """UUID primary key plus created/updated timestamps.

    List endpoints order by ``created_at`` descending (newest first).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']
