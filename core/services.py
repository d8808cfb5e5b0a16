"""Base CRUD service used by the supplier, forwarder, order and invoice apps.

A service owns the ORM calls for one table and speaks in records and
exceptions from :mod:`core.exceptions`; views never touch the ORM directly.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import ProtectedError
from rest_framework.exceptions import NotFound

from .exceptions import Conflict
from .persistence import Other, UniquenessViolation, persist

logger = logging.getLogger(__name__)


class ResourceService:
    """CRUD over a single model.

    Subclasses set ``model`` and the user-facing messages, and may override
    :meth:`get_queryset` (joins, ordering) or :meth:`write` (nested data).
    """

    model = None
    label = 'Record'
    conflict_message = 'A record with these values already exists'
    protected_message = 'Record is still referenced by other records'

    def get_queryset(self):
        return self.model.objects.all().order_by('-created_at')

    def get_one(self, pk):
        try:
            return self.get_queryset().get(pk=pk)
        except (self.model.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFound(f'{self.label} not found')

    def create(self, data):
        record = self._save(self.model(), data)
        logger.info('%s %s created', self.label, record.pk)
        return record

    def update(self, pk, data):
        return self._save(self.get_one(pk), data)

    def delete(self, pk):
        record = self.get_one(pk)
        record_pk = record.pk
        try:
            record.delete()
        except ProtectedError:
            raise Conflict(self.protected_message)
        # Django clears the pk on delete; keep it so the record can be rendered.
        record.pk = record_pk
        logger.info('%s %s deleted', self.label, record_pk)
        return record

    def write(self, record, data):
        for field, value in data.items():
            setattr(record, field, value)
        record.save()
        return record

    def _save(self, record, data):
        result = persist(lambda: self.write(record, data))
        if isinstance(result, UniquenessViolation):
            raise Conflict(self.conflict_message)
        if isinstance(result, Other):
            raise result.cause
        return self.get_one(result.record.pk)
