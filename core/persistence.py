"""Tagged outcomes for ORM writes.

Callers branch on the result type instead of inspecting driver error codes:

    result = persist(lambda: supplier.save())
    if isinstance(result, UniquenessViolation):
        ...
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Union

from django.db import DatabaseError, IntegrityError, transaction

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (PostgreSQL)
UNIQUE_VIOLATION = '23505'


@dataclass(frozen=True)
class Ok:
    record: Any


@dataclass(frozen=True)
class UniquenessViolation:
    message: str = ''


@dataclass(frozen=True)
class Other:
    cause: Exception


WriteResult = Union[Ok, UniquenessViolation, Other]


def is_unique_violation(exc: IntegrityError) -> bool:
    cause = exc.__cause__
    code = getattr(cause, 'pgcode', None) or getattr(cause, 'sqlstate', None)
    if code:
        return code == UNIQUE_VIOLATION
    # sqlite3 only exposes the message ("UNIQUE constraint failed: ...")
    return 'unique' in str(exc).lower()


def persist(write: Callable[[], Any]) -> WriteResult:
    """Run ``write`` in its own transaction and classify the outcome.

    The return value of ``write`` becomes ``Ok.record``.
    """
    try:
        with transaction.atomic():
            record = write()
    except IntegrityError as exc:
        if is_unique_violation(exc):
            logger.info('Write rejected by a uniqueness constraint: %s', exc)
            return UniquenessViolation(message=str(exc))
        return Other(cause=exc)
    except DatabaseError as exc:
        return Other(cause=exc)
    return Ok(record=record)
