"""Error taxonomy shared by the API apps and the DRF exception handler.

Services raise these (or DRF's built-in ``ValidationError`` / ``NotFound``);
the handler renders every handled error as ``{"message", "statusCode"}``.
Anything that is not an ``APIException`` is left alone so Django answers
with a plain 500.
"""

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.views import exception_handler


class ValidationFailed(APIException):
    """Bad input detected by a service (MIME type, size, missing field...)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'invalid'


class Conflict(APIException):
    """A uniqueness (or reference) constraint rejected the write."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    payload = {'statusCode': response.status_code}
    if isinstance(exc, ValidationError) and isinstance(exc.detail, (dict, list)):
        message = _first_message(exc.detail) or 'Validation failed.'
        if isinstance(exc.detail, dict) and exc.detail:
            field = next(iter(exc.detail))
            if field != 'non_field_errors':
                message = f'{field}: {message}'
        payload['message'] = message
        payload['errors'] = response.data
    else:
        payload['message'] = _first_message(getattr(exc, 'detail', response.data))
    response.data = payload
    return response
