"""
Project-wide DRF exception handler.

Every API error response carries an ``error`` string so clients can show a
message without knowing which layer produced it. Validation errors keep the
per-field messages under ``details``.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    """Return the first human readable message from DRF error detail."""
    if isinstance(detail, dict):
        if not detail:
            return 'Invalid input.'
        field, value = next(iter(detail.items()))
        message = _first_message(value)
        if field in ('non_field_errors', 'detail'):
            return message
        return f'{field}: {message}'
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else 'Invalid input.'
    return str(detail)


def api_exception_handler(exc, context):
    """Wrap DRF's default handler with the project's JSON error shape."""
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            "Unhandled error in %s: %s",
            view.__class__.__name__ if view else 'unknown view',
            exc,
        )
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    data = response.data
    if isinstance(data, dict) and set(data) == {'detail'}:
        response.data = {'error': str(data['detail'])}
    elif not (isinstance(data, dict) and 'error' in data):
        response.data = {'error': _first_message(data), 'details': data}

    return response
