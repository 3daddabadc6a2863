"""Project-wide DRF exception handler."""

import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

from apps.ledger.services.exceptions import LedgerServiceError

logger = logging.getLogger(__name__)


def ledger_exception_handler(exc, context):
    """
    Translate exceptions raised by views and services into JSON responses.

    Ledger service errors carry their own HTTP status code. DRF exceptions
    keep their status, with the body reshaped to ``{"error": ...}``.
    Anything else is logged with its traceback and answered with a 500.
    """
    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else 'unknown view'

    if isinstance(exc, LedgerServiceError):
        set_rollback()
        if exc.status_code >= 500:
            logger.error("%s failed: %s", view_name, exc, exc_info=exc)
        else:
            logger.info("%s rejected request: %s", view_name, exc)
        data = {'error': str(exc)}
        if exc.details:
            data['details'] = exc.details
        return Response(data, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, ValidationError):
            response.data = {'error': 'Invalid input', 'details': response.data}
        elif isinstance(response.data, dict) and 'detail' in response.data:
            response.data = {'error': str(response.data['detail'])}
        return response

    logger.error("Unhandled error in %s", view_name, exc_info=exc)
    set_rollback()
    return Response(
        {'error': 'Internal server error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
