"""
offers/handlers.py

DRF EXCEPTION_HANDLER: every failure leaves the API as {"error": "<message>"}.
Domain errors use their own status; DRF errors keep DRF's status with the
detail flattened to one line; stray DatabaseErrors become a 500.
"""
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .errors import OfferServiceError, StorageError

logger = logging.getLogger(__name__)


def _first_message(detail) -> str:
    """Flatten DRF's nested error detail (dict/list/ErrorDetail) to one line."""
    if isinstance(detail, dict):
        if "detail" in detail:
            return _first_message(detail["detail"])
        for field, value in detail.items():
            msg = _first_message(value)
            return msg if field == "non_field_errors" else f"{field}: {msg}"
        return "Invalid input."
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else "Invalid input."
    return str(detail)


def api_exception_handler(exc, context):
    if isinstance(exc, OfferServiceError):
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc, exc_info=exc)
        return Response({"error": str(exc)}, status=exc.status_code)

    if isinstance(exc, DatabaseError):
        logger.exception("Unhandled storage failure", exc_info=exc)
        return Response({"error": StorageError.default_message},
                        status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    response = exception_handler(exc, context)
    if response is None:
        return None
    response.data = {"error": _first_message(response.data)}
    return response
