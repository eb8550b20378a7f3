"""
offers/errors.py

Failure taxonomy for the offers service. Each error carries the HTTP status it
maps to; offers.handlers turns them into the API's {"error": "<message>"} shape.

Only rest_framework.status is imported here: DRF loads the authentication
classes while defining APIView, and those import this module.
"""
from rest_framework import status

class OfferServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class ValidationError(OfferServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input."


class AuthError(OfferServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials."


class NotFoundError(OfferServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Offer not found."


class UnsupportedMediaTypeError(OfferServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Unsupported file type."


class PayloadTooLargeError(OfferServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "File too large."


class StorageError(OfferServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage failure."
