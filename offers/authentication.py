"""
offers/authentication.py

DRF authentication class for the admin API. It reuses SimpleJWT's stateless
flow (Authorization: Bearer <token>, TokenUser built from the claims, no user
table) but routes token validation through the Auth Gate.
"""
from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication

from . import services
from .errors import AuthError


class AdminTokenAuthentication(JWTStatelessUserAuthentication):
    def get_validated_token(self, raw_token):
        try:
            return services.auth_gate().verify(raw_token)
        except AuthError as exc:
            raise exceptions.AuthenticationFailed(str(exc)) from exc
