"""
offers/auth.py: the admin Auth Gate

There is exactly one admin identity, configured through the environment:
    ADMIN_USERNAME       plain login name
    ADMIN_PASSWORD_HASH  Django password hash (manage.py hash_admin_password)

login() checks both and hands back a SimpleJWT access token, valid for 12
hours, that carries the username claim. A wrong username and a wrong
password fail the same way ("Invalid credentials.") and both run the password
hasher, so callers cannot probe for the username.

verify() accepts a raw bearer token and returns the validated AccessToken or
raises AuthError (missing, malformed, badly signed, expired, wrong type).
"""
from datetime import timedelta

from django.contrib.auth.hashers import check_password
from django.utils import timezone
from django.utils.crypto import constant_time_compare
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from .errors import AuthError

TOKEN_LIFETIME = timedelta(hours=12)
USERNAME_CLAIM = "username"


class AdminAuthGate:
    def __init__(self, username: str, password_hash: str, token_lifetime: timedelta = TOKEN_LIFETIME, clock=None):
        self._username = username or ""
        self._password_hash = password_hash or ""
        self._lifetime = token_lifetime
        self._clock = clock or timezone.now

    def login(self, username: str, password: str) -> str:
        username_ok = bool(self._username) and constant_time_compare(username or "", self._username)
        password_ok = check_password(password or "", self._password_hash)
        if not (username_ok and password_ok):
            raise AuthError("Invalid credentials.")
        return self.issue_token(self._username)

    def issue_token(self, username: str) -> str:
        token = AccessToken()
        token.set_exp(from_time=self._clock(), lifetime=self._lifetime)
        token[USERNAME_CLAIM] = username
        return str(token)

    def verify(self, raw_token) -> AccessToken:
        if isinstance(raw_token, bytes):
            raw_token = raw_token.decode("utf-8", errors="replace")
        if not raw_token:
            raise AuthError("Missing token.")
        try:
            token = AccessToken(raw_token)
        except TokenError as exc:
            raise AuthError("Invalid or expired token.") from exc
        if not token.get(USERNAME_CLAIM):
            raise AuthError("Invalid or expired token.")
        return token
