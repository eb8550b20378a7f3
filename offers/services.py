"""
offers/services.py

Builds the store handles the views work with. Everything is constructed per
call from settings, so nothing is cached between requests and tests can swap
settings (override_settings) or the clock (patch current_time) freely.
"""
from django.conf import settings
from django.utils import timezone

from .assets import AssetStore
from .auth import AdminAuthGate
from .repository import OfferRepository


def current_time():
    """The one clock the offers app reads."""
    return timezone.now()


def asset_store() -> AssetStore:
    return AssetStore(
        location=settings.OFFERS_UPLOAD_DIR,
        url_prefix=settings.OFFERS_ASSET_URL,
        max_bytes=settings.OFFERS_ASSET_MAX_BYTES,
        clock=current_time,
    )


def offer_repository() -> OfferRepository:
    return OfferRepository(asset_store=asset_store(), clock=current_time)


def auth_gate() -> AdminAuthGate:
    return AdminAuthGate(
        username=settings.OFFERS_ADMIN_USERNAME,
        password_hash=settings.OFFERS_ADMIN_PASSWORD_HASH,
        clock=current_time,
    )
