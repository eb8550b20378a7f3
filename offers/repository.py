"""
offers/repository.py: CRUD over the Offer table

Purpose
===============================================================================
Own every write to the Offer table so the rules live in one place:
- create(): title is required (non-blank after trimming); timestamps are set
  here from the injected clock, never taken from the client.
- update(): field-level merge. A field present in the patch overwrites the
  stored value (None clears it); a field absent from the patch is untouched.
  Presence is tracked with the UNSET sentinel, so is_active=False is a real
  value and not "not supplied".
- delete(): removes the row, then best-effort removes its asset files. Asset
  cleanup failures are logged and never reach the caller.

Each mutation is a single INSERT / UPDATE / DELETE statement; the database's
own locking serializes concurrent writers.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, fields
from typing import Any

from django.db import DatabaseError
from django.utils import timezone

from .errors import NotFoundError, StorageError, ValidationError
from .models import Offer

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET = _Unset()

_OPTIONAL_TEXT = ("description", "thumbnail_path", "pdf_path")


@dataclass
class OfferFields:
    """Offer input where every field may be left UNSET (omitted)."""
    title: Any = UNSET
    description: Any = UNSET
    is_active: Any = UNSET
    start_at: Any = UNSET
    end_at: Any = UNSET
    thumbnail_path: Any = UNSET
    pdf_path: Any = UNSET

    def present(self) -> dict:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return {name: value for name, value in values.items() if value is not UNSET}


def _normalize(values: dict) -> dict:
    out = dict(values)
    if "title" in out and out["title"] is not None:
        out["title"] = str(out["title"]).strip()
    for name in _OPTIONAL_TEXT:
        # Blank text is stored as absent, same as an explicit null.
        if name in out and (out[name] is None or not str(out[name]).strip()):
            out[name] = None
    if "is_active" in out:
        out["is_active"] = bool(out["is_active"])
    return out


@contextmanager
def _storage_errors():
    try:
        yield
    except DatabaseError as exc:
        logger.exception("Offer storage failure")
        raise StorageError() from exc


class OfferRepository:
    def __init__(self, asset_store=None, clock=None, model=Offer):
        self._assets = asset_store
        self._clock = clock or timezone.now
        self._model = model

    def list(self):
        """All offers, newest created first."""
        with _storage_errors():
            return list(self._model.objects.order_by("-created_at", "-id"))

    def get(self, offer_id):
        with _storage_errors():
            try:
                return self._model.objects.get(pk=offer_id)
            except self._model.DoesNotExist:
                raise NotFoundError() from None

    def create(self, data: OfferFields):
        values = _normalize(data.present())
        if not values.get("title"):
            raise ValidationError("Title is required.")
        values.setdefault("is_active", False)

        now = self._clock()
        with _storage_errors():
            return self._model.objects.create(created_at=now, updated_at=now, **values)

    def update(self, offer_id, patch: OfferFields):
        existing = self.get(offer_id)

        changes = _normalize(patch.present())
        if "title" in changes and not changes["title"]:
            raise ValidationError("Title is required.")
        # Never move updated_at backwards, even if the clock does.
        changes["updated_at"] = max(self._clock(), existing.updated_at)

        with _storage_errors():
            matched = self._model.objects.filter(pk=offer_id).update(**changes)
        if not matched:
            raise NotFoundError()
        return self.get(offer_id)

    def delete(self, offer_id) -> None:
        existing = self.get(offer_id)

        with _storage_errors():
            deleted, _ = self._model.objects.filter(pk=offer_id).delete()
        if not deleted:
            raise NotFoundError()

        self._reclaim_assets(existing)

    def _reclaim_assets(self, offer) -> None:
        if self._assets is None:
            return
        for path in offer.asset_paths:
            try:
                self._assets.remove(path)
            except OSError:
                logger.warning("Could not remove asset %s of deleted offer %s", path, offer.pk, exc_info=True)
