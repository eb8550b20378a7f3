from datetime import datetime, timedelta, timezone as dt_timezone
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase

from offers.errors import NotFoundError, StorageError, ValidationError
from offers.models import Offer
from offers.repository import UNSET, OfferFields, OfferRepository


class FakeClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class RecordingAssetStore:
    def __init__(self):
        self.removed = []
        self.fail = False

    def remove(self, path):
        if self.fail:
            raise OSError("disk says no")
        self.removed.append(path)
        return True


class OfferRepositoryTests(TestCase):
    """
    Offer store rules:
      - create: title required, timestamps from the clock, blank optionals absent
      - update: only supplied fields change (False / null are real values)
      - delete: row gone, assets reclaimed best-effort
      - database failures surface as StorageError
    """

    def setUp(self):
        self.clock = FakeClock(datetime(2025, 1, 1, 9, 0, tzinfo=dt_timezone.utc))
        self.assets = RecordingAssetStore()
        self.repo = OfferRepository(asset_store=self.assets, clock=self.clock)

    # -----------------------
    # create
    # -----------------------
    def test_create_requires_title(self):
        for data in (OfferFields(), OfferFields(title=None), OfferFields(title="   ")):
            with self.assertRaisesMessage(ValidationError, "Title is required."):
                self.repo.create(data)
        self.assertEqual(Offer.objects.count(), 0)

    def test_create_sets_timestamps_and_defaults(self):
        offer = self.repo.create(OfferFields(title="  Summer sale  "))

        self.assertIsNotNone(offer.pk)
        self.assertEqual(offer.title, "Summer sale")
        self.assertFalse(offer.is_active)
        self.assertIsNone(offer.description)
        self.assertIsNone(offer.start_at)
        self.assertIsNone(offer.end_at)
        self.assertIsNone(offer.thumbnail_path)
        self.assertIsNone(offer.pdf_path)
        self.assertEqual(offer.created_at, self.clock.now)
        self.assertEqual(offer.updated_at, self.clock.now)

    def test_create_blank_optional_text_is_stored_absent(self):
        offer = self.repo.create(OfferFields(title="x", description="  ", pdf_path=""))
        offer.refresh_from_db()
        self.assertIsNone(offer.description)
        self.assertIsNone(offer.pdf_path)

    def test_list_is_newest_first(self):
        a = self.repo.create(OfferFields(title="a"))
        self.clock.advance(minutes=1)
        b = self.repo.create(OfferFields(title="b"))
        c = self.repo.create(OfferFields(title="c"))  # same created_at as b

        self.assertEqual([o.pk for o in self.repo.list()], [c.pk, b.pk, a.pk])

    # -----------------------
    # update
    # -----------------------
    def test_partial_update_leaves_other_fields_alone(self):
        start = self.clock.now + timedelta(days=1)
        offer = self.repo.create(OfferFields(
            title="Sale", description="old", is_active=True, start_at=start,
            thumbnail_path="/uploads/1_t.png",
        ))
        self.clock.advance(minutes=5)

        updated = self.repo.update(offer.pk, OfferFields(description="new"))

        self.assertEqual(updated.description, "new")
        self.assertEqual(updated.title, "Sale")
        self.assertTrue(updated.is_active)
        self.assertEqual(updated.start_at, start)
        self.assertEqual(updated.thumbnail_path, "/uploads/1_t.png")
        self.assertEqual(updated.created_at, offer.created_at)
        self.assertEqual(updated.updated_at, self.clock.now)
        self.assertGreater(updated.updated_at, offer.updated_at)

    def test_update_applies_false_is_active(self):
        offer = self.repo.create(OfferFields(title="Sale", is_active=True))
        updated = self.repo.update(offer.pk, OfferFields(is_active=False))
        self.assertFalse(updated.is_active)

    def test_update_with_none_clears_field(self):
        offer = self.repo.create(OfferFields(
            title="Sale", start_at=self.clock.now, end_at=self.clock.now + timedelta(days=1),
        ))
        updated = self.repo.update(offer.pk, OfferFields(start_at=None))
        self.assertIsNone(updated.start_at)
        self.assertIsNotNone(updated.end_at)

    def test_update_rejects_blank_title(self):
        offer = self.repo.create(OfferFields(title="Sale"))
        for title in ("", "  ", None):
            with self.assertRaises(ValidationError):
                self.repo.update(offer.pk, OfferFields(title=title))
        offer.refresh_from_db()
        self.assertEqual(offer.title, "Sale")

    def test_update_unknown_id(self):
        with self.assertRaises(NotFoundError):
            self.repo.update(999, OfferFields(title="x"))

    def test_empty_patch_only_touches_updated_at(self):
        offer = self.repo.create(OfferFields(title="Sale", description="d"))
        self.clock.advance(seconds=1)
        updated = self.repo.update(offer.pk, OfferFields())
        self.assertEqual((updated.title, updated.description), ("Sale", "d"))
        self.assertEqual(updated.updated_at, self.clock.now)

    def test_updated_at_never_moves_backwards(self):
        offer = self.repo.create(OfferFields(title="Sale"))
        self.clock.advance(hours=-1)
        updated = self.repo.update(offer.pk, OfferFields(description="d"))
        self.assertEqual(updated.updated_at, offer.updated_at)

    # -----------------------
    # delete
    # -----------------------
    def test_delete_then_delete_again(self):
        offer = self.repo.create(OfferFields(title="Sale"))
        self.repo.delete(offer.pk)
        self.assertFalse(Offer.objects.filter(pk=offer.pk).exists())
        with self.assertRaises(NotFoundError):
            self.repo.delete(offer.pk)
        with self.assertRaises(NotFoundError):
            self.repo.get(offer.pk)

    def test_delete_reclaims_assets(self):
        offer = self.repo.create(OfferFields(
            title="Sale", thumbnail_path="/uploads/1_t.png", pdf_path="/uploads/1_f.pdf",
        ))
        self.repo.delete(offer.pk)
        self.assertEqual(sorted(self.assets.removed), ["/uploads/1_f.pdf", "/uploads/1_t.png"])

    def test_delete_survives_asset_cleanup_failure(self):
        offer = self.repo.create(OfferFields(title="Sale", pdf_path="/uploads/1_f.pdf"))
        self.assets.fail = True

        with self.assertLogs("offers.repository", level="WARNING"):
            self.repo.delete(offer.pk)

        self.assertFalse(Offer.objects.filter(pk=offer.pk).exists())

    # -----------------------
    # storage failures
    # -----------------------
    def test_database_error_becomes_storage_error(self):
        with mock.patch.object(Offer.objects, "order_by", side_effect=DatabaseError("locked")):
            with self.assertLogs("offers.repository", level="ERROR"):
                with self.assertRaises(StorageError):
                    self.repo.list()


def test_present_skips_unset_but_keeps_falsy_values():
    data = OfferFields(title="t", is_active=False, description=None)
    assert data.present() == {"title": "t", "is_active": False, "description": None}
    assert OfferFields().present() == {}
    assert not UNSET
