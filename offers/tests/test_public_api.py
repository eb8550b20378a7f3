from datetime import timedelta
from unittest import mock

import pytest
from django.contrib.auth.hashers import make_password
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from offers.repository import OfferFields, OfferRepository

PUBLIC_KEYS = {"id", "title", "description", "startAt", "endAt", "thumbnailPath", "pdfPath"}


class FakeClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class PublicOffersAPITests(APITestCase):
    """
    GET /api/offers: what the public sees as offers are toggled and scheduled.
    The clock is patched so window edges can be crossed deterministically.
    """

    def setUp(self):
        overrides = self.settings(
            OFFERS_ADMIN_USERNAME="admin",
            OFFERS_ADMIN_PASSWORD_HASH=make_password("pw"),
        )
        overrides.enable()
        self.addCleanup(overrides.disable)

        self.clock = FakeClock(timezone.now())
        patcher = mock.patch("offers.services.current_time", self.clock)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.admin = APIClient()
        res = self.admin.post("/admin/login", {"username": "admin", "password": "pw"}, format="json")
        self.admin.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['token']}")

        self.repo = OfferRepository(clock=self.clock)

    def public_ids(self, **params):
        res = self.client.get("/api/offers", params)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        return [o["id"] for o in res.data]

    def test_offer_lifecycle_as_seen_publicly(self):
        res = self.admin.post("/admin/offers", {"title": "Sale", "isActive": True}, format="json")
        offer_id = res.data["id"]
        self.assertEqual(self.public_ids(limit=1), [offer_id])

        self.admin.patch(f"/admin/offers/{offer_id}", {"isActive": False}, format="json")
        self.assertEqual(self.public_ids(), [])

        start = self.clock.now + timedelta(hours=1)
        self.admin.patch(
            f"/admin/offers/{offer_id}", {"isActive": True, "startAt": start.isoformat()}, format="json",
        )
        self.assertEqual(self.public_ids(), [])

        self.clock.advance(hours=1)  # exactly startAt
        self.assertEqual(self.public_ids(), [offer_id])

        self.clock.advance(days=30)
        self.assertEqual(self.public_ids(), [offer_id])

        self.admin.delete(f"/admin/offers/{offer_id}")
        self.assertEqual(self.public_ids(), [])

    def test_end_bound_is_inclusive(self):
        end = self.clock.now + timedelta(minutes=10)
        offer = self.repo.create(OfferFields(title="Flash", is_active=True, end_at=end))

        self.clock.now = end
        self.assertEqual(self.public_ids(), [offer.pk])
        self.clock.advance(microseconds=1)
        self.assertEqual(self.public_ids(), [])

    def test_inverted_window_never_shows(self):
        self.repo.create(OfferFields(
            title="Backwards", is_active=True,
            start_at=self.clock.now + timedelta(hours=1), end_at=self.clock.now - timedelta(hours=1),
        ))
        self.assertEqual(self.public_ids(), [])
        self.clock.advance(hours=1)
        self.assertEqual(self.public_ids(), [])

    def test_public_shape(self):
        self.repo.create(OfferFields(title="Sale", description="d", is_active=True, pdf_path="/uploads/1_a.pdf"))
        res = self.client.get("/api/offers")
        self.assertEqual(len(res.data), 1)
        self.assertEqual(set(res.data[0]), PUBLIC_KEYS)
        self.assertEqual(res.data[0]["pdfPath"], "/uploads/1_a.pdf")

    def test_limit_default_and_clamp(self):
        created = []
        for i in range(55):
            created.append(self.repo.create(OfferFields(title=f"o{i}", is_active=True)).pk)
            self.clock.advance(seconds=1)
        newest_first = list(reversed(created))

        self.assertEqual(self.public_ids(), newest_first[:3])
        self.assertEqual(self.public_ids(limit=10), newest_first[:10])
        self.assertEqual(self.public_ids(limit=1000), newest_first[:50])
        self.assertEqual(self.public_ids(limit="junk"), newest_first[:3])
        self.assertEqual(self.public_ids(limit=0), newest_first[:3])

    def test_public_ignores_authorization_header(self):
        self.repo.create(OfferFields(title="Sale", is_active=True))
        self.client.credentials(HTTP_AUTHORIZATION="Bearer garbage")
        res = self.client.get("/api/offers")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 1)


def test_health():
    res = APIClient().get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True}


@pytest.mark.django_db
def test_public_listing_empty():
    res = APIClient().get("/api/offers")
    assert res.status_code == 200
    assert res.json() == []
