"""
offers/models.py

Data model for:
- Offer: a time-bounded promotional item with optional thumbnail/PDF assets.

Notes & design choices
----------------------
- is_active is a manual kill switch, independent of the start/end window.
- start_at / end_at are nullable instants (USE_TZ=True, stored in UTC); NULL
  means "no lower/upper bound". Inverted windows are stored as given.
- thumbnail_path / pdf_path hold Asset Store paths (e.g. /uploads/...), never
  file content.
- created_at / updated_at are set by OfferRepository, not by auto_now, so the
  repository's clock is the single source of time.
- Indexes mirror the public query: is_active, (start_at, end_at), created_at.
"""
from django.db import models


class Offer(models.Model):
    title = models.TextField(help_text="Headline shown to visitors.")
    description = models.TextField(null=True, blank=True)
    is_active = models.BooleanField(default=False, db_index=True,
                                    help_text="If false, hidden from the public listing.")
    start_at = models.DateTimeField(null=True, blank=True, help_text="Visible from (inclusive).")
    end_at = models.DateTimeField(null=True, blank=True, help_text="Visible until (inclusive).")
    thumbnail_path = models.CharField(max_length=500, null=True, blank=True)
    pdf_path = models.CharField(max_length=500, null=True, blank=True)
    created_at = models.DateTimeField(db_index=True)
    updated_at = models.DateTimeField()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["start_at", "end_at"], name="offers_window_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    @property
    def asset_paths(self):
        return [p for p in (self.thumbnail_path, self.pdf_path) if p]
