"""
offers/visibility.py

Public visibility rules for offers.

An offer is publicly visible at instant `now` when:
    is_active
    AND (start_at is NULL OR start_at <= now)
    AND (end_at   is NULL OR end_at   >= now)

Both bounds are inclusive. An inverted window (start_at > end_at) is not an
error; it is evaluated literally and is never visible.

`is_visible` is the pure predicate; `visible_q` is the same rule as a database
filter so the public listing is computed by the store, not in Python.
"""
from django.db.models import Q


def is_visible(offer, now) -> bool:
    if not offer.is_active:
        return False
    if offer.start_at is not None and offer.start_at > now:
        return False
    if offer.end_at is not None and offer.end_at < now:
        return False
    return True


def visible_q(now) -> Q:
    return (
        Q(is_active=True)
        & (Q(start_at__isnull=True) | Q(start_at__lte=now))
        & (Q(end_at__isnull=True) | Q(end_at__gte=now))
    )


def clamp_limit(raw, default: int = 3, maximum: int = 50) -> int:
    """Parse a ?limit= value: junk or < 1 falls back to default, capped at maximum."""
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return default
    if limit < 1:
        return default
    return min(limit, maximum)


def list_public(queryset, now, limit: int):
    """Visible offers from `queryset`, newest first, at most `limit` rows."""
    return list(queryset.filter(visible_q(now)).order_by("-created_at", "-id")[:limit])
