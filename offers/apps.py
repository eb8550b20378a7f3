"""
offers/apps.py

AppConfig for the Offers app.

Why this app exists
-------------------
It owns the whole offer lifecycle: the Offer table, uploaded assets, the
admin API (login, CRUD, upload) and the public listing of visible offers.

ready() switches every new SQLite connection to WAL journaling so readers
never block on the single writer.
"""
from django.apps import AppConfig
from django.db.backends.signals import connection_created


def _enable_sqlite_wal(sender, connection, **kwargs):
    if connection.vendor == "sqlite":
        with connection.cursor() as cursor:
            cursor.execute("PRAGMA journal_mode=WAL;")


class OffersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "offers"
    verbose_name = "Promotional offers"

    def ready(self):
        connection_created.connect(_enable_sqlite_wal, dispatch_uid="offers_sqlite_wal")
