import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from offers import services
from offers.errors import ValidationError
from offers.serializers import OfferInputSerializer


class Command(BaseCommand):
    help = "Seed offers from a JSON file (array of offer objects, camelCase keys as in the API)."

    def add_arguments(self, parser):
        parser.add_argument("json_path", type=str, help="Path to offers JSON")

    def handle(self, *args, **opts):
        path = Path(opts["json_path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")
        data = json.loads(path.read_text(encoding="utf-8"))
        items = data.get("offers", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise CommandError("Expected a JSON array of offers (or {\"offers\": [...]}).")

        # Validate everything first so a bad item leaves the table untouched.
        pending = []
        for i, x in enumerate(items):
            if not isinstance(x, dict):
                raise CommandError(f"item {i}: expected an object, got {type(x).__name__}")
            ser = OfferInputSerializer(data=x, partial=True)
            if not ser.is_valid():
                raise CommandError(f"item {i}: {ser.errors}")
            pending.append(ser.to_fields())

        repo = services.offer_repository()
        created = 0
        for i, fields in enumerate(pending):
            try:
                repo.create(fields)
            except ValidationError as exc:
                raise CommandError(f"item {i}: {exc}") from exc
            created += 1
        self.stdout.write(self.style.SUCCESS(f"Seeded {created} offer(s)."))
