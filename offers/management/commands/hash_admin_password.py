from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Print a password hash to use as ADMIN_PASSWORD_HASH."

    def add_arguments(self, parser):
        parser.add_argument("password", type=str, help="The admin password to hash")

    def handle(self, *args, **opts):
        password = opts["password"]
        if not password:
            raise CommandError("Password must not be empty.")
        self.stdout.write(make_password(password))
