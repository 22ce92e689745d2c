import os

from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password

from clinic.models import User

DEFAULT_USERS = [
    ("admin", "admin"),
    ("nurse", "staff"),
]


class Command(BaseCommand):
    help = "Ensure the default clinic accounts exist with a known password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            default=os.getenv("CLINIC_DEFAULT_PASSWORD", "clinic123"),
            help="Password set on every default account (env CLINIC_DEFAULT_PASSWORD).",
        )

    def handle(self, *args, **opts):
        password = make_password(opts["password"])
        for username, role in DEFAULT_USERS:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={"role": role, "password": password, "is_active": True},
            )
            if not created:
                # reset password, role and active flag
                u.password = password
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All clinic users ensured."))
