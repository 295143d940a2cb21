import os

from django.core.management.base import BaseCommand, CommandError

from eventhub.domain.errors import DomainError
from eventhub.wiring import build_services

DEFAULT_ADMIN_NAME = "Admin Principal"
DEFAULT_ADMIN_EMAIL = "admin@eventos.com"
DEFAULT_ADMIN_PASSWORD = "admin123"


class Command(BaseCommand):
    help = "Create the initial admin account if it does not exist yet."

    def add_arguments(self, parser):
        parser.add_argument("--name", default=os.environ.get("EVENTHUB_ADMIN_NAME", DEFAULT_ADMIN_NAME))
        parser.add_argument("--email", default=os.environ.get("EVENTHUB_ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL))
        parser.add_argument(
            "--password",
            default=os.environ.get("EVENTHUB_ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD),
        )

    def handle(self, *args, **options):
        try:
            user, created = build_services().accounts.ensure_admin(
                options["name"], options["email"], options["password"]
            )
        except DomainError as exc:
            raise CommandError(str(exc)) from exc

        if created:
            self.stdout.write(self.style.SUCCESS(f"Created admin {user.email} (id {user.id})"))
        else:
            self.stdout.write(f"Account {user.email} already exists (id {user.id})")
