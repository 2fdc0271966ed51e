from django.core.management.base import BaseCommand, CommandError

from rsvps.domain.errors import DomainError
from rsvps.services import RsvpService
from rsvps.stores import JsonFileSnapshotStore


class RsvpCommand(BaseCommand):
    """Base for commands that work on one RsvpService."""

    def add_arguments(self, parser):
        parser.add_argument(
            "--storage-dir",
            help="Directory holding the RSVP snapshot (defaults to RSVP_STORAGE_DIR).",
        )

    def get_service(self, options) -> RsvpService:
        return RsvpService(JsonFileSnapshotStore(options.get("storage_dir")))

    def handle(self, *args, **options):
        try:
            return self.run(self.get_service(options), options)
        except DomainError as exc:
            raise CommandError(exc.message) from exc

    def run(self, service: RsvpService, options):
        raise NotImplementedError
