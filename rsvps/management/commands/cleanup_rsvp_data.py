from rsvps.domain import CleanupOptions
from rsvps.management.commands._base import RsvpCommand


class Command(RsvpCommand):
    help = "Archive or delete events older than --max-age days."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("--max-age", type=int, help="Age in days (default 30).")
        parser.add_argument(
            "--archive", action="store_true", help="Mark old events archived instead of deleting."
        )
        parser.add_argument(
            "--include-rsvps", action="store_true", help="Also delete RSVPs of old events."
        )

    def run(self, service, options):
        result = service.cleanup_data(
            CleanupOptions(
                max_age=options["max_age"],
                archive=options["archive"],
                include_rsvps=options["include_rsvps"],
            )
        )
        self.stdout.write(
            self.style.SUCCESS(
                f"Cleaned up {result.events} events and {result.rsvps} RSVPs"
            )
        )
