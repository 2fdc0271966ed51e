from rsvps.management.commands._base import RsvpCommand


class Command(RsvpCommand):
    help = "Print RSVP statistics for the whole store or one event."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("--event", dest="event_id", help="Event id to report on.")

    def run(self, service, options):
        if options["event_id"]:
            stats = service.get_event_stats(options["event_id"])
            self.stdout.write(f"Event: {stats.event.name} at {stats.event.location}")
            self.stdout.write(f"Days until event: {stats.days_until_event}")
            self.stdout.write(f"Players: {stats.current_players}/{stats.max_players}")
        else:
            stats = service.get_rsvp_stats()

        self.stdout.write(
            f"Total: {stats.total}  Yes: {stats.confirmed}  "
            f"No: {stats.declined}  Maybe: {stats.maybe}"
        )
        self.stdout.write(f"Attendance rate: {stats.attendance_rate:.1f}%")
