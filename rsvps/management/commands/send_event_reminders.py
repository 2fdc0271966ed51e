from rsvps.management.commands._base import RsvpCommand


class Command(RsvpCommand):
    help = "Send reminders for every event whose reminder is due."

    def run(self, service, options):
        events = service.send_reminders()
        for event in events:
            self.stdout.write(f"Reminder sent: {event.name} ({event.date:%Y-%m-%d %H:%M})")
        self.stdout.write(self.style.SUCCESS(f"Sent reminders for {len(events)} events"))
