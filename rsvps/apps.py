from django.apps import AppConfig


class RsvpsConfig(AppConfig):
    name = "rsvps"
    verbose_name = "RSVP tracker"
