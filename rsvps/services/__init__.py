from rsvps.services.rsvp_service import RsvpService

__all__ = ["RsvpService"]
