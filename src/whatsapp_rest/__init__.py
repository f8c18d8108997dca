"""WhatsApp REST bridge."""

__version__ = "1.0.0"
